"""Dependencies module."""
from .services import get_agent_service, get_broker, get_structure_service, get_workspace_service

__all__ = [
    "get_agent_service",
    "get_broker",
    "get_structure_service",
    "get_workspace_service",
]
