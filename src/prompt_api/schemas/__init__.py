"""Prompt API schemas module."""
from .agent import AgentStatusResponse
from .internal import ChangeNotification
from .realtime import RealtimeMessage
from .settings import IgnorePatterns
from .workspace import WorkspaceCreate, WorkspaceFilesRequest, WorkspaceResponse, WorkspaceUpdate

__all__ = [
    # Agent
    "AgentStatusResponse",
    # Internal
    "ChangeNotification",
    # Realtime
    "RealtimeMessage",
    # Settings
    "IgnorePatterns",
    # Workspace
    "WorkspaceCreate",
    "WorkspaceUpdate",
    "WorkspaceResponse",
    "WorkspaceFilesRequest",
]
