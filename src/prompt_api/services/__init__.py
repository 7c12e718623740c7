"""Business logic services module."""
from .agent_service import AgentError, AgentResponseError, AgentService, AgentUnavailableError
from .structure_service import StructureService
from .subscription_broker import RealtimeConnection, SubscriptionBroker
from .workspace_service import WorkspaceNotFoundError, WorkspaceService

__all__ = [
    "AgentService",
    "AgentError",
    "AgentUnavailableError",
    "AgentResponseError",
    "WorkspaceService",
    "WorkspaceNotFoundError",
    "StructureService",
    "SubscriptionBroker",
    "RealtimeConnection",
]
