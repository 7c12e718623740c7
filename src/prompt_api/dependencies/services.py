"""Service dependencies."""
from fastapi import Depends
from starlette.requests import HTTPConnection

from prompt_api.services import AgentService, StructureService, SubscriptionBroker, WorkspaceService


def get_broker(conn: HTTPConnection) -> SubscriptionBroker:
    """
    Get the process-wide SubscriptionBroker built in the app lifespan.

    Works for both HTTP requests and WebSocket connections.

    Returns:
        SubscriptionBroker instance
    """
    return conn.app.state.broker


def get_agent_service() -> AgentService:
    """
    Get AgentService instance.

    Returns:
        AgentService instance
    """
    return AgentService()


def get_workspace_service() -> WorkspaceService:
    """
    Get WorkspaceService instance.

    Returns:
        WorkspaceService instance
    """
    return WorkspaceService()


def get_structure_service(
    workspace_service: WorkspaceService = Depends(get_workspace_service),
    agent_service: AgentService = Depends(get_agent_service),
) -> StructureService:
    return StructureService(workspace_service, agent_service)
