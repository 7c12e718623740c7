"""Health check routes."""
from fastapi import APIRouter, Depends

from prompt_api.dependencies import get_agent_service
from prompt_api.schemas import AgentStatusResponse
from prompt_api.services import AgentService

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "prompt-api"}


@router.get("/agent/status", response_model=AgentStatusResponse)
async def agent_status(agent: AgentService = Depends(get_agent_service)):
    """Whether the filesystem agent is reachable."""
    running = await agent.check_status()
    return AgentStatusResponse(running=running, agent_url=agent.base_url)
