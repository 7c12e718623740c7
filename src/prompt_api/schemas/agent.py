"""Agent status schemas."""
from pydantic import BaseModel


class AgentStatusResponse(BaseModel):
    """Whether the filesystem agent answers."""
    running: bool
    agent_url: str
