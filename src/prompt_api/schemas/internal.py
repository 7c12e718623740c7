"""Agent -> main server callback schemas."""
from pydantic import BaseModel

from shared.schemas import ChangeType


class ChangeNotification(BaseModel):
    """Filesystem change posted by the agent."""
    type: ChangeType
    path: str
