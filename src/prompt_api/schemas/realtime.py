"""Real-time (WebSocket) protocol schemas.

Every frame is a JSON envelope ``{"event": <name>, "data": {...}}``.
"""
from typing import Any

from pydantic import BaseModel, Field

# Client -> server
WATCH_WORKSPACE = "watch-workspace"
STOP_WATCH = "stop-watch"

# Server -> client
WATCH_STARTED = "watch-started"
WATCH_STOPPED = "watch-stopped"
FILESYSTEM_CHANGE = "filesystem:change"
ERROR = "error"


class RealtimeMessage(BaseModel):
    """Envelope of a real-time frame."""
    event: str
    data: dict[str, Any] = Field(default_factory=dict)
