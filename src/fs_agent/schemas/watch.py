"""Watch request/response schemas."""
from pydantic import BaseModel, ConfigDict, Field


class WatchRequest(BaseModel):
    """Request to start watching a directory."""
    model_config = ConfigDict(populate_by_name=True)

    path: str
    callback_url: str = Field(..., alias="callbackUrl")
    ignore_patterns: list[str] = Field(default_factory=list, alias="ignorePatterns")


class UnwatchRequest(BaseModel):
    """Request to stop watching a directory."""
    path: str


class WatchAcceptedResponse(BaseModel):
    """Watch start acknowledgement."""
    message: str


class UnwatchResponse(BaseModel):
    """Watch stop result."""
    message: str
    stopped: bool


class ActiveWatchesResponse(BaseModel):
    """Registry introspection."""
    count: int
    paths: list[str]
