"""Workspace schemas."""
from pydantic import BaseModel, Field


class WorkspaceCreate(BaseModel):
    """Request to register a workspace."""
    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1, description="Absolute project directory on the agent host")
    ignore_patterns: list[str] = Field(default_factory=list)


class WorkspaceUpdate(BaseModel):
    """Partial workspace update."""
    name: str | None = None
    path: str | None = None
    ignore_patterns: list[str] | None = None


class WorkspaceResponse(BaseModel):
    """Workspace record."""
    workspace_id: str
    name: str
    path: str
    ignore_patterns: list[str] = Field(default_factory=list)
    created_at: float
    updated_at: float


class WorkspaceFilesRequest(BaseModel):
    """Request for the contents of files inside a workspace."""
    files: list[str]
