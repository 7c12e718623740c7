"""Workspace record and workspace content routes."""
import loguru
from fastapi import APIRouter, Depends, HTTPException, status

from prompt_api.dependencies import get_structure_service, get_workspace_service
from prompt_api.schemas import WorkspaceCreate, WorkspaceFilesRequest, WorkspaceResponse, WorkspaceUpdate
from prompt_api.services import (
    AgentError,
    AgentResponseError,
    AgentUnavailableError,
    StructureService,
    WorkspaceNotFoundError,
    WorkspaceService,
)
from shared.schemas import FileContent, FileNode

router = APIRouter()


def _agent_http_error(workspace_id: str, e: AgentError) -> HTTPException:
    """Translate an agent failure into the HTTP error returned to the client."""
    if isinstance(e, AgentUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if isinstance(e, AgentResponseError) and e.status_code == status.HTTP_404_NOT_FOUND:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.detail)
    loguru.logger.error(f"Agent call failed workspace_id={workspace_id}: {e}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get("/workspaces", response_model=list[WorkspaceResponse])
async def list_workspaces(service: WorkspaceService = Depends(get_workspace_service)):
    """List workspaces, most recently updated first."""
    return await service.list_workspaces()


@router.post("/workspaces", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    body: WorkspaceCreate,
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Register a project directory."""
    return await service.create_workspace(body.name, body.path, body.ignore_patterns)


@router.get("/workspaces/{workspace_id}", response_model=WorkspaceResponse)
async def get_workspace(
    workspace_id: str,
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.get_workspace(workspace_id)
    if workspace is None:
        raise HTTPException(status_code=404, detail="Workspace not found")
    return workspace


@router.put("/workspaces/{workspace_id}", response_model=WorkspaceResponse)
async def update_workspace(
    workspace_id: str,
    body: WorkspaceUpdate,
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Update name, path or ignore patterns of a workspace."""
    try:
        return await service.update_workspace(workspace_id, body.model_dump())
    except WorkspaceNotFoundError:
        raise HTTPException(status_code=404, detail="Workspace not found")


@router.delete("/workspaces/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(
    workspace_id: str,
    service: WorkspaceService = Depends(get_workspace_service),
):
    try:
        await service.delete_workspace(workspace_id)
    except WorkspaceNotFoundError:
        raise HTTPException(status_code=404, detail="Workspace not found")


@router.get(
    "/workspaces/{workspace_id}/structure",
    response_model=list[FileNode],
    response_model_exclude_none=True,
)
async def get_workspace_structure(
    workspace_id: str,
    service: StructureService = Depends(get_structure_service),
):
    """Structure tree of a workspace, as seen by the filesystem agent."""
    try:
        return await service.get_structure(workspace_id)
    except WorkspaceNotFoundError:
        raise HTTPException(status_code=404, detail="Workspace not found")
    except AgentError as e:
        raise _agent_http_error(workspace_id, e)


@router.post("/workspaces/{workspace_id}/files/content", response_model=list[FileContent])
async def read_workspace_files(
    workspace_id: str,
    body: WorkspaceFilesRequest,
    service: StructureService = Depends(get_structure_service),
):
    """Contents of the requested files; unreadable ones are left out."""
    try:
        return await service.read_files(workspace_id, body.files)
    except WorkspaceNotFoundError:
        raise HTTPException(status_code=404, detail="Workspace not found")
    except AgentError as e:
        raise _agent_http_error(workspace_id, e)
