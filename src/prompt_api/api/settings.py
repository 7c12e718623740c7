"""Global settings routes."""
from fastapi import APIRouter, Depends

from prompt_api.dependencies import get_workspace_service
from prompt_api.schemas import IgnorePatterns
from prompt_api.services import WorkspaceService

router = APIRouter()


@router.get("/settings/ignore-patterns", response_model=IgnorePatterns)
async def get_ignore_patterns(service: WorkspaceService = Depends(get_workspace_service)):
    """Global ignore patterns applied before every workspace's own."""
    return IgnorePatterns(patterns=await service.get_global_ignore_patterns())


@router.put("/settings/ignore-patterns", response_model=IgnorePatterns)
async def set_ignore_patterns(
    body: IgnorePatterns,
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Replace the global ignore patterns.

    Running watches keep the patterns they were started with.
    """
    return IgnorePatterns(patterns=await service.set_global_ignore_patterns(body.patterns))
