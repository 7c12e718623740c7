"""Directory structure and file content routes."""
import loguru
from fastapi import APIRouter, Depends, HTTPException, Query

from fs_agent.dependencies import get_directory_walker, get_file_reader
from fs_agent.schemas import FileContentRequest
from fs_agent.services import DirectoryWalker, FileReader, WalkError
from shared.schemas import FileContent, FileNode

router = APIRouter()


def _parse_patterns(raw: str | None) -> list[str]:
    """Split the comma separated ignorePatterns query value."""
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


@router.get(
    "/structure",
    response_model=list[FileNode],
    response_model_exclude_none=True,
)
async def get_structure(
    path: str | None = Query(None, description="Absolute directory path to walk"),
    ignore_patterns: str | None = Query(None, alias="ignorePatterns", description="Comma separated ignore patterns"),
    walker: DirectoryWalker = Depends(get_directory_walker),
    reader: FileReader = Depends(get_file_reader),
):
    """Walk a directory and return its structure tree."""
    if not path:
        raise HTTPException(status_code=400, detail='The "path" parameter is required')

    if not await reader.path_exists(path):
        raise HTTPException(status_code=404, detail=f'Path "{path}" does not exist or is not accessible')

    patterns = _parse_patterns(ignore_patterns)
    try:
        structure = await walker.walk(path, patterns)
    except WalkError as e:
        loguru.logger.error(f"Structure generation failed path={path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate structure: {e}")

    loguru.logger.info(f"Structure generated path={path} entries={len(structure)} ignore_patterns={len(patterns)}")
    return structure


@router.post("/files/content", response_model=list[FileContent])
async def read_file_contents(
    body: FileContentRequest,
    reader: FileReader = Depends(get_file_reader),
):
    """Read several files relative to a base path; unreadable files are omitted."""
    if not body.base_path:
        raise HTTPException(status_code=400, detail='"basePath" and "files" (array) are required')

    if not await reader.path_exists(body.base_path):
        raise HTTPException(
            status_code=404,
            detail=f'Base path "{body.base_path}" does not exist or is not accessible',
        )

    try:
        contents = await reader.read_many(body.base_path, body.files)
    except Exception as e:
        loguru.logger.error(f"Reading files failed base_path={body.base_path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to read files: {e}")

    loguru.logger.info(
        f"Files read base_path={body.base_path} requested={len(body.files)} returned={len(contents)}"
    )
    return contents
