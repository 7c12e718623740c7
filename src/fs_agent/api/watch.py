"""Filesystem watch routes."""
import loguru
from fastapi import APIRouter, Depends, HTTPException, status

from fs_agent.dependencies import get_watch_registry
from fs_agent.schemas import (
    ActiveWatchesResponse,
    UnwatchRequest,
    UnwatchResponse,
    WatchAcceptedResponse,
    WatchRequest,
)
from fs_agent.services import WatchRegistry

router = APIRouter()


@router.post("/watch", response_model=WatchAcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_watch(
    body: WatchRequest,
    registry: WatchRegistry = Depends(get_watch_registry),
):
    """Start watching a directory; the watch is established in the background."""
    loguru.logger.info(f"Received request to watch path: {body.path}")
    if not body.path or not body.callback_url:
        raise HTTPException(status_code=400, detail='Parameters "path" and "callbackUrl" are required')

    try:
        registry.start_watching(body.path, body.callback_url, body.ignore_patterns)
    except Exception as e:
        loguru.logger.error(f"Failed to start watcher path={body.path}: {e}")
        raise HTTPException(status_code=500, detail="Failed to start watcher")

    return WatchAcceptedResponse(message="Watch request accepted")


@router.post("/unwatch", response_model=UnwatchResponse)
async def stop_watch(
    body: UnwatchRequest,
    registry: WatchRegistry = Depends(get_watch_registry),
):
    """Stop watching a directory; stopping an unwatched path is not an error."""
    if not body.path:
        raise HTTPException(status_code=400, detail='Parameter "path" is required')

    stopped = await registry.stop_watching(body.path)
    message = "Watcher stopped" if stopped else "No active watcher for this path"
    return UnwatchResponse(message=message, stopped=stopped)


@router.get("/watches", response_model=ActiveWatchesResponse)
async def list_watches(registry: WatchRegistry = Depends(get_watch_registry)):
    """List the paths currently watched."""
    return ActiveWatchesResponse(count=registry.get_active_count(), paths=registry.get_active_paths())
