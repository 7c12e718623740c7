"""Health check routes."""
from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def describe():
    """Describe the agent and its endpoints."""
    return {
        "name": "File System Agent",
        "version": "0.1.0",
        "status": "running",
        "endpoints": {
            "health": "GET /status",
            "structure": "GET /structure?path=<path>&ignorePatterns=<patterns>",
            "fileContent": "POST /files/content",
            "watch": "POST /watch",
            "unwatch": "POST /unwatch",
            "watches": "GET /watches",
        },
    }


@router.get("/status")
async def agent_status():
    """Liveness endpoint polled by the main server."""
    return {"status": "running"}
