"""API routes module."""
from fastapi import APIRouter

from . import health, internal, realtime, settings, workspaces


def create_api_router() -> APIRouter:
    """
    Create and configure the main API router.

    Returns:
        Configured APIRouter instance
    """
    router = APIRouter()

    router.include_router(health.router, tags=["Health"])
    router.include_router(workspaces.router, tags=["Workspaces"])
    router.include_router(settings.router, tags=["Settings"])
    router.include_router(internal.router, tags=["Internal"])
    router.include_router(realtime.router, tags=["Realtime"])

    return router


__all__ = ["create_api_router"]
