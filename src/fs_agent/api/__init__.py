"""API routes module."""
from fastapi import APIRouter

from . import files, health, watch


def create_api_router() -> APIRouter:
    """
    Create and configure the agent API router.

    Returns:
        Configured APIRouter instance
    """
    router = APIRouter()

    router.include_router(health.router, tags=["Health"])
    router.include_router(files.router, tags=["Files"])
    router.include_router(watch.router, tags=["Watch"])

    return router


__all__ = ["create_api_router"]
