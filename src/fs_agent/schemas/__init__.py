"""Filesystem agent schemas module."""
from .files import FileContentRequest
from .watch import (
    ActiveWatchesResponse,
    UnwatchRequest,
    UnwatchResponse,
    WatchAcceptedResponse,
    WatchRequest,
)

__all__ = [
    # Files
    "FileContentRequest",
    # Watch
    "WatchRequest",
    "UnwatchRequest",
    "WatchAcceptedResponse",
    "UnwatchResponse",
    "ActiveWatchesResponse",
]
