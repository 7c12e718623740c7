"""Shared schemas for the filesystem agent and the main server."""
from .filesystem import ChangeType, FileContent, FileNode

__all__ = [
    "ChangeType",
    "FileContent",
    "FileNode",
]
