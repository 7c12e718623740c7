"""Filesystem wire schemas shared by the agent and the main server."""
from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ChangeType(str, Enum):
    """Filesystem change kinds relayed from the agent to the main server."""
    ADD = "add"
    UNLINK = "unlink"
    ADD_DIR = "addDir"
    UNLINK_DIR = "unlinkDir"


class FileNode(BaseModel):
    """Recursive structure tree node.

    ``path`` is relative to the walked root, uses ``/`` separators and never
    starts or ends with a slash. ``children`` is only set on directories.
    """
    name: str
    path: str
    type: Literal["file", "directory"]
    children: list["FileNode"] | None = None


class FileContent(BaseModel):
    """Content of one file read relative to a base path."""
    path: str
    content: str
