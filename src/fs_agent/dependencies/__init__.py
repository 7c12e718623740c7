"""FastAPI dependencies module."""
from .services import get_directory_walker, get_file_reader, get_watch_registry

__all__ = [
    "get_directory_walker",
    "get_file_reader",
    "get_watch_registry",
]
