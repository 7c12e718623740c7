"""Service dependencies."""
from fastapi import Request

from fs_agent.services import DirectoryWalker, FileReader, WatchRegistry


def get_watch_registry(request: Request) -> WatchRegistry:
    """
    Get the process-wide WatchRegistry built in the app lifespan.

    Returns:
        WatchRegistry instance
    """
    return request.app.state.watch_registry


def get_directory_walker() -> DirectoryWalker:
    """
    Get DirectoryWalker instance.

    Returns:
        DirectoryWalker instance
    """
    return DirectoryWalker()


def get_file_reader() -> FileReader:
    """
    Get FileReader instance.

    Returns:
        FileReader instance
    """
    return FileReader()
