"""Filesystem utility functions."""
from pathlib import Path


def safe_join(root: Path, relative_path: str) -> Path:
    """
    Safely join a relative path to a root directory.

    Ensures the result is within the root directory (prevents directory traversal).

    Args:
        root: Root directory path
        relative_path: Relative path to join

    Returns:
        Resolved absolute path

    Raises:
        ValueError: If the result would be outside root
    """
    root_resolved = root.resolve()
    candidate = (root / relative_path).resolve()

    try:
        candidate.relative_to(root_resolved)
    except ValueError:
        raise ValueError(f"Path {relative_path} would escape root directory")

    return candidate


def to_posix_relative(path: str) -> str:
    """
    Normalize a relative path for the wire: ``/`` separators, no leading or trailing slash.

    Args:
        path: Relative path, possibly using host separators

    Returns:
        Forward-slash relative path
    """
    return path.replace("\\", "/").strip("/")
