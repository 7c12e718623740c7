"""Shared utilities and configurations.

New code should import from the submodules directly.
"""
# Config
from .config import settings

# Database
from .database import get_client, get_db, close_db

# Utils
from .utils import safe_join, to_posix_relative


__all__ = [
    # Config
    "settings",
    # Database
    "get_client",
    "get_db",
    "close_db",
    # Utils
    "safe_join",
    "to_posix_relative",
]
