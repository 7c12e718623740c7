"""Database module."""
from .mongodb import get_client, get_db, ping_db, close_db

__all__ = ["get_client", "get_db", "ping_db", "close_db"]
