"""Shared utilities."""
from .filesystem import safe_join, to_posix_relative
from .http import validation_exception_handler
from .logging import configure_logging

__all__ = [
    "safe_join",
    "to_posix_relative",
    "validation_exception_handler",
    "configure_logging",
]
