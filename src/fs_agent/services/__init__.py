"""Filesystem agent services."""
from .directory_walker import DirectoryWalker, RootNotADirectoryError, RootReadError, WalkError
from .file_reader import FileReader
from .notifier import ChangeNotifier
from .pattern_matcher import PatternMatcher, matches, normalize_pattern
from .watch_registry import ActiveWatch, WatchFilter, WatchRegistry

__all__ = [
    "DirectoryWalker",
    "WalkError",
    "RootNotADirectoryError",
    "RootReadError",
    "FileReader",
    "ChangeNotifier",
    "PatternMatcher",
    "matches",
    "normalize_pattern",
    "ActiveWatch",
    "WatchFilter",
    "WatchRegistry",
]
