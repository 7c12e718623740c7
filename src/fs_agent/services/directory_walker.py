"""Directory structure walking."""
import asyncio
import os
from collections.abc import Iterable

import loguru

from shared.schemas import FileNode

from .pattern_matcher import PatternMatcher


class WalkError(Exception):
    """Base error for structure walks."""


class RootNotADirectoryError(WalkError):
    """The walk root does not resolve to a directory."""


class RootReadError(WalkError):
    """The walk root itself could not be listed."""


class DirectoryWalker:
    """Build the structure tree of a directory, honoring ignore patterns."""

    async def walk(self, root_path: str, ignore_patterns: Iterable[str] = ()) -> list[FileNode]:
        """
        Recursively list a directory as a sorted tree of nodes.

        Runs the blocking traversal in a worker thread.

        Args:
            root_path: Directory to walk
            ignore_patterns: Patterns excluding entries (and their subtrees)

        Returns:
            Root-level nodes, directories first, each group sorted by name

        Raises:
            RootNotADirectoryError: If root_path is not a directory
            RootReadError: If root_path cannot be listed
        """
        matcher = PatternMatcher(ignore_patterns)
        return await asyncio.to_thread(self.walk_sync, root_path, matcher)

    def walk_sync(self, root_path: str, matcher: PatternMatcher) -> list[FileNode]:
        """Blocking variant of :meth:`walk` taking a compiled matcher."""
        if not os.path.isdir(root_path):
            raise RootNotADirectoryError(f"Source path must be a directory: {root_path}")
        try:
            return self._build_tree(root_path, "", matcher)
        except OSError as e:
            raise RootReadError(f"Failed to read directory {root_path}: {e}") from e

    def _build_tree(self, dir_path: str, relative_path: str, matcher: PatternMatcher) -> list[FileNode]:
        directories: list[FileNode] = []
        files: list[FileNode] = []

        with os.scandir(dir_path) as entries:
            items = list(entries)

        for item in items:
            item_relative = f"{relative_path}/{item.name}" if relative_path else item.name
            # Symlinks are reported as plain files and never followed
            try:
                is_dir = item.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if matcher.matches(item_relative, is_dir=is_dir):
                continue

            if is_dir:
                try:
                    children = self._build_tree(item.path, item_relative, matcher)
                except OSError as e:
                    loguru.logger.warning(f"Skipping unreadable directory {item_relative}: {e}")
                    continue
                directories.append(
                    FileNode(name=item.name, path=item_relative, type="directory", children=children)
                )
            else:
                files.append(FileNode(name=item.name, path=item_relative, type="file"))

        directories.sort(key=lambda node: node.name)
        files.sort(key=lambda node: node.name)
        return directories + files
