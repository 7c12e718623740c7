"""Ignore-pattern matching for structure walks and watches."""
from collections.abc import Iterable

import loguru
from pathspec.patterns import GitWildMatchPattern


def normalize_pattern(pattern: str) -> str:
    """
    Make a bare name match at any depth.

    A pattern without ``/`` that does not already start with ``**/`` is
    rewritten to ``**/<pattern>``, so ``node_modules`` also matches
    ``packages/app/node_modules``.

    Args:
        pattern: Raw ignore pattern

    Returns:
        Normalized pattern
    """
    if pattern.startswith("!"):
        return "!" + normalize_pattern(pattern[1:])
    if "/" not in pattern and not pattern.startswith("**/"):
        return f"**/{pattern}"
    return pattern


def _expand(pattern: str) -> list[str]:
    """Also match the directory itself for a ``dir/**`` pattern; a bare stem stays anchored."""
    if pattern.startswith("!") or not pattern.endswith("/**"):
        return [pattern]
    stem = pattern[:-3]
    if not stem or stem == "**":
        return [pattern]
    return [pattern, stem if "/" in stem else f"/{stem}"]


class PatternMatcher:
    """Compiled set of ignore patterns; any matching pattern excludes a path.

    Matching follows gitignore rules rather than plain globbing: a pattern
    that matches a path also matches everything below it, and wildcards match
    dotfiles. A trailing ``/**`` also matches the directory itself, so
    ``node_modules/**`` excludes ``node_modules`` as well as its contents.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns = [p for p in patterns if p and p.strip()]
        self._compiled: list[GitWildMatchPattern] = []
        for pattern in self.patterns:
            for source in _expand(normalize_pattern(pattern.strip())):
                try:
                    compiled = GitWildMatchPattern(source)
                except ValueError as e:
                    loguru.logger.warning(f"Skipping invalid ignore pattern {pattern!r}: {e}")
                    break
                # Negated and comment patterns exclude nothing
                if compiled.include:
                    self._compiled.append(compiled)

    def __bool__(self) -> bool:
        return bool(self._compiled)

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        Check a relative path against the compiled patterns.

        Args:
            relative_path: Path relative to the walk/watch root
            is_dir: Also try the path with a trailing ``/`` so directory-only
                patterns such as ``build/`` apply

        Returns:
            True on the first matching pattern, False otherwise
        """
        normalized = relative_path.replace("\\", "/")
        candidates = (normalized, f"{normalized}/") if is_dir else (normalized,)
        for compiled in self._compiled:
            for candidate in candidates:
                if compiled.match_file(candidate):
                    return True
        return False


def matches(relative_path: str, patterns: Iterable[str]) -> bool:
    """
    Return True if ``relative_path`` matches any of ``patterns``.

    Uses gitignore semantics, not minimatch: ``matches("a/b/c", ["a/b"])`` is
    True because a match covers the whole subtree, and ``matches(".env", ["*"])``
    is True because wildcards also match dotfiles.
    """
    return PatternMatcher(patterns).matches(relative_path)
