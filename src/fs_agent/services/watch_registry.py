"""Live filesystem watches, at most one per absolute path."""
import asyncio
import contextlib
import os
from collections.abc import Iterable
from dataclasses import dataclass, field

import loguru
from watchfiles import Change, awatch

from shared.config import settings
from shared.schemas import ChangeType
from shared.utils import to_posix_relative

from .notifier import ChangeNotifier
from .pattern_matcher import PatternMatcher


@dataclass
class ActiveWatch:
    """Registry entry for one watched directory."""
    path: str
    callback_url: str
    ignore_patterns: list[str]
    stop_event: asyncio.Event = field(default_factory=asyncio.Event)
    # Relative paths of directories seen under the root; tells unlink from unlinkDir
    known_dirs: set[str] = field(default_factory=set)
    task: asyncio.Task | None = None


class WatchFilter:
    """watchfiles filter dropping hidden entries, ignored paths and paths past the depth bound."""

    def __init__(self, root: str, matcher: PatternMatcher, max_depth: int, known_dirs: set[str]):
        self.root = root
        self.matcher = matcher
        self.max_depth = max_depth
        self.known_dirs = known_dirs

    def relative(self, path: str) -> str | None:
        """Path relative to the watched root, or None when it is the root or outside it."""
        try:
            rel = os.path.relpath(path, self.root)
        except ValueError:
            return None
        if rel == "." or rel == ".." or rel.startswith(".." + os.sep):
            return None
        return to_posix_relative(rel)

    def allows(self, relative_path: str, is_dir: bool = False) -> bool:
        parts = relative_path.split("/")
        if any(part.startswith(".") for part in parts):
            return False
        if len(parts) - 1 > self.max_depth:
            return False
        return not self.matcher.matches(relative_path, is_dir=is_dir)

    def __call__(self, change: Change, path: str) -> bool:
        rel = self.relative(path)
        if rel is None:
            return False
        if rel in self.known_dirs or os.path.isdir(path):
            return self.allows(rel, is_dir=True)
        if os.path.lexists(path):
            return self.allows(rel, is_dir=False)
        # Gone and never seen as a directory (e.g. inside an ignored tree): it may have been one
        return self.allows(rel, is_dir=False) and self.allows(rel, is_dir=True)

    def watches_children(self, relative_dir: str) -> bool:
        """Whether entries directly inside ``relative_dir`` are within the depth bound."""
        return len(relative_dir.split("/")) <= self.max_depth


class WatchRegistry:
    """Owns every OS watch of the agent process.

    ``start_watching`` is idempotent per absolute path: a second start on a
    watched path neither restarts it nor changes its callback or patterns.
    A watch whose backend fails stays registered until ``stop_watching``.
    """

    def __init__(
        self,
        notifier: ChangeNotifier | None = None,
        debounce_ms: int | None = None,
        step_ms: int | None = None,
        max_depth: int | None = None,
    ):
        self.notifier = notifier or ChangeNotifier()
        self.debounce_ms = debounce_ms if debounce_ms is not None else settings.watch_debounce_ms
        self.step_ms = step_ms if step_ms is not None else settings.watch_step_ms
        self.max_depth = max_depth if max_depth is not None else settings.watch_max_depth
        self._watches: dict[str, ActiveWatch] = {}

    @staticmethod
    def _key(path: str) -> str:
        return os.path.abspath(path)

    def start_watching(self, path: str, callback_url: str, ignore_patterns: Iterable[str] = ()) -> bool:
        """
        Start watching the tree under ``path`` unless a watch already exists.

        Must be called from the event loop; the watch is established in a
        background task, so this returns before the initial scan completes.

        Args:
            path: Directory to watch
            callback_url: Where change notifications are POSTed
            ignore_patterns: Patterns excluded from notifications

        Returns:
            True if a new watch was created, False if one was already active
        """
        key = self._key(path)
        if key in self._watches:
            loguru.logger.info(f"Watcher is already active for path: {key}")
            return False

        watch = ActiveWatch(path=key, callback_url=callback_url, ignore_patterns=list(ignore_patterns))
        self._watches[key] = watch
        watch.task = asyncio.get_running_loop().create_task(self._run(watch), name=f"watch:{key}")
        loguru.logger.info(f"Initializing new watcher for path={key} callback={callback_url}")
        return True

    async def stop_watching(self, path: str) -> bool:
        """
        Close the watch on ``path``.

        Returns:
            True if a watch was closed, False if none was registered
        """
        key = self._key(path)
        watch = self._watches.pop(key, None)
        if watch is None:
            loguru.logger.warning(f"No active watcher to stop for path: {key}")
            return False
        await self._close(watch)
        loguru.logger.info(f"Watcher stopped for path={key}")
        return True

    async def stop_all(self) -> None:
        """Close every watch; used at shutdown."""
        for key in list(self._watches):
            await self.stop_watching(key)

    def get_active_count(self) -> int:
        return len(self._watches)

    def get_active_paths(self) -> list[str]:
        return list(self._watches)

    async def _close(self, watch: ActiveWatch) -> None:
        watch.stop_event.set()
        task = watch.task
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self, watch: ActiveWatch) -> None:
        watch_filter = WatchFilter(
            watch.path, PatternMatcher(watch.ignore_patterns), self.max_depth, watch.known_dirs
        )
        try:
            entries = await asyncio.to_thread(self._scan_tree, watch_filter, watch.path)
            watch.known_dirs.update(rel for change_type, rel in entries if change_type is ChangeType.ADD_DIR)
            loguru.logger.info(
                f"Watcher is ready path={watch.path} directories={len(watch.known_dirs)} "
                f"ignore_patterns={len(watch.ignore_patterns)}"
            )
            while not watch.stop_event.is_set():
                if not os.path.isdir(watch.path):
                    raise FileNotFoundError(f"Watched directory is gone: {watch.path}")
                targets = self._watch_targets(watch, watch_filter)
                # Only allowed directories within the depth bound get an OS watch;
                # the target set is rebuilt whenever directories come or go
                async with contextlib.aclosing(awatch(
                    *targets,
                    watch_filter=watch_filter,
                    debounce=self.debounce_ms,
                    step=self.step_ms,
                    stop_event=watch.stop_event,
                    recursive=False,
                )) as batches:
                    async for changes in batches:
                        events = await self._expand_new_directories(
                            watch, watch_filter, self._coalesce(watch, watch_filter, changes)
                        )
                        for change_type, relative_path in events:
                            await self.notifier.notify(watch.callback_url, change_type, relative_path)
                        if any(t in (ChangeType.ADD_DIR, ChangeType.UNLINK_DIR) for t, _ in events):
                            break
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Left registered on purpose until stop_watching clears it
            loguru.logger.error(f"Watcher error on {watch.path}: {e!r}")

    def _watch_targets(self, watch: ActiveWatch, watch_filter: WatchFilter) -> list[str]:
        targets = [watch.path]
        for rel in sorted(watch.known_dirs):
            full_path = os.path.join(watch.path, *rel.split("/"))
            if watch_filter.watches_children(rel) and os.path.isdir(full_path):
                targets.append(full_path)
        return targets

    async def _expand_new_directories(
        self,
        watch: ActiveWatch,
        watch_filter: WatchFilter,
        events: list[tuple[ChangeType, str]],
    ) -> list[tuple[ChangeType, str]]:
        """Report the contents of new directories, which had no watch while they filled up."""
        expanded: list[tuple[ChangeType, str]] = []
        for change_type, rel in events:
            expanded.append((change_type, rel))
            if change_type is not ChangeType.ADD_DIR:
                continue
            full_path = os.path.join(watch.path, *rel.split("/"))
            for entry in await asyncio.to_thread(self._scan_tree, watch_filter, full_path):
                if entry[0] is ChangeType.ADD_DIR:
                    watch.known_dirs.add(entry[1])
                expanded.append(entry)
        return expanded

    def _scan_tree(self, watch_filter: WatchFilter, start: str) -> list[tuple[ChangeType, str]]:
        """Allowed entries below ``start``, top-down, as addDir/add events. Symlinks are not followed."""
        found: list[tuple[ChangeType, str]] = []
        for dirpath, dirnames, filenames in os.walk(start):
            kept = []
            for name in sorted(dirnames):
                full_path = os.path.join(dirpath, name)
                rel = watch_filter.relative(full_path)
                if rel is None or os.path.islink(full_path):
                    continue
                if watch_filter.allows(rel, is_dir=True):
                    kept.append(name)
                    found.append((ChangeType.ADD_DIR, rel))
            for name in sorted(filenames):
                rel = watch_filter.relative(os.path.join(dirpath, name))
                if rel is not None and watch_filter.allows(rel):
                    found.append((ChangeType.ADD, rel))
            dirnames[:] = kept
        return found

    def _coalesce(
        self,
        watch: ActiveWatch,
        watch_filter: WatchFilter,
        changes: set[tuple[Change, str]],
    ) -> list[tuple[ChangeType, str]]:
        """
        Reduce one debounced batch to at most one event per path.

        The path's state after the batch decides: present and created → add /
        addDir; gone and deleted → unlink / unlinkDir. Pure modifications are
        not relayed.
        """
        by_path: dict[str, set[Change]] = {}
        for change, raw_path in changes:
            by_path.setdefault(raw_path, set()).add(change)

        events: list[tuple[ChangeType, str]] = []
        for raw_path in sorted(by_path):
            kinds = by_path[raw_path]
            rel = watch_filter.relative(raw_path)
            if rel is None:
                continue

            if os.path.lexists(raw_path):
                if Change.added not in kinds and Change.deleted not in kinds:
                    continue
                if os.path.isdir(raw_path) and not os.path.islink(raw_path):
                    watch.known_dirs.add(rel)
                    events.append((ChangeType.ADD_DIR, rel))
                else:
                    events.append((ChangeType.ADD, rel))
            elif Change.deleted in kinds:
                if rel in watch.known_dirs:
                    prefix = f"{rel}/"
                    watch.known_dirs.difference_update(
                        {d for d in watch.known_dirs if d == rel or d.startswith(prefix)}
                    )
                    events.append((ChangeType.UNLINK_DIR, rel))
                else:
                    events.append((ChangeType.UNLINK, rel))

        return events
