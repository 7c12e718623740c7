"""Best-effort batch file reading."""
import stat
from collections.abc import Iterable
from pathlib import Path

import aiofiles
import aiofiles.os
import loguru

from shared.schemas import FileContent
from shared.utils import safe_join, to_posix_relative


class FileReader:
    """Read many files relative to a base path, skipping the ones that fail."""

    async def path_exists(self, target_path: str) -> bool:
        """Check that a path exists and is accessible."""
        return await aiofiles.os.path.exists(target_path)

    async def read_many(self, base_path: str, relative_paths: Iterable[str]) -> list[FileContent]:
        """
        Read the contents of several files.

        Missing, non-regular, unreadable or non UTF-8 files are logged and
        omitted, so the result may be shorter than the request. Requested
        order is preserved for the files that are returned.

        Args:
            base_path: Directory the relative paths are resolved against
            relative_paths: Paths relative to base_path

        Returns:
            Contents of the files that could be read
        """
        base = Path(base_path)
        results: list[FileContent] = []

        for relative_path in relative_paths:
            try:
                content = await self._read_one(base, relative_path)
            except (OSError, ValueError) as e:
                # UnicodeDecodeError is a ValueError
                loguru.logger.warning(f"Unable to read file {relative_path}: {e}")
                continue
            if content is None:
                loguru.logger.warning(f"Skipping {relative_path}: not a regular file")
                continue
            results.append(FileContent(path=to_posix_relative(relative_path), content=content))

        return results

    async def _read_one(self, base: Path, relative_path: str) -> str | None:
        full_path = safe_join(base, relative_path)
        file_stat = await aiofiles.os.stat(full_path)
        if not stat.S_ISREG(file_stat.st_mode):
            return None
        async with aiofiles.open(full_path, "r", encoding="utf-8", newline="") as f:
            return await f.read()
