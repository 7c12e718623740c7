"""HTTP client for the filesystem agent."""
from typing import Any

import httpx
import loguru

from shared.config import settings
from shared.schemas import FileContent, FileNode


class AgentError(Exception):
    """Base error for agent calls."""


class AgentUnavailableError(AgentError):
    """The agent could not be reached (connection refused, timeout, ...)."""


class AgentResponseError(AgentError):
    """The agent answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Agent error ({status_code}): {detail}")


def _error_detail(resp: httpx.Response) -> Any:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "detail" in body:
        return body["detail"]
    return body


class AgentService:
    """Filesystem agent client used by the main server."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.agent_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.agent_timeout_seconds
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise AgentUnavailableError(f"Agent unreachable at {self.base_url}: {e!r}") from e

        if not resp.is_success:
            raise AgentResponseError(resp.status_code, _error_detail(resp))
        return resp

    async def check_status(self) -> bool:
        """
        Check whether the agent is running.

        Returns:
            True if ``GET /status`` answers ``{"status": "running"}``
        """
        try:
            resp = await self._request("GET", "/status")
            return resp.json().get("status") == "running"
        except (AgentError, ValueError) as e:
            loguru.logger.warning(f"Agent not available at {self.base_url}: {e}")
            return False

    async def get_structure(self, path: str, ignore_patterns: list[str] | None = None) -> list[FileNode]:
        """
        Get the structure tree of a directory through the agent.

        Args:
            path: Absolute directory path on the agent host
            ignore_patterns: Effective ignore patterns

        Returns:
            Root-level structure nodes
        """
        params = {"path": path}
        if ignore_patterns:
            params["ignorePatterns"] = ",".join(ignore_patterns)
        resp = await self._request("GET", "/structure", params=params)
        return [FileNode.model_validate(node) for node in resp.json()]

    async def read_files(self, base_path: str, files: list[str]) -> list[FileContent]:
        """
        Read several files through the agent (best-effort, may return fewer entries).

        Args:
            base_path: Directory the files are relative to
            files: Relative file paths

        Returns:
            Contents of the readable files
        """
        resp = await self._request("POST", "/files/content", json={"basePath": base_path, "files": files})
        return [FileContent.model_validate(item) for item in resp.json()]

    async def start_watching(self, path: str, callback_url: str, ignore_patterns: list[str]) -> None:
        """
        Ask the agent to watch a directory and post changes to ``callback_url``.

        Args:
            path: Absolute directory path on the agent host
            callback_url: Main server notify-change endpoint
            ignore_patterns: Effective ignore patterns
        """
        await self._request(
            "POST",
            "/watch",
            json={"path": path, "callbackUrl": callback_url, "ignorePatterns": ignore_patterns},
        )
        loguru.logger.info(f"Agent watch requested path={path} callback={callback_url}")

    async def stop_watching(self, path: str) -> bool:
        """
        Ask the agent to stop watching a directory.

        Returns:
            True if the agent had an active watch for the path
        """
        resp = await self._request("POST", "/unwatch", json={"path": path})
        stopped = bool(resp.json().get("stopped", False))
        loguru.logger.info(f"Agent unwatch requested path={path} stopped={stopped}")
        return stopped
