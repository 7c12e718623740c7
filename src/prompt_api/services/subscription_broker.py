"""Reference-counted live workspace subscriptions and change fan-out."""
import asyncio
from collections.abc import Callable
from typing import Any, Protocol

import loguru

from prompt_api.schemas.realtime import ERROR, FILESYSTEM_CHANGE, WATCH_STARTED
from shared.config import settings
from shared.schemas import ChangeType

from .agent_service import AgentError, AgentService
from .workspace_service import WorkspaceService


class RealtimeConnection(Protocol):
    """A live client connection the broker can push events to."""

    connection_id: str

    async def send(self, event: str, data: dict[str, Any]) -> None:
        ...


class SubscriptionBroker:
    """Track which connections watch which workspace and drive the agent watches.

    A connection watches at most one workspace. The first subscriber of a
    workspace starts the agent watch, the last one leaving stops it. All map
    updates are synchronous between awaits, so the single event loop keeps
    them consistent without locks; agent start/stop calls for one workspace
    are chained through the pending start/stop tasks instead.
    """

    def __init__(
        self,
        workspace_service: WorkspaceService,
        agent_service: AgentService,
        callback_url_builder: Callable[[str], str] | None = None,
    ):
        self.workspace_service = workspace_service
        self.agent_service = agent_service
        self._callback_url = callback_url_builder or settings.notify_callback_url
        self._counts: dict[str, int] = {}
        self._subscribers: dict[str, dict[str, RealtimeConnection]] = {}
        self._connection_resources: dict[str, str] = {}
        # workspace id -> path the agent watch was started on
        self._watched_paths: dict[str, str] = {}
        self._pending_starts: dict[str, asyncio.Task] = {}
        self._pending_stops: dict[str, asyncio.Task] = {}

    # -- introspection -----------------------------------------------------

    def get_count(self, resource_id: str) -> int:
        return self._counts.get(resource_id, 0)

    def get_subscribers(self, resource_id: str) -> list[str]:
        return list(self._subscribers.get(resource_id, {}))

    def get_resource(self, connection: RealtimeConnection) -> str | None:
        return self._connection_resources.get(connection.connection_id)

    def is_watching(self, resource_id: str) -> bool:
        """Whether an agent watch is established for the workspace."""
        return resource_id in self._watched_paths

    # -- protocol ------------------------------------------------------------

    async def watch(self, connection: RealtimeConnection, resource_id: str) -> bool:
        """
        Subscribe a connection to a workspace.

        Leaves the connection's previous workspace first. Emits
        ``watch-started`` on success, ``error`` otherwise; on failure the
        connection is left unsubscribed.

        Args:
            connection: Client connection
            resource_id: Workspace ID

        Returns:
            True if the connection is now subscribed
        """
        current = self.get_resource(connection)
        if current == resource_id:
            await connection.send(WATCH_STARTED, {"workspaceId": resource_id})
            return True
        if current is not None:
            await self.unwatch(connection)

        try:
            workspace = await self.workspace_service.get_workspace(resource_id)
            if workspace is None:
                await connection.send(ERROR, {"message": "Workspace not found"})
                return False
            patterns = await self.workspace_service.get_effective_ignore_patterns(workspace)
        except Exception as e:
            loguru.logger.error(f"Workspace lookup failed workspace_id={resource_id}: {e}")
            await connection.send(ERROR, {"message": "Failed to start watching workspace"})
            return False

        count = self._increment(connection, resource_id)
        loguru.logger.info(
            f"Subscription added workspace_id={resource_id} connection={connection.connection_id} count={count}"
        )

        start = self._pending_starts.get(resource_id)
        if start is None and resource_id not in self._watched_paths:
            start = asyncio.get_running_loop().create_task(
                self._start_upstream(resource_id, workspace["path"], patterns)
            )
            self._pending_starts[resource_id] = start

        if start is not None:
            try:
                await asyncio.shield(start)
            except Exception as e:
                loguru.logger.warning(f"Agent watch failed workspace_id={resource_id}: {e}")
                self._decrement(connection, resource_id)
                await connection.send(ERROR, {"message": f"Failed to start watching workspace: {e}"})
                return False

        await connection.send(WATCH_STARTED, {"workspaceId": resource_id})
        return True

    async def unwatch(self, connection: RealtimeConnection) -> str | None:
        """
        Unsubscribe a connection from its workspace.

        The last subscriber leaving stops the agent watch.

        Returns:
            The workspace ID left, or None if the connection watched nothing
        """
        resource_id = self.get_resource(connection)
        if resource_id is None:
            return None

        remaining = self._decrement(connection, resource_id)
        loguru.logger.info(
            f"Subscription removed workspace_id={resource_id} connection={connection.connection_id} count={remaining}"
        )
        if remaining > 0:
            return resource_id

        stop = asyncio.get_running_loop().create_task(self._stop_upstream(resource_id))
        self._pending_stops[resource_id] = stop
        await asyncio.shield(stop)
        return resource_id

    async def disconnect(self, connection: RealtimeConnection) -> None:
        """Drop every subscription of a closed connection."""
        await self.unwatch(connection)

    async def broadcast(self, resource_id: str, change_type: ChangeType, path: str) -> int:
        """
        Send a filesystem change to every current subscriber of a workspace.

        A failing send is logged and skipped. Nothing is buffered for later
        subscribers.

        Returns:
            Number of connections the event was delivered to
        """
        subscribers = list(self._subscribers.get(resource_id, {}).values())
        payload = {"type": ChangeType(change_type).value, "path": path, "workspaceId": resource_id}
        results = await asyncio.gather(
            *(connection.send(FILESYSTEM_CHANGE, payload) for connection in subscribers),
            return_exceptions=True,
        )

        delivered = 0
        for connection, result in zip(subscribers, results):
            if isinstance(result, BaseException):
                loguru.logger.warning(
                    f"Dropping change for connection={connection.connection_id} workspace_id={resource_id}: {result!r}"
                )
            else:
                delivered += 1
        return delivered

    # -- internals -----------------------------------------------------------

    def _increment(self, connection: RealtimeConnection, resource_id: str) -> int:
        self._connection_resources[connection.connection_id] = resource_id
        self._subscribers.setdefault(resource_id, {})[connection.connection_id] = connection
        self._counts[resource_id] = self._counts.get(resource_id, 0) + 1
        return self._counts[resource_id]

    def _decrement(self, connection: RealtimeConnection, resource_id: str) -> int:
        if self._connection_resources.get(connection.connection_id) != resource_id:
            return self._counts.get(resource_id, 0)
        del self._connection_resources[connection.connection_id]

        group = self._subscribers.get(resource_id, {})
        group.pop(connection.connection_id, None)
        remaining = self._counts.get(resource_id, 0) - 1
        if remaining <= 0:
            self._counts.pop(resource_id, None)
            self._subscribers.pop(resource_id, None)
            return 0
        self._counts[resource_id] = remaining
        return remaining

    async def _start_upstream(self, resource_id: str, path: str, patterns: list[str]) -> None:
        try:
            stop = self._pending_stops.get(resource_id)
            if stop is not None:
                await asyncio.shield(stop)
            await self.agent_service.start_watching(path, self._callback_url(resource_id), patterns)
            self._watched_paths[resource_id] = path
            loguru.logger.info(f"Agent watch established workspace_id={resource_id} path={path}")
        finally:
            if self._pending_starts.get(resource_id) is asyncio.current_task():
                del self._pending_starts[resource_id]

    async def _stop_upstream(self, resource_id: str) -> None:
        try:
            start = self._pending_starts.get(resource_id)
            if start is not None:
                try:
                    await asyncio.shield(start)
                except Exception:
                    # Never established, nothing to stop
                    return

            if resource_id in self._counts:
                # Someone subscribed again while the start was in flight
                return

            path = self._watched_paths.pop(resource_id, None)
            if path is None:
                return
            try:
                await self.agent_service.stop_watching(path)
                loguru.logger.info(f"Agent watch stopped workspace_id={resource_id} path={path}")
            except AgentError as e:
                loguru.logger.warning(f"Agent unwatch failed workspace_id={resource_id} path={path}: {e}")
        finally:
            if self._pending_stops.get(resource_id) is asyncio.current_task():
                del self._pending_stops[resource_id]
