"""Workspace and ignore-pattern records."""
import time
import uuid
from typing import Any

import loguru

from prompt_api.dao import SettingDAO, WorkspaceDAO


class WorkspaceNotFoundError(Exception):
    """No workspace with the requested id."""


class WorkspaceService:
    """Workspace records business logic."""

    def __init__(self, workspace_dao: WorkspaceDAO | None = None, setting_dao: SettingDAO | None = None):
        """Initialize WorkspaceService."""
        self.dao = workspace_dao or WorkspaceDAO()
        self.setting_dao = setting_dao or SettingDAO()

    async def list_workspaces(self) -> list[dict[str, Any]]:
        return await self.dao.find_all()

    async def get_workspace(self, workspace_id: str) -> dict[str, Any] | None:
        """
        Get workspace by ID.

        Args:
            workspace_id: Workspace ID

        Returns:
            Workspace document or None
        """
        return await self.dao.find_by_id(workspace_id)

    async def create_workspace(self, name: str, path: str, ignore_patterns: list[str]) -> dict[str, Any]:
        """
        Register a project directory as a workspace.

        Args:
            name: Display name
            path: Absolute project directory on the agent host
            ignore_patterns: Workspace specific ignore patterns

        Returns:
            Workspace document
        """
        now = time.time()
        workspace_doc = {
            "workspace_id": str(uuid.uuid4()),
            "name": name,
            "path": path,
            "ignore_patterns": ignore_patterns,
            "created_at": now,
            "updated_at": now,
        }
        created = await self.dao.create(workspace_doc)
        loguru.logger.info(f"Workspace created name={name!r} path={path} workspace_id={created['workspace_id']}")
        return created

    async def update_workspace(self, workspace_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """
        Apply a partial update.

        Raises:
            WorkspaceNotFoundError: If the workspace does not exist
        """
        data = {k: v for k, v in changes.items() if v is not None}
        data["updated_at"] = time.time()
        if not await self.dao.update(workspace_id, data):
            raise WorkspaceNotFoundError(workspace_id)
        workspace = await self.dao.find_by_id(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        loguru.logger.info(f"Workspace updated workspace_id={workspace_id} fields={sorted(data)}")
        return workspace

    async def delete_workspace(self, workspace_id: str) -> None:
        """
        Delete a workspace record.

        Raises:
            WorkspaceNotFoundError: If the workspace does not exist
        """
        if not await self.dao.delete(workspace_id):
            raise WorkspaceNotFoundError(workspace_id)
        loguru.logger.info(f"Workspace deleted workspace_id={workspace_id}")

    async def get_global_ignore_patterns(self) -> list[str]:
        return await self.setting_dao.get_global_ignore_patterns()

    async def set_global_ignore_patterns(self, patterns: list[str]) -> list[str]:
        cleaned = [p.strip() for p in patterns if p.strip()]
        return await self.setting_dao.set_global_ignore_patterns(cleaned)

    async def get_effective_ignore_patterns(self, workspace: dict[str, Any]) -> list[str]:
        """Global patterns followed by the workspace's own patterns."""
        global_patterns = await self.get_global_ignore_patterns()
        return [*global_patterns, *(workspace.get("ignore_patterns") or [])]
