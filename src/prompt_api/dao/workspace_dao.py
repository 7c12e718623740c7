"""Workspace Data Access Object."""
from typing import Any

from .base import NO_OBJECT_ID, BaseDAO


class WorkspaceDAO(BaseDAO):
    """Workspace DAO implementation."""

    collection_name = "workspaces"
    id_field = "workspace_id"

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Create a new workspace.

        Args:
            data: Workspace document to insert

        Returns:
            Created workspace document
        """
        await self.collection.insert_one(data)
        data.pop("_id", None)
        return data

    async def find_all(self) -> list[dict[str, Any]]:
        """
        List all workspaces, most recently updated first.

        Returns:
            List of workspace documents
        """
        cursor = self.collection.find({}, NO_OBJECT_ID).sort("updated_at", -1)
        return await cursor.to_list(length=None)

    async def create_indexes(self):
        """Create indexes for the workspaces collection.

        This should be called during application initialization.
        """
        await self.collection.create_index(self.id_field, unique=True)
        await self.collection.create_index([("updated_at", -1)])
