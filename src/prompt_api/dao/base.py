"""Base DAO for collections keyed by a string id field."""
from abc import ABC, abstractmethod
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from shared.database import get_db

# Mongo's own _id never leaves the DAO layer
NO_OBJECT_ID = {"_id": 0}


class BaseDAO(ABC):
    """Data Access Object over one collection whose documents carry their own id field."""

    collection_name: str
    id_field: str

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return get_db()[self.collection_name]

    @abstractmethod
    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a new document."""

    async def find_by_id(self, id_value: str) -> dict[str, Any] | None:
        """Find a document by its id field."""
        return await self.collection.find_one({self.id_field: id_value}, NO_OBJECT_ID)

    async def update(self, id_value: str, data: dict[str, Any]) -> bool:
        """
        Set fields on a document.

        Returns:
            True if a document matched, False otherwise
        """
        result = await self.collection.update_one({self.id_field: id_value}, {"$set": data})
        return result.matched_count > 0

    async def delete(self, id_value: str) -> bool:
        """
        Delete a document.

        Returns:
            True if deleted, False otherwise
        """
        result = await self.collection.delete_one({self.id_field: id_value})
        return result.deleted_count > 0
