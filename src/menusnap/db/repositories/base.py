"""Base repository class with common database operations."""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection


class BaseRepository:
    """Base repository providing the query primitives shared by collections."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository with a MongoDB collection.

        Args:
            collection: Motor collection instance
        """
        self.collection = collection

    async def find_many(
        self,
        filter: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        limit: int = 100,
        skip: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Find multiple documents matching filter.

        Args:
            filter: MongoDB query filter
            sort: List of (field, direction) tuples
            limit: Maximum documents to return
            skip: Number of documents to skip

        Returns:
            List of raw documents
        """
        cursor = self.collection.find(filter or {})

        if sort:
            cursor = cursor.sort(sort)

        cursor = cursor.skip(skip).limit(limit)
        return await cursor.to_list(length=limit)

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        """Find single document matching filter."""
        return await self.collection.find_one(filter)

    async def insert_one(self, document: dict[str, Any]) -> str:
        """
        Insert a single document.

        Returns:
            Inserted document ID as string
        """
        result = await self.collection.insert_one(document)
        return str(result.inserted_id)

    async def delete_many(self, filter: dict[str, Any]) -> int:
        """Delete documents matching filter and return how many were removed."""
        result = await self.collection.delete_many(filter)
        return result.deleted_count
