"""Repository for saved menu scans (scan history)."""

import logging

from motor.motor_asyncio import AsyncIOMotorCollection

from menusnap.core.exceptions import ScanNotFoundError
from menusnap.models.scan import MenuScanRecord

from .base import BaseRepository

logger = logging.getLogger(__name__)


class MenuScanRepository(BaseRepository):
    """
    Repository for menu scan history.

    Stored in the `menu_scans` collection, keyed by `scan_id`. Records are
    write-once: there is no update operation.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def ensure_indexes(self) -> None:
        """Create the lookup and history-ordering indexes."""
        await self.collection.create_index("scan_id", unique=True)
        await self.collection.create_index([("scan_date", -1)])

    async def save(self, record: MenuScanRecord) -> str:
        """
        Store a new scan record.

        Returns:
            The record's scan id
        """
        await self.insert_one(record.to_document())
        logger.info(
            f"Saved menu scan {record.id} for '{record.restaurant_name}' ({len(record.items)} items)"
        )
        return record.id

    async def get(self, scan_id: str) -> MenuScanRecord:
        """
        Get a scan record by id.

        Raises:
            ScanNotFoundError: If no scan has this id
        """
        doc = await self.find_one({"scan_id": scan_id})
        if doc is None:
            raise ScanNotFoundError(scan_id)
        return MenuScanRecord.from_document(doc)

    async def list_recent(self, limit: int = 100) -> list[MenuScanRecord]:
        """List saved scans, most recent first."""
        docs = await self.find_many(sort=[("scan_date", -1)], limit=limit)
        return [MenuScanRecord.from_document(doc) for doc in docs]

    async def delete(self, scan_id: str) -> bool:
        """
        Delete a scan from history.

        Returns:
            True if a scan was deleted
        """
        deleted = await self.delete_many({"scan_id": scan_id})
        if deleted:
            logger.info(f"Deleted menu scan {scan_id}")
        return deleted > 0
