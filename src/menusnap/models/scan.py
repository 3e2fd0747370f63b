"""Pydantic model for a saved menu scan (history entry)."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .menu import MenuItem


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MenuScanRecord(BaseModel):
    """
    A successful analysis the user chose to keep.

    Records are created once and never updated; deleting from history is
    the only other lifecycle event.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()), description="Scan identifier")
    restaurant_name: str = Field(..., description="User-entered restaurant name")
    scan_date: datetime = Field(default_factory=_utcnow, description="Creation timestamp (UTC)")
    image: bytes = Field(b"", repr=False, description="Compressed JPEG of the menu photo")
    items: tuple[MenuItem, ...] = Field(default=(), description="Ranked menu items")

    @field_validator("restaurant_name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("restaurant name must not be blank")
        return value

    @classmethod
    def create(
        cls,
        restaurant_name: str,
        image: bytes,
        items: list[MenuItem] | tuple[MenuItem, ...],
    ) -> "MenuScanRecord":
        """Build a new record stamped with a fresh id and the current time."""
        return cls(restaurant_name=restaurant_name, image=image, items=tuple(items))

    @property
    def formatted_date(self) -> str:
        """Abbreviated date with short time, e.g. 'Jan 10, 2026, 6:42 PM'."""
        hour = self.scan_date.strftime("%I").lstrip("0") or "12"
        return f"{self.scan_date:%b} {self.scan_date.day}, {self.scan_date.year}, {hour}:{self.scan_date:%M %p}"

    def to_document(self) -> dict[str, Any]:
        """Serialize for MongoDB; items are stored in their wire (camelCase) form."""
        return {
            "scan_id": self.id,
            "restaurant_name": self.restaurant_name,
            "scan_date": self.scan_date,
            "image": self.image,
            "items": [item.model_dump(mode="json", by_alias=True) for item in self.items],
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "MenuScanRecord":
        """Rebuild a record from a stored MongoDB document."""
        scan_date = doc["scan_date"]
        # Mongo returns naive datetimes in UTC
        if scan_date.tzinfo is None:
            scan_date = scan_date.replace(tzinfo=timezone.utc)
        return cls(
            id=doc["scan_id"],
            restaurant_name=doc["restaurant_name"],
            scan_date=scan_date,
            image=bytes(doc.get("image") or b""),
            items=tuple(MenuItem.model_validate(item) for item in doc.get("items", [])),
        )
