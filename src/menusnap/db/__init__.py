"""Database module - MongoDB connection and repositories."""

from .mongo import MongoDB
from .repositories import MenuScanRepository

__all__ = ["MenuScanRepository", "MongoDB"]
