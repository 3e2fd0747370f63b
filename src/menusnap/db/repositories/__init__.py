"""Repository classes for database access."""

from .menu_scans import MenuScanRepository

__all__ = ["MenuScanRepository"]
