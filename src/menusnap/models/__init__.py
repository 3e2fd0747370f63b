"""Pydantic models for menu analysis."""

from .menu import (
    DEFAULT_HEALTH_REASON,
    AnalysisState,
    AnalysisStatus,
    HealthCategory,
    MenuItem,
)
from .scan import MenuScanRecord

__all__ = [
    # Menu analysis
    "AnalysisState",
    "AnalysisStatus",
    "DEFAULT_HEALTH_REASON",
    "HealthCategory",
    "MenuItem",
    # History
    "MenuScanRecord",
]
