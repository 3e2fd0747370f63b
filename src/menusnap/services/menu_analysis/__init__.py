"""
Menu Analysis Service - photo in, ranked menu items out.

Image preprocessing, the vision model request, tolerant response parsing,
and the analysis lifecycle state machine.
"""

from .client import MenuExtractionClient
from .coordinator import (
    NO_ITEMS_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    AnalysisCoordinator,
    rank_items,
)
from .factory import build_coordinator, build_extraction_client
from .image import compress_for_history, prepare
from .parser import extract_json_array, extract_text, parse

__all__ = [
    "AnalysisCoordinator",
    "MenuExtractionClient",
    "NO_ITEMS_MESSAGE",
    "UNEXPECTED_ERROR_MESSAGE",
    "build_coordinator",
    "build_extraction_client",
    "compress_for_history",
    "extract_json_array",
    "extract_text",
    "parse",
    "prepare",
    "rank_items",
]
