"""
Factory for menu analysis services.

Services are built explicitly from settings and handed to their callers;
nothing is cached at module level.
"""

import logging

from menusnap.core.config import Settings

from .client import MenuExtractionClient
from .coordinator import AnalysisCoordinator

logger = logging.getLogger(__name__)


def build_extraction_client(settings: Settings) -> MenuExtractionClient:
    """Create a MenuExtractionClient configured from settings."""
    if not settings.is_api_configured:
        logger.warning("MENUSNAP_ANTHROPIC_API_KEY is not set; requests will be rejected")

    logger.info(f"Configuring menu extraction: model={settings.anthropic_model}")

    return MenuExtractionClient(
        api_key=settings.anthropic_api_key,
        api_url=settings.anthropic_api_url,
        model=settings.anthropic_model,
        api_version=settings.anthropic_version,
        max_tokens=settings.max_output_tokens,
        timeout=settings.request_timeout,
        max_image_dimension=settings.max_image_dimension,
        max_image_bytes=settings.max_image_bytes,
    )


def build_coordinator(client: MenuExtractionClient) -> AnalysisCoordinator:
    """Create a coordinator for one analysis session."""
    return AnalysisCoordinator(client)
