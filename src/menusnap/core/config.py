"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MENUSNAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Anthropic Messages API
    anthropic_api_key: str = ""
    anthropic_api_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_model: str = "claude-sonnet-4-20250514"  # claude-3-5-haiku is cheaper and still works
    anthropic_version: str = "2023-06-01"
    max_output_tokens: int = 8192
    request_timeout: float = 60.0  # seconds

    # Image preprocessing
    max_image_dimension: int = 2500
    max_image_bytes: int = 3 * 1024 * 1024  # 3MB stays under 5MB after base64 (+33%)

    # Scan history (MongoDB)
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "menusnap"
    scans_collection: str = "menu_scans"

    # Logging
    log_level: str = "INFO"

    @property
    def is_api_configured(self) -> bool:
        """Check if an API key has been provided."""
        return bool(self.anthropic_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
