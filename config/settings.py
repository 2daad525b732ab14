"""
Column mapper settings.

Uses pydantic-settings for validation and type safety. Every value has a
default, so the mapper runs without any environment configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """
    Column mapper settings.

    Values may be overridden with COLUMN_MAPPER_* environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="COLUMN_MAPPER_",
        case_sensitive=False,
        extra="ignore"
    )

    # ===================
    # FILE PREVIEW
    # ===================
    preview_row_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of data rows kept in the file preview"
    )

    # ===================
    # AUTO-DETECTION
    # ===================
    min_confidence: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Minimum match confidence for automatic column mapping"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Call get_settings.cache_clear() to reload.
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
