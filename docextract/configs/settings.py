"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from docextract.configs.base import BaseSettings
from docextract.configs.extraction import ExtractionSettings
from docextract.configs.gemini import GeminiSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from docextract.configs import get_settings
        settings = get_settings()
    """
    return Settings()
