"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from docextract.configs.extraction import ExtractionSettings
from docextract.configs.gemini import GeminiSettings
from docextract.configs.settings import Settings, get_settings

__all__ = ["ExtractionSettings", "GeminiSettings", "Settings", "get_settings"]
