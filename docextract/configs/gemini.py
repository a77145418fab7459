"""
Gemini model configuration.

Model identifiers for the two extraction tiers and the consolidation pass,
plus credentials and request timeout for the google-genai client.

Dependencies: pydantic_settings
System role: Generative model configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Gemini API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google AI Studio API key",
    )
    standard_model: str = Field(
        default="gemini-2.0-flash",
        description="Model used for the standard (lower capability) tier",
    )
    thinking_model: str = Field(
        default="gemini-2.5-pro",
        description="Model used for the thinking (higher capability) tier",
    )
    consolidation_model: str | None = Field(
        default=None,
        description="Model used by the consolidation pass (defaults to thinking_model)",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for every turn",
    )
    request_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="HTTP timeout applied to each model turn",
    )

    def model_for(self, use_thinking_model: bool) -> str:
        """Return the model id for the requested tier."""
        return self.thinking_model if use_thinking_model else self.standard_model

    @property
    def resolved_consolidation_model(self) -> str:
        """Consolidation model, falling back to the thinking tier."""
        return self.consolidation_model or self.thinking_model
