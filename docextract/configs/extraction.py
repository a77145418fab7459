"""
Extraction pipeline configuration.

Upload limits, conversation bounds, worker pool sizing and job retention.

Dependencies: pydantic_settings
System role: Pipeline tuning knobs
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionSettings(BaseSettings):
    """Extraction pipeline configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_document_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Maximum accepted upload size in bytes",
    )
    allowed_media_types: list[str] = Field(
        default=["application/pdf"],
        description="Media types accepted for extraction",
    )
    max_continuation_rounds: int = Field(
        default=2,
        ge=0,
        description="Follow-up turns allowed when the reply looks truncated",
    )
    request_reasoning: bool = Field(
        default=True,
        description="Ask the thinking tier to explain its analysis after extracting",
    )
    consolidation_enabled: bool = Field(
        default=True,
        description="Run the dedupe/merge pass on extracted tasks",
    )
    worker_count: int = Field(
        default=4,
        ge=1,
        description="Number of background extraction workers",
    )
    queue_size: int = Field(
        default=100,
        ge=1,
        description="Maximum number of jobs waiting for a worker",
    )
    max_concurrent_streams: int = Field(
        default=4,
        ge=1,
        description="Streaming extractions allowed to run at the same time",
    )
    job_ttl_seconds: int = Field(
        default=60 * 60,
        gt=0,
        description="Jobs older than this are evicted regardless of status",
    )
    sweep_interval_seconds: int = Field(
        default=5 * 60,
        gt=0,
        description="Interval between eviction sweeps",
    )
    chunk_progress_interval: int = Field(
        default=20,
        ge=1,
        description="Emit a progress note every N streamed chunks",
    )
