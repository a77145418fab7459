"""
Job domain models and schemas.

Request/response schemas for extraction job tracking.

Dependencies: pydantic
System role: Job status API contracts
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from docextract.models.extraction import ExtractedRecord


class JobStatus(str, Enum):
    """Extraction job lifecycle states."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class JobSnapshot(BaseModel):
    """Read-only copy of a job's state for polling."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    job_id: str
    status: JobStatus
    elapsed_time: int = Field(description="Milliseconds since submission")
    progress_log: str = Field(default="", description="Accumulated progress markers")
    result: list[ExtractedRecord] | None = Field(
        default=None, description="Extracted tasks, present only when completed"
    )
    error: str | None = Field(default=None, description="Failure reason, present only when failed")

    def to_response(self) -> dict:
        """Serialize for polling clients, omitting result/error until they exist."""
        payload = self.model_dump(mode="json", by_alias=True)
        if self.result is None:
            payload.pop("result")
        if self.error is None:
            payload.pop("error")
        return payload


class JobSubmittedResponse(BaseModel):
    """Response schema for an accepted extraction job."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_id: str
    status: JobStatus = JobStatus.PENDING
    message: str = "Processing started. Check job status using the jobId."
