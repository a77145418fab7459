"""API and domain models."""

from docextract.models.extraction import ExtractedRecord, ExtractionOptions, Priority
from docextract.models.job import JobSnapshot, JobStatus, JobSubmittedResponse

__all__ = [
    "ExtractedRecord",
    "ExtractionOptions",
    "JobSnapshot",
    "JobStatus",
    "JobSubmittedResponse",
    "Priority",
]
