"""Service orchestrators."""

from .extraction_service import ExtractionService
from .job_service import JobService

__all__ = [
    "ExtractionService",
    "JobService",
]
