"""
Core business logic module.

Contains the exception hierarchy, the pure parsing helpers, progress sinks,
job tracking and the extraction agents.
"""

from docextract.core.exceptions import (
    ConsolidationError,
    DocExtractException,
    DocumentValidationError,
    ExtractionEmptyError,
    JobNotFoundError,
    ModelTransportError,
    QueueFullError,
)

__all__ = [
    "ConsolidationError",
    "DocExtractException",
    "DocumentValidationError",
    "ExtractionEmptyError",
    "JobNotFoundError",
    "ModelTransportError",
    "QueueFullError",
]
