"""
Exception hierarchy for the document extraction service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocExtractException(Exception):
    """Base exception for all extraction service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentValidationError(DocExtractException):
    """Raised when a submitted document or its options are rejected."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class JobNotFoundError(DocExtractException):
    """Raised when a job id is unknown (never created or already evicted)."""

    def __init__(self, job_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["job_id"] = job_id
        super().__init__(f"Job not found: {job_id}", details)


class QueueFullError(DocExtractException):
    """Raised when the worker queue cannot accept another job."""

    pass


class ModelTransportError(DocExtractException):
    """Raised when a call to the generative model fails at any turn."""

    def __init__(
        self,
        message: str,
        turn: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize transport error.

        Args:
            message: Error message from the underlying client, kept verbatim
            turn: Conversation turn that failed (initial, reasoning, continuation...)
            details: Additional context
        """
        details = details or {}
        if turn:
            details["turn"] = turn
        super().__init__(message, details)


class ExtractionEmptyError(DocExtractException):
    """Raised when no task records could be recovered from the model output."""

    def __init__(self, message: str = "No tasks could be extracted from the document") -> None:
        super().__init__(message)


class ConsolidationError(DocExtractException):
    """Raised inside the consolidation pass (non-critical, always recovered)."""

    pass
