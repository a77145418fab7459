"""
Process-local job store.

Keyed, TTL-evicted registry of extraction jobs. Every field update on a job
happens under that job's lock so pollers never observe a half-applied write
(for example ``completed`` with no result).

Dependencies: threading, docextract.models
System role: Job persistence boundary (ephemeral, in-memory)
"""

import logging
import threading
import time
import uuid
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from docextract.core.exceptions import DocumentValidationError, JobNotFoundError
from docextract.models.extraction import ExtractedRecord, ExtractionOptions
from docextract.models.job import JobSnapshot, JobStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Job:
    """One extraction request and its mutable state."""

    job_id: str
    created_at: float
    document: bytes
    media_type: str
    options: ExtractionOptions
    status: JobStatus = JobStatus.PENDING
    result: list[ExtractedRecord] | None = None
    error: str | None = None
    progress_log: list[str] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class JobStore(ABC):
    """Interface for job registries used by the service and workers."""

    @abstractmethod
    def submit(self, document: bytes, media_type: str, options: ExtractionOptions) -> str:
        """Insert a pending job and return its id."""

    @abstractmethod
    def get_snapshot(self, job_id: str) -> JobSnapshot:
        """Return a read-only copy of a job, raising JobNotFoundError."""

    @abstractmethod
    def claim_next(self) -> Job | None:
        """Move the oldest pending job to processing and return it."""

    @abstractmethod
    def append_progress(self, job_id: str, text: str) -> None:
        """Append text to a job's progress log."""

    @abstractmethod
    def complete(self, job_id: str, records: list[ExtractedRecord]) -> None:
        """Mark a job completed with its records."""

    @abstractmethod
    def fail(self, job_id: str, message: str) -> None:
        """Mark a job failed with an error message."""

    @abstractmethod
    def evict_expired(self, ttl_seconds: float, now: float | None = None) -> int:
        """Delete jobs older than the TTL regardless of status."""

    @abstractmethod
    def discard(self, job_id: str) -> None:
        """Remove a job immediately (used to roll back a rejected submission)."""


class InMemoryJobStore(JobStore):
    """Dictionary-backed job store with per-entry locking."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """
        Initialize an empty store.

        Args:
            clock: Source of epoch seconds, injectable for tests
        """
        self._clock = clock
        self._jobs: dict[str, Job] = {}
        self._pending: deque[str] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        with self._lock:
            return job_id in self._jobs

    def _get(self, job_id: str) -> Job:
        with self._lock:
            job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def submit(self, document: bytes, media_type: str, options: ExtractionOptions) -> str:
        if not document:
            raise DocumentValidationError("No document provided", field="file")

        job_id = str(uuid.uuid4())
        job = Job(
            job_id=job_id,
            created_at=self._clock(),
            document=document,
            media_type=media_type,
            options=options,
        )
        with self._lock:
            self._jobs[job_id] = job
            self._pending.append(job_id)

        logger.info(
            "Job submitted",
            extra={"job_id": job_id, "document_bytes": len(document)},
        )
        return job_id

    def get_snapshot(self, job_id: str) -> JobSnapshot:
        job = self._get(job_id)
        with job.lock:
            elapsed_ms = max(0, int((self._clock() - job.created_at) * 1000))
            return JobSnapshot(
                job_id=job.job_id,
                status=job.status,
                elapsed_time=elapsed_ms,
                progress_log="".join(job.progress_log),
                result=list(job.result) if job.status is JobStatus.COMPLETED else None,
                error=job.error if job.status is JobStatus.FAILED else None,
            )

    def claim_next(self) -> Job | None:
        with self._lock:
            while self._pending:
                job_id = self._pending.popleft()
                job = self._jobs.get(job_id)
                if job is None:
                    continue
                with job.lock:
                    if job.status is not JobStatus.PENDING:
                        continue
                    job.status = JobStatus.PROCESSING
                return job
        return None

    def append_progress(self, job_id: str, text: str) -> None:
        if not text:
            return
        try:
            job = self._get(job_id)
        except JobNotFoundError:
            logger.debug("Progress dropped for evicted job", extra={"job_id": job_id})
            return
        with job.lock:
            job.progress_log.append(text)

    def complete(self, job_id: str, records: list[ExtractedRecord]) -> None:
        job = self._get(job_id)
        with job.lock:
            if job.status.is_terminal:
                logger.debug("Ignoring completion of finished job", extra={"job_id": job_id})
                return
            job.result = list(records)
            job.error = None
            job.status = JobStatus.COMPLETED
            job.document = b""

    def fail(self, job_id: str, message: str) -> None:
        job = self._get(job_id)
        with job.lock:
            if job.status.is_terminal:
                logger.debug("Ignoring failure of finished job", extra={"job_id": job_id})
                return
            job.error = message or "Unknown error occurred during processing"
            job.result = None
            job.status = JobStatus.FAILED
            job.document = b""

    def evict_expired(self, ttl_seconds: float, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        with self._lock:
            expired = [
                job_id
                for job_id, job in self._jobs.items()
                if now - job.created_at > ttl_seconds
            ]
            for job_id in expired:
                del self._jobs[job_id]

        if expired:
            logger.info(
                "Evicted expired jobs",
                extra={"evicted": len(expired), "ttl_seconds": ttl_seconds},
            )
        return len(expired)

    def discard(self, job_id: str) -> None:
        with self._lock:
            self._jobs.pop(job_id, None)
