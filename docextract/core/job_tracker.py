"""
Job state management logic.

Tracks job progress, handles failures, and manages job lifecycle.
Acts as the progress sink for polling-mode extractions: markers land in the
job's progress log, raw model text only when the job asked for it.

Dependencies: docextract.boundary.jobs, docextract.core.streaming
System role: Job tracking business logic
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

from docextract.boundary.jobs.job_store import JobStore
from docextract.core.streaming import ProgressSink
from docextract.models.extraction import ExtractedRecord

logger = logging.getLogger(__name__)


class JobTracker(ProgressSink):
    """Job tracking business logic."""

    def __init__(
        self,
        store: JobStore,
        job_id: str,
        record_model_text: bool = False,
        heartbeat_interval: float = 15.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize job tracker for one job.

        Args:
            store: Job store owning the entry
            job_id: Job ID
            record_model_text: Copy raw model output into the progress log
            heartbeat_interval: Minimum seconds between "still processing" notes
            clock: Monotonic clock, injectable for tests
        """
        self._store = store
        self._job_id = job_id
        self._record_model_text = record_model_text
        self._heartbeat_interval = heartbeat_interval
        self._clock = clock
        self._last_heartbeat = clock()

    @property
    def job_id(self) -> str:
        return self._job_id

    def _emit(self, text: str) -> None:
        self._store.append_progress(self._job_id, text)

    def write_chunk(self, text: str) -> None:
        if self._record_model_text and text:
            self._emit(text)
        self.heartbeat()

    def heartbeat(self) -> bool:
        """
        Note that the job is alive if the interval has passed.

        Returns:
            bool: True when a note was written
        """
        now = self._clock()
        if now - self._last_heartbeat < self._heartbeat_interval:
            return False
        self._last_heartbeat = now
        stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        self.write_marker(f"Still processing... {stamp}")
        return True

    def complete(self, records: list[ExtractedRecord]) -> None:
        """
        Mark job as completed.

        Args:
            records: Final task records
        """
        self.write_marker(
            f"Successfully completed task extraction and optimization! Found {len(records)} tasks."
        )
        self._store.complete(self._job_id, records)
        logger.info("Job completed", extra={"job_id": self._job_id, "records": len(records)})

    def handle_failure(self, error: str) -> None:
        """
        Mark job as failed.

        Args:
            error: Error message, stored verbatim
        """
        self.write_marker(f"Error occurred during processing: {error}")
        self._store.fail(self._job_id, error)
        logger.warning("Job failed", extra={"job_id": self._job_id, "error": error})
