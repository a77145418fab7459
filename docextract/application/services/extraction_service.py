"""
Extraction service orchestrator.

Validates uploads, hands polling jobs to the worker pool and runs the
extraction pipeline (orchestrator, then consolidation) either for a claimed
job or live against a streaming channel.

Dependencies: docextract.core.agentic_system, docextract.boundary.jobs, docextract.workers
System role: Extraction service orchestration layer
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

from docextract.boundary.jobs.job_store import Job, JobStore
from docextract.boundary.llm.base import Attachment
from docextract.configs.extraction import ExtractionSettings
from docextract.core.agentic_system.extraction_agent import ConsolidationAgent, ExtractionAgent
from docextract.core.exceptions import (
    DocExtractException,
    DocumentValidationError,
    JobNotFoundError,
    QueueFullError,
)
from docextract.core.job_tracker import JobTracker
from docextract.core.streaming import ChannelSink, ProgressSink
from docextract.models.extraction import ExtractedRecord, ExtractionOptions
from docextract.models.job import JobSubmittedResponse
from docextract.workers.pool import ExtractionWorkerPool

logger = logging.getLogger(__name__)


class ExtractionService:
    """
    Extraction service orchestrator.

    Polling mode: submit() stores a pending job and wakes a worker, which
    calls process_job(). Streaming mode: start_stream() runs the same
    pipeline in a background task and returns the live text channel.
    """

    def __init__(
        self,
        store: JobStore,
        pool: ExtractionWorkerPool,
        extraction_agent: ExtractionAgent,
        consolidation_agent: ConsolidationAgent,
        settings: ExtractionSettings,
    ) -> None:
        """
        Initialize extraction service.

        Args:
            store: Job store for polling-mode jobs
            pool: Worker pool that runs submitted jobs
            extraction_agent: Conversation orchestrator
            consolidation_agent: Dedupe/merge pass
            settings: Upload limits
        """
        self.store = store
        self.pool = pool
        self.extraction_agent = extraction_agent
        self.consolidation_agent = consolidation_agent
        self.settings = settings
        self._stream_tasks: set[asyncio.Task] = set()

    def validate_document(self, document: bytes | None, media_type: str | None) -> None:
        """
        Reject malformed uploads before any work is scheduled.

        Args:
            document: Uploaded bytes
            media_type: Declared content type

        Raises:
            DocumentValidationError: Missing, wrong type or oversized document
        """
        if not document:
            raise DocumentValidationError("No PDF file provided", field="file")
        if media_type not in self.settings.allowed_media_types:
            raise DocumentValidationError(
                "Uploaded file is not a PDF",
                field="file",
                details={"media_type": media_type},
            )
        if len(document) > self.settings.max_document_bytes:
            limit_mb = self.settings.max_document_bytes // (1024 * 1024)
            raise DocumentValidationError(
                f"PDF file is too large. Maximum size is {limit_mb}MB.",
                field="file",
                details={"size": len(document)},
            )

    def submit(
        self,
        document: bytes | None,
        media_type: str | None,
        options: ExtractionOptions,
    ) -> JobSubmittedResponse:
        """
        Create a pending job and schedule it.

        Args:
            document: Uploaded PDF bytes
            media_type: Declared content type
            options: Candidate context and model tier

        Returns:
            JobSubmittedResponse: Job id with status pending

        Raises:
            DocumentValidationError: Upload rejected
            QueueFullError: No room in the worker queue
        """
        self.validate_document(document, media_type)
        job_id = self.store.submit(document, media_type, options)
        try:
            self.pool.enqueue(job_id)
        except QueueFullError:
            self.store.discard(job_id)
            logger.warning("Extraction queue full, submission rejected", extra={"job_id": job_id})
            raise
        return JobSubmittedResponse(job_id=job_id)

    async def process_job(self, job: Job) -> None:
        """
        Run a claimed job to a terminal state.

        Failures are recorded on the job and never raised.

        Args:
            job: Job in processing state
        """
        tracker = JobTracker(
            self.store,
            job.job_id,
            record_model_text=job.options.use_thinking_model,
        )
        document = Attachment(data=job.document, mime_type=job.media_type)

        try:
            records = await self._run_pipeline(document, job.options, tracker)
        except DocExtractException as e:
            self._finish(tracker.handle_failure, e.message)
            return
        except Exception as e:
            logger.exception(f"{__name__}:process_job - Unexpected failure")
            self._finish(tracker.handle_failure, str(e) or "Unknown error occurred during processing")
            return

        self._finish(tracker.complete, records)

    def _finish(self, write_outcome: Callable[[Any], None], outcome: Any) -> None:
        """Record a terminal outcome; a job evicted mid-run has nowhere to store it."""
        try:
            write_outcome(outcome)
        except JobNotFoundError:
            logger.debug(f"{__name__}:_finish - Job evicted before finishing, outcome dropped")

    def start_stream(
        self,
        document: bytes | None,
        media_type: str | None,
        options: ExtractionOptions,
    ) -> AsyncIterator[str]:
        """
        Validate the upload and start a live extraction.

        Must be called from a running event loop.

        Args:
            document: Uploaded PDF bytes
            media_type: Declared content type
            options: Candidate context and model tier

        Returns:
            AsyncIterator[str]: Model text, progress markers, final fenced JSON
                block and summary line; ends when the extraction is over

        Raises:
            DocumentValidationError: Upload rejected
            QueueFullError: Too many streaming extractions already running
        """
        self.validate_document(document, media_type)
        if len(self._stream_tasks) >= self.settings.max_concurrent_streams:
            logger.warning(
                f"{__name__}:start_stream - Rejected, {len(self._stream_tasks)} streams running"
            )
            raise QueueFullError("Too many streaming extractions in progress")
        channel = ChannelSink()
        task = asyncio.create_task(
            self._stream_pipeline(Attachment(data=document, mime_type=media_type), options, channel)
        )
        self._stream_tasks.add(task)
        task.add_done_callback(self._stream_tasks.discard)
        return channel.stream()

    async def _stream_pipeline(
        self,
        document: Attachment,
        options: ExtractionOptions,
        channel: ChannelSink,
    ) -> None:
        try:
            records = await self._run_pipeline(document, options, channel)
        except DocExtractException as e:
            channel.write_error(e.message)
            return
        except Exception as e:
            logger.exception(f"{__name__}:_stream_pipeline - Unexpected failure")
            channel.write_error(str(e) or "Unknown error")
            return
        channel.write_result(records)

    async def _run_pipeline(
        self,
        document: Attachment,
        options: ExtractionOptions,
        sink: ProgressSink,
    ) -> list[ExtractedRecord]:
        records = await self.extraction_agent.run(document, options, sink)
        logger.info(f"{__name__}:_run_pipeline - Extracted {len(records)} records, consolidating")
        sink.write_marker("Starting task optimization process...")
        return await self.consolidation_agent.consolidate(records, sink)
