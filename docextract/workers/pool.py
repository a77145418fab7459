"""
Extraction worker pool.

Bounded queue plus a fixed number of asyncio worker tasks. Submissions put a
wake-up on the queue; a worker claims the oldest pending job from the store
and runs it to completion, so each job is processed by exactly one worker. A
sweeper task evicts jobs past their TTL.

Dependencies: asyncio, docextract.boundary.jobs, docextract.observability
System role: Background job processing
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from docextract.boundary.jobs.job_store import Job, JobStore
from docextract.core.exceptions import QueueFullError
from docextract.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

JobProcessor = Callable[[Job], Awaitable[None]]


class ExtractionWorkerPool:
    """Fixed-size pool of extraction workers fed by a bounded queue."""

    def __init__(
        self,
        store: JobStore,
        worker_count: int = 4,
        queue_size: int = 100,
        job_ttl_seconds: float = 3600,
        sweep_interval_seconds: float = 300,
    ) -> None:
        """
        Initialize worker pool.

        Args:
            store: Job store the workers claim jobs from
            worker_count: Number of concurrent workers
            queue_size: Maximum jobs waiting for a worker
            job_ttl_seconds: Age after which jobs are evicted
            sweep_interval_seconds: Pause between eviction sweeps
        """
        self._store = store
        self._worker_count = worker_count
        self._queue_size = queue_size
        self._job_ttl = job_ttl_seconds
        self._sweep_interval = sweep_interval_seconds
        self._queue: asyncio.Queue[str] | None = None
        self._workers: list[asyncio.Task] = []
        self._sweeper: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    def start(self, processor: JobProcessor) -> None:
        """
        Spawn worker and sweeper tasks on the running loop.

        Args:
            processor: Coroutine function that runs one claimed job to completion
        """
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._workers = [
            asyncio.create_task(self._worker(index, processor), name=f"extraction-worker-{index}")
            for index in range(self._worker_count)
        ]
        self._sweeper = asyncio.create_task(self._sweep(), name="job-sweeper")
        logger.info(f"{__name__}:start - Started {self._worker_count} workers")

    async def stop(self) -> None:
        """Cancel workers and the sweeper and wait for them to exit."""
        tasks = [*self._workers]
        if self._sweeper is not None:
            tasks.append(self._sweeper)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._workers = []
        self._sweeper = None
        self._queue = None
        logger.info(f"{__name__}:stop - Worker pool stopped")

    def enqueue(self, job_id: str) -> None:
        """
        Signal that a job is waiting.

        Args:
            job_id: Submitted job id

        Raises:
            QueueFullError: Pool not started or queue at capacity
        """
        if self._queue is None:
            raise QueueFullError("Extraction workers are not running")
        try:
            self._queue.put_nowait(job_id)
        except asyncio.QueueFull:
            raise QueueFullError(
                "Too many extraction jobs in progress, try again later",
                details={"queue_size": self._queue_size},
            ) from None

    async def _worker(self, index: int, processor: JobProcessor) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            await queue.get()
            try:
                job = self._store.claim_next()
                if job is None:
                    continue
                set_correlation_id(job.job_id)
                logger.info(f"{__name__}:_worker - Worker {index} processing job")
                await processor(job)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception(f"{__name__}:_worker - Worker {index} job crashed")
            finally:
                clear_correlation_id()
                queue.task_done()

    async def _sweep(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                self._store.evict_expired(self._job_ttl)
            except Exception:
                logger.exception(f"{__name__}:_sweep - Eviction sweep failed")

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        if self._queue is not None:
            await self._queue.join()
