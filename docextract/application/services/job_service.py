"""
Job service orchestrator.

Status reporting for extraction jobs.

Dependencies: docextract.boundary.jobs
System role: Job management orchestration
"""

from docextract.boundary.jobs.job_store import JobStore
from docextract.models.job import JobSnapshot


class JobService:
    """
    Job service orchestrator.

    Read side of the job store used by the polling endpoint.
    """

    def __init__(self, store: JobStore) -> None:
        """
        Initialize job service.

        Args:
            store: Job store
        """
        self.store = store

    def get_job_status(self, job_id: str) -> JobSnapshot:
        """
        Get job status, elapsed time, progress log and outcome.

        Args:
            job_id: Job id

        Returns:
            JobSnapshot: Current job state

        Raises:
            JobNotFoundError: Unknown or evicted job
        """
        return self.store.get_snapshot(job_id)
