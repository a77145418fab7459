"""Job registry boundary."""

from docextract.boundary.jobs.job_store import InMemoryJobStore, Job, JobStore

__all__ = ["InMemoryJobStore", "Job", "JobStore"]
