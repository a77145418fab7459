"""
Background workers module.

Asyncio worker pool for document extraction jobs.

Dependencies: asyncio, docextract.boundary.jobs
System role: Background task processing
"""

from docextract.workers.pool import ExtractionWorkerPool, JobProcessor

__all__ = ["ExtractionWorkerPool", "JobProcessor"]
