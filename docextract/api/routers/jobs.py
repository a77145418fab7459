"""
Job API endpoints.

Routes: GET /jobs/{id}

Dependencies: docextract.application.services.job_service, docextract.models
System role: Job status HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from docextract.api.deps import get_job_service
from docextract.application.services.job_service import JobService
from docextract.core.exceptions import JobNotFoundError

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{job_id}")
async def get_job_status(
    job_id: str,
    job_service: JobService = Depends(get_job_service),
) -> dict:
    """
    Get job status and progress for frontend polling.

    Frontend should poll this endpoint every 1-2 seconds while the job is
    pending or processing. ``result`` is present only once the job has
    completed and ``error`` only once it has failed.

    Args:
        job_id: Job id returned by POST /extractions
        job_service: Injected JobService

    Returns:
        dict: Job status information

    Raises:
        HTTPException(404): Job not found or already evicted

    Example Response:
        {
            "jobId": "0b8f0e0e-3c1c-4ad4-9f4e-0d6c3e1f2a11",
            "status": "completed",
            "elapsedTime": 41873,
            "progressLog": "\\n[System: Sending document to Gemini...]\\n...",
            "result": [{"title": "Reset password for Alice", "priority": "High", ...}]
        }
    """
    try:
        snapshot = job_service.get_job_status(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return snapshot.to_response()
