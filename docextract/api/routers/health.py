"""
Health check API endpoints.

Routes: GET /health, GET /health/workers

Dependencies: docextract.workers
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from docextract.api.deps import get_worker_pool
from docextract.workers.pool import ExtractionWorkerPool


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/workers", response_model=HealthResponse)
async def health_check_workers(
    pool: ExtractionWorkerPool = Depends(get_worker_pool),
) -> HealthResponse:
    """Extraction worker pool health check."""
    if not pool.running:
        return HealthResponse(status="unhealthy", message="Extraction workers not running")
    return HealthResponse(status="healthy", message=f"{pool.pending} jobs waiting")
