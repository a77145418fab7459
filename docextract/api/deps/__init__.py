"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_extraction_service,
    get_job_service,
    get_service_cache,
    get_worker_pool,
)

__all__ = [
    "ServiceCache",
    "get_extraction_service",
    "get_job_service",
    "get_service_cache",
    "get_worker_pool",
]
