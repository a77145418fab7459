"""API routers."""

from .extractions import router as extractions_router
from .health import router as health_router
from .jobs import router as jobs_router

__all__ = [
    "extractions_router",
    "health_router",
    "jobs_router",
]
