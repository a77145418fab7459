"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures
lifespan (worker pool and eviction sweeper start/stop).

Dependencies: fastapi, docextract.api, docextract.observability, docextract.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docextract.api.deps import get_service_cache
from docextract.api.routers import extractions_router, health_router, jobs_router
from docextract.configs import get_settings
from docextract.observability.logger import configure_logging
from docextract.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts the extraction workers on startup and stops them on shutdown.
    Jobs still running at shutdown are abandoned; they live only in memory.
    """
    # Startup
    configure_logging(get_settings().log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    try:
        service = cache.extraction_service
        cache.worker_pool.start(service.process_job)
    except Exception as e:
        logger.exception(
            "Failed to initialize extraction workers",
            extra={"error": str(e)},
        )
        raise
    logger.info("Application startup complete: extraction workers running")

    yield

    # Shutdown
    await cache.worker_pool.stop()
    cache.clear()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Document Task Extraction API",
        description="Extracts structured tasks from PDF documents with Gemini",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(extractions_router, prefix="/api/v1")
    app.include_router(jobs_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docextract.main:app",
        host="localhost",
        port=8082,
        reload=get_settings().debug,
    )
