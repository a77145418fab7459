"""
Dependency injection container.

Factory functions for FastAPI dependencies. The job store, model client,
agents and worker pool are process-wide singletons held by ServiceCache and
built lazily on first access.

Dependencies: docextract.configs, docextract.application, docextract.boundary
System role: DI container for service injection
"""

from docextract.application.services import ExtractionService, JobService
from docextract.boundary.jobs.job_store import InMemoryJobStore, JobStore
from docextract.boundary.llm.base import ChatModelClient
from docextract.configs import Settings, get_settings
from docextract.core.agentic_system.extraction_agent import ConsolidationAgent, ExtractionAgent
from docextract.workers.pool import ExtractionWorkerPool


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._job_store = None
        self._chat_client = None
        self._worker_pool = None
        self._extraction_service = None

    @property
    def settings(self) -> Settings:
        """Get settings (explicit or process-wide)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def job_store(self) -> JobStore:
        """Get cached job store."""
        if self._job_store is None:
            self._job_store = InMemoryJobStore()
        return self._job_store

    @property
    def chat_client(self) -> ChatModelClient:
        """Get cached Gemini chat client."""
        if self._chat_client is None:
            # Lazy import to avoid loading the SDK when a client is injected
            from docextract.boundary.llm.gemini_client import GeminiChatClient

            self._chat_client = GeminiChatClient(self.settings.gemini)
        return self._chat_client

    @chat_client.setter
    def chat_client(self, client: ChatModelClient) -> None:
        self._chat_client = client
        self._extraction_service = None

    @property
    def worker_pool(self) -> ExtractionWorkerPool:
        """Get cached worker pool (not started)."""
        if self._worker_pool is None:
            extraction = self.settings.extraction
            self._worker_pool = ExtractionWorkerPool(
                store=self.job_store,
                worker_count=extraction.worker_count,
                queue_size=extraction.queue_size,
                job_ttl_seconds=extraction.job_ttl_seconds,
                sweep_interval_seconds=extraction.sweep_interval_seconds,
            )
        return self._worker_pool

    @property
    def extraction_service(self) -> ExtractionService:
        """Get cached extraction service with both agents."""
        if self._extraction_service is None:
            settings = self.settings
            self._extraction_service = ExtractionService(
                store=self.job_store,
                pool=self.worker_pool,
                extraction_agent=ExtractionAgent(
                    client=self.chat_client,
                    gemini_settings=settings.gemini,
                    extraction_settings=settings.extraction,
                ),
                consolidation_agent=ConsolidationAgent(
                    client=self.chat_client,
                    model=settings.gemini.resolved_consolidation_model,
                    enabled=settings.extraction.consolidation_enabled,
                ),
                settings=settings.extraction,
            )
        return self._extraction_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._job_store = None
        self._chat_client = None
        self._worker_pool = None
        self._extraction_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_extraction_service() -> ExtractionService:
    """
    Get extraction service instance.

    Returns:
        ExtractionService: Shared extraction service
    """
    return get_service_cache().extraction_service


def get_job_service() -> JobService:
    """
    Get job service instance.

    Returns:
        JobService: Job status reader over the shared store
    """
    return JobService(store=get_service_cache().job_store)


def get_worker_pool() -> ExtractionWorkerPool:
    """Get the shared worker pool."""
    return get_service_cache().worker_pool
