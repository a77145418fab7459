"""
Shared test fixtures and configuration for entire test suite.

Provides: scripted chat sessions standing in for Gemini, settings factories,
an in-memory job store with a controllable clock
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from collections.abc import AsyncIterator

import pytest

from docextract.boundary.jobs.job_store import InMemoryJobStore
from docextract.boundary.llm.base import Attachment
from docextract.configs.extraction import ExtractionSettings
from docextract.configs.gemini import GeminiSettings
from docextract.core.exceptions import ModelTransportError
from docextract.models.extraction import ExtractionOptions

SAMPLE_PDF = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF"


class FakeChatSession:
    """
    Chat session that replays scripted replies in order.

    A reply may be an exception instance, which is raised for that turn.
    Streamed replies are split into ``chunk_size`` pieces.
    """

    def __init__(self, replies: list, chunk_size: int = 16) -> None:
        self.replies = list(replies)
        self.chunk_size = chunk_size
        self.sent: list[str] = []
        self.attachments: list[Attachment | None] = []
        self.stream_calls = 0
        self.send_calls = 0

    def _next_reply(self, message: str, attachment: Attachment | None) -> str:
        self.sent.append(message)
        self.attachments.append(attachment)
        if not self.replies:
            raise AssertionError(f"Unexpected turn: {message[:60]!r}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def send(self, message: str, attachment: Attachment | None = None) -> str:
        self.send_calls += 1
        return self._next_reply(message, attachment)

    async def send_stream(
        self, message: str, attachment: Attachment | None = None
    ) -> AsyncIterator[str]:
        self.stream_calls += 1
        reply = self._next_reply(message, attachment)
        for start in range(0, len(reply), self.chunk_size):
            yield reply[start : start + self.chunk_size]


class FakeChatClient:
    """ChatModelClient handing out pre-built sessions in order."""

    def __init__(self, *sessions: FakeChatSession, start_errors: int = 0) -> None:
        self.sessions = list(sessions)
        self.start_errors = start_errors
        self.started: list[tuple[str, dict | None]] = []

    def start_chat(self, model: str, response_schema: dict | None = None) -> FakeChatSession:
        self.started.append((model, response_schema))
        if self.start_errors:
            self.start_errors -= 1
            raise ModelTransportError("model unavailable", turn="create")
        if not self.sessions:
            raise AssertionError("No scripted session left")
        return self.sessions.pop(0)


class FakeClock:
    """Manually advanced epoch clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def job_store(clock: FakeClock) -> InMemoryJobStore:
    """Provide an empty job store driven by the fake clock."""
    return InMemoryJobStore(clock=clock)


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    """Provide Gemini settings with fixed model ids."""
    return GeminiSettings(
        api_key="test-key",
        standard_model="standard-model",
        thinking_model="thinking-model",
    )


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    """Provide extraction settings with test-friendly bounds."""
    return ExtractionSettings(
        max_document_bytes=1024,
        max_continuation_rounds=2,
        request_reasoning=True,
        worker_count=2,
        queue_size=4,
        max_concurrent_streams=2,
        chunk_progress_interval=20,
    )


@pytest.fixture
def options() -> ExtractionOptions:
    """Provide standard-tier options with candidate context."""
    return ExtractionOptions(
        technicians=["Alice", "Bob"],
        groups=["Service Desk"],
        categories=["Access"],
    )


@pytest.fixture
def document() -> Attachment:
    """Provide a tiny PDF attachment."""
    return Attachment(data=SAMPLE_PDF, mime_type="application/pdf")


@pytest.fixture
def chat_factory():
    """
    Build a FakeChatClient from scripted reply lists.

    Usage:
        client, (extraction, consolidation) = chat_factory(["..."], ["..."])
    """

    def _build(*scripts: list, start_errors: int = 0, chunk_size: int = 16):
        sessions = [FakeChatSession(script, chunk_size=chunk_size) for script in scripts]
        return FakeChatClient(*sessions, start_errors=start_errors), sessions

    return _build
