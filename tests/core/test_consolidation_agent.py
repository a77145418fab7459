"""
Test suite for ConsolidationAgent.

Consolidation is best-effort: every failure path must hand back the input
list unchanged.

System role: Verification of the dedupe/merge pass
"""

import json

import pytest

from docextract.core.agentic_system.extraction_agent import ConsolidationAgent
from docextract.core.exceptions import ModelTransportError
from docextract.core.streaming import ProgressSink
from docextract.models.extraction import ExtractedRecord

MERGED_REPLY = json.dumps(
    [
        {
            "title": "Reset password for Alice",
            "details": "<p>Alice is locked out; reset and confirm by phone.</p>",
            "assignee": "Bob",
            "priority": "High",
        }
    ]
)


@pytest.fixture
def records() -> list[ExtractedRecord]:
    """Two near-duplicate records."""
    return [
        ExtractedRecord.from_raw(
            {"title": "Reset password for Alice", "details": "<p>Locked out</p>"}
        ),
        ExtractedRecord.from_raw(
            {"title": "Please reset Alice's password", "details": "<p>Call her back</p>"}
        ),
    ]


class MarkerSink(ProgressSink):
    def __init__(self, forwards_chunks: bool = False) -> None:
        self.forwards_chunks = forwards_chunks
        self.markers: list[str] = []
        self.chunks: list[str] = []

    def write_marker(self, text: str) -> None:
        self.markers.append(text)

    def write_chunk(self, text: str) -> None:
        self.chunks.append(text)


class TestConsolidate:
    """Test suite for ConsolidationAgent.consolidate."""

    @pytest.mark.asyncio
    async def test_merges_duplicates(self, chat_factory, records) -> None:
        client, (session,) = chat_factory([MERGED_REPLY])
        agent = ConsolidationAgent(client, model="consolidation-model")

        result = await agent.consolidate(records)

        assert len(result) == 1
        assert result[0].assignee == "Bob"
        assert client.started == [("consolidation-model", None)]
        assert "Please reset Alice's password" in session.sent[0]
        assert "Return ONLY the optimized JSON array" in session.sent[0]

    @pytest.mark.asyncio
    async def test_empty_input_skips_model(self, chat_factory) -> None:
        client, _ = chat_factory()
        agent = ConsolidationAgent(client, model="consolidation-model")

        assert await agent.consolidate([]) == []
        assert client.started == []

    @pytest.mark.asyncio
    async def test_disabled_returns_input(self, chat_factory, records) -> None:
        client, _ = chat_factory()
        agent = ConsolidationAgent(client, model="consolidation-model", enabled=False)

        assert await agent.consolidate(records) == records
        assert client.started == []

    @pytest.mark.asyncio
    async def test_transport_error_returns_input(self, chat_factory, records) -> None:
        client, _ = chat_factory([ModelTransportError("503 UNAVAILABLE")])
        agent = ConsolidationAgent(client, model="consolidation-model")
        sink = MarkerSink()

        result = await agent.consolidate(records, sink)

        assert result == records
        assert "Could not optimize tasks. Original extraction will be used." in sink.markers

    @pytest.mark.asyncio
    async def test_chat_creation_error_returns_input(self, chat_factory, records) -> None:
        client, _ = chat_factory(start_errors=1)
        agent = ConsolidationAgent(client, model="consolidation-model")

        assert await agent.consolidate(records) == records

    @pytest.mark.asyncio
    async def test_unparseable_reply_returns_input(self, chat_factory, records) -> None:
        client, _ = chat_factory(["These tasks all look distinct to me."])
        agent = ConsolidationAgent(client, model="consolidation-model")

        assert await agent.consolidate(records) == records

    @pytest.mark.asyncio
    async def test_empty_array_reply_returns_input(self, chat_factory, records) -> None:
        client, _ = chat_factory(["[]"])
        agent = ConsolidationAgent(client, model="consolidation-model")

        assert await agent.consolidate(records) == records

    @pytest.mark.asyncio
    async def test_streaming_forwards_chunks_and_markers(self, chat_factory, records) -> None:
        client, (session,) = chat_factory([MERGED_REPLY], chunk_size=8)
        agent = ConsolidationAgent(client, model="consolidation-model")
        sink = MarkerSink(forwards_chunks=True)

        result = await agent.consolidate(records, sink)

        assert len(result) == 1
        assert "".join(sink.chunks) == MERGED_REPLY
        assert session.stream_calls == 1
        assert sink.markers == [
            "Optimizing 2 extracted tasks...",
            "Optimized 2 tasks to 1 consolidated tasks.",
        ]
