"""
Progress sinks.

Agents report what they are doing to a sink: synthetic phase markers and,
where the destination wants them, raw model text chunks. Polling jobs use
the job tracker sink (progress log); streaming requests use the channel sink,
which feeds a one-way text stream closed after the final payload.

Dependencies: asyncio, json
System role: Output side of the extraction pipeline
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator

from docextract.models.extraction import ExtractedRecord

logger = logging.getLogger(__name__)

MARKER_TEMPLATE = "\n[System: {text}]\n"


def render_marker(text: str) -> str:
    """Format a synthetic progress marker."""
    return MARKER_TEMPLATE.format(text=text)


def render_records(records: list[ExtractedRecord]) -> str:
    """Format records as the fenced JSON block closing a stream."""
    payload = json.dumps([record.to_wire() for record in records], indent=2)
    return f"\n```json\n{payload}\n```\n"


def render_summary(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"\nExtracted {count} {noun}.\n"


class ProgressSink:
    """Sink that discards everything. Base for real destinations."""

    forwards_chunks: bool = False

    def write_marker(self, text: str) -> None:
        self._emit(render_marker(text))

    def write_chunk(self, text: str) -> None:
        """Receive one piece of raw model output."""

    def _emit(self, text: str) -> None:
        pass


class ChannelSink(ProgressSink):
    """
    Live text channel for streaming requests.

    Everything written is queued in order and handed to the HTTP response
    through ``stream()``. After ``close()`` the iterator ends, which is the
    completion signal for the client.
    """

    forwards_chunks = True

    def __init__(self) -> None:
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _emit(self, text: str) -> None:
        if self._closed:
            logger.debug(f"{__name__}:_emit - Dropping write after close")
            return
        self._queue.put_nowait(text)

    def write_chunk(self, text: str) -> None:
        if text:
            self._emit(text)

    def write_result(self, records: list[ExtractedRecord]) -> None:
        """Write the final fenced payload and the summary line, then close."""
        self._emit(render_records(records))
        self._emit(render_summary(len(records)))
        self.close()

    def write_error(self, message: str) -> None:
        """Write an inline error annotation, then close."""
        self.write_marker(f"Error during extraction: {message}")
        self.close()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    async def stream(self) -> AsyncIterator[str]:
        """Yield queued text until the channel is closed."""
        while True:
            item = await self._queue.get()
            if item is None:
                return
            yield item
