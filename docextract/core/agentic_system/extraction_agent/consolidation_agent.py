"""
Task consolidation agent.

Best-effort second pass that asks the model to drop duplicates and merge
related tasks, tolerating typos in the source transcript. Any failure falls
back to the list it was given; this pass never fails a job.

Dependencies: docextract.boundary.llm, docextract.core.recovery
System role: Consolidation pass over extracted records
"""

import logging

from docextract.boundary.llm.base import ChatModelClient
from docextract.core.agentic_system.extraction_agent.extraction_prompt import (
    build_consolidation_prompt,
)
from docextract.core.exceptions import ConsolidationError
from docextract.core.recovery import recover_record_array
from docextract.core.streaming import ProgressSink
from docextract.models.extraction import ExtractedRecord

logger = logging.getLogger(__name__)


class ConsolidationAgent:
    """Dedupe and merge pass over extracted task records."""

    def __init__(self, client: ChatModelClient, model: str, enabled: bool = True) -> None:
        """
        Initialize consolidation agent.

        Args:
            client: Chat model client
            model: Model id used for the pass
            enabled: When False, consolidate() returns its input unchanged
        """
        self._client = client
        self._model = model
        self._enabled = enabled

    async def consolidate(
        self,
        records: list[ExtractedRecord],
        sink: ProgressSink | None = None,
    ) -> list[ExtractedRecord]:
        """
        Merge near-duplicate records.

        Args:
            records: Records from the extraction agent
            sink: Destination for markers; chunks are streamed when it forwards them

        Returns:
            list[ExtractedRecord]: Consolidated records, or the input on any failure
        """
        if not records or not self._enabled:
            return list(records)

        sink = sink or ProgressSink()
        logger.info(f"{__name__}:consolidate - START records={len(records)}, model={self._model}")
        sink.write_marker(f"Optimizing {len(records)} extracted tasks...")

        try:
            reply = await self._request(build_consolidation_prompt(records), sink)
            optimized = recover_record_array(reply)
            if not optimized:
                raise ConsolidationError(
                    "Could not extract task array from model response",
                    details={"reply_len": len(reply)},
                )
        except Exception as exc:
            logger.warning(f"{__name__}:consolidate - Falling back to original tasks: {exc}")
            sink.write_marker("Could not optimize tasks. Original extraction will be used.")
            return list(records)

        logger.info(f"{__name__}:consolidate - END {len(records)} -> {len(optimized)}")
        sink.write_marker(
            f"Optimized {len(records)} tasks to {len(optimized)} consolidated tasks."
        )
        return optimized

    async def _request(self, prompt: str, sink: ProgressSink) -> str:
        chat = self._client.start_chat(self._model)
        if not sink.forwards_chunks:
            return await chat.send(prompt)

        parts: list[str] = []
        async for chunk in chat.send_stream(prompt):
            parts.append(chunk)
            sink.write_chunk(chunk)
        return "".join(parts)
