"""
Document extraction agent.

Runs the multi-turn conversation that turns a PDF into task records: send
the document with the extraction prompt, keep asking the model to continue
while the accumulated reply looks cut off (bounded rounds), then hand the
text to the staged recovery engine.

Dependencies: docextract.boundary.llm, docextract.core.completeness, docextract.core.recovery
System role: Conversation orchestrator
"""

import logging

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from docextract.boundary.llm.base import Attachment, ChatModelClient, ChatSession
from docextract.configs.extraction import ExtractionSettings
from docextract.configs.gemini import GeminiSettings
from docextract.core.agentic_system.extraction_agent.extraction_prompt import (
    CONTINUATION_PROMPT,
    REASONING_PROMPT,
    WRAP_UP_PROMPT,
    build_extraction_prompt,
)
from docextract.core.agentic_system.extraction_agent.extraction_schema import (
    TASK_SCHEMA,
    ConversationState,
    OrchestratorState,
    TurnKind,
)
from docextract.core.completeness import is_complete
from docextract.core.exceptions import ExtractionEmptyError, ModelTransportError
from docextract.core.recovery import recover_records
from docextract.core.streaming import ProgressSink
from docextract.models.extraction import ExtractedRecord, ExtractionOptions

logger = logging.getLogger(__name__)

CHAT_INIT_ATTEMPTS = 3
THINKING_CONTINUATION_ROUNDS = 1


class ExtractionAgent:
    """
    Conversation orchestrator for document task extraction.

    Standard tier: plain JSON prompt, continuation turns while the reply is
    incomplete, and a wrap-up request on the last permitted round.
    Thinking tier: schema-constrained output plus an optional turn asking the
    model to explain its analysis.
    """

    def __init__(
        self,
        client: ChatModelClient,
        gemini_settings: GeminiSettings,
        extraction_settings: ExtractionSettings,
        retry_delay: float = 2.0,
    ) -> None:
        """
        Initialize extraction agent.

        Args:
            client: Chat model client
            gemini_settings: Model ids per tier
            extraction_settings: Continuation bound, reasoning flag, chunk note interval
            retry_delay: Seconds to wait between chat initialization attempts
        """
        self._client = client
        self._gemini = gemini_settings
        self._max_rounds = extraction_settings.max_continuation_rounds
        self._request_reasoning = extraction_settings.request_reasoning
        self._chunk_interval = extraction_settings.chunk_progress_interval
        self._retry_delay = retry_delay

    async def run(
        self,
        document: Attachment,
        options: ExtractionOptions,
        sink: ProgressSink | None = None,
    ) -> list[ExtractedRecord]:
        """
        Extract task records from a document.

        Args:
            document: PDF bytes and media type
            options: Candidate context and model tier
            sink: Destination for progress markers and model text

        Returns:
            list[ExtractedRecord]: Recovered records, never empty

        Raises:
            ModelTransportError: Any model turn failed
            ExtractionEmptyError: Nothing could be recovered from the replies
        """
        sink = sink or ProgressSink()
        thinking = options.use_thinking_model
        model = self._gemini.model_for(thinking)
        state = ConversationState()

        logger.info(f"{__name__}:run - START model={model}, thinking={thinking}")

        try:
            chat = await self._open_chat(model, TASK_SCHEMA if thinking else None, sink)

            state.state = OrchestratorState.AWAITING_INITIAL
            sink.write_marker("Sending document to Gemini...")
            prompt = build_extraction_prompt(options)
            reply = await self._streamed_turn(chat, prompt, sink, attachment=document)
            state.record(TurnKind.INITIAL, prompt, reply)
            logger.info(f"{__name__}:run - Initial turn OK: reply_len={len(reply)}")

            sink.write_marker("Validating extraction results...")
            await self._continue_until_complete(chat, state, thinking, sink)

            if thinking and self._request_reasoning:
                sink.write_marker("Model is analyzing and reasoning through the document...")
                reply = await self._streamed_turn(chat, REASONING_PROMPT, sink)
                state.record(TurnKind.REASONING, REASONING_PROMPT, reply)
        except ModelTransportError as exc:
            state.state = OrchestratorState.ABORTED
            logger.error(f"{__name__}:run - ABORTED after {len(state.turns)} turns: {exc.message}")
            raise

        state.state = OrchestratorState.DONE
        sink.write_marker("Extracting structured task data...")
        records = recover_records(state.buffer) or recover_records(state.transcript)
        if not records:
            logger.warning(f"{__name__}:run - No records recovered from {len(state.transcript)} chars")
            raise ExtractionEmptyError()

        logger.info(
            f"{__name__}:run - END records={len(records)}, "
            f"continuations={state.continuation_rounds}"
        )
        return records

    async def _open_chat(
        self,
        model: str,
        response_schema: dict | None,
        sink: ProgressSink,
    ) -> ChatSession:
        sink.write_marker("Initializing document processing...")

        def _before_sleep(retry_state) -> None:
            attempt = retry_state.attempt_number
            exc = retry_state.outcome.exception()
            logger.warning(f"{__name__}:_open_chat - Attempt {attempt} failed: {exc}")
            sink.write_marker(f"Retry {attempt}/{CHAT_INIT_ATTEMPTS} initializing model...")

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ModelTransportError),
            stop=stop_after_attempt(CHAT_INIT_ATTEMPTS),
            wait=wait_fixed(self._retry_delay),
            before_sleep=_before_sleep,
            reraise=True,
        ):
            with attempt:
                return self._client.start_chat(model, response_schema=response_schema)
        raise ModelTransportError("Failed to initialize AI model after multiple attempts")

    async def _continue_until_complete(
        self,
        chat: ChatSession,
        state: ConversationState,
        thinking: bool,
        sink: ProgressSink,
    ) -> None:
        limit = self._max_rounds
        if thinking:
            limit = min(limit, THINKING_CONTINUATION_ROUNDS)
        while True:
            state.complete = is_complete(state.buffer)
            if state.complete:
                return
            if state.continuation_rounds >= limit:
                logger.warning(
                    f"{__name__}:_continue_until_complete - ContinuationExhausted after "
                    f"{state.continuation_rounds} rounds, recovering from partial output"
                )
                return

            state.state = OrchestratorState.AWAITING_CONTINUATION
            state.continuation_rounds += 1
            round_number = state.continuation_rounds
            wrap_up = not thinking and round_number > 1 and round_number == self._max_rounds

            if wrap_up:
                kind, prompt = TurnKind.WRAP_UP, WRAP_UP_PROMPT
                sink.write_marker("Finalizing response...")
            else:
                kind, prompt = TurnKind.CONTINUATION, CONTINUATION_PROMPT
                sink.write_marker(
                    f"Response seems incomplete. Requesting continuation (round {round_number})..."
                )

            if sink.forwards_chunks:
                reply = await self._streamed_turn(chat, prompt, sink)
            else:
                reply = await chat.send(prompt)
                sink.write_chunk(reply)
            state.record(kind, prompt, reply)
            logger.info(
                f"{__name__}:_continue_until_complete - Round {round_number} ({kind.value}) "
                f"reply_len={len(reply)}"
            )

    async def _streamed_turn(
        self,
        chat: ChatSession,
        prompt: str,
        sink: ProgressSink,
        attachment: Attachment | None = None,
    ) -> str:
        parts: list[str] = []
        chunk_count = 0
        async for chunk in chat.send_stream(prompt, attachment=attachment):
            parts.append(chunk)
            sink.write_chunk(chunk)
            chunk_count += 1
            if chunk_count % self._chunk_interval == 0:
                sink.write_marker(f"Received {chunk_count} chunks of content so far...")
        return "".join(parts)
