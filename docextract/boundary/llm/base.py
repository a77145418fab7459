"""
Chat model boundary interfaces.

The extraction and consolidation agents only need a multi-turn chat that can
take a binary attachment on the first turn, optionally constrain output to a
JSON schema, and return replies either whole or chunk by chunk. These
protocols describe exactly that so tests can script conversations without
the network.

Dependencies: typing
System role: Contract between agents and the generative model client
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class Attachment:
    """Binary document sent inline with a turn."""

    data: bytes
    mime_type: str


class ChatSession(Protocol):
    """One conversation with retained context."""

    async def send(self, message: str, attachment: Attachment | None = None) -> str:
        """Send a turn and return the full reply text."""
        ...

    def send_stream(
        self, message: str, attachment: Attachment | None = None
    ) -> AsyncIterator[str]:
        """Send a turn and yield reply text chunks as they arrive."""
        ...


class ChatModelClient(Protocol):
    """Factory for chat sessions."""

    def start_chat(
        self,
        model: str,
        response_schema: dict[str, Any] | None = None,
    ) -> ChatSession:
        """Open a new conversation against ``model``."""
        ...
