"""
Gemini chat client.

Implements the chat boundary on top of google-genai async chats. Every SDK
failure is re-raised as ModelTransportError carrying the SDK's message
unchanged so it can be shown to the user as-is.

Dependencies: google.genai, docextract.configs
System role: Generative model transport
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from google import genai
from google.genai import types

from docextract.boundary.llm.base import Attachment
from docextract.configs.gemini import GeminiSettings
from docextract.core.exceptions import ModelTransportError

logger = logging.getLogger(__name__)


def _build_parts(message: str, attachment: Attachment | None) -> list[types.Part]:
    parts = [types.Part.from_text(text=message)]
    if attachment is not None:
        parts.append(types.Part.from_bytes(data=attachment.data, mime_type=attachment.mime_type))
    return parts


class GeminiChatSession:
    """Adapter from a google-genai AsyncChat to ChatSession."""

    def __init__(self, chat: Any, model: str) -> None:
        self._chat = chat
        self._model = model

    async def send(self, message: str, attachment: Attachment | None = None) -> str:
        try:
            response = await self._chat.send_message(_build_parts(message, attachment))
        except Exception as exc:
            logger.error(f"{__name__}:send - Gemini call failed on {self._model}: {exc}")
            raise ModelTransportError(str(exc)) from exc
        return response.text or ""

    async def send_stream(
        self, message: str, attachment: Attachment | None = None
    ) -> AsyncIterator[str]:
        try:
            stream = await self._chat.send_message_stream(_build_parts(message, attachment))
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as exc:
            logger.error(f"{__name__}:send_stream - Gemini stream failed on {self._model}: {exc}")
            raise ModelTransportError(str(exc)) from exc


class GeminiChatClient:
    """
    ChatModelClient backed by google-genai.

    Args:
        settings: Gemini configuration (API key, temperature, timeout)
        client: Optional pre-built genai.Client
    """

    def __init__(self, settings: GeminiSettings, client: genai.Client | None = None) -> None:
        self._settings = settings
        self._client = client or genai.Client(
            api_key=settings.api_key,
            http_options=types.HttpOptions(
                timeout=int(settings.request_timeout_seconds * 1000),
            ),
        )

    def start_chat(
        self,
        model: str,
        response_schema: dict[str, Any] | None = None,
    ) -> GeminiChatSession:
        """
        Open an async chat against ``model``.

        Args:
            model: Gemini model id
            response_schema: When given, replies are constrained to JSON of this shape

        Returns:
            GeminiChatSession: Session keeping the conversation history
        """
        config_kwargs: dict[str, Any] = {"temperature": self._settings.temperature}
        if response_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = response_schema

        try:
            chat = self._client.aio.chats.create(
                model=model,
                config=types.GenerateContentConfig(**config_kwargs),
            )
        except Exception as exc:
            raise ModelTransportError(str(exc), turn="create") from exc

        logger.debug(f"{__name__}:start_chat - Opened chat on {model}")
        return GeminiChatSession(chat, model)
