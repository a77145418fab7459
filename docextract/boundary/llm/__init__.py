"""Generative model boundary."""

from docextract.boundary.llm.base import Attachment, ChatModelClient, ChatSession
from docextract.boundary.llm.gemini_client import GeminiChatClient, GeminiChatSession

__all__ = [
    "Attachment",
    "ChatModelClient",
    "ChatSession",
    "GeminiChatClient",
    "GeminiChatSession",
]
