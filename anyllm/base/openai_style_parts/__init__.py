"""OpenAI-style adapter parts: message/tool translation, payloads, parsing."""

from .base import OpenAICompatibleProvider
from .messages import to_openai_message, to_openai_messages
from .parsing import parse_chat_response, parse_embedding_response
from .payloads import build_chat_payload, build_embedding_payload
from .tools import to_openai_tool_choice, to_openai_tools

__all__ = [
    "OpenAICompatibleProvider",
    "to_openai_message",
    "to_openai_messages",
    "to_openai_tools",
    "to_openai_tool_choice",
    "build_chat_payload",
    "build_embedding_payload",
    "parse_chat_response",
    "parse_embedding_response",
]
