"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``anyllm.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.enums import FinishReason, Role
from .models_parts.text_content import TextContent
from .models_parts.image_content import ImageContent
from .models_parts.file_content import FileContent
from .models_parts.tool_call import ToolCall
from .models_parts.usage import Usage
from .models_parts.message import Content, Message
from .models_parts.response import Response
from .models_parts.chat_response import ChatResponse
from .models_parts.text_response import TextResponse
from .models_parts.embedding_response import EmbeddingResponse

__all__ = [
    "Role",
    "FinishReason",
    "Content",
    "TextContent",
    "ImageContent",
    "FileContent",
    "ToolCall",
    "Usage",
    "Message",
    "Response",
    "ChatResponse",
    "TextResponse",
    "EmbeddingResponse",
]
