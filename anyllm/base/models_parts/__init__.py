"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`anyllm.base.models_parts` if needed, while `anyllm.base.models` remains the
primary stable import path.
"""

from .enums import FinishReason, Role
from .text_content import TextContent
from .image_content import ImageContent
from .file_content import FileContent
from .tool_call import ToolCall
from .usage import Usage
from .response import Response
from .chat_response import ChatResponse
from .text_response import TextResponse
from .embedding_response import EmbeddingResponse
from .message import Content, Message

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
