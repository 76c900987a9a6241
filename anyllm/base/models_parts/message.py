"""
Canonical chat message.

A message has a fixed role and either plain text or an ordered tuple of
content parts. Tool-result messages must reference the tool call they answer
through ``tool_call_id``; no other role may carry one. Only assistant messages
carry ``tool_calls``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from ..errors_parts.validation_error import ValidationError
from ._media import PathLike
from .chat_response import ChatResponse
from .enums import Role
from .file_content import FileContent
from .image_content import URL_MEDIA_TYPE, ImageContent
from .text_content import TextContent
from .tool_call import ToolCall

Content = Union[TextContent, ImageContent, FileContent]
ContentInput = Union[str, Sequence[Union[str, Content]]]
_CONTENT_TYPES = (TextContent, ImageContent, FileContent)


def _split_data_url(url: str, default_media_type: str) -> Tuple[str, str, bool]:
    """Return ``(data, media_type, is_base64)`` for a ``data:`` URL or a plain URL."""
    if url.startswith("data:") and ";base64," in url:
        header, data = url[5:].split(";base64,", 1)
        return data, header or default_media_type, True
    return url, URL_MEDIA_TYPE, False


def part_from_dict(data: Mapping[str, Any]) -> Content:
    """Decode one content part mapping by its ``type``.

    Accepts the canonical ``to_dict`` shapes plus the OpenAI ``image_url`` and
    ``file`` part shapes.
    """
    kind = data.get("type")
    if kind == "text":
        return TextContent(str(data.get("text", "")))
    if kind == "image":
        if data.get("is_base64", True):
            return ImageContent.from_base64(data["data"], data.get("media_type") or "image/jpeg")
        return ImageContent.from_url(data["data"])
    if kind == "image_url":
        ref = data.get("image_url")
        url = ref.get("url") if isinstance(ref, Mapping) else ref
        payload, media_type, is_base64 = _split_data_url(str(url or ""), "image/jpeg")
        return ImageContent(data=payload, media_type=media_type, is_base64=is_base64)
    if kind == "file":
        inner = data.get("file")
        if isinstance(inner, Mapping):
            payload, media_type, _ = _split_data_url(str(inner.get("file_data") or ""), "application/octet-stream")
            return FileContent.from_base64(payload, media_type, inner.get("filename") or "file")
        return FileContent.from_base64(
            data["data"], data.get("media_type") or "application/octet-stream", data.get("filename") or "file"
        )
    raise ValidationError(f"unsupported content part type: {kind!r}")


def _normalize_content(content: Any) -> Union[str, Tuple[Content, ...]]:
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(TextContent(part))
        elif isinstance(part, _CONTENT_TYPES):
            parts.append(part)
        elif isinstance(part, Mapping):
            try:
                parts.append(part_from_dict(part))
            except KeyError as exc:
                raise ValidationError(f"content part is missing {exc}") from exc
        else:
            raise ValidationError(f"unsupported content part: {type(part).__name__}")
    return tuple(parts)


@dataclass(frozen=True)
class Message:
    """Role-tagged message sent to a provider.

    Attributes:
        role: Author role; fixed at construction.
        content: Plain text or a tuple of content parts.
        name: Optional author name forwarded to vendors that support it.
        tool_call_id: Identifier of the answered tool call (tool role only).
        tool_calls: Tool invocations carried by an assistant message.

    Prefer the role constructors (:meth:`system`, :meth:`user`, ...) over the
    raw initializer.
    """

    role: Role
    content: Union[str, Tuple[Content, ...]]
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Tuple[ToolCall, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", Role(self.role))
        object.__setattr__(self, "content", _normalize_content(self.content))
        object.__setattr__(self, "tool_calls", tuple(self.tool_calls))
        if self.role is Role.TOOL and not self.tool_call_id:
            raise ValidationError("tool messages require a tool_call_id")
        if self.role is not Role.TOOL and self.tool_call_id is not None:
            raise ValidationError(f"{self.role.value} messages cannot carry a tool_call_id")
        if self.tool_calls and self.role is not Role.ASSISTANT:
            raise ValidationError("only assistant messages can carry tool_calls")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def system(cls, content: str, name: Optional[str] = None) -> "Message":
        return cls(Role.SYSTEM, content, name=name)

    @classmethod
    def user(cls, content: ContentInput, name: Optional[str] = None) -> "Message":
        return cls(Role.USER, content, name=name)

    @classmethod
    def assistant(
        cls,
        content: ContentInput = "",
        tool_calls: Iterable[ToolCall] = (),
        name: Optional[str] = None,
    ) -> "Message":
        return cls(Role.ASSISTANT, content, name=name, tool_calls=tuple(tool_calls))

    @classmethod
    def tool(cls, content: str, tool_call_id: str, name: Optional[str] = None) -> "Message":
        return cls(Role.TOOL, content, name=name, tool_call_id=tool_call_id)

    @classmethod
    def user_with_image(cls, text: str, image: Union[str, ImageContent]) -> "Message":
        """User message with text followed by one image (URL or ImageContent)."""
        part = ImageContent.from_url(image) if isinstance(image, str) else image
        return cls.user([TextContent(text), part])

    @classmethod
    def user_with_files(cls, text: str, files: Iterable[Union[PathLike, FileContent]]) -> "Message":
        """User message with text followed by files read from disk (or prebuilt parts)."""
        parts: list = [TextContent(text)]
        for item in files:
            parts.append(item if isinstance(item, FileContent) else FileContent.from_path(item))
        return cls.user(parts)

    @classmethod
    def from_response(cls, response: ChatResponse) -> "Message":
        """Assistant message echoing a chat response (for multi-turn history)."""
        return cls.assistant(response.content, tool_calls=response.tool_calls)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """Build a message from a ``{role, content, ...}`` mapping."""
        try:
            role = Role(data.get("role"))
        except ValueError as exc:
            raise ValidationError(f"invalid message role: {data.get('role')!r}") from exc
        return cls(
            role,
            data.get("content") or "",
            name=data.get("name"),
            tool_call_id=data.get("tool_call_id"),
            tool_calls=tuple(ToolCall.from_dict(tc) for tc in data.get("tool_calls") or ()),
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    @property
    def parts(self) -> Tuple[Content, ...]:
        """Content as parts; plain text becomes one TextContent."""
        if isinstance(self.content, str):
            return (TextContent(self.content),)
        return self.content

    def text_or_joined(self) -> str:
        """Flatten content to text; non-text parts render as ``[type]`` markers."""
        if isinstance(self.content, str):
            return self.content
        return " ".join(p.text if isinstance(p, TextContent) else f"[{p.type}]" for p in self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Canonical JSON-serializable mapping (stable across runs)."""
        data: Dict[str, Any] = {
            "role": self.role.value,
            "content": self.content if isinstance(self.content, str) else [p.to_dict() for p in self.content],
        }
        if self.name is not None:
            data["name"] = self.name
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        return data


__all__ = ["Message", "Content", "ContentInput", "part_from_dict"]
