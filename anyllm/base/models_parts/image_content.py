"""
Image content part.

An image is either a remote URL passed through to the vendor or inline base64
data with an explicit media type. No media-type acceptability check is done at
construction; vendors reject what they cannot handle.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ._media import PathLike, read_base64

URL_MEDIA_TYPE = "image/url"


@dataclass(frozen=True)
class ImageContent:
    """Image attached to a user message.

    Attributes:
        data: Either the image URL or its base64-encoded bytes.
        media_type: MIME type of inline data, or ``"image/url"`` for URLs.
        is_base64: ``True`` when ``data`` holds inline base64 bytes.
    """

    data: str
    media_type: str
    is_base64: bool

    @classmethod
    def from_url(cls, url: str) -> "ImageContent":
        return cls(data=url, media_type=URL_MEDIA_TYPE, is_base64=False)

    @classmethod
    def from_base64(cls, data: str, media_type: str) -> "ImageContent":
        return cls(data=data, media_type=media_type, is_base64=True)

    @classmethod
    def from_path(cls, path: PathLike) -> "ImageContent":
        """Read a local image; the MIME type is guessed from the extension."""
        data, media_type = read_base64(path, "image/jpeg")
        return cls(data=data, media_type=media_type, is_base64=True)

    @property
    def type(self) -> str:
        return "image"

    def data_url(self) -> str:
        """Return a ``data:`` URL for inline images, or the URL itself."""
        if not self.is_base64:
            return self.data
        return f"data:{self.media_type};base64,{self.data}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "data": self.data,
            "media_type": self.media_type,
            "is_base64": self.is_base64,
        }


__all__ = ["ImageContent", "URL_MEDIA_TYPE"]
