"""Document/file content part (PDF, text, spreadsheets...)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

from ._media import PathLike, read_base64


@dataclass(frozen=True)
class FileContent:
    """Inline file attached to a user message as base64 data.

    Attributes:
        data: Base64-encoded file bytes.
        media_type: MIME type, ``application/octet-stream`` when unknown.
        filename: Base name presented to the vendor.
    """

    data: str
    media_type: str
    filename: str

    @classmethod
    def from_path(cls, path: PathLike) -> "FileContent":
        data, media_type = read_base64(path, "application/octet-stream")
        return cls(data=data, media_type=media_type, filename=os.path.basename(str(path)))

    @classmethod
    def from_base64(cls, data: str, media_type: str, filename: str = "file") -> "FileContent":
        return cls(data=data, media_type=media_type, filename=filename)

    @property
    def type(self) -> str:
        return "file"

    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "data": self.data,
            "media_type": self.media_type,
            "filename": self.filename,
        }


__all__ = ["FileContent"]
