"""Small helpers shared by the file-backed content constructors."""
from __future__ import annotations

import base64
import mimetypes
from pathlib import Path
from typing import Tuple, Union

PathLike = Union[str, Path]


def read_base64(path: PathLike, default_media_type: str) -> Tuple[str, str]:
    """Return ``(base64_data, media_type)`` for a local file.

    ``FileNotFoundError`` from the OS propagates unchanged.
    """
    raw = Path(path).read_bytes()
    media_type, _ = mimetypes.guess_type(str(path))
    return base64.b64encode(raw).decode("ascii"), media_type or default_media_type


__all__ = ["PathLike", "read_base64"]
