"""Local file input for batch uploads."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from mosaia.util.mime import guess_mime_type


@dataclass(slots=True)
class UploadFile:
    """
    A file to upload.

    Notes:
        - ``size`` defaults to ``len(content)``. It can be given explicitly,
          which is how empty or placeholder entries show up from callers.
        - ``mime_type`` is guessed from ``name`` when omitted.
    """

    name: str
    content: bytes
    mime_type: Optional[str] = None
    size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = len(self.content)
        if not self.mime_type:
            self.mime_type = guess_mime_type(self.name)

    @classmethod
    def from_path(cls, local_path: str, *, name: Optional[str] = None) -> "UploadFile":
        """Read a local file into memory."""
        with open(local_path, "rb") as f:
            content = f.read()
        return cls(name=name or os.path.basename(local_path), content=content)


def file_size(file: Any) -> Optional[float]:
    """Return the numeric size reported by a file-like input, or None."""
    size = getattr(file, "size", None)
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return None
    return size


def file_name(file: Any) -> str:
    return str(getattr(file, "name", "") or "")


def file_mime_type(file: Any) -> str:
    return getattr(file, "mime_type", None) or guess_mime_type(file_name(file))


def file_content(file: Any) -> bytes:
    """Return the bytes of an UploadFile or any object exposing ``content`` or ``read()``."""
    content = getattr(file, "content", None)
    if content is None and callable(getattr(file, "read", None)):
        content = file.read()
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    raise TypeError(f"Cannot read content of {file_name(file) or type(file).__name__!r}")
