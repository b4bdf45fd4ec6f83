from __future__ import annotations

import mimetypes

DEFAULT_MIME: str = "application/octet-stream"
JSON_MIME: str = "application/json"

ITEM_TYPE_FILE: str = "FILE"
ITEM_TYPE_FOLDER: str = "FOLDER"


def guess_mime_type(filename: str) -> str:
    """Guess a MIME type from a file name, falling back to octet-stream."""
    mime, _ = mimetypes.guess_type(filename or "")
    return mime or DEFAULT_MIME


def is_json_content_type(content_type: str | None) -> bool:
    """
    Returns True if a Content-Type header value denotes JSON.

    Matches ``application/json`` with parameters (``; charset=utf-8``) as
    well as ``+json`` suffix types.
    """
    if not content_type:
        return False
    media = content_type.split(";", 1)[0].strip().lower()
    return media == JSON_MIME or media.endswith("+json")


def is_folder(item_type: str | None) -> bool:
    return (item_type or "").upper() == ITEM_TYPE_FOLDER
