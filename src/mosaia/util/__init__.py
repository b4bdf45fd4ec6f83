from .mime import (
    DEFAULT_MIME,
    ITEM_TYPE_FILE,
    ITEM_TYPE_FOLDER,
    JSON_MIME,
    guess_mime_type,
    is_folder,
    is_json_content_type,
)
from .time import (
    is_timestamp_expired,
    normalize_dt,
    now_utc,
    parse_rfc3339,
    to_datetime,
    to_rfc3339,
)

__all__ = [
    "DEFAULT_MIME",
    "JSON_MIME",
    "ITEM_TYPE_FILE",
    "ITEM_TYPE_FOLDER",
    "guess_mime_type",
    "is_folder",
    "is_json_content_type",
    "now_utc",
    "parse_rfc3339",
    "to_rfc3339",
    "to_datetime",
    "normalize_dt",
    "is_timestamp_expired",
]
