"""Query-string serialization."""

from __future__ import annotations

from typing import Any, Mapping, Optional

QueryParams = Mapping[str, Any]


def build_query_params(params: Optional[QueryParams]) -> list[tuple[str, str]]:
    """
    Serialize query parameters into ``(key, value)`` pairs.

    Keys whose value is ``None`` are omitted. Booleans become ``true`` /
    ``false``. Lists and tuples are sent once, comma-joined, with ``None``
    elements as empty strings. Everything else goes through ``str``.
    """
    if not params:
        return []

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        pairs.append((key, _to_str(value)))
    return pairs


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_str(v) for v in value)
    return str(value)
