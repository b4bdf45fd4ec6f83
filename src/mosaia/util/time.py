from __future__ import annotations

from datetime import datetime, timezone
from typing import Union

Timestamp = Union[int, float, str, datetime]

# Epoch values above this are taken to be milliseconds rather than seconds.
_EPOCH_MS_THRESHOLD = 10**12


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # Python's fromisoformat doesn't accept 'Z' in 3.9/3.10, so normalize.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    dt = normalize_dt(dt)
    return dt.astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    """Convert tz-aware datetime to RFC3339 (UTC, with 'Z')."""
    dt = normalize_dt(dt).astimezone(timezone.utc)
    s = dt.isoformat(timespec="milliseconds")
    return s.replace("+00:00", "Z")


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt


def to_datetime(value: Timestamp) -> datetime:
    """
    Convert a timestamp as sent by the API into a tz-aware UTC datetime.

    Session ``exp`` values are JWT-style epoch seconds (sometimes sent as
    numeric strings, sometimes as milliseconds); upload expirations are
    RFC3339 strings.
    """
    if isinstance(value, bool):
        raise TypeError("timestamp must not be a bool")
    if isinstance(value, datetime):
        return normalize_dt(value).astimezone(timezone.utc)
    if isinstance(value, str):
        s = value.strip()
        try:
            number = float(s)
        except ValueError:
            return parse_rfc3339(s)
        return _from_epoch(number)
    if isinstance(value, (int, float)):
        return _from_epoch(float(value))
    raise TypeError(f"unsupported timestamp type: {type(value).__name__}")


def is_timestamp_expired(value: Timestamp, *, now: datetime | None = None) -> bool:
    """Return True if the timestamp is at or before ``now``."""
    current = normalize_dt(now) if now is not None else now_utc()
    return to_datetime(value) <= current


def _from_epoch(number: float) -> datetime:
    if number > _EPOCH_MS_THRESHOLD:
        number = number / 1000.0
    return datetime.fromtimestamp(number, tz=timezone.utc)
