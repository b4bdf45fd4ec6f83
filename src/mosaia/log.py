"""Logging helpers for mosaia."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "mosaia"

FORMATTER = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_console_handler: Optional[logging.Handler] = None

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the ``mosaia.<name>`` logger."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def enable_console_logging(
    level: int | str = logging.INFO,
    *,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """
    Attach a console handler to the package root logger.

    Calling this more than once only updates the level of the existing
    handler, so verbose clients created repeatedly do not duplicate output.
    """
    global _console_handler

    if isinstance(level, str):
        level = LOG_LEVELS.get(level.lower(), logging.INFO)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _console_handler is None:
        _console_handler = logging.StreamHandler(stream or sys.stdout)
        _console_handler.setFormatter(FORMATTER)
        root.addHandler(_console_handler)

    _console_handler.setLevel(level)
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)
    return _console_handler


def redact_key_for_logging(key: Optional[str]) -> Optional[str]:
    """
    Redact an API key or token, keeping only the first and last 6 characters.

    Short keys keep 3 characters on each side.
    """
    if not key:
        return key
    if len(key) <= 12:
        return f"{key[:3]}...{key[-3:]}"
    return f"{key[:6]}...{key[-6:]}"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return a copy of request headers with the bearer token redacted."""
    redacted = dict(headers)
    auth = redacted.get("Authorization")
    if auth:
        prefix, _, token = auth.partition(" ")
        redacted["Authorization"] = f"{prefix} {redact_key_for_logging(token)}".rstrip()
    return redacted
