"""Public configuration exports for mosaia."""

from __future__ import annotations

from .config import (
    DEFAULT_API_URL,
    DEFAULT_API_VERSION,
    DEFAULT_APP_URL,
    DEFAULT_CONTENT_TYPE,
    TOKEN_PREFIX,
    ConfigurationManager,
    MosaiaConfig,
    Refresher,
    SessionCredentials,
)

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_APP_URL",
    "DEFAULT_CONTENT_TYPE",
    "TOKEN_PREFIX",
    "ConfigurationManager",
    "MosaiaConfig",
    "Refresher",
    "SessionCredentials",
]
