"""SDK configuration and the shared configuration manager."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Literal, Optional, Union

from mosaia.errors import InvalidArgumentError, InvalidStateError
from mosaia.log import get_logger
from mosaia.util.time import Timestamp, is_timestamp_expired

DEFAULT_API_URL = "https://api.mosaia.ai"
DEFAULT_API_VERSION = "1"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_APP_URL = "https://mosaia.ai"
TOKEN_PREFIX = "Bearer"

AuthType = Literal["password", "client", "refresh", "oauth"]

Refresher = Callable[["MosaiaConfig"], Awaitable["MosaiaConfig"]]

logger = get_logger("config")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class SessionCredentials:
    """Session credentials for token-based authentication."""

    access_token: str
    refresh_token: Optional[str] = None
    sub: Optional[str] = None
    iat: Optional[Timestamp] = None
    exp: Optional[Timestamp] = None
    auth_type: Optional[AuthType] = None

    def is_expired(self) -> bool:
        """True when ``exp`` is set and has passed."""
        if self.exp is None or self.exp == "":
            return False
        return is_timestamp_expired(self.exp)


@dataclass(slots=True)
class MosaiaConfig:
    """
    SDK configuration.

    Notes:
        - ``api_key`` is sent as a bearer token on every request; after a
          sign-in or refresh it holds the session access token.
        - ``verbose`` only enables diagnostics and never changes results.
    """

    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    version: str = DEFAULT_API_VERSION
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    verbose: bool = False
    session: Optional[SessionCredentials] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "MosaiaConfig":
        """
        Build a configuration from ``MOSAIA_*`` environment variables.

        Keyword overrides win over the environment.
        """
        values: dict[str, Any] = {
            "api_key": os.getenv("MOSAIA_API_KEY"),
            "api_url": os.getenv("MOSAIA_API_URL") or DEFAULT_API_URL,
            "version": os.getenv("MOSAIA_API_VERSION") or DEFAULT_API_VERSION,
            "client_id": os.getenv("MOSAIA_CLIENT_ID"),
            "client_secret": os.getenv("MOSAIA_CLIENT_SECRET"),
            "verbose": os.getenv("MOSAIA_VERBOSE", "").strip().lower() in _TRUE_VALUES,
        }
        values.update(overrides)
        return cls(**values)

    @property
    def base_url(self) -> str:
        """``{api_url}/v{version}`` with defaults applied."""
        api_url = (self.api_url or DEFAULT_API_URL).rstrip("/")
        return f"{api_url}/v{self.version or DEFAULT_API_VERSION}"

    def is_session_expired(self) -> bool:
        return self.session is not None and self.session.is_expired()

    def copy(self, **changes: Any) -> "MosaiaConfig":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


ConfigInput = Union[MosaiaConfig, dict]


class ConfigurationManager:
    """
    Holds the current configuration shared by every client of one SDK instance.

    The manager is passed by reference to each ``APIClient``. It is the only
    shared mutable state in the SDK; the session refresh path rewrites it.
    """

    def __init__(self, config: Optional[ConfigInput] = None) -> None:
        self._config: Optional[MosaiaConfig] = None
        self._refresh_lock: Optional[asyncio.Lock] = None
        self.refresh_count = 0
        if config is not None:
            self.initialize(config)

    def initialize(self, config: ConfigInput) -> MosaiaConfig:
        """Set the configuration, filling in the default URL and version."""
        if isinstance(config, dict):
            config = MosaiaConfig(**config)
        if not isinstance(config, MosaiaConfig):
            raise InvalidArgumentError("config must be a MosaiaConfig or a dict")

        self._config = config.copy(
            api_url=config.api_url or DEFAULT_API_URL,
            version=config.version or DEFAULT_API_VERSION,
        )
        return self._config

    def get_config(self) -> MosaiaConfig:
        if self._config is None:
            raise InvalidStateError("Configuration not initialized. Call initialize() first.")
        return self._config

    def set_config(self, config: MosaiaConfig) -> None:
        self._config = config

    def update_config(self, **changes: Any) -> MosaiaConfig:
        """Replace individual fields of the current configuration."""
        self._config = self.get_config().copy(**changes)
        return self._config

    def get_api_url(self) -> str:
        return self.get_config().base_url

    def get_api_key(self) -> Optional[str]:
        return self.get_config().api_key

    def is_initialized(self) -> bool:
        return self._config is not None

    def reset(self) -> None:
        self._config = None

    async def refresh(self, refresher: Refresher) -> MosaiaConfig:
        """
        Refresh an expired session and store the refreshed configuration.

        Concurrent callers queue on one lock; whoever gets it after the
        first refresh sees a fresh session and returns without calling
        ``refresher`` again.
        """
        if self._refresh_lock is None:
            self._refresh_lock = asyncio.Lock()

        async with self._refresh_lock:
            current = self.get_config()
            if not current.is_session_expired():
                return current

            logger.info("Session expired, refreshing token")
            refreshed = await refresher(current)
            self.refresh_count += 1
            self.set_config(refreshed)
            return refreshed
