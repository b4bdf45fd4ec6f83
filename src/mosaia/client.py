"""Top-level SDK entrypoint."""

from __future__ import annotations

from typing import Optional

import httpx

from mosaia.auth import MosaiaAuth
from mosaia.collections import Drives
from mosaia.config import ConfigurationManager, MosaiaConfig
from mosaia.config.config import ConfigInput
from mosaia.log import enable_console_logging, get_logger
from mosaia.transport import DEFAULT_TIMEOUT, APIClient, EventHook

logger = get_logger("client")


class Mosaia:
    """
    Mosaia SDK client.

    One instance owns one configuration manager and one transport; every
    collection and model it hands out shares them, so a session refreshed
    by one request is seen by all others.

    Example:
        async with Mosaia({"api_key": "..."}) as mosaia:
            drives = await mosaia.drives.get()
            drive = drives.data[0]
            result = await drive.items.upload_files([UploadFile("a.txt", b"hi")])
    """

    def __init__(
        self,
        config: Optional[ConfigInput] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._config_manager = ConfigurationManager(config if config is not None else MosaiaConfig.from_env())
        self._api = APIClient(
            self._config_manager,
            http_client=http_client,
            timeout=timeout,
            refresher=self._refresh_session,
        )
        self._auth: Optional[MosaiaAuth] = None
        self._configure_logging()

    @property
    def config(self) -> MosaiaConfig:
        return self._config_manager.get_config()

    @config.setter
    def config(self, config: ConfigInput) -> None:
        self._config_manager.initialize(config)
        self._configure_logging()

    @property
    def config_manager(self) -> ConfigurationManager:
        return self._config_manager

    @property
    def api(self) -> APIClient:
        return self._api

    @property
    def drives(self) -> Drives:
        return Drives(client=self._api)

    @property
    def auth(self) -> MosaiaAuth:
        """Auth operations bound to this client's configuration."""
        if self._auth is None:
            self._auth = MosaiaAuth(self._config_manager, http_client=self._api.http_client)
        return self._auth

    def add_event_hook(self, hook: EventHook) -> None:
        self._api.add_event_hook(hook)

    async def aclose(self) -> None:
        await self._api.aclose()
        self._auth = None

    async def __aenter__(self) -> "Mosaia":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _refresh_session(self, config: MosaiaConfig) -> MosaiaConfig:
        session = config.session
        return await self.auth.refresh_token(session.refresh_token if session else None)

    def _configure_logging(self) -> None:
        if self._config_manager.is_initialized() and self.config.verbose:
            enable_console_logging()
            logger.debug("Verbose logging enabled")
