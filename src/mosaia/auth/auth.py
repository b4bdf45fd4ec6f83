"""Session authentication for mosaia."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from mosaia.config import ConfigurationManager, MosaiaConfig, Refresher, SessionCredentials
from mosaia.errors import AuthError, MosaiaError
from mosaia.log import get_logger
from mosaia.transport import APIClient

SIGNIN_PATH = "/auth/signin"
SIGNOUT_PATH = "/auth/signout"

logger = get_logger("auth")


class MosaiaAuth:
    """
    Sign in, refresh and sign out against ``/auth``.

    Every sign-in method returns a new ``MosaiaConfig`` (the current one with
    ``api_key`` set to the access token and ``session`` replaced); storing
    it is up to the caller, except for ``sign_out`` which resets the manager.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigurationManager] = None,
        *,
        config: Optional[MosaiaConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config_manager = config_manager
        # Never auto-refresh here: the refresh request itself runs with an
        # expired session.
        self._client = APIClient(
            config_manager,
            config=config,
            http_client=http_client,
            auto_refresh=False,
        )

    @property
    def config(self) -> MosaiaConfig:
        return self._client.current_config()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def sign_in_with_password(self, email: str, password: str) -> MosaiaConfig:
        """
        Authenticate a user with email and password.

        Raises:
            AuthError: if ``client_id`` is missing from the configuration or
                the API rejects the credentials.
        """
        client_id = self.config.client_id
        if not client_id:
            raise AuthError("client_id is required and not found in config")

        request = {
            "grant_type": "password",
            "email": email,
            "password": password,
            "client_id": client_id,
        }
        return await self._sign_in(request, auth_type="password")

    async def sign_in_with_client(self, client_id: str, client_secret: str) -> MosaiaConfig:
        """Authenticate an application with client credentials."""
        request = {
            "grant_type": "client",
            "client_id": client_id,
            "client_secret": client_secret,
        }
        return await self._sign_in(request, auth_type="client")

    async def refresh_token(self, token: Optional[str] = None) -> MosaiaConfig:
        """
        Exchange a refresh token for a new session.

        Args:
            token: Refresh token to use; defaults to the session's own.
        """
        session = self.config.session
        refresh_token = token or (session.refresh_token if session else None)
        if not refresh_token:
            raise AuthError("Refresh token is required and not found in config")

        request = {"grant_type": "refresh", "refresh_token": refresh_token}
        return await self._sign_in(request, auth_type="refresh")

    async def sign_out(self, api_key: Optional[str] = None) -> None:
        """Invalidate a token server-side and reset the configuration manager."""
        token = api_key or self.config.api_key
        if not token:
            raise AuthError("api_key is required and not found in config")

        try:
            await self._client.delete(SIGNOUT_PATH, {"token": token})
        except MosaiaError:
            raise
        except Exception as exc:
            raise AuthError(str(exc) or "Sign out failed", cause=exc) from exc

        if self._config_manager is not None:
            self._config_manager.reset()

    def as_refresher(self) -> Refresher:
        """Return a coroutine function usable as an ``APIClient`` refresher."""

        async def _refresh(config: MosaiaConfig) -> MosaiaConfig:
            session = config.session
            return await self.refresh_token(session.refresh_token if session else None)

        return _refresh

    async def _sign_in(self, request: dict[str, Any], *, auth_type: str) -> MosaiaConfig:
        try:
            response = await self._client.post(SIGNIN_PATH, request)
        except AuthError:
            raise
        except MosaiaError as exc:
            raise AuthError(exc.message, code=exc.code, status=exc.status, cause=exc) from exc
        except Exception as exc:
            raise AuthError(str(exc) or "Authentication request failed", cause=exc) from exc

        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, dict) or not data.get("access_token"):
            raise AuthError("Invalid authentication response from API")

        session = SessionCredentials(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            sub=data.get("sub"),
            iat=data.get("iat"),
            exp=data.get("exp"),
            auth_type=auth_type,  # type: ignore[arg-type]
        )
        logger.debug("Signed in with grant_type=%s", request["grant_type"])
        return self.config.copy(api_key=session.access_token, session=session)
