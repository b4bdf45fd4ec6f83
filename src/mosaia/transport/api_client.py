"""HTTP transport for the Mosaia API (internal use by collections and models)."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import httpx

from mosaia.config import (
    DEFAULT_CONTENT_TYPE,
    TOKEN_PREFIX,
    ConfigurationManager,
    MosaiaConfig,
    Refresher,
)
from mosaia.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    api_error_from_payload,
    map_http_error,
)
from mosaia.log import get_logger, redact_headers
from mosaia.util.mime import is_json_content_type

from .query import QueryParams, build_query_params

EventHook = Callable[[str, dict[str, Any]], None]

DEFAULT_TIMEOUT = 30.0

# Envelope bookkeeping fields removed before a body reaches callers.
_ENVELOPE_FIELDS: tuple[str, ...] = ("error", "meta")

logger = get_logger("transport")


class APIClient:
    """
    Authenticated HTTP client for the Mosaia REST API.

    Notes:
        - Configuration is re-read before every request, and an expired
          session is refreshed first (see ``ConfigurationManager.refresh``).
        - No retries are performed here.
        - Network exceptions (``httpx.HTTPError``) propagate unmodified; HTTP
          and envelope errors are raised as ``MosaiaError`` subclasses.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigurationManager] = None,
        *,
        config: Optional[MosaiaConfig] = None,
        refresher: Optional[Refresher] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        auto_refresh: bool = True,
        event_hooks: Optional[Sequence[EventHook]] = None,
    ) -> None:
        if config_manager is None and config is None:
            raise InvalidArgumentError("APIClient requires a config_manager or a config")

        # A fixed config gets a private manager so refresh works the same way.
        self._config_manager = config_manager or ConfigurationManager(config)
        self._refresher = refresher
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._timeout = timeout
        self._auto_refresh = auto_refresh
        self._event_hooks: list[EventHook] = list(event_hooks or [])

    @property
    def config_manager(self) -> ConfigurationManager:
        return self._config_manager

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The underlying ``httpx.AsyncClient`` (created on first use)."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
            self._owns_http_client = True
        return self._http_client

    def current_config(self) -> MosaiaConfig:
        """Return the current configuration without refreshing it."""
        return self._config_manager.get_config()

    def add_event_hook(self, hook: EventHook) -> None:
        """Subscribe to ``request`` / ``response`` / ``error`` diagnostic events."""
        self._event_hooks.append(hook)

    async def resolve_config(self) -> MosaiaConfig:
        """Return the current configuration, refreshing an expired session first."""
        config = self.current_config()
        if self._auto_refresh and config.is_session_expired():
            config = await self._config_manager.refresh(self._refresher or _default_refresher)
        return config

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ----------------------------
    # Public API
    # ----------------------------
    async def get(self, path: str, params: Optional[QueryParams] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        data: Any = None,
        *,
        files: Any = None,
        params: Optional[QueryParams] = None,
    ) -> Any:
        return await self.request("POST", path, data=data, params=params, files=files)

    async def put(self, path: str, data: Any = None, params: Optional[QueryParams] = None) -> Any:
        return await self.request("PUT", path, data=data, params=params)

    async def delete(self, path: str, params: Optional[QueryParams] = None) -> Any:
        return await self.request("DELETE", path, params=params)

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: Any = None,
        params: Optional[QueryParams] = None,
        files: Any = None,
    ) -> Any:
        """
        Send one request and return the unwrapped response body.

        Args:
            method: HTTP method.
            path: API path (``/drive/1/item``) or an absolute URL.
            data: JSON body, or form fields when ``files`` is given.
            params: Query parameters; ``None`` values are omitted.
            files: httpx multipart file entries; switches to multipart.

        Returns:
            ``None`` for 204, otherwise the body without ``error``/``meta``
            (a dict for JSON objects, text for non-JSON responses).
        """
        config = await self.resolve_config()
        method = method.upper()
        url = _build_url(config, path)
        headers = _build_headers(config, multipart=files is not None)
        query = build_query_params(params)

        kwargs: dict[str, Any] = {"headers": headers}
        if query:
            kwargs["params"] = query
        if files is not None:
            kwargs["files"] = files
            if data:
                kwargs["data"] = data
        elif data is not None and method != "GET":
            kwargs["json"] = data

        self._emit(
            "request",
            {
                "method": method,
                "url": url,
                "headers": redact_headers(headers),
                "params": dict(params) if params else None,
                "body": _describe_body(data, files),
            },
            verbose=config.verbose,
        )

        try:
            response = await self.http_client.request(method, url, **kwargs)
        except Exception as exc:
            self._emit(
                "error",
                {"method": method, "path": path, "error": repr(exc)},
                verbose=config.verbose,
            )
            raise

        return self._handle_response(method, path, response, verbose=config.verbose)

    # ----------------------------
    # Internals
    # ----------------------------
    def _handle_response(
        self,
        method: str,
        path: str,
        response: httpx.Response,
        *,
        verbose: bool,
    ) -> Any:
        status = response.status_code

        if status == 204:
            self._emit(
                "response",
                {"method": method, "path": path, "status": status, "body": None},
                verbose=verbose,
            )
            return None

        if not response.is_success:
            error_data = _parse_error_body(response)
            self._emit(
                "error",
                {
                    "method": method,
                    "path": path,
                    "status": status,
                    "reason": response.reason_phrase,
                    "body": error_data,
                    "meta": error_data.get("meta"),
                },
                verbose=verbose,
            )
            raise map_http_error(
                HttpErrorInfo(
                    status_code=status,
                    message=_error_message(error_data) or response.reason_phrase,
                    code=_error_code(error_data),
                    details=error_data,
                )
            )

        body = _parse_body(response)
        envelope = body if isinstance(body, dict) else {}
        self._emit(
            "response",
            {
                "method": method,
                "path": path,
                "status": status,
                "body": body,
                "meta": envelope.get("meta"),
                "error": envelope.get("error"),
            },
            verbose=verbose,
        )

        if envelope.get("error"):
            raise api_error_from_payload(envelope["error"], status=status)

        if isinstance(body, dict):
            return {k: v for k, v in body.items() if k not in _ENVELOPE_FIELDS}
        return body

    def _emit(self, event: str, payload: dict[str, Any], *, verbose: bool) -> None:
        if verbose:
            _log_event(event, payload)
        for hook in self._event_hooks:
            try:
                hook(event, payload)
            except Exception:
                logger.exception("Event hook failed for %s event", event)


def _build_url(config: MosaiaConfig, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    if path and not path.startswith("/"):
        path = "/" + path
    return config.base_url + path


def _build_headers(config: MosaiaConfig, *, multipart: bool) -> dict[str, str]:
    headers = {"Authorization": f"{TOKEN_PREFIX} {config.api_key or ''}"}
    if not multipart:
        headers["Content-Type"] = DEFAULT_CONTENT_TYPE
    return headers


def _parse_body(response: httpx.Response) -> Any:
    if not is_json_content_type(response.headers.get("content-type")):
        return response.text
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            "Malformed JSON in API response",
            status=response.status_code,
            details={"body": response.text[:500]},
            cause=exc,
        ) from exc


def _parse_error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        return payload
    return {"message": response.reason_phrase}


def _error_message(error_data: dict[str, Any]) -> Optional[str]:
    message = error_data.get("message")
    if not message and isinstance(error_data.get("error"), dict):
        message = error_data["error"].get("message")
    return str(message) if message else None


def _error_code(error_data: dict[str, Any]) -> Optional[str]:
    code = error_data.get("code")
    if not code and isinstance(error_data.get("error"), dict):
        code = error_data["error"].get("code")
    return code if isinstance(code, str) and code else None


def _describe_body(data: Any, files: Any) -> Any:
    if files is None:
        return data
    names = [entry[1][0] for entry in files if isinstance(entry, tuple) and len(entry) == 2]
    return {"fields": dict(data) if data else {}, "files": names}


def _log_event(event: str, payload: dict[str, Any]) -> None:
    if event == "request":
        logger.info("HTTP Request: %s %s", payload["method"], payload["url"])
        logger.info("Headers: %s", payload["headers"])
        if payload.get("params"):
            logger.info("Query Params: %s", payload["params"])
        if payload.get("body") is not None:
            logger.info("Request Body: %s", payload["body"])
        return

    if event == "response":
        logger.info("HTTP Response: %s %s %s", payload["status"], payload["method"], payload["path"])
        if payload["status"] == 204:
            logger.info("Response Data: No Content (204)")
        else:
            logger.info("Response Data: %s", payload.get("body"))
        if payload.get("meta"):
            logger.info("Response Meta: %s", payload["meta"])
        if payload.get("error"):
            logger.info("Response Error: %s", payload["error"])
        return

    if "status" in payload:
        logger.error("HTTP Error: %s %s %s", payload["status"], payload["method"], payload["path"])
        logger.error("Error Details: %s", payload.get("body"))
        if payload.get("meta"):
            logger.info("Response Meta: %s", payload["meta"])
    else:
        logger.error("Request Error: %s %s %s", payload["method"], payload["path"], payload["error"])


async def _default_refresher(config: MosaiaConfig) -> MosaiaConfig:
    from mosaia.auth import MosaiaAuth

    auth = MosaiaAuth(config=config)
    try:
        return await auth.refresh_token()
    finally:
        await auth.aclose()
