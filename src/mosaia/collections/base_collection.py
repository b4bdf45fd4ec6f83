"""Generic CRUD collection over one resource type."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Generic, Mapping, NoReturn, Optional, TypeVar, Union

import httpx

from mosaia.errors import (
    UNKNOWN_ERROR_MESSAGE,
    ApiError,
    InvalidArgumentError,
    MosaiaError,
    NetworkError,
)
from mosaia.models import BaseModel, BatchResponse
from mosaia.transport import APIClient, QueryParams

M = TypeVar("M", bound=BaseModel)

ModelFactory = Callable[[Mapping[str, Any], Optional[str]], M]


class BaseCollection(Generic[M]):
    """
    Uniform CRUD operations for one resource type.

    A concrete collection is this class with a fixed URI segment and model
    class, e.g. ``Drives`` is ``BaseCollection("/drive", Drive)``.

    Notes:
        - The collection holds no cache and no session state; everything
          goes through the shared ``APIClient``.
        - All failures surface as ``MosaiaError`` subclasses.
    """

    def __init__(
        self,
        uri: str,
        model_class: Callable[..., M],
        *,
        client: APIClient,
    ) -> None:
        self._uri = uri
        self._client = client
        self._factory: ModelFactory = partial(model_class, client=client)

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def client(self) -> APIClient:
        return self._client

    # ----------------------------
    # Public API
    # ----------------------------
    async def list(self, params: Optional[QueryParams] = None) -> Union[BatchResponse[M], M]:
        """
        List entities with optional filtering and pagination.

        Returns:
            ``BatchResponse`` when ``data`` is an array (order preserved,
            ``paging`` passed through); a single model if the API answered
            with one object.
        """
        try:
            response = await self._client.get(self._uri, params)
            data = _require_data(response)
            if isinstance(data, list):
                return BatchResponse(
                    data=[self._factory(item, self._uri) for item in data],
                    paging=response.get("paging"),
                )
            return self._factory(data, self._uri)
        except Exception as exc:
            reraise(exc)

    async def get_one(self, id: str, params: Optional[QueryParams] = None) -> M:
        """Fetch one entity from ``{uri}/{id}``."""
        try:
            if not id:
                raise InvalidArgumentError("Entity ID is required")
            response = await self._client.get(f"{self._uri}/{id}", params)
            data = _require_data(response)
            if isinstance(data, list):
                raise ApiError("Invalid response from API: expected a single entity")
            return self._factory(data, self._uri)
        except Exception as exc:
            reraise(exc)

    async def get(
        self,
        params: Optional[QueryParams] = None,
        id: Optional[str] = None,
    ) -> Union[BatchResponse[M], M]:
        """Dual-mode lookup: ``get_one`` when ``id`` is given, else ``list``."""
        if id:
            return await self.get_one(id, params)
        return await self.list(params)

    async def create(self, entity: Mapping[str, Any]) -> M:
        """Create an entity. Any ``id`` in the payload is dropped (server-assigned)."""
        try:
            payload = {k: v for k, v in entity.items() if k != "id"}
            response = await self._client.post(self._uri, payload)
            return self._factory(_require_data(response), self._uri)
        except Exception as exc:
            reraise(exc)

    async def update(
        self,
        id: str,
        updates: Mapping[str, Any],
        params: Optional[QueryParams] = None,
    ) -> M:
        """
        Partially update ``{uri}/{id}``.

        The returned model is hydrated with URI ``{uri}/{id}``.

        Raises:
            InvalidArgumentError: if ``id`` is empty (no request is sent).
        """
        try:
            if not id:
                raise InvalidArgumentError("Entity ID is required for update")
            item_uri = f"{self._uri}/{id}"
            response = await self._client.put(item_uri, dict(updates), params)
            return self._factory(_require_data(response), item_uri)
        except Exception as exc:
            reraise(exc)

    async def delete(self, id: str, params: Optional[QueryParams] = None) -> None:
        """
        Delete ``{uri}/{id}``.

        Raises:
            InvalidArgumentError: if ``id`` is empty (no request is sent).
        """
        try:
            if not id:
                raise InvalidArgumentError("Entity ID is required for deletion")
            await self._client.delete(f"{self._uri}/{id}", params)
        except Exception as exc:
            reraise(exc)


def _require_data(response: Any) -> Any:
    if not isinstance(response, dict) or response.get("data") is None:
        raise ApiError("Invalid response from API")
    return response["data"]


def reraise(exc: Exception) -> NoReturn:
    """Re-raise ``exc`` as a MosaiaError, keeping the original message."""
    if isinstance(exc, MosaiaError):
        raise exc
    if isinstance(exc, httpx.TransportError):
        raise NetworkError(str(exc) or type(exc).__name__, cause=exc) from exc
    message = str(exc) or UNKNOWN_ERROR_MESSAGE
    raise MosaiaError(message, cause=exc) from exc
