"""Base model: a URI-aware wrapper around a raw entity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

from mosaia.errors import ApiError, InvalidStateError

if TYPE_CHECKING:
    from mosaia.transport import APIClient


class BaseModel:
    """
    Wraps one entity (an opaque attribute bag) plus the URI it came from.

    Attribute access falls through to the data bag, so ``model.name`` reads
    ``data["name"]``. The model never validates the bag.

    Notes:
        - ``uri`` is the collection URI (``/drive``); the entity itself lives
          at ``{uri}/{id}`` (see ``get_uri``).
        - Network methods need a bound ``APIClient``; collections bind it
          when hydrating.
    """

    default_uri: str = ""

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        uri: Optional[str] = None,
        *,
        client: Optional["APIClient"] = None,
    ) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self._uri: str = uri or self.default_uri
        self._client = client

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        data = self.__dict__.get("_data")
        if data is not None and name in data:
            return data[name]
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, uri={self._uri!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseModel):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data and self._uri == other._uri

    __hash__ = None  # type: ignore[assignment]

    @property
    def id(self) -> Optional[str]:
        return self._data.get("id")

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    @property
    def client(self) -> "APIClient":
        if self._client is None:
            raise InvalidStateError(f"{type(self).__name__} is not bound to an API client")
        return self._client

    def is_active(self) -> bool:
        return self._data.get("active") is True

    def has_id(self) -> bool:
        return bool(self._data.get("id"))

    def get_uri(self) -> str:
        """Return ``{uri}/{id}``. Requires a persisted entity."""
        if not self.has_id():
            raise InvalidStateError("Entity ID is required")
        return f"{self._uri}/{self._data['id']}"

    def to_json(self) -> dict[str, Any]:
        return dict(self._data)

    def to_api_payload(self) -> dict[str, Any]:
        """The data bag without read-only fields."""
        payload = dict(self._data)
        payload.pop("id", None)
        return payload

    def update(self, updates: Mapping[str, Any]) -> None:
        """Merge ``updates`` into the local data bag (no network call)."""
        self._data.update(updates)

    async def create(self) -> dict[str, Any]:
        """POST this entity to its collection URI and merge the response."""
        response = await self.client.post(self._uri, self.to_api_payload())
        return self._merge_response(response)

    async def save(self) -> dict[str, Any]:
        """PUT the full data bag to ``{uri}/{id}`` and merge the response."""
        if not self.has_id():
            raise InvalidStateError("Entity ID is required for update")
        response = await self.client.put(self.get_uri(), self.to_json())
        return self._merge_response(response)

    async def delete(self) -> None:
        """DELETE ``{uri}/{id}`` and clear the local data bag."""
        if not self.has_id():
            raise InvalidStateError("Entity ID is required for deletion")
        await self.client.delete(self.get_uri())
        self._data = {}

    def _merge_response(self, response: Any) -> dict[str, Any]:
        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, dict):
            raise ApiError("Invalid response from API")
        self.update(data)
        return data
