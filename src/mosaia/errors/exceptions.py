"""Exception hierarchy and HTTP error mapping for mosaia."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class MosaiaError(Exception):
    """
    Base exception for mosaia.

    Every error raised by the SDK exposes the same shape so callers can
    handle failures without looking at transport internals.

    Attributes:
        message: Human-readable message.
        code: Machine-readable code (``UNKNOWN_ERROR`` when the API gave none).
        status: HTTP status code when the error came from a response.
        details: Optional structured information (e.g., raw error body).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = UNKNOWN_ERROR_CODE,
        status: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{message, code, status}`` view of this error."""
        return {"message": self.message, "code": self.code, "status": self.status}


class InvalidArgumentError(MosaiaError):
    """Raised for invalid arguments (client-side validation or HTTP 400)."""


class InvalidStateError(MosaiaError):
    """Raised when an object is used in an invalid state."""


class AuthError(MosaiaError):
    """Raised when authentication or session refresh fails (HTTP 401)."""


class PermissionError(MosaiaError):
    """Raised when access is denied (HTTP 403)."""


class NotFoundError(MosaiaError):
    """Raised when a resource is not found (HTTP 404)."""


class ConflictError(MosaiaError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(MosaiaError):
    """Raised when rate-limited (HTTP 429)."""


class NetworkError(MosaiaError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(MosaiaError):
    """Raised for unclassified API errors (5xx, unknown 4xx, logical errors)."""


class StorageUploadError(MosaiaError):
    """Raised when a direct upload to a presigned storage URL fails."""


class UploadExpiredError(StorageUploadError):
    """Raised when a presigned URL expired before its upload started."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to mosaia exceptions."""

    status_code: int
    message: str | None = None
    code: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> MosaiaError:
    """
    Map an HTTP error to a mosaia exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    message = info.message or f"HTTP error {info.status_code}"
    kwargs: dict[str, Any] = {
        "code": info.code or UNKNOWN_ERROR_CODE,
        "status": info.status_code,
        "details": dict(info.details) if info.details else None,
        "cause": cause,
    }

    if info.status_code == 400:
        return InvalidArgumentError(message, **kwargs)
    if info.status_code == 401:
        return AuthError(message, **kwargs)
    if info.status_code == 403:
        return PermissionError(message, **kwargs)
    if info.status_code == 404:
        return NotFoundError(message, **kwargs)
    if info.status_code in (409, 412):
        return ConflictError(message, **kwargs)
    if info.status_code == 429:
        return RateLimitError(message, **kwargs)

    return ApiError(message, **kwargs)


def api_error_from_payload(payload: Any, *, status: Optional[int] = None) -> ApiError:
    """
    Build an ApiError from an ``error`` value found in a response body.

    The backend may report a logical error on a 2xx response either as an
    object (``{"message": ..., "code": ...}``) or as a bare string.
    """
    if isinstance(payload, dict):
        message = payload.get("message") or UNKNOWN_ERROR_MESSAGE
        code = payload.get("code") or UNKNOWN_ERROR_CODE
        return ApiError(str(message), code=str(code), status=status, details=dict(payload))
    if payload:
        return ApiError(str(payload), status=status)
    return ApiError(UNKNOWN_ERROR_MESSAGE, status=status)
