"""Public error exports for mosaia."""

from __future__ import annotations

from .exceptions import (
    UNKNOWN_ERROR_CODE,
    UNKNOWN_ERROR_MESSAGE,
    ApiError,
    AuthError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    MosaiaError,
    NetworkError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    StorageUploadError,
    UploadExpiredError,
    api_error_from_payload,
    map_http_error,
)

__all__ = [
    "UNKNOWN_ERROR_CODE",
    "UNKNOWN_ERROR_MESSAGE",
    "MosaiaError",
    "InvalidArgumentError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "ApiError",
    "StorageUploadError",
    "UploadExpiredError",
    "HttpErrorInfo",
    "api_error_from_payload",
    "map_http_error",
]
