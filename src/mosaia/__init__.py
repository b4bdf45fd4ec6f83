"""mosaia public API."""

from __future__ import annotations

from mosaia.auth import MosaiaAuth
from mosaia.client import Mosaia
from mosaia.collections import BaseCollection, DriveItems, Drives, UploadJobs
from mosaia.config import ConfigurationManager, MosaiaConfig, SessionCredentials
from mosaia.errors import (
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
    map_http_error,
)
from mosaia.log import enable_console_logging
from mosaia.models import (
    BaseModel,
    BatchResponse,
    Drive,
    DriveItem,
    UploadFile,
    UploadJob,
    UploadResult,
    UploadStatus,
)
from mosaia.transport import APIClient
from mosaia.upload import PresignedUploader, UploadOrchestrator

__version__ = "0.1.0"

__all__ = [
    # High-level
    "Mosaia",
    "MosaiaAuth",
    "enable_console_logging",
    # Config / Transport
    "MosaiaConfig",
    "SessionCredentials",
    "ConfigurationManager",
    "APIClient",
    # Collections
    "BaseCollection",
    "Drives",
    "DriveItems",
    "UploadJobs",
    # Models
    "BaseModel",
    "Drive",
    "DriveItem",
    "UploadJob",
    "UploadStatus",
    "UploadFile",
    "BatchResponse",
    "UploadResult",
    # Upload
    "PresignedUploader",
    "UploadOrchestrator",
    # Errors
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
    "map_http_error",
]
