"""Public model exports for mosaia."""

from __future__ import annotations

from .base import BaseModel
from .drive import Drive
from .drive_item import DriveItem
from .results import BatchResponse, UploadResult
from .upload_file import UploadFile
from .upload_job import TERMINAL_STATUSES, UploadJob, UploadStatus

__all__ = [
    "BaseModel",
    "Drive",
    "DriveItem",
    "UploadJob",
    "UploadStatus",
    "TERMINAL_STATUSES",
    "UploadFile",
    "BatchResponse",
    "UploadResult",
]
