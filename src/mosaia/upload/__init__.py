from __future__ import annotations

from .orchestrator import JobProgressCallback, UploadOrchestrator
from .uploader import DEFAULT_CHUNK_SIZE, PresignedUploader, ProgressCallback

__all__ = [
    "UploadOrchestrator",
    "JobProgressCallback",
    "PresignedUploader",
    "ProgressCallback",
    "DEFAULT_CHUNK_SIZE",
]
