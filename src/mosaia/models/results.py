"""Result models for list and upload operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Optional, TypeVar

from .upload_job import UploadJob, UploadStatus

M = TypeVar("M")


@dataclass(slots=True)
class BatchResponse(Generic[M]):
    """A list of hydrated models plus the API's opaque paging metadata."""

    data: list[M]
    paging: Optional[dict[str, Any]] = None

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[M]:
        return iter(self.data)


@dataclass(slots=True)
class UploadResult:
    """Aggregate result for DriveItems.upload_files."""

    message: Optional[str]
    upload_jobs: list[UploadJob]
    instructions: Optional[dict[str, Any]] = None

    skipped: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def completed(self) -> list[UploadJob]:
        return [job for job in self.upload_jobs if job.status is UploadStatus.COMPLETED]

    @property
    def failed(self) -> list[UploadJob]:
        return [job for job in self.upload_jobs if job.status is UploadStatus.FAILED]

    @property
    def summary(self) -> dict[str, int]:
        counts: dict[str, int] = {status.value.lower(): 0 for status in UploadStatus}
        for job in self.upload_jobs:
            counts[job.status.value.lower()] += 1
        counts["skipped"] = len(self.skipped)
        return counts
