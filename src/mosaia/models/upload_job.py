"""Upload job model: one file's presigned-URL upload lifecycle."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from mosaia.errors import InvalidStateError
from mosaia.util.time import is_timestamp_expired, now_utc, to_rfc3339

from .base import BaseModel

DEFAULT_FAILURE_MESSAGE = "Upload failed"


class UploadStatus(str, Enum):
    """Upload job states."""

    PENDING = "PENDING"
    UPLOADING = "UPLOADING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


TERMINAL_STATUSES: frozenset[UploadStatus] = frozenset(
    {UploadStatus.COMPLETED, UploadStatus.FAILED}
)

_ALLOWED_TRANSITIONS: dict[UploadStatus, frozenset[UploadStatus]] = {
    UploadStatus.PENDING: frozenset({UploadStatus.UPLOADING, UploadStatus.FAILED}),
    UploadStatus.UPLOADING: frozenset({UploadStatus.COMPLETED, UploadStatus.FAILED}),
    UploadStatus.COMPLETED: frozenset(),
    UploadStatus.FAILED: frozenset(),
}


class UploadJob(BaseModel):
    """
    Tracks one file's upload.

    Status moves PENDING -> UPLOADING -> COMPLETED | FAILED. A PENDING job
    may also fail directly (expired URL, no matching local file). Terminal
    states are final; ``InvalidStateError`` is raised otherwise.
    """

    default_uri = "/upload"

    @classmethod
    def from_descriptor(
        cls,
        descriptor: Mapping[str, Any],
        uri: Optional[str] = None,
        *,
        client: Any = None,
    ) -> "UploadJob":
        """Build a PENDING job from one ``data.files[]`` upload descriptor."""
        data: dict[str, Any] = {
            "id": descriptor.get("upload_job_id"),
            "name": descriptor.get("name") or descriptor.get("filename"),
            "size": descriptor.get("size"),
            "mime_type": descriptor.get("mime_type"),
            "path": descriptor.get("path"),
            "presigned_url": descriptor.get("presigned_url"),
            "presigned_url_expires_at": descriptor.get("expires_at"),
            "status": UploadStatus.PENDING.value,
            "started_at": to_rfc3339(now_utc()),
        }
        for key in ("failed_url", "status_url"):
            if descriptor.get(key):
                data[key] = descriptor[key]
        return cls(data, uri, client=client)

    @property
    def filename(self) -> Optional[str]:
        return self._data.get("name") or self._data.get("filename")

    @property
    def size(self) -> Optional[int]:
        return self._data.get("size")

    @property
    def mime_type(self) -> Optional[str]:
        return self._data.get("mime_type")

    @property
    def path(self) -> Optional[str]:
        return self._data.get("path")

    @property
    def presigned_url(self) -> Optional[str]:
        return self._data.get("presigned_url")

    @property
    def presigned_url_expires_at(self) -> Optional[str | datetime]:
        return self._data.get("presigned_url_expires_at")

    @property
    def failed_url(self) -> Optional[str]:
        return self._data.get("failed_url")

    @property
    def status_url(self) -> Optional[str]:
        return self._data.get("status_url")

    @property
    def error_summary(self) -> Optional[str]:
        return self._data.get("error_summary")

    @property
    def status(self) -> UploadStatus:
        return UploadStatus(self._data.get("status") or UploadStatus.PENDING.value)

    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def is_expired(self) -> bool:
        """True when the presigned URL expiration has passed."""
        expires_at = self.presigned_url_expires_at
        if not expires_at:
            return False
        return is_timestamp_expired(expires_at)

    # ----------------------------
    # State transitions (local)
    # ----------------------------
    def mark_uploading(self) -> None:
        self._transition(UploadStatus.UPLOADING)

    def mark_completed(self) -> None:
        self._transition(UploadStatus.COMPLETED)
        self._data["completed_at"] = to_rfc3339(now_utc())

    def fail(self, reason: Optional[str] = None) -> None:
        """Move the job to FAILED locally, recording ``reason``."""
        self._transition(UploadStatus.FAILED)
        self._data["error_summary"] = reason or DEFAULT_FAILURE_MESSAGE
        self._data["completed_at"] = to_rfc3339(now_utc())

    # ----------------------------
    # Server-side reporting
    # ----------------------------
    async def mark_failed(self, error_message: Optional[str] = None) -> dict[str, Any]:
        """
        Report this job as failed to the API.

        The backend reverts the storage quota reserved for the file. The
        local job is moved to FAILED as well (if it is not already).

        Raises:
            InvalidStateError: if the API gave no ``failed_url`` for this job.
        """
        if not self.failed_url:
            raise InvalidStateError("Cannot mark upload as failed: failed_url not available")

        message = error_message or DEFAULT_FAILURE_MESSAGE
        if self.status is not UploadStatus.FAILED:
            self.fail(message)

        response = await self.client.post(self.failed_url, {"error": message})
        updated = response.get("data", response) if isinstance(response, dict) else None
        if isinstance(updated, dict):
            # The local status is authoritative once terminal.
            updated = {k: v for k, v in updated.items() if k != "status"}
            self._data.update(updated)
        return self.to_json()

    def _transition(self, new_status: UploadStatus) -> None:
        current = self.status
        if new_status not in _ALLOWED_TRANSITIONS[current]:
            raise InvalidStateError(
                "Invalid upload job status transition",
                details={"job_id": self.id, "from": current.value, "to": new_status.value},
            )
        self._data["status"] = new_status.value
