"""Drive items collection: files and folders inside one drive."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from mosaia.errors import ApiError, InvalidArgumentError, NotFoundError
from mosaia.log import get_logger
from mosaia.models import BatchResponse, DriveItem, UploadJob, UploadResult
from mosaia.transport import APIClient
from mosaia.upload import JobProgressCallback, PresignedUploader, UploadOrchestrator

from .base_collection import BaseCollection, reraise

logger = get_logger("collections")


class DriveItems(BaseCollection[DriveItem]):
    """
    Items of one drive under ``{drive_uri}/item``.

    Besides CRUD this collection uploads files (two-phase, via presigned
    URLs) and resolves items by path.
    """

    def __init__(
        self,
        uri: str = "",
        *,
        client: APIClient,
        uploader: Optional[PresignedUploader] = None,
    ) -> None:
        super().__init__(f"{uri}{DriveItem.default_uri}", DriveItem, client=client)
        self._orchestrator = UploadOrchestrator(
            client,
            self.uri,
            jobs_uri=f"{uri}{UploadJob.default_uri}",
            uploader=uploader,
        )

    async def upload_files(
        self,
        files: Sequence[Any],
        *,
        path: Optional[str] = None,
        relative_paths: Optional[Union[str, Sequence[str]]] = None,
        preserve_structure: Optional[bool] = None,
        on_progress: Optional[JobProgressCallback] = None,
        max_concurrency: Optional[int] = None,
    ) -> UploadResult:
        """
        Upload files into this drive.

        Individual upload failures do not raise; they are reported on the
        returned jobs (status FAILED) and in ``UploadResult.errors``.

        Example:
            result = await drive.items.upload_files(
                [UploadFile.from_path("report.pdf")],
                path="/reports",
            )
        """
        return await self._orchestrator.upload_files(
            files,
            path=path,
            relative_paths=relative_paths,
            preserve_structure=preserve_structure,
            on_progress=on_progress,
            max_concurrency=max_concurrency,
        )

    async def find_by_path(
        self,
        path: str,
        *,
        case_sensitive: Optional[bool] = None,
    ) -> Union[DriveItem, BatchResponse[DriveItem], None]:
        """
        Resolve an item by its path inside the drive.

        Returns:
            The item, a listing when the path names a folder's contents, or
            ``None`` when nothing exists at ``path``.
        """
        normalized = (path or "").lstrip("/")
        if not normalized:
            raise InvalidArgumentError("Path is required")

        params: dict[str, Any] = {"path": normalized, "case_sensitive": case_sensitive}
        try:
            response = await self.client.get(f"{self.uri}/path", params)
        except NotFoundError:
            logger.debug("No drive item at path %r", normalized)
            return None
        except Exception as exc:
            reraise(exc)

        data = response.get("data") if isinstance(response, dict) else None
        if isinstance(data, list):
            return BatchResponse(
                data=[DriveItem(item, self.uri, client=self.client) for item in data],
                paging=response.get("paging"),
            )
        if isinstance(data, dict):
            return DriveItem(data, self.uri, client=self.client)
        raise ApiError("Invalid response from API")

    async def get_upload_status(self, job_id: str) -> Any:
        """Return the server-side status record of an upload job."""
        if not job_id:
            raise InvalidArgumentError("Upload job ID is required")
        try:
            response = await self.client.get(f"{self.uri}/upload/{job_id}")
        except Exception as exc:
            reraise(exc)
        if isinstance(response, dict):
            return response.get("data", response)
        return response
