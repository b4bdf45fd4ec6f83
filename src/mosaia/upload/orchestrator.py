"""Batch upload: reserve jobs through the API, then PUT each file to storage."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from mosaia.errors import (
    ApiError,
    InvalidArgumentError,
    StorageUploadError,
    UploadExpiredError,
)
from mosaia.log import get_logger
from mosaia.models import UploadJob, UploadResult
from mosaia.models.upload_file import file_content, file_mime_type, file_name, file_size
from mosaia.transport import APIClient

from .uploader import PresignedUploader, notify

JobProgressCallback = Callable[[UploadJob, int], Any]

# A valid input file and its bytes, read once.
StagedFile = tuple[Any, bytes]

logger = get_logger("upload")


class UploadOrchestrator:
    """
    Run the two-phase upload flow for one drive.

    1. POST the file metadata (multipart) to the drive's item endpoint; the
       API answers with one upload job per file, each with a presigned URL.
    2. PUT every file directly to storage, concurrently.

    A job whose upload fails is moved to FAILED and, when the API gave a
    ``failed_url``, reported back so the reserved quota is released. A
    failure while reporting is logged and never replaces the original error.
    """

    def __init__(
        self,
        client: APIClient,
        uri: str,
        *,
        jobs_uri: Optional[str] = None,
        uploader: Optional[PresignedUploader] = None,
    ) -> None:
        self._client = client
        self._uri = uri
        self._jobs_uri = jobs_uri
        self._uploader = uploader

    @property
    def uploader(self) -> PresignedUploader:
        # Storage requests share the connection pool but never the API headers.
        if self._uploader is None:
            self._uploader = PresignedUploader(self._client.http_client)
        return self._uploader

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
        Upload ``files`` and return one job per accepted file.

        Args:
            files: ``UploadFile`` objects (or anything with ``name``, ``size``
                and ``content``/``read()``).
            path: Destination folder inside the drive.
            relative_paths: Per-file relative paths; a sequence is sent as a
                JSON array, a string as-is.
            preserve_structure: Ask the API to recreate folder structure.
            on_progress: ``callback(job, percent)``; may be a coroutine function.
            max_concurrency: Upper bound on simultaneous storage PUTs.

        Raises:
            InvalidArgumentError: no files, or no file with a positive size
                (raised before any network call).
            MosaiaError: the job reservation request failed.
        """
        files = list(files or [])
        if not files:
            raise InvalidArgumentError("At least one file is required for upload")
        if max_concurrency is not None and max_concurrency < 1:
            raise InvalidArgumentError("max_concurrency must be at least 1")

        valid, skipped = _partition_files(files)
        if skipped:
            logger.warning("Skipping %d file(s) with no content: %s", len(skipped), ", ".join(skipped))
        if not valid:
            raise InvalidArgumentError(
                "No valid files to upload: every file has an empty or invalid size",
                details={"skipped": skipped},
            )

        multipart = [
            ("files", (file_name(f), content, file_mime_type(f)))
            for f, content in valid
        ]
        fields = _form_fields(path, relative_paths, preserve_structure)
        response = await self._client.post(self._uri, fields or None, files=multipart)

        data = _unwrap(response)
        descriptors = data.get("files") or []
        jobs = [
            UploadJob.from_descriptor(d, self._jobs_uri, client=self._client)
            for d in descriptors
        ]
        logger.info("Reserved %d upload job(s) for %d file(s)", len(jobs), len(valid))

        semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
        pairs = _match_files(jobs, valid)
        outcomes = await asyncio.gather(
            *(self._run(job, staged, on_progress, semaphore) for job, staged in pairs),
            return_exceptions=True,
        )

        errors: dict[str, str] = {}
        for index, (job, outcome) in enumerate(zip(jobs, outcomes)):
            if isinstance(outcome, Exception):
                errors[job.id or f"#{index}"] = str(outcome) or type(outcome).__name__
            elif isinstance(outcome, BaseException):
                raise outcome

        if errors:
            logger.warning("%d of %d upload(s) failed", len(errors), len(jobs))

        return UploadResult(
            message=data.get("message") or response.get("message"),
            upload_jobs=jobs,
            instructions=data.get("instructions"),
            skipped=skipped,
            errors=errors,
        )

    async def _run(
        self,
        job: UploadJob,
        staged: Optional[StagedFile],
        on_progress: Optional[JobProgressCallback],
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        if semaphore is None:
            await self._upload_one(job, staged, on_progress)
            return
        async with semaphore:
            await self._upload_one(job, staged, on_progress)

    async def _upload_one(
        self,
        job: UploadJob,
        staged: Optional[StagedFile],
        on_progress: Optional[JobProgressCallback],
    ) -> None:
        async def progress(percent: int) -> None:
            await notify(on_progress, job, percent)

        try:
            if staged is None:
                raise StorageUploadError(
                    "No local file matches upload job",
                    details={"job_id": job.id, "name": job.filename},
                )
            if not job.presigned_url:
                raise StorageUploadError("Upload job has no presigned URL", details={"job_id": job.id})
            if job.is_expired():
                raise UploadExpiredError(
                    "Presigned URL expired before upload started",
                    details={"job_id": job.id, "expires_at": job.presigned_url_expires_at},
                )

            file, content = staged
            job.mark_uploading()
            if on_progress is not None:
                await notify(on_progress, job, 0)
            await self.uploader.upload(
                job.presigned_url,
                content,
                mime_type=job.mime_type or file_mime_type(file),
                on_progress=progress if on_progress is not None else None,
            )
        except Exception as exc:
            await self._compensate(job, exc)
            raise

        job.mark_completed()
        logger.info("Upload job %s completed (%s)", job.id, job.filename)

    async def _compensate(self, job: UploadJob, exc: Exception) -> None:
        reason = str(exc) or type(exc).__name__
        if not job.is_terminal():
            job.fail(reason)
        logger.error("Upload job %s failed: %s", job.id, reason)

        if not job.failed_url:
            return
        try:
            await job.mark_failed(reason)
        except Exception as report_exc:
            logger.error("Could not report upload job %s as failed: %s", job.id, report_exc)


def _partition_files(files: Iterable[Any]) -> tuple[list[StagedFile], list[str]]:
    valid: list[StagedFile] = []
    skipped: list[str] = []
    for index, f in enumerate(files):
        size = file_size(f)
        if size is None or size <= 0:
            skipped.append(file_name(f) or f"#{index}")
        else:
            valid.append((f, file_content(f)))
    return valid, skipped


def _form_fields(
    path: Optional[str],
    relative_paths: Optional[Union[str, Sequence[str]]],
    preserve_structure: Optional[bool],
) -> dict[str, str]:
    fields: dict[str, str] = {}
    if path:
        fields["path"] = path
    if relative_paths:
        if isinstance(relative_paths, str):
            fields["relativePaths"] = relative_paths
        else:
            fields["relativePaths"] = json.dumps(list(relative_paths))
    if preserve_structure is not None:
        fields["preserveStructure"] = "true" if preserve_structure else "false"
    return fields


def _unwrap(response: Any) -> dict[str, Any]:
    if not isinstance(response, dict):
        raise ApiError("Invalid response from API")
    data = response.get("data") or response
    if not isinstance(data, dict):
        raise ApiError("Invalid response from API: expected upload descriptors")
    return data


def _match_files(
    jobs: list[UploadJob], files: list[StagedFile]
) -> list[tuple[UploadJob, Optional[StagedFile]]]:
    """Pair jobs with staged files by position, or by name when counts differ."""
    if len(jobs) == len(files):
        return list(zip(jobs, files))

    remaining = list(files)
    pairs: list[tuple[UploadJob, Optional[StagedFile]]] = []
    for job in jobs:
        index = next((i for i, (f, _) in enumerate(remaining) if file_name(f) == job.filename), None)
        pairs.append((job, remaining.pop(index) if index is not None else None))
    return pairs
