"""Upload jobs collection for one drive."""

from __future__ import annotations

from mosaia.models import UploadJob
from mosaia.transport import APIClient

from .base_collection import BaseCollection


class UploadJobs(BaseCollection[UploadJob]):
    """Upload jobs under ``{drive_uri}/upload``; normally reached via ``Drive.uploads``."""

    def __init__(self, uri: str = "", *, client: APIClient) -> None:
        super().__init__(f"{uri}{UploadJob.default_uri}", UploadJob, client=client)
