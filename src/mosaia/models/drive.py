"""Drive model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseModel

if TYPE_CHECKING:
    from mosaia.collections import DriveItems, UploadJobs


class Drive(BaseModel):
    """A drive; its items and uploads live under ``{uri}/{id}``."""

    default_uri = "/drive"

    @property
    def items(self) -> "DriveItems":
        from mosaia.collections import DriveItems

        return DriveItems(self.get_uri(), client=self.client)

    @property
    def uploads(self) -> "UploadJobs":
        from mosaia.collections import UploadJobs

        return UploadJobs(self.get_uri(), client=self.client)
