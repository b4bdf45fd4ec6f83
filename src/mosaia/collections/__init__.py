"""Resource collections for mosaia."""

from __future__ import annotations

from .base_collection import BaseCollection
from .drive_items import DriveItems
from .drives import Drives
from .upload_jobs import UploadJobs

__all__ = [
    "BaseCollection",
    "Drives",
    "DriveItems",
    "UploadJobs",
]
