"""Drive item model (file or folder metadata)."""

from __future__ import annotations

from typing import Optional

from mosaia.errors import InvalidStateError
from mosaia.util.mime import is_folder

from .base import BaseModel


class DriveItem(BaseModel):
    default_uri = "/item"

    @property
    def name(self) -> Optional[str]:
        return self._data.get("name")

    @property
    def path(self) -> Optional[str]:
        return self._data.get("path")

    def is_folder(self) -> bool:
        return is_folder(self._data.get("item_type"))

    def download_url(self, expires_in: Optional[int] = None) -> str:
        """
        Return the download URL of this item.

        Args:
            expires_in: Optional lifetime in seconds of the signed download link.
        """
        if not self.has_id():
            raise InvalidStateError("Cannot get download URL for unsaved drive item")

        url = f"{self.client.current_config().base_url}{self.get_uri()}/download"
        if expires_in:
            url += f"?expires_in={int(expires_in)}"
        return url
