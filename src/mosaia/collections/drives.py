"""Drives collection."""

from __future__ import annotations

from mosaia.models import Drive
from mosaia.transport import APIClient

from .base_collection import BaseCollection


class Drives(BaseCollection[Drive]):
    """
    Drives visible to the authenticated principal.

    Example:
        drives = await client.drives.get()
        drive = await client.drives.get(id="drive-123")
        items = await drive.items.get()
    """

    def __init__(self, uri: str = "", *, client: APIClient) -> None:
        super().__init__(f"{uri}{Drive.default_uri}", Drive, client=client)
