"""Direct-to-storage uploads through presigned URLs."""

from __future__ import annotations

import inspect
from typing import Any, AsyncIterator, Callable, Optional

import httpx

from mosaia.errors import StorageUploadError
from mosaia.log import get_logger
from mosaia.util.mime import DEFAULT_MIME

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_UPLOAD_TIMEOUT = 300.0

ProgressCallback = Callable[[int], Any]

logger = get_logger("upload")


class PresignedUploader:
    """
    PUT file bytes to a presigned storage URL.

    The request carries no API credentials (the URL is the credential) and a
    fixed ``Content-Length``. Every PUT uses the uploader's own timeout,
    also on a shared client. The body is streamed in chunks so progress can
    be reported as an integer percentage.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: float = DEFAULT_UPLOAD_TIMEOUT,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._http_client = http_client
        self._chunk_size = chunk_size
        self._timeout = timeout

    async def upload(
        self,
        url: str,
        content: bytes,
        *,
        mime_type: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Upload ``content`` to ``url``.

        Raises:
            StorageUploadError: when storage answers with a non-2xx status.
            httpx.HTTPError: on network failures (including an expired URL
                rejected at connection level).
        """
        if self._http_client is not None:
            await self._put(self._http_client, url, content, mime_type, on_progress)
            return

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            await self._put(client, url, content, mime_type, on_progress)

    async def _put(
        self,
        client: httpx.AsyncClient,
        url: str,
        content: bytes,
        mime_type: Optional[str],
        on_progress: Optional[ProgressCallback],
    ) -> None:
        headers = {
            "Content-Type": mime_type or DEFAULT_MIME,
            "Content-Length": str(len(content)),
        }
        response = await client.put(
            url,
            content=self._stream(content, on_progress),
            headers=headers,
            timeout=httpx.Timeout(self._timeout),
        )
        if not response.is_success:
            raise StorageUploadError(
                f"Storage upload failed with HTTP {response.status_code}",
                status=response.status_code,
                details={"reason": response.reason_phrase, "body": response.text[:500]},
            )
        logger.debug("Uploaded %d bytes to storage", len(content))

    async def _stream(
        self,
        content: bytes,
        on_progress: Optional[ProgressCallback],
    ) -> AsyncIterator[bytes]:
        total = len(content)
        sent = 0
        for start in range(0, total, self._chunk_size):
            chunk = content[start : start + self._chunk_size]
            yield chunk
            sent += len(chunk)
            if on_progress is not None:
                await notify(on_progress, int(sent * 100 / total))


async def notify(callback: Callable[..., Any], *args: Any) -> None:
    """Call a sync or async callback."""
    result = callback(*args)
    if inspect.isawaitable(result):
        await result
