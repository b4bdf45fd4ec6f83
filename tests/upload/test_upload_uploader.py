import unittest

import httpx

from mosaia.errors import StorageUploadError
from mosaia.upload import PresignedUploader


class FakeStorage:
    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text="" if self.status < 400 else "AccessDenied")


class TestPresignedUploader(unittest.IsolatedAsyncioTestCase):
    async def test_upload_streams_content(self) -> None:
        storage = FakeStorage()
        uploader = PresignedUploader(
            httpx.AsyncClient(transport=httpx.MockTransport(storage)),
            chunk_size=3,
        )
        progress = []

        await uploader.upload(
            "https://storage.test/put/1?sig=abc",
            b"abcdefg",
            mime_type="text/plain",
            on_progress=progress.append,
        )

        request = storage.requests[0]
        self.assertEqual(request.method, "PUT")
        self.assertEqual(request.url.params["sig"], "abc")
        self.assertEqual(request.headers["Content-Length"], "7")
        self.assertEqual(request.headers["Content-Type"], "text/plain")
        self.assertNotIn("Transfer-Encoding", request.headers)
        self.assertEqual(request.content, b"abcdefg")
        self.assertEqual(progress, [42, 85, 100])

    async def test_default_content_type(self) -> None:
        storage = FakeStorage()
        uploader = PresignedUploader(httpx.AsyncClient(transport=httpx.MockTransport(storage)))
        await uploader.upload("https://storage.test/put/1", b"x")
        self.assertEqual(storage.requests[0].headers["Content-Type"], "application/octet-stream")

    async def test_upload_timeout_overrides_shared_client_timeout(self) -> None:
        storage = FakeStorage()
        shared = httpx.AsyncClient(transport=httpx.MockTransport(storage), timeout=30.0)
        uploader = PresignedUploader(shared, timeout=300.0)

        await uploader.upload("https://storage.test/put/1", b"x")

        timeout = storage.requests[0].extensions["timeout"]
        self.assertEqual(timeout["read"], 300.0)
        self.assertEqual(timeout["write"], 300.0)

    async def test_non_2xx_raises(self) -> None:
        storage = FakeStorage(status=403)
        uploader = PresignedUploader(httpx.AsyncClient(transport=httpx.MockTransport(storage)))

        with self.assertRaises(StorageUploadError) as ctx:
            await uploader.upload("https://storage.test/put/1", b"x")

        self.assertEqual(ctx.exception.status, 403)
        self.assertEqual(ctx.exception.details["body"], "AccessDenied")

    def test_chunk_size_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            PresignedUploader(chunk_size=0)


if __name__ == "__main__":
    unittest.main()
