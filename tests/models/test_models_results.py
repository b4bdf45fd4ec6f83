import os
import tempfile
import unittest

from mosaia.models import BatchResponse, Drive, UploadFile, UploadJob, UploadResult
from mosaia.models.upload_file import file_content, file_size


def _job(job_id: str) -> UploadJob:
    return UploadJob.from_descriptor({"upload_job_id": job_id, "name": f"{job_id}.txt"})


class TestBatchResponse(unittest.TestCase):
    def test_len_and_iter(self) -> None:
        batch = BatchResponse(data=[Drive({"id": "a"}), Drive({"id": "b"})], paging={"total": 2})
        self.assertEqual(len(batch), 2)
        self.assertEqual([d.id for d in batch], ["a", "b"])
        self.assertEqual(batch.paging, {"total": 2})


class TestUploadResult(unittest.TestCase):
    def test_completed_failed_and_summary(self) -> None:
        done = _job("a")
        done.mark_uploading()
        done.mark_completed()
        failed = _job("b")
        failed.fail("boom")
        pending = _job("c")

        result = UploadResult(
            message="ok",
            upload_jobs=[done, failed, pending],
            skipped=["empty.txt"],
            errors={"b": "boom"},
        )

        self.assertEqual(result.completed, [done])
        self.assertEqual(result.failed, [failed])
        self.assertEqual(
            result.summary,
            {"pending": 1, "uploading": 0, "completed": 1, "failed": 1, "skipped": 1},
        )


class TestUploadFile(unittest.TestCase):
    def test_defaults(self) -> None:
        f = UploadFile("notes.txt", b"hello")
        self.assertEqual(f.size, 5)
        self.assertEqual(f.mime_type, "text/plain")

    def test_explicit_size_is_kept(self) -> None:
        self.assertEqual(UploadFile("x.bin", b"", size=0).size, 0)

    def test_from_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = os.path.join(tmp, "data.json")
            with open(p, "wb") as fh:
                fh.write(b"{}")

            f = UploadFile.from_path(p)

        self.assertEqual(f.name, "data.json")
        self.assertEqual(f.content, b"{}")
        self.assertEqual(f.mime_type, "application/json")

    def test_file_size_rejects_non_numeric(self) -> None:
        class Odd:
            name = "odd"
            size = "12"

        self.assertIsNone(file_size(Odd()))
        self.assertEqual(file_size(UploadFile("a", b"abc")), 3)

    def test_file_content_accepts_str_and_readers(self) -> None:
        class Reader:
            name = "r.txt"

            def read(self):
                return b"from reader"

        self.assertEqual(file_content(UploadFile("a", b"x")), b"x")
        self.assertEqual(file_content(Reader()), b"from reader")


if __name__ == "__main__":
    unittest.main()
