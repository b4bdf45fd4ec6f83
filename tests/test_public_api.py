import unittest

import mosaia


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(mosaia, "Mosaia"))
        self.assertTrue(hasattr(mosaia, "MosaiaAuth"))
        self.assertTrue(hasattr(mosaia, "MosaiaConfig"))

        self.assertTrue(hasattr(mosaia, "Drives"))
        self.assertTrue(hasattr(mosaia, "DriveItems"))
        self.assertTrue(hasattr(mosaia, "UploadJobs"))
        self.assertTrue(hasattr(mosaia, "UploadFile"))
        self.assertTrue(hasattr(mosaia, "UploadResult"))

        self.assertTrue(hasattr(mosaia, "MosaiaError"))
        self.assertTrue(hasattr(mosaia, "InvalidStateError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(mosaia, "__all__"))
        self.assertIn("Mosaia", mosaia.__all__)
        self.assertIn("MosaiaError", mosaia.__all__)
        for name in mosaia.__all__:
            self.assertTrue(hasattr(mosaia, name), name)


if __name__ == "__main__":
    unittest.main()
