import unittest

from mosaia.transport.query import build_query_params


class TestBuildQueryParams(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertEqual(build_query_params(None), [])
        self.assertEqual(build_query_params({}), [])

    def test_none_values_are_omitted(self) -> None:
        self.assertEqual(build_query_params({"a": None, "b": 1}), [("b", "1")])

    def test_booleans_and_sequences(self) -> None:
        pairs = build_query_params({"flag": True, "off": False, "ids": ["x", None, "y"]})
        self.assertEqual(pairs, [("flag", "true"), ("off", "false"), ("ids", "x,,y")])

    def test_sequence_is_one_comma_joined_value(self) -> None:
        self.assertEqual(build_query_params({"tags": ("a", True, 3)}), [("tags", "a,true,3")])
        self.assertEqual(build_query_params({"tags": []}), [("tags", "")])


if __name__ == "__main__":
    unittest.main()
