import unittest
import sys
import os
from unittest import mock

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from qpxt.sorting.sort_errors import (
    DEFAULT_INSERTION_THRESHOLD,
    INSERTION_THRESHOLD_ENV,
    InvalidRangeError,
    check_at_least,
    check_not_negative,
    check_valid_range,
    resolve_insertion_threshold,
)


class TestCheckValidRange(unittest.TestCase):

    def test_returns_end(self):
        self.assertEqual(check_valid_range(0, 3, 5), 3)
        self.assertEqual(check_valid_range(5, 5, 5), 5)

    def test_none_end_is_length(self):
        self.assertEqual(check_valid_range(2, None, 5), 5)

    def test_error_carries_context(self):
        with self.assertRaises(InvalidRangeError) as ctx:
            check_valid_range(1, 9, 5)
        err = ctx.exception
        self.assertEqual((err.start, err.end, err.length, err.name), (1, 9, 5, "end"))
        self.assertIn("Invalid range", str(err))

    def test_is_an_index_error(self):
        with self.assertRaises(IndexError):
            check_valid_range(-1, None, 5)


class TestScalarChecks(unittest.TestCase):

    def test_not_negative(self):
        self.assertEqual(check_not_negative(0, "count"), 0)
        with self.assertRaises(InvalidRangeError) as ctx:
            check_not_negative(-2, "count")
        self.assertEqual(ctx.exception.name, "count")

    def test_at_least(self):
        self.assertEqual(check_at_least(1, 1, "length"), 1)
        with self.assertRaises(InvalidRangeError):
            check_at_least(0, 1, "length")


class TestResolveInsertionThreshold(unittest.TestCase):

    def test_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(resolve_insertion_threshold(), DEFAULT_INSERTION_THRESHOLD)

    def test_explicit_wins_over_env(self):
        with mock.patch.dict(os.environ, {INSERTION_THRESHOLD_ENV: "64"}):
            self.assertEqual(resolve_insertion_threshold(8), 8)

    def test_env(self):
        with mock.patch.dict(os.environ, {INSERTION_THRESHOLD_ENV: "64"}):
            self.assertEqual(resolve_insertion_threshold(), 64)

    def test_bad_env_falls_back(self):
        for raw in ("abc", "0", "-5", ""):
            with self.subTest(raw=raw):
                with mock.patch.dict(os.environ, {INSERTION_THRESHOLD_ENV: raw}):
                    self.assertEqual(resolve_insertion_threshold(), DEFAULT_INSERTION_THRESHOLD)

    def test_bad_explicit_raises(self):
        with self.assertRaises(ValueError):
            resolve_insertion_threshold(0)


if __name__ == '__main__':
    unittest.main()
