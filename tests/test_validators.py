import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from qpxt.comparison import natural_order
from qpxt.sorting.merge_sort import sort_by
from qpxt.validators import first_order_violation, is_permutation, is_stable, validate_sort


def first(record):
    return record[0]


class TestValidators(unittest.TestCase):
    """Tests for sort result validation."""

    DATA = [(3, "a"), (1, "b"), (3, "c"), (2, "d")]

    def test_valid_sort(self):
        result = sort_by(self.DATA, first)
        self.assertEqual(validate_sort(self.DATA, result, first, natural_order), (True, "OK"))

    def test_not_a_permutation(self):
        ok, reason = validate_sort(self.DATA, [(1, "b"), (2, "d"), (3, "a")], first, natural_order)
        self.assertFalse(ok)
        self.assertEqual(reason, "Not a permutation of the input")

    def test_out_of_order(self):
        result = [(1, "b"), (3, "a"), (2, "d"), (3, "c")]
        ok, reason = validate_sort(self.DATA, result, first, natural_order)
        self.assertFalse(ok)
        self.assertEqual(reason, "Out of order at index 1")

    def test_unstable(self):
        result = [(1, "b"), (2, "d"), (3, "c"), (3, "a")]
        ok, reason = validate_sort(self.DATA, result, first, natural_order)
        self.assertFalse(ok)
        self.assertEqual(reason, "Equal keys reordered")

    def test_first_order_violation(self):
        self.assertIsNone(first_order_violation([1, 2, 2, 3], lambda x: x, natural_order))
        self.assertEqual(first_order_violation([1, 3, 2], lambda x: x, natural_order), 1)

    def test_is_permutation_unhashable(self):
        self.assertTrue(is_permutation([[1], [2], [1]], [[1], [1], [2]]))
        self.assertFalse(is_permutation([[1], [2]], [[1], [1]]))

    def test_is_stable(self):
        self.assertTrue(is_stable(self.DATA, sort_by(self.DATA, first), first, natural_order))


if __name__ == '__main__':
    unittest.main()
