import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from qpxt.comparison import compare_by, inverse, natural_order, resolve_comparator, then
from qpxt.sorting.merge_sort import merge_sort


class TestComparison(unittest.TestCase):
    """Tests for comparator combinators."""

    def test_natural_order(self):
        self.assertLess(natural_order(1, 2), 0)
        self.assertGreater(natural_order("b", "a"), 0)
        self.assertEqual(natural_order((1, 2), (1, 2)), 0)

    def test_inverse(self):
        desc = inverse(natural_order)
        self.assertGreater(desc(1, 2), 0)
        self.assertEqual(desc(3, 3), 0)

    def test_resolve_comparator(self):
        self.assertIs(resolve_comparator(None), natural_order)
        desc = inverse(natural_order)
        self.assertIs(resolve_comparator(desc), desc)

    def test_compare_by(self):
        by_len = compare_by(natural_order, len)
        self.assertGreater(by_len("abc", "z"), 0)
        self.assertEqual(by_len("ab", "yz"), 0)

    def test_then_breaks_ties(self):
        by_len_then_alpha = then(compare_by(natural_order, len), natural_order)
        words = ["pear", "fig", "apple", "kiwi", "date"]
        self.assertEqual(
            merge_sort(words, compare=by_len_then_alpha),
            ["fig", "date", "kiwi", "pear", "apple"],
        )

    def test_then_only_called_on_ties(self):
        calls = []

        def tie_breaker(a, b):
            calls.append((a, b))
            return 0

        combined = then(natural_order, tie_breaker)
        combined(1, 2)
        self.assertEqual(calls, [])
        combined(2, 2)
        self.assertEqual(calls, [(2, 2)])


if __name__ == '__main__':
    unittest.main()
