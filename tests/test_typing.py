import unittest
import sys
import os
import re
import tempfile
import textwrap
from unittest import mock

from mypy import api as mypy_api

# Add project root to path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.append(PROJECT_ROOT)

# Line numbers below are 1-based lines of this snippet.
SNIPPET = textwrap.dedent('''\
    from qpxt.collection import is_sorted, is_sorted_by, max_by, min_by, sort
    from qpxt.comparison import natural_order
    from qpxt.sorting.merge_sort import merge_sort, sort_by


    class NoOrder:
        pass


    def ident(x: int) -> int:
        return x


    def no_order(x: int) -> NoOrder:
        return NoOrder()


    def tie(a: NoOrder, b: NoOrder) -> int:
        return 0


    ok_1 = sort_by([1, 2], ident)
    ok_2 = sort_by([1, 2], no_order, tie)
    ok_3 = sort_by([1, 2], ident, natural_order)
    ok_4 = merge_sort([3, 1])
    ok_5 = merge_sort([1, 2], key=no_order, compare=tie)
    ok_6 = sort([NoOrder()], tie)
    ok_7 = is_sorted_by([1, 2], no_order, tie)
    ok_8 = min_by([1, 2], ident)
    bad_1 = sort_by([1, 2], no_order)
    bad_2 = merge_sort([NoOrder()])
    bad_3 = sort([NoOrder()])
    bad_4 = is_sorted([NoOrder()])
    bad_5 = max_by([1, 2], no_order)
''')

EXPECTED_ERROR_LINES = {30, 31, 32, 33, 34}
SNIPPET_LINE = re.compile(r"typed_calls\.py:(\d+): error:")


class TestNaturalOrderTyping(unittest.TestCase):
    """Calls without a comparator only type-check for keys that support '<'."""

    def run_mypy(self, source):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "typed_calls.py")
            with open(path, "w") as f:
                f.write(source)
            with mock.patch.dict(os.environ, {"MYPYPATH": PROJECT_ROOT}):
                stdout, stderr, _ = mypy_api.run([
                    "--no-incremental",
                    "--cache-dir", os.path.join(tmp, ".mypy_cache"),
                    "--hide-error-context",
                    "--no-error-summary",
                    path,
                ])
        return stdout, stderr

    def test_only_unordered_keys_without_comparator_are_rejected(self):
        stdout, stderr = self.run_mypy(SNIPPET)
        errors = [line for line in stdout.splitlines() if ": error:" in line]

        # No errors may come from the package itself.
        foreign = [line for line in errors if not SNIPPET_LINE.search(line)]
        self.assertEqual(foreign, [], stdout + stderr)

        lines = {int(SNIPPET_LINE.search(line).group(1)) for line in errors}
        self.assertEqual(lines, EXPECTED_ERROR_LINES, stdout + stderr)


if __name__ == '__main__':
    unittest.main()
