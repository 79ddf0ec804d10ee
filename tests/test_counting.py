"""Tests for visual-line counting across closed folds."""

from __future__ import annotations

import unittest

from foldscroll.counting import count_virtual_lines
from foldscroll.host import FoldHost
from foldscroll.layout import FoldLayout, FoldRegion
from foldscroll.types import LAST


def _count(layout: FoldLayout, start: int, end: int | str) -> int:
    host = FoldHost(
        closed_fold_at=lambda view, line: layout.closed_fold_at(line),
        next_fold_start=lambda view, line: layout.next_fold_start(line),
        total_lines=lambda view: layout.total_lines,
    )
    return count_virtual_lines(host, None, start, end)


class CountVirtualLinesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.layout = FoldLayout(10, [FoldRegion(4, 6)])

    def test_closed_fold_counts_as_one_line(self) -> None:
        self.assertEqual(_count(self.layout, 1, 10), 8)
        self.assertEqual(_count(self.layout, 1, LAST), 8)

    def test_range_ending_inside_fold(self) -> None:
        self.assertEqual(_count(self.layout, 2, 5), 3)

    def test_range_starting_inside_fold(self) -> None:
        self.assertEqual(_count(self.layout, 5, 10), 5)
        self.assertEqual(_count(self.layout, 5, 5), 1)

    def test_end_before_start_is_empty(self) -> None:
        self.assertEqual(_count(self.layout, 5, 3), 0)

    def test_out_of_range_bounds_are_clamped(self) -> None:
        self.assertEqual(_count(self.layout, -4, 100), 8)
        self.assertEqual(_count(self.layout, 0, 3), 3)
        self.assertEqual(_count(self.layout, 11, 20), 0)

    def test_invalid_end_string_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            _count(self.layout, 1, "end")

    def test_no_folds_counts_every_line(self) -> None:
        layout = FoldLayout(37)
        self.assertEqual(_count(layout, 1, LAST), 37)
        self.assertEqual(_count(layout, 10, 20), 11)

    def test_additive_across_fold_boundary(self) -> None:
        layout = FoldLayout(20, [FoldRegion(5, 10)])
        self.assertEqual(
            _count(layout, 1, 20),
            _count(layout, 1, 4) + 1 + _count(layout, 11, 20),
        )
        self.assertEqual(_count(layout, 1, 20), 15)

    def test_count_is_monotonic_in_end_line(self) -> None:
        layout = FoldLayout(30, [FoldRegion(3, 8), FoldRegion(12, 12), FoldRegion(20, 29, closed=False), FoldRegion(22, 25)])
        counts = [_count(layout, 1, end) for end in range(1, 31)]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(counts[-1], 2 + 1 + 3 + 1 + 9 + 1 + 5)

    def test_fully_folded_buffer_is_one_visual_line(self) -> None:
        self.assertEqual(_count(FoldLayout(12, [FoldRegion(1, 12)]), 1, LAST), 1)

    def test_nested_open_and_closed_folds(self) -> None:
        layout = FoldLayout(20, [FoldRegion(2, 15, closed=False), FoldRegion(4, 6), FoldRegion(10, 12)])
        self.assertEqual(_count(layout, 1, LAST), 16)
        closed_outer = FoldLayout(20, [FoldRegion(2, 15), FoldRegion(4, 6)])
        self.assertEqual(_count(closed_outer, 1, LAST), 7)


if __name__ == "__main__":
    unittest.main()
