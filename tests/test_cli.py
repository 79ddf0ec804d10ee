"""CLI argument handling and query output tests.

Verifies how ``foldscroll.cli.main`` builds layouts from files or
``--lines`` and which output each query option prints.
"""

from __future__ import annotations

import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from foldscroll import cli


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        patcher = mock.patch("foldscroll.config.CONFIG_PATH", self.root / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def run_cli(self, *argv: str) -> str:
        stdout = io.StringIO()
        with mock.patch.object(sys, "argv", ["foldscroll", *argv]), mock.patch("sys.stdout", stdout):
            cli.main()
        return stdout.getvalue()


class CliQueryTests(CliTestCase):
    def test_count_with_last_line_sentinel(self) -> None:
        self.assertEqual(self.run_cli("--lines", "10", "--fold", "4-6", "--count", "1", "$"), "8\n")

    def test_count_with_explicit_range(self) -> None:
        self.assertEqual(self.run_cli("--lines", "10", "--fold", "4-6", "--count", "2", "5"), "3\n")

    def test_locate_snaps_to_fold_start(self) -> None:
        self.assertEqual(self.run_cli("--lines", "10", "--fold", "4-6", "--locate", "0.5"), "4\n")

    def test_open_fold_is_not_collapsed(self) -> None:
        self.assertEqual(self.run_cli("--lines", "10", "--fold", "4-6:open", "--count", "1", "$"), "10\n")

    def test_spans_listing(self) -> None:
        self.assertEqual(
            self.run_cli("--lines", "10", "--fold", "4-6", "--spans"),
            "1-3 text 3\n4-6 folded 1\n7-10 text 4\n",
        )

    def test_counts_lines_of_file(self) -> None:
        target = self.root / "notes.txt"
        target.write_text("".join(f"line {idx}\n" for idx in range(1, 13)), encoding="utf-8")
        self.assertEqual(self.run_cli(str(target), "--fold", "2-11", "--count", "1", "$"), "3\n")

    def test_memoize_config_does_not_change_answers(self) -> None:
        (self.root / "config.json").write_text('{"memoize": true}\n', encoding="utf-8")
        self.assertEqual(self.run_cli("--lines", "10", "--fold", "4-6", "--locate", "1.0"), "10\n")


class CliPreviewTests(CliTestCase):
    def test_preview_collapses_closed_folds(self) -> None:
        target = self.root / "sample.txt"
        target.write_text("a\nb\nc\nd\ne\nf\n", encoding="utf-8")
        output = self.run_cli(str(target), "--fold", "2-4", "--no-color")
        self.assertEqual(output, "1 a\n2 +--  3 lines: b\n5 e\n6 f\n")

    def test_form_feed_does_not_split_a_line(self) -> None:
        target = self.root / "page.c"
        target.write_text("int a;\n\x0c\nint b;\n", encoding="utf-8")
        self.assertEqual(self.run_cli(str(target), "--no-color"), "1 int a;\n2 \\x0c\n3 int b;\n")
        self.assertEqual(self.run_cli(str(target), "--fold", "2-3", "--count", "1", "$"), "2\n")

    def test_colored_preview_keeps_one_row_per_visual_line(self) -> None:
        target = self.root / "sample.py"
        target.write_text("def f():\n    x = 1\n    return x\n\nprint(f())\n", encoding="utf-8")
        output = self.run_cli(str(target), "--fold", "1-3")
        rows = output.splitlines()
        self.assertEqual(len(rows), 3)
        self.assertIn("+--  3 lines: def f():", rows[0])
        self.assertTrue(rows[2].startswith("5 "))


class CliErrorTests(CliTestCase):
    def test_missing_path_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            self.run_cli(str(self.root / "missing.txt"), "--count", "1", "$")
        self.assertIn("Path not found", str(exc_info.exception))

    def test_rejects_path_combined_with_lines(self) -> None:
        target = self.root / "a.txt"
        target.write_text("x\n", encoding="utf-8")
        with self.assertRaises(SystemExit) as exc_info:
            self.run_cli(str(target), "--lines", "4", "--spans")
        self.assertEqual(str(exc_info.exception), "Cannot combine positional path with --lines.")

    def test_requires_path_or_lines(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            self.run_cli("--spans")
        self.assertEqual(str(exc_info.exception), "Either PATH or --lines is required.")

    def test_preview_requires_path(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            self.run_cli("--lines", "4")
        self.assertIn("Preview needs a PATH", str(exc_info.exception))

    def test_overlapping_folds_are_rejected(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            self.run_cli("--lines", "10", "--fold", "2-5", "--fold", "4-8", "--spans")
        self.assertIn("overlap", str(exc_info.exception))

    def test_malformed_fold_spec_is_argparse_error(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as exc_info:
                self.run_cli("--lines", "10", "--fold", "four-six", "--spans")
        self.assertEqual(exc_info.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
