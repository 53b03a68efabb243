"""Tests for batch delete/move semantics.

Every target is attempted; failures are reported together at the end.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from sea.errors import BatchOperationError
from sea.fileops import delete_paths, move_paths


class DeleteTests(unittest.TestCase):
    def test_deletes_files_directories_and_links_without_following(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "file.txt").write_text("x", encoding="utf-8")
            (root / "tree" / "nested").mkdir(parents=True)
            (root / "tree" / "nested" / "deep.txt").write_text("x", encoding="utf-8")
            (root / "target").mkdir()
            (root / "target" / "kept.txt").write_text("x", encoding="utf-8")
            os.symlink(root / "target", root / "link")

            deleted = delete_paths([root / "file.txt", root / "tree", root / "link"])

            self.assertEqual(len(deleted), 3)
            self.assertEqual(sorted(path.name for path in root.iterdir()), ["target"])
            self.assertTrue((root / "target" / "kept.txt").exists())

    def test_failures_are_collected_and_batch_continues(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a").write_text("x", encoding="utf-8")
            (root / "c").write_text("x", encoding="utf-8")

            with self.assertRaises(BatchOperationError) as ctx:
                delete_paths([root / "a", root / "missing", root / "c"])

            error = ctx.exception
            self.assertFalse((root / "a").exists())
            self.assertFalse((root / "c").exists())
            self.assertEqual([path.name for path, _ in error.failures], ["missing"])
            self.assertEqual(error.attempted, 3)
            self.assertEqual(error.operation, "delete")
            self.assertIn("1 of 3 failed", error.summary())
            self.assertIn("missing", error.summary())

    def test_nested_targets_are_deleted_before_their_parents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "tree" / "inner").mkdir(parents=True)
            (root / "tree" / "inner" / "leaf.txt").write_text("x", encoding="utf-8")

            deleted = delete_paths([root / "tree", root / "tree" / "inner"])

            self.assertEqual(deleted, [root / "tree" / "inner", root / "tree"])
            self.assertFalse((root / "tree").exists())


class MoveTests(unittest.TestCase):
    def test_moves_into_destination(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "src").mkdir()
            (root / "dst").mkdir()
            (root / "src" / "a.txt").write_text("a", encoding="utf-8")
            (root / "src" / "folder").mkdir()

            moved = move_paths([root / "src" / "a.txt", root / "src" / "folder"], root / "dst")

            self.assertEqual(moved, [root / "dst" / "a.txt", root / "dst" / "folder"])
            self.assertEqual((root / "dst" / "a.txt").read_text(encoding="utf-8"), "a")
            self.assertTrue((root / "dst" / "folder").is_dir())
            self.assertEqual(list((root / "src").iterdir()), [])

    def test_same_directory_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("a", encoding="utf-8")

            self.assertEqual(move_paths([root / "a.txt"], root), [])
            self.assertTrue((root / "a.txt").exists())

    def test_existing_target_and_missing_source_fail_without_overwrite(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "src").mkdir()
            (root / "dst").mkdir()
            (root / "src" / "a.txt").write_text("new", encoding="utf-8")
            (root / "src" / "b.txt").write_text("b", encoding="utf-8")
            (root / "dst" / "a.txt").write_text("old", encoding="utf-8")

            with self.assertRaises(BatchOperationError) as ctx:
                move_paths(
                    [root / "src" / "a.txt", root / "src" / "gone", root / "src" / "b.txt"],
                    root / "dst",
                )

            failures = ctx.exception.failures
            self.assertEqual([path.name for path, _ in failures], ["a.txt", "gone"])
            self.assertIsInstance(failures[0][1], FileExistsError)
            self.assertIsInstance(failures[1][1], FileNotFoundError)
            self.assertEqual((root / "dst" / "a.txt").read_text(encoding="utf-8"), "old")
            self.assertTrue((root / "dst" / "b.txt").exists())
