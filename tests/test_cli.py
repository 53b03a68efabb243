"""Tests for CLI argument handling and exit effects."""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sea import cli
from sea.errors import DirectoryReadError
from sea.runtime import SessionResult
from sea.ui_theme import OCEAN_THEME, PLAIN_THEME


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        (self.root / "pics").mkdir()
        (self.root / "notes.txt").write_text("x", encoding="utf-8")

        for name, value in (
            ("load_show_hidden", False),
            ("load_hidden_prefix", "."),
            ("load_theme_name", None),
        ):
            patcher = mock.patch(f"sea.cli.{name}", return_value=value)
            patcher.start()
            self.addCleanup(patcher.stop)
        env_patcher = mock.patch.dict(os.environ, {}, clear=False)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)
        os.environ.pop("SEA_LAST_DIR_FILE", None)

    def _result(self, *paths: Path) -> SessionResult:
        return SessionResult(final_dir=self.root / "pics", selected_paths=list(paths))

    def test_picker_prints_selected_paths(self) -> None:
        result = self._result(self.root / "pics" / "cat.png", self.root / "notes.txt")
        with mock.patch("sea.cli.run_session", return_value=result), mock.patch(
            "sys.stdout", new_callable=io.StringIO
        ) as stdout:
            cli.main([str(self.root), "--picker"])

        self.assertEqual(
            stdout.getvalue(),
            f"{self.root}/pics/cat.png\n{self.root}/notes.txt\n",
        )

    def test_without_picker_nothing_is_printed(self) -> None:
        result = self._result(self.root / "notes.txt")
        with mock.patch("sea.cli.run_session", return_value=result), mock.patch(
            "sys.stdout", new_callable=io.StringIO
        ) as stdout:
            cli.main([str(self.root)])

        self.assertEqual(stdout.getvalue(), "")

    def test_last_dir_marker_receives_final_directory(self) -> None:
        marker = self.root / "lastdir"
        os.environ["SEA_LAST_DIR_FILE"] = str(marker)
        with mock.patch("sea.cli.run_session", return_value=self._result()):
            cli.main([str(self.root)])

        self.assertEqual(marker.read_text(encoding="utf-8"), str(self.root / "pics"))

    def test_options_follow_flags_over_saved_preferences(self) -> None:
        with mock.patch("sea.cli.run_session", return_value=self._result()) as run_mock:
            cli.main([str(self.root), "--show-hidden", "--theme", "ocean"])

        options = run_mock.call_args.args[0]
        self.assertEqual(options.start_dir, self.root)
        self.assertTrue(options.show_hidden)
        self.assertEqual(options.hidden_prefix, ".")
        self.assertIs(options.theme, OCEAN_THEME)
        self.assertIs(options.on_show_hidden_changed, cli.save_show_hidden)

        with mock.patch("sea.cli.run_session", return_value=self._result()) as run_mock:
            cli.main([str(self.root), "--no-color"])

        options = run_mock.call_args.args[0]
        self.assertFalse(options.show_hidden)
        self.assertIs(options.theme, PLAIN_THEME)

    def test_relative_start_path_is_made_absolute(self) -> None:
        with mock.patch("sea.cli.run_session", return_value=self._result()) as run_mock:
            original = os.getcwd()
            os.chdir(self.root)
            try:
                cli.main(["pics"])
            finally:
                os.chdir(original)

        self.assertEqual(run_mock.call_args.args[0].start_dir, self.root / "pics")

    def test_missing_or_non_directory_path_exits(self) -> None:
        with mock.patch("sea.cli.run_session") as run_mock:
            with self.assertRaises(SystemExit) as missing:
                cli.main([str(self.root / "nope")])
            with self.assertRaises(SystemExit) as not_dir:
                cli.main([str(self.root / "notes.txt")])

        run_mock.assert_not_called()
        self.assertIn("Path not found", str(missing.exception.code))
        self.assertIn("Not a directory", str(not_dir.exception.code))

    def test_fatal_session_error_exits_with_message(self) -> None:
        error = DirectoryReadError(self.root, PermissionError(13, "Permission denied"))
        with mock.patch("sea.cli.run_session", side_effect=error):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.root)])

        self.assertEqual(str(ctx.exception.code), f"sea: cannot read {self.root}: Permission denied")
