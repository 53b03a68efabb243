"""Tests for frame rendering against an in-memory listing."""

from __future__ import annotations

import os
import unittest
from pathlib import Path

from sea.ansi import ANSI_ESCAPE_RE
from sea.model import EntryKind, EntryStore
from sea.navigator import Navigator, NavigatorState
from sea.render import list_rows_for_terminal, render_frame, render_header, render_status
from sea.ui_theme import DEFAULT_THEME, PLAIN_THEME

D = EntryKind.DIRECTORY
F = EntryKind.FILE
L = EntryKind.SYMLINK

LISTINGS: dict[Path, list[tuple[str, EntryKind]]] = {
    Path("/srv"): [("docs", D), ("a.txt", F), ("b.txt", F), ("latest", L), ("c.txt", F)],
    Path("/srv/docs"): [],
}


def fake_lister(store: EntryStore, directory: Path, show_hidden: bool, hidden_prefix: str) -> int:
    for name, kind in LISTINGS[directory]:
        store.append(os.fsencode(name), kind)
    return len(LISTINGS[directory])


def make_navigator(height: int = 10) -> Navigator:
    navigator = Navigator(NavigatorState(cwd=Path("/srv")), height, lister=fake_lister)
    navigator.load()
    return navigator


def plain_rows(frame: str) -> list[str]:
    """Split a frame on its cursor-position sequences and strip styling."""
    pieces = frame.split("\033[")
    rows: list[str] = []
    for piece in pieces[1:]:
        head, _, rest = piece.partition("H")
        if head.replace(";", "").isdigit() and head.endswith(";1"):
            rows.append(ANSI_ESCAPE_RE.sub("", rest).rstrip())
        elif rows:
            rows[-1] += ANSI_ESCAPE_RE.sub("", "\033[" + piece).rstrip()
    return rows


class RenderTests(unittest.TestCase):
    def test_list_rows_leave_room_for_header_and_status(self) -> None:
        self.assertEqual(list_rows_for_terminal(24), 22)
        self.assertEqual(list_rows_for_terminal(2), 1)
        self.assertEqual(list_rows_for_terminal(0), 1)

    def test_frame_lists_entries_with_kind_suffixes(self) -> None:
        navigator = make_navigator()
        frame = render_frame(navigator, 40, 12, PLAIN_THEME)
        rows = plain_rows(frame)

        self.assertEqual(rows[0], "/srv")
        self.assertEqual(rows[1:6], ["  docs/", "  a.txt", "  b.txt", "  latest@", "  c.txt"])
        self.assertEqual(rows[-1], "1/5")

    def test_cursor_row_uses_cursor_style(self) -> None:
        navigator = make_navigator()
        navigator.handle_key("j")
        frame = render_frame(navigator, 30, 12, DEFAULT_THEME)

        self.assertIn(DEFAULT_THEME.cursor_row + "  a.txt", frame)
        self.assertNotIn(DEFAULT_THEME.cursor_row + "  docs/", frame)

    def test_selected_rows_carry_marker_and_header_count(self) -> None:
        navigator = make_navigator()
        navigator.handle_key("j")
        navigator.handle_key(" ")
        navigator.handle_key("j")
        rows = plain_rows(render_frame(navigator, 40, 12, PLAIN_THEME))

        self.assertIn("* a.txt", rows)
        self.assertEqual(rows[0], "/srv [1 selected]")

    def test_header_reports_selection_elsewhere(self) -> None:
        navigator = make_navigator()
        navigator.handle_key("j")
        navigator.handle_key(" ")
        navigator.handle_key("G")
        navigator.handle_key("g")
        navigator.handle_key("l")
        self.assertEqual(navigator.state.cwd, Path("/srv/docs"))

        header = ANSI_ESCAPE_RE.sub("", render_header(navigator, 40, PLAIN_THEME)).rstrip()
        self.assertEqual(header, "/srv/docs [1 elsewhere]")
        self.assertIn("(empty)", render_frame(navigator, 40, 12, PLAIN_THEME))
        self.assertEqual(ANSI_ESCAPE_RE.sub("", render_status(navigator, 20, PLAIN_THEME)).rstrip(), "0/0")

    def test_only_window_rows_are_drawn(self) -> None:
        navigator = make_navigator(height=2)
        navigator.handle_key("G")
        rows = plain_rows(render_frame(navigator, 40, 4, PLAIN_THEME))

        self.assertEqual(rows, ["/srv", "  latest@", "  c.txt", "5/5"])

    def test_search_status_shows_query_and_match_count(self) -> None:
        navigator = make_navigator()
        for key in ("/", "t", "x", "t"):
            navigator.handle_key(key)

        status = ANSI_ESCAPE_RE.sub("", render_status(navigator, 40, PLAIN_THEME)).rstrip()
        self.assertEqual(status, "/txt_  3 matches")
        rows = plain_rows(render_frame(navigator, 40, 12, PLAIN_THEME))
        self.assertEqual(rows[1:4], ["  a.txt", "  b.txt", "  c.txt"])

        navigator.handle_key("q")
        navigator.handle_key("BACKSPACE")
        navigator.handle_key("BACKSPACE")
        navigator.handle_key("BACKSPACE")
        navigator.handle_key("BACKSPACE")
        navigator.handle_key("z")
        self.assertIn("(no matches)", render_frame(navigator, 40, 12, PLAIN_THEME))

    def test_status_message_replaces_position(self) -> None:
        navigator = make_navigator()
        navigator.state.status_message = "nothing to paste"
        status = ANSI_ESCAPE_RE.sub("", render_status(navigator, 40, PLAIN_THEME)).rstrip()
        self.assertEqual(status, "nothing to paste")

    def test_control_characters_in_names_are_neutralized(self) -> None:
        def lister(store: EntryStore, directory: Path, show_hidden: bool, hidden_prefix: str) -> int:
            store.append(b"evil\x1b[2Jname", F)
            return 1

        navigator = Navigator(NavigatorState(cwd=Path("/x")), 5, lister=lister)
        navigator.load()
        frame = render_frame(navigator, 40, 8, PLAIN_THEME)
        self.assertIn("evil?[2Jname", frame)
        self.assertNotIn("\x1b[2J", frame)
