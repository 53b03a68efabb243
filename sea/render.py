"""Frame rendering for the browser screen.

Reads the navigator's listing, selection and scroll window and produces one
ANSI string per frame. Rows are positioned with absolute cursor moves because
output post-processing is disabled in raw mode.
"""

from __future__ import annotations

import os

from .ansi import CLEAR_TO_EOL, pad_to_width, printable_name
from .model import EntryKind
from .navigator import Mode, Navigator
from .ui_theme import DEFAULT_THEME, UITheme

HEADER_ROWS = 1
STATUS_ROWS = 1

_KIND_SUFFIX = {
    EntryKind.DIRECTORY: "/",
    EntryKind.FILE: "",
    EntryKind.SYMLINK: "@",
}


def list_rows_for_terminal(term_lines: int) -> int:
    """Number of entry rows that fit between the header and status rows."""
    return max(1, term_lines - HEADER_ROWS - STATUS_ROWS)


def _move_to(row: int) -> str:
    return f"\033[{row};1H"


def _kind_style(kind: EntryKind, theme: UITheme) -> str:
    if kind is EntryKind.DIRECTORY:
        return theme.entry_dir
    if kind is EntryKind.SYMLINK:
        return theme.entry_symlink
    return theme.entry_file


def render_header(navigator: Navigator, columns: int, theme: UITheme) -> str:
    state = navigator.state
    parts = [f"{theme.header}{printable_name(str(state.cwd))}{theme.reset}"]
    counts: list[str] = []
    if navigator.selection.count:
        counts.append(f"{navigator.selection.count} selected")
    elsewhere = navigator.history.selected_count()
    if elsewhere:
        counts.append(f"{elsewhere} elsewhere")
    if state.pending_moves:
        counts.append(f"{len(state.pending_moves)} to move")
    if state.show_hidden:
        counts.append("hidden shown")
    if counts:
        parts.append(f"{theme.header_count}[{', '.join(counts)}]{theme.reset}")
    return pad_to_width(" ".join(parts), columns)


def render_entry_row(navigator: Navigator, position: int, columns: int, theme: UITheme) -> str:
    """Render the row at ``position`` of the current (possibly filtered) view."""
    store = navigator.store
    index = navigator.view_index(position)
    kind = store.kind_at(index)
    name = printable_name(os.fsdecode(store.name_at(index))) + _KIND_SUFFIX[kind]
    selected = navigator.selection.is_selected(index)
    marker = "*" if selected else " "
    if position == navigator.view_cursor():
        text = pad_to_width(f"{marker} {name}", columns)
        return f"{theme.cursor_row}{text}{theme.reset}"
    if selected:
        body = f"{theme.selected_marker}{marker}{theme.reset} {theme.selected_row}{name}{theme.reset}"
    else:
        body = f"{marker} {_kind_style(kind, theme)}{name}{theme.reset}"
    return pad_to_width(body, columns)


def render_status(navigator: Navigator, columns: int, theme: UITheme) -> str:
    state = navigator.state
    if state.mode is Mode.SEARCHING:
        caret = "_" if state.search_editing else ""
        matches = len(state.search_indices)
        noun = "match" if matches == 1 else "matches"
        text = (
            f"{theme.search_prompt}/{theme.reset}{theme.search_query}{state.search_query}{caret}{theme.reset}"
            f"  {theme.status}{matches} {noun}{theme.reset}"
        )
        return pad_to_width(text, columns)
    if state.status_message:
        return pad_to_width(f"{theme.status}{state.status_message}{theme.reset}", columns)
    total = navigator.store.total_entries()
    position = f"{navigator.view_cursor() + 1}/{total}" if total else "0/0"
    return pad_to_width(f"{theme.status}{position}{theme.reset}", columns)


def render_frame(navigator: Navigator, columns: int, term_lines: int, theme: UITheme | None = None) -> str:
    """Build the full screen for the current navigator state."""
    theme = theme or DEFAULT_THEME
    columns = max(1, columns)
    list_rows = list_rows_for_terminal(term_lines)
    out: list[str] = [_move_to(1), render_header(navigator, columns, theme), CLEAR_TO_EOL]

    visible = navigator.window.visible_range(navigator.view_total())
    row = HEADER_ROWS + 1
    if not visible:
        hint = "(no matches)" if navigator.state.mode is Mode.SEARCHING else "(empty)"
        out.extend([_move_to(row), f"{theme.empty_hint}{hint}{theme.reset}", CLEAR_TO_EOL])
        row += 1
    for position in visible:
        out.extend([_move_to(row), render_entry_row(navigator, position, columns, theme), CLEAR_TO_EOL])
        row += 1
    while row <= HEADER_ROWS + list_rows:
        out.extend([_move_to(row), CLEAR_TO_EOL])
        row += 1

    out.extend([_move_to(HEADER_ROWS + list_rows + 1), render_status(navigator, columns, theme), CLEAR_TO_EOL])
    return "".join(out)


__all__ = [
    "HEADER_ROWS",
    "STATUS_ROWS",
    "list_rows_for_terminal",
    "render_header",
    "render_entry_row",
    "render_status",
    "render_frame",
]
