"""Cursor/selection state machine for the directory browser.

Every key becomes at most one ``Action``; ``Navigator.dispatch`` runs it to
completion against one explicit ``NavigatorState``. Directory changes follow
a fixed order: save the outgoing selection to history, reset the listing
arena, re-list, resize the selection, restore any saved selection, then place
the cursor and the scroll window.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .actions import Action, ActionDecoder
from .errors import BatchOperationError, DirectoryReadError
from .fileops import delete_paths, move_paths
from .model import (
    DEFAULT_HIDDEN_PREFIX,
    DirectoryHistory,
    EntryKind,
    EntryStore,
    ListingArena,
    ScrollWindow,
    Selection,
    populate_store,
)
from .search import filter_entry_indices

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    BROWSING = "browsing"
    SEARCHING = "searching"


@dataclass
class NavigatorState:
    """All mutable browsing state for one session."""

    cwd: Path
    cursor: int = 0
    running: bool = True
    show_hidden: bool = False
    hidden_prefix: str = DEFAULT_HIDDEN_PREFIX
    mode: Mode = Mode.BROWSING
    search_query: str = ""
    search_editing: bool = False
    search_indices: list[int] = field(default_factory=list)
    search_cursor: int = 0
    pending_moves: list[Path] = field(default_factory=list)
    status_message: str = ""


Lister = Callable[[EntryStore, Path, bool, str], int]


class Navigator:
    """Owns the listing arena, selection, history and scroll window."""

    def __init__(
        self,
        state: NavigatorState,
        window_height: int,
        *,
        lister: Lister = populate_store,
        decoder: ActionDecoder | None = None,
        on_show_hidden_changed: Callable[[bool], None] | None = None,
    ) -> None:
        self.state = state
        self.arena = ListingArena()
        self.selection = Selection()
        self.history = DirectoryHistory()
        self.window = ScrollWindow(window_height)
        self._lister = lister
        self._decoder = decoder if decoder is not None else ActionDecoder()
        self._on_show_hidden_changed = on_show_hidden_changed
        self._handlers: dict[Action, Callable[[], None]] = {
            Action.QUIT: self.quit,
            Action.LEFT: self.go_parent,
            Action.RIGHT: self.enter_selected,
            Action.UP: self.move_up,
            Action.DOWN: self.move_down,
            Action.TOP: self.jump_top,
            Action.BOTTOM: self.jump_bottom,
            Action.TOGGLE_SELECT: self.toggle_select,
            Action.SELECT_ALL: self.select_all,
            Action.INVERT_SELECTION: self.invert_selection,
            Action.DELETE: self.delete_selection,
            Action.MOVE: self.cut_selection,
            Action.PASTE: self.paste,
            Action.TOGGLE_HIDDEN: self.toggle_hidden,
            Action.SEARCH: self.open_search,
        }
        missing = set(Action) - set(self._handlers)
        if missing:
            raise RuntimeError(f"no handler for actions: {sorted(action.name for action in missing)}")

    @property
    def store(self) -> EntryStore:
        return self.arena.store

    def load(self) -> None:
        """List the starting directory; failure here is fatal to the caller."""
        self._relist(self.state.cwd)
        self.state.cursor = 0
        self._place_window()

    # ------------------------------------------------------------------
    # input

    def handle_key(self, key: str) -> None:
        """Route one key token, honoring the search prompt while it is open."""
        state = self.state
        if not key:
            return
        state.status_message = ""
        if state.mode is Mode.SEARCHING:
            if key == "ESC":
                self.close_search()
                return
            if state.search_editing:
                if key == "ENTER":
                    state.search_editing = False
                    return
                if key == "BACKSPACE":
                    self._set_search_query(state.search_query[:-1])
                    return
                if len(key) == 1 and key.isprintable():
                    self._set_search_query(state.search_query + key)
                    return
                if key not in {"UP", "DOWN", "LEFT", "RIGHT"}:
                    return
        action = self._decoder.decode(key)
        if action is None:
            return
        self.dispatch(action)

    def dispatch(self, action: Action) -> None:
        self._handlers[action]()

    # ------------------------------------------------------------------
    # view helpers (full listing or search subset)

    def view_total(self) -> int:
        if self.state.mode is Mode.SEARCHING:
            return len(self.state.search_indices)
        return self.store.total_entries()

    def view_cursor(self) -> int:
        if self.state.mode is Mode.SEARCHING:
            return self.state.search_cursor
        return self.state.cursor

    def view_index(self, position: int) -> int:
        """Map a row position in the current view to an entry index."""
        if self.state.mode is Mode.SEARCHING:
            return self.state.search_indices[position]
        return position

    def view_indices(self) -> list[int]:
        if self.state.mode is Mode.SEARCHING:
            return list(self.state.search_indices)
        return list(range(self.store.total_entries()))

    def cursor_entry(self) -> int | None:
        """Entry index under the cursor, or ``None`` for an empty view."""
        if self.view_total() == 0:
            return None
        return self.view_index(self.view_cursor())

    def _set_view_cursor(self, position: int) -> None:
        if self.state.mode is Mode.SEARCHING:
            self.state.search_cursor = position
        else:
            self.state.cursor = position
        self.window.advance(position)

    def _place_window(self) -> None:
        total = self.view_total()
        self.window.clamp(total)
        if total:
            self.window.advance(self.view_cursor())

    def resize(self, window_height: int) -> None:
        self.window.resize(window_height, self.view_total(), self.view_cursor())

    # ------------------------------------------------------------------
    # movement

    def move_down(self) -> None:
        total = self.view_total()
        if total == 0:
            return
        cursor = self.view_cursor()
        self._set_view_cursor(cursor + 1 if cursor < total - 1 else 0)

    def move_up(self) -> None:
        total = self.view_total()
        if total == 0:
            return
        cursor = self.view_cursor()
        self._set_view_cursor(cursor - 1 if cursor > 0 else total - 1)

    def jump_top(self) -> None:
        if self.view_total() == 0:
            return
        self._set_view_cursor(0)

    def jump_bottom(self) -> None:
        total = self.view_total()
        if total == 0:
            return
        self._set_view_cursor(total - 1)

    # ------------------------------------------------------------------
    # selection

    def toggle_select(self) -> None:
        index = self.cursor_entry()
        if index is None:
            return
        self.selection.toggle(index)

    def select_all(self) -> None:
        if self.state.mode is Mode.SEARCHING:
            self.selection.select_indices(self.state.search_indices)
        else:
            self.selection.select_all()

    def invert_selection(self) -> None:
        if self.state.mode is Mode.SEARCHING:
            self.selection.invert_indices(self.state.search_indices)
        else:
            self.selection.invert()

    def selected_here(self) -> Iterator[Path]:
        for index in self.selection.selected_indices():
            yield self.state.cwd / os.fsdecode(self.store.name_at(index))

    def selected_paths(self) -> list[Path]:
        """Every selected entry, remembered directories first."""
        return [*self.history.selected_paths(), *self.selected_here()]

    def output_paths(self) -> list[Path]:
        """Paths handed to the shell on exit: unpasted cuts, then selections."""
        paths = list(self.state.pending_moves)
        paths.extend(path for path in self.selected_paths() if path not in paths)
        return paths

    # ------------------------------------------------------------------
    # directory changes

    def _relist(self, directory: Path) -> None:
        store = self.arena.reset()
        try:
            self._lister(store, directory, self.state.show_hidden, self.state.hidden_prefix)
        finally:
            self.selection.resize_and_clear(store.total_entries())

    def _relist_nearest(self, directory: Path) -> Path:
        """List ``directory`` or, when it is gone, its nearest readable ancestor.

        Returns the directory actually listed. Raises ``DirectoryReadError``
        only when not even the filesystem root can be read.
        """
        candidate = directory
        while True:
            try:
                self._relist(candidate)
                return candidate
            except DirectoryReadError as exc:
                parent = candidate.parent
                if parent == candidate:
                    raise
                logger.warning("cannot list %s, trying %s: %s", candidate, parent, exc)
                candidate = parent

    def _land_in_ancestor(self, vanished: Path, landed: Path) -> None:
        """Adopt ``landed`` as ``cwd`` after ``vanished`` could not be listed."""
        state = self.state
        state.cwd = landed
        self.history.take(vanished)
        self.history.restore(landed, self.store, self.selection)
        child = os.fsencode(vanished.relative_to(landed).parts[0])
        found = self.store.index_of(child)
        state.cursor = found if found is not None else 0
        self.window.reset()
        self._place_window()
        note = f"{vanished} is gone"
        state.status_message = f"{state.status_message}; {note}" if state.status_message else note

    def _switch_directory(self, target: Path, focus_name: bytes | None) -> bool:
        """Leave ``cwd`` for ``target``; returns ``False`` if target is unreadable."""
        state = self.state
        previous = state.cwd
        previous_cursor = state.cursor
        self.history.save(previous, self.store, self.selection)
        try:
            self._relist(target)
        except DirectoryReadError as exc:
            logger.warning("staying in %s: %s", previous, exc)
            state.status_message = str(exc)
            landed = self._relist_nearest(previous)
            if landed != previous:
                self._land_in_ancestor(previous, landed)
                return False
            self.history.restore(previous, self.store, self.selection)
            state.cursor = min(previous_cursor, max(0, self.store.total_entries() - 1))
            self._place_window()
            return False

        state.cwd = target
        self.history.restore(target, self.store, self.selection)
        cursor = 0
        if focus_name is not None:
            found = self.store.index_of(focus_name, EntryKind.DIRECTORY)
            if found is None:
                logger.debug("%r not found in %s, cursor falls back to top", focus_name, target)
            else:
                cursor = found
        state.cursor = cursor
        self.window.reset()
        self._place_window()
        logger.debug("now browsing %s (%d entries)", target, self.store.total_entries())
        return True

    def go_parent(self) -> None:
        self.close_search()
        cwd = self.state.cwd
        parent = cwd.parent
        if parent == cwd:
            return
        self._switch_directory(parent, os.fsencode(cwd.name))

    def enter_selected(self) -> None:
        index = self.cursor_entry()
        self.close_search()
        if index is None or not self.store.is_dir(index):
            return
        name = self.store.name_at(index)
        self._switch_directory(self.state.cwd / os.fsdecode(name), None)

    def reload(self, focus_name: bytes | None = None) -> None:
        """Re-list ``cwd`` in place with a cleared selection.

        When ``cwd`` itself disappeared the nearest surviving ancestor is
        listed instead.
        """
        previous = self.state.cwd
        landed = self._relist_nearest(previous)
        if landed != previous:
            self._land_in_ancestor(previous, landed)
            return
        total = self.store.total_entries()
        found = self.store.index_of(focus_name) if focus_name is not None else None
        if found is not None:
            self.state.cursor = found
        else:
            self.state.cursor = min(self.state.cursor, max(0, total - 1))
        self._place_window()

    def _name_under_cursor(self) -> bytes | None:
        index = self.cursor_entry()
        if index is None:
            return None
        return self.store.name_at(index)

    def toggle_hidden(self) -> None:
        self.close_search()
        focus_name = self._name_under_cursor()
        self.state.show_hidden = not self.state.show_hidden
        self.reload(focus_name)
        if self._on_show_hidden_changed is not None:
            self._on_show_hidden_changed(self.state.show_hidden)

    # ------------------------------------------------------------------
    # file operations

    def delete_selection(self) -> None:
        self.close_search()
        records = self.history.flush()
        targets = [path for record in records for path in record.paths()]
        targets.extend(self.selected_here())
        if not targets:
            self.state.status_message = "nothing selected"
            return
        try:
            deleted = delete_paths(targets)
        except BatchOperationError as exc:
            self.state.status_message = exc.summary()
        else:
            self.state.status_message = f"deleted {len(deleted)} entries"
        self.reload()

    def cut_selection(self) -> None:
        """Queue every selected entry for a later paste."""
        self.close_search()
        targets = self.selected_paths()
        if not targets:
            self.state.status_message = "nothing selected"
            return
        pending = self.state.pending_moves
        pending.extend(path for path in targets if path not in pending)
        self.history.flush()
        self.selection.clear()
        self.state.status_message = f"{len(pending)} entries ready to move, press p to paste"

    def paste(self) -> None:
        self.close_search()
        pending = self.state.pending_moves
        if not pending:
            self.state.status_message = "nothing to paste"
            return
        self.state.pending_moves = []
        try:
            moved = move_paths(pending, self.state.cwd)
        except BatchOperationError as exc:
            self.state.status_message = exc.summary()
        else:
            self.state.status_message = f"moved {len(moved)} entries"
        self.reload()

    # ------------------------------------------------------------------
    # search

    def open_search(self) -> None:
        state = self.state
        if state.mode is Mode.SEARCHING:
            state.search_editing = True
            return
        state.mode = Mode.SEARCHING
        state.search_editing = True
        state.search_query = ""
        state.search_indices = filter_entry_indices("", self.store)
        state.search_cursor = min(state.cursor, max(0, len(state.search_indices) - 1))
        self._place_window()

    def _set_search_query(self, query: str) -> None:
        state = self.state
        current = self.cursor_entry()
        state.search_query = query
        state.search_indices = filter_entry_indices(query, self.store)
        if current is not None and current in state.search_indices:
            state.search_cursor = state.search_indices.index(current)
        else:
            state.search_cursor = 0
        self.window.reset()
        self._place_window()

    def close_search(self) -> None:
        """Return to the full listing with the cursor on the same entry."""
        state = self.state
        if state.mode is not Mode.SEARCHING:
            return
        current = self.cursor_entry()
        state.mode = Mode.BROWSING
        state.search_editing = False
        state.search_query = ""
        state.search_indices = []
        state.search_cursor = 0
        if current is not None:
            state.cursor = current
        self._place_window()

    def quit(self) -> None:
        self.state.running = False


__all__ = [
    "Mode",
    "NavigatorState",
    "Navigator",
]
