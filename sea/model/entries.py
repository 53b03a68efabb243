"""Packed entry storage for the current directory listing.

``EntryStore`` keeps every entry name of one directory in a single
``bytearray`` plus a table of end offsets, so name lookup is O(1) and the
whole listing can be dropped in one step. ``ListingArena`` owns the store and
is the only place allowed to reset it.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator

from ..errors import ArenaResetError


class EntryKind(enum.Enum):
    """Kind tag stored next to each entry name."""

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class EntryStore:
    """Flyweight container for one directory's entries.

    Name ``i`` spans ``names[end_offsets[i - 1]:end_offsets[i]]`` with an
    implicit leading offset of ``0``. Directories occupy ``[0, dir_count)``.
    """

    def __init__(self) -> None:
        self._names = bytearray()
        self._end_offsets: list[int] = []
        self._kinds: list[EntryKind] = []
        self._dir_count = 0

    def __len__(self) -> int:
        return len(self._end_offsets)

    def __iter__(self) -> Iterator[tuple[bytes, EntryKind]]:
        for index in range(len(self._end_offsets)):
            yield self.name_at(index), self._kinds[index]

    def total_entries(self) -> int:
        return len(self._end_offsets)

    def dir_count(self) -> int:
        return self._dir_count

    def clear(self) -> None:
        """Drop all entries.

        Raises ``BufferError`` while a ``name_view`` is still exported.
        """
        del self._names[:]
        self._end_offsets.clear()
        self._kinds.clear()
        self._dir_count = 0

    def append(self, name: bytes, kind: EntryKind) -> None:
        """Append one entry; directories must precede every other kind."""
        if kind is EntryKind.DIRECTORY:
            if self._dir_count != len(self._end_offsets):
                raise ValueError("directories must be appended before other entries")
            self._dir_count += 1
        self._names += name
        self._end_offsets.append(len(self._names))
        self._kinds.append(kind)

    def _span(self, index: int) -> tuple[int, int]:
        if index < 0 or index >= len(self._end_offsets):
            raise IndexError(f"entry index {index} out of range for {len(self._end_offsets)} entries")
        start = self._end_offsets[index - 1] if index > 0 else 0
        return start, self._end_offsets[index]

    def name_at(self, index: int) -> bytes:
        """Return an owned copy of entry ``index``'s name."""
        start, end = self._span(index)
        return bytes(self._names[start:end])

    def name_view(self, index: int) -> memoryview:
        """Return a zero-copy view of entry ``index``'s name.

        The view pins the arena buffer: release it before the next reset.
        """
        start, end = self._span(index)
        return memoryview(self._names)[start:end]

    def kind_at(self, index: int) -> EntryKind:
        self._span(index)
        return self._kinds[index]

    def is_dir(self, index: int) -> bool:
        return 0 <= index < self._dir_count

    def index_of(self, name: bytes, kind: EntryKind | None = None) -> int | None:
        """Return the first index whose name equals ``name``, if any."""
        if kind is EntryKind.DIRECTORY:
            candidates = range(self._dir_count)
        elif kind is None:
            candidates = range(len(self._end_offsets))
        else:
            candidates = range(self._dir_count, len(self._end_offsets))
        for index in candidates:
            start, end = self._span(index)
            if end - start == len(name) and self._names[start:end] == name:
                return index
        return None

    def name_index(self) -> dict[bytes, int]:
        """Map each name to its first index."""
        index_by_name: dict[bytes, int] = {}
        for index in range(len(self._end_offsets)):
            index_by_name.setdefault(self.name_at(index), index)
        return index_by_name

    def buffer_size(self) -> int:
        return len(self._names)


class ListingArena:
    """Ephemeral allocation domain backing one directory listing.

    ``reset`` wipes the listing in bulk. Anything that must outlive a reset
    has to be copied out first; ``generation`` lets holders detect that a
    reset happened since they last looked.
    """

    def __init__(self) -> None:
        self.store = EntryStore()
        self.generation = 0

    def reset(self) -> EntryStore:
        try:
            self.store.clear()
        except BufferError as exc:
            raise ArenaResetError("listing arena still has live name views") from exc
        self.generation += 1
        return self.store


__all__ = [
    "EntryKind",
    "EntryStore",
    "ListingArena",
]
