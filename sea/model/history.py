"""Cross-directory selection cache.

Records are kept only for directories that are not currently displayed. They
hold owned copies of the selected names and indices, so they stay valid
across any number of listing-arena resets until they are taken back or
flushed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .entries import EntryStore
from .selection import Selection

logger = logging.getLogger(__name__)

NAME_SEPARATOR = b"\0"


@dataclass(frozen=True)
class HistoryRecord:
    """Saved selection of one directory."""

    path: Path
    names: bytes
    indices: tuple[int, ...]

    def name_list(self) -> list[bytes]:
        if not self.names:
            return []
        return self.names.split(NAME_SEPARATOR)

    def entries(self) -> Iterator[tuple[int, bytes]]:
        return zip(self.indices, self.name_list())

    def paths(self) -> Iterator[Path]:
        for name in self.name_list():
            yield self.path / os.fsdecode(name)


def snapshot_selection(path: Path, store: EntryStore, selection: Selection) -> HistoryRecord:
    """Copy the selected names and indices out of the listing arena."""
    indices = tuple(selection.selected_indices())
    names = NAME_SEPARATOR.join(store.name_at(index) for index in indices)
    return HistoryRecord(path=path, names=names, indices=indices)


def apply_record(record: HistoryRecord, store: EntryStore, selection: Selection) -> int:
    """Set the bits for ``record``'s names in a fresh listing.

    The saved index is used when the entry there still has the saved name;
    otherwise the name is looked up. Names that vanished are dropped. Returns
    the number of entries restored.
    """
    total = store.total_entries()
    restored: list[int] = []
    index_by_name: dict[bytes, int] | None = None
    for index, name in record.entries():
        if index < total and store.name_at(index) == name:
            restored.append(index)
            continue
        if index_by_name is None:
            index_by_name = store.name_index()
        moved_to = index_by_name.get(name)
        if moved_to is None:
            logger.debug("dropping vanished selection %r in %s", name, record.path)
            continue
        restored.append(moved_to)
    selection.set_indices(restored)
    return selection.count


class DirectoryHistory:
    """Mapping from absolute directory path to its saved selection."""

    def __init__(self) -> None:
        self._records: dict[Path, HistoryRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(list(self._records.values()))

    def get(self, path: Path) -> HistoryRecord | None:
        return self._records.get(path)

    def save(self, path: Path, store: EntryStore, selection: Selection) -> HistoryRecord | None:
        """Store the selection of the directory being left.

        Nothing is stored for an empty selection.
        """
        if selection.count <= 0:
            return None
        record = snapshot_selection(path, store, selection)
        self._records[path] = record
        logger.debug("saved %d selected entries for %s", len(record.indices), path)
        return record

    def take(self, path: Path) -> HistoryRecord | None:
        """Remove and return the record for ``path``; records are single use."""
        return self._records.pop(path, None)

    def restore(self, path: Path, store: EntryStore, selection: Selection) -> int:
        """Load and release the saved selection for ``path`` into ``selection``."""
        record = self.take(path)
        if record is None:
            return 0
        restored = apply_record(record, store, selection)
        logger.debug("restored %d of %d selected entries for %s", restored, len(record.indices), path)
        return restored

    def flush(self) -> list[HistoryRecord]:
        """Remove every record and return them."""
        records = list(self._records.values())
        self._records = {}
        if records:
            logger.debug("flushed %d history records", len(records))
        return records

    def selected_paths(self) -> Iterator[Path]:
        for record in self._records.values():
            yield from record.paths()

    def selected_count(self) -> int:
        return sum(len(record.indices) for record in self._records.values())


__all__ = [
    "NAME_SEPARATOR",
    "HistoryRecord",
    "snapshot_selection",
    "apply_record",
    "DirectoryHistory",
]
