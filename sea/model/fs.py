"""Directory scanning into an ``EntryStore``."""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import DirectoryReadError
from .entries import EntryKind, EntryStore

DEFAULT_HIDDEN_PREFIX = "."


def entry_kind(entry: os.DirEntry) -> EntryKind:
    """Classify a scandir entry without following symlinks."""
    try:
        if entry.is_symlink():
            return EntryKind.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return EntryKind.DIRECTORY
    except OSError:
        pass
    return EntryKind.FILE


def populate_store(
    store: EntryStore,
    directory: Path,
    show_hidden: bool,
    hidden_prefix: str = DEFAULT_HIDDEN_PREFIX,
) -> int:
    """Append the entries of ``directory`` to an empty ``store``.

    Directories come first, then everything else; each group keeps the order
    ``os.scandir`` produced. Returns the number of entries appended and raises
    ``DirectoryReadError`` when the directory cannot be read.
    """
    hidden_marker = os.fsencode(hidden_prefix) if hidden_prefix else b""
    directories: list[bytes] = []
    others: list[tuple[bytes, EntryKind]] = []
    try:
        with os.scandir(os.fsencode(directory)) as entries:
            for entry in entries:
                name = entry.name
                if hidden_marker and not show_hidden and name.startswith(hidden_marker):
                    continue
                kind = entry_kind(entry)
                if kind is EntryKind.DIRECTORY:
                    directories.append(name)
                else:
                    others.append((name, kind))
    except OSError as exc:
        raise DirectoryReadError(directory, exc) from exc

    for name in directories:
        store.append(name, EntryKind.DIRECTORY)
    for name, kind in others:
        store.append(name, kind)
    return len(directories) + len(others)


__all__ = [
    "DEFAULT_HIDDEN_PREFIX",
    "entry_kind",
    "populate_store",
]
