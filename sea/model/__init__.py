"""Navigation and selection model for one browsing session.

This package contains the non-UI primitives:
- packed entry storage and the per-listing arena
- directory scanning into that storage
- the bit-per-entry selection set
- the visible scroll window
- the cross-directory selection history
"""

from __future__ import annotations

from .entries import EntryKind, EntryStore, ListingArena
from .fs import DEFAULT_HIDDEN_PREFIX, entry_kind, populate_store
from .history import DirectoryHistory, HistoryRecord, apply_record, snapshot_selection
from .selection import Selection
from .window import ScrollWindow

__all__ = [
    "EntryKind",
    "EntryStore",
    "ListingArena",
    "DEFAULT_HIDDEN_PREFIX",
    "entry_kind",
    "populate_store",
    "DirectoryHistory",
    "HistoryRecord",
    "apply_record",
    "snapshot_selection",
    "Selection",
    "ScrollWindow",
]
