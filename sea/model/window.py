"""Visible-slice tracking for the entry list."""

from __future__ import annotations


class ScrollWindow:
    """Window ``[start, start + height)`` over the entry list.

    The window moves only as far as needed to keep the cursor visible; it
    never re-centers.
    """

    def __init__(self, height: int, start: int = 0) -> None:
        self.height = max(1, height)
        self.start = max(0, start)

    @property
    def end(self) -> int:
        return self.start + self.height

    def advance(self, cursor: int) -> None:
        """Slide the window so ``cursor`` becomes visible."""
        if cursor < self.start:
            self.start = cursor
        elif cursor >= self.start + self.height:
            self.start = cursor - (self.height - 1)

    def clamp(self, total: int) -> None:
        """Re-fit the window after the entry count changed."""
        if total <= self.height:
            self.start = 0
        elif self.start + self.height > total:
            self.start = total - self.height

    def resize(self, height: int, total: int, cursor: int) -> None:
        self.height = max(1, height)
        self.clamp(total)
        if total:
            self.advance(cursor)

    def reset(self) -> None:
        self.start = 0

    def visible_range(self, total: int) -> range:
        if total <= 0:
            return range(0)
        return range(self.start, min(total, self.start + self.height))


__all__ = ["ScrollWindow"]
