"""Bit-per-entry selection set aligned with the current ``EntryStore``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Selection:
    """Packed bit set with an incrementally maintained population count.

    ``count`` is updated by every mutating operation; only ``set_indices``
    (used when loading a saved selection) recounts from scratch.
    """

    def __init__(self, length: int = 0) -> None:
        self._length = 0
        self._bits = bytearray()
        self.count = 0
        self.resize_and_clear(length)

    def __len__(self) -> int:
        return self._length

    def _check(self, index: int) -> None:
        if index < 0 or index >= self._length:
            raise IndexError(f"selection index {index} out of range for {self._length} entries")

    def _tail_mask(self) -> int:
        used = self._length % 8
        return 0xFF if used == 0 else (1 << used) - 1

    def resize_and_clear(self, length: int) -> None:
        """Resize to ``length`` entries and clear every bit."""
        self._length = max(0, length)
        self._bits = bytearray((self._length + 7) // 8)
        self.count = 0

    def clear(self) -> None:
        self._bits = bytearray(len(self._bits))
        self.count = 0

    def is_selected(self, index: int) -> bool:
        self._check(index)
        return bool(self._bits[index >> 3] & (1 << (index & 7)))

    def toggle(self, index: int) -> bool:
        """Flip one bit and return its new value."""
        self._check(index)
        mask = 1 << (index & 7)
        self._bits[index >> 3] ^= mask
        if self._bits[index >> 3] & mask:
            self.count += 1
            return True
        self.count -= 1
        return False

    def select_all(self) -> None:
        if not self._length:
            return
        self._bits = bytearray(b"\xff" * len(self._bits))
        self._bits[-1] &= self._tail_mask()
        self.count = self._length

    def invert(self) -> None:
        if not self._length:
            return
        self._bits = bytearray(byte ^ 0xFF for byte in self._bits)
        self._bits[-1] &= self._tail_mask()
        self.count = self._length - self.count

    def select_indices(self, indices: Iterable[int]) -> None:
        """Set the bits for ``indices`` only (search-mode select-all)."""
        for index in indices:
            if not self.is_selected(index):
                self.toggle(index)

    def invert_indices(self, indices: Iterable[int]) -> None:
        """Flip the bits for ``indices`` only (search-mode invert)."""
        for index in indices:
            self.toggle(index)

    def set_indices(self, indices: Iterable[int]) -> None:
        """Replace the selection with ``indices`` and recount."""
        self._bits = bytearray(len(self._bits))
        for index in indices:
            self._check(index)
            self._bits[index >> 3] |= 1 << (index & 7)
        self.count = self.count_set_bits()

    def count_set_bits(self) -> int:
        return int.from_bytes(self._bits, "little").bit_count()

    def selected_indices(self) -> Iterator[int]:
        for byte_index, byte in enumerate(self._bits):
            if not byte:
                continue
            base = byte_index << 3
            for bit in range(8):
                if byte & (1 << bit):
                    yield base + bit


__all__ = ["Selection"]
