"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Plain bytes map to themselves; arrow keys arrive as ``ESC [ A..D``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_SEQUENCE = "UNKNOWN_SEQUENCE"
_PENDING_BYTES: list[bytes] = []

_ARROWS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> bytes:
    """Complete a multi-byte UTF-8 character started by ``lead``."""
    value = lead[0]
    if value >= 0xF0:
        missing = 3
    elif value >= 0xE0:
        missing = 2
    elif value >= 0xC0:
        missing = 1
    else:
        return lead
    out = bytearray(lead)
    for _ in range(missing):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        out += part
    return bytes(out)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Block for one key and return its token.

    Returns ``""`` on timeout or end of input.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch in {b"\r", b"\n"}:
        return "ENTER"

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch).decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROWS:
        return _ARROWS[seq]
    # Swallow parameter and intermediate bytes up to the final byte.
    while seq is not None and 0x20 <= seq[0] <= 0x3F:
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return UNKNOWN_SEQUENCE


def clear_pending() -> None:
    _PENDING_BYTES.clear()


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_SEQUENCE",
    "read_key",
    "clear_pending",
]
