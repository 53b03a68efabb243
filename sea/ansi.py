"""ANSI-aware text measurement and clipping.

Keeps rendered rows inside the terminal width when names contain wide
characters and rows carry color codes.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

CLEAR_SCREEN = "\033[2J\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
ENTER_ALT_SCREEN = "\033[?1049h"
EXIT_ALT_SCREEN = "\033[?1049l"
RESET = "\033[0m"
CLEAR_TO_EOL = "\033[K"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def printable_name(text: str) -> str:
    """Replace control characters so a file name cannot move the cursor."""
    return "".join("?" if (ord(ch) < 32 or ord(ch) == 127) else ch for ch in text)


def display_width(text: str) -> int:
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_to_width(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "CLEAR_SCREEN",
    "HIDE_CURSOR",
    "SHOW_CURSOR",
    "ENTER_ALT_SCREEN",
    "EXIT_ALT_SCREEN",
    "RESET",
    "CLEAR_TO_EOL",
    "char_display_width",
    "printable_name",
    "display_width",
    "clip_ansi_line",
    "pad_to_width",
]
