"""Terminal control helpers for the browser session.

Owns the raw-mode lifecycle and alternate-screen switching. The saved tty
state is restored on every exit path of ``raw_mode``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty


class TerminalController:
    """Manage terminal mode transitions around one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with the cursor hidden."""
        # setraw clears ICANON/ECHO/ISIG/IEXTEN, input mapping and OPOST.
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l\x1b[2J\x1b[H")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        try:
            os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, text: str) -> None:
        data = text.encode("utf-8", errors="replace")
        while data:
            written = os.write(self.stdout_fd, data)
            data = data[written:]

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
