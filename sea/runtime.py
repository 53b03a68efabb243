"""Interactive session bootstrap and event loop.

Builds the navigator, enters raw mode, and runs one blocking
read/dispatch/render cycle per key until quit. Exit effects (last-directory
marker, picker output) are handled by the caller once the terminal is
restored.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .input import read_key
from .navigator import Navigator, NavigatorState
from .render import list_rows_for_terminal, render_frame
from .terminal import TerminalController
from .ui_theme import UITheme

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


@dataclass(frozen=True)
class SessionResult:
    """What a finished session hands back to the CLI."""

    final_dir: Path
    selected_paths: list[Path]


@dataclass(frozen=True)
class SessionOptions:
    start_dir: Path
    show_hidden: bool
    hidden_prefix: str
    theme: UITheme
    on_show_hidden_changed: Callable[[bool], None] | None = None


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    input_fd: int,
    theme: UITheme,
    read: Callable[[int], str] = read_key,
) -> None:
    """Render, block for one key, dispatch; repeat until quit or end of input."""
    with terminal.raw_mode():
        while navigator.state.running:
            term = shutil.get_terminal_size((80, 24))
            navigator.resize(list_rows_for_terminal(term.lines))
            terminal.write(render_frame(navigator, term.columns, term.lines, theme))
            key = read(input_fd)
            if not key:
                logger.debug("input closed, leaving")
                break
            navigator.handle_key(key)


def build_navigator(options: SessionOptions) -> Navigator:
    """Create a navigator on the start directory and list it."""
    term = shutil.get_terminal_size((80, 24))
    state = NavigatorState(
        cwd=options.start_dir,
        show_hidden=options.show_hidden,
        hidden_prefix=options.hidden_prefix,
    )
    navigator = Navigator(
        state,
        list_rows_for_terminal(term.lines),
        on_show_hidden_changed=options.on_show_hidden_changed,
    )
    navigator.load()
    return navigator


def run_session(options: SessionOptions) -> SessionResult:
    """Run one interactive session on the controlling terminal."""
    navigator = build_navigator(options)
    tty_fd = os.open(TTY_PATH, os.O_RDWR)
    try:
        terminal = TerminalController(tty_fd, tty_fd)
        run_main_loop(navigator, terminal, tty_fd, options.theme)
    finally:
        os.close(tty_fd)
    logger.debug("session ended in %s", navigator.state.cwd)
    return SessionResult(
        final_dir=navigator.state.cwd,
        selected_paths=navigator.output_paths(),
    )


__all__ = [
    "SessionOptions",
    "SessionResult",
    "build_navigator",
    "run_main_loop",
    "run_session",
]
