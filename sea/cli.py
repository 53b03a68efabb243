"""Command-line front door for sea.

Parses CLI options, resolves the start directory and preferences, runs the
interactive session, then applies exit effects: the last-directory marker and
picker output.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import termios
from pathlib import Path

from .config import (
    load_hidden_prefix,
    load_show_hidden,
    load_theme_name,
    save_show_hidden,
    write_last_dir,
)
from .errors import SeaError
from .runtime import SessionOptions, run_session
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def configure_logging(log_file: str | None) -> None:
    """Send log records to ``log_file``; without one logging stays silent."""
    if not log_file:
        logging.getLogger("sea").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sea",
        description="Browse directories and select files from the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    parser.add_argument(
        "--picker",
        action="store_true",
        help="On quit, print every selected entry as directory/name, one per line.",
    )
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        default=None,
        help="Show hidden entries (overrides the saved preference).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write debug logs to PATH.")
    return parser


def resolve_start_dir(raw_path: str | None) -> Path:
    """Return the absolute start directory or exit with a message."""
    if raw_path is None:
        try:
            return Path.cwd()
        except OSError as exc:
            raise SystemExit(f"cannot read working directory: {exc.strerror or exc}") from exc
    path = Path(raw_path).expanduser()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    return Path(os.path.abspath(path))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one browsing session."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    start_dir = resolve_start_dir(args.path)
    show_hidden = load_show_hidden() if args.show_hidden is None else args.show_hidden
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)
    options = SessionOptions(
        start_dir=start_dir,
        show_hidden=show_hidden,
        hidden_prefix=load_hidden_prefix(),
        theme=theme,
        on_show_hidden_changed=save_show_hidden,
    )

    try:
        result = run_session(options)
    except (SeaError, termios.error, OSError) as exc:
        logger.error("session aborted: %s", exc)
        raise SystemExit(f"sea: {exc}") from exc

    try:
        write_last_dir(result.final_dir)
    except OSError as exc:
        logger.error("cannot write last directory marker: %s", exc)
        raise SystemExit(f"sea: cannot write last directory marker: {exc}") from exc

    if args.picker:
        for path in result.selected_paths:
            sys.stdout.write(os.fsdecode(path) + "\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
