"""Batch delete and move of selected entries.

Each batch attempts every target. Failures are collected and raised together
as ``BatchOperationError`` once the batch is done; entries that succeeded
stay done.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from .errors import BatchOperationError

logger = logging.getLogger(__name__)


def delete_path(path: Path) -> None:
    """Delete one entry; directories recursively, symlinks never followed."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def move_path(source: Path, destination_dir: Path) -> Path | None:
    """Move ``source`` into ``destination_dir`` without overwriting.

    Returns the new path, or ``None`` when the source already lives there.
    """
    target = destination_dir / source.name
    if source.parent == destination_dir:
        return None
    if target.exists() or target.is_symlink():
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))
    if not (source.exists() or source.is_symlink()):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(source))
    shutil.move(os.fspath(source), os.fspath(target))
    return target


def delete_paths(paths: Iterable[Path]) -> list[Path]:
    """Delete every path and return the ones removed.

    Deeper paths go first so a nested target is not taken out by its parent.
    Raises ``BatchOperationError`` after the batch when any entry failed.
    """
    deleted: list[Path] = []
    failures: list[tuple[Path, OSError]] = []
    attempted = 0
    for path in sorted(paths, key=lambda item: len(item.parts), reverse=True):
        attempted += 1
        try:
            delete_path(path)
        except OSError as exc:
            logger.warning("delete failed for %s: %s", path, exc)
            failures.append((path, exc))
            continue
        deleted.append(path)
    logger.info("deleted %d of %d entries", len(deleted), attempted)
    if failures:
        raise BatchOperationError("delete", failures, attempted)
    return deleted


def move_paths(paths: Iterable[Path], destination_dir: Path) -> list[Path]:
    """Move every path into ``destination_dir`` and return the new paths."""
    moved: list[Path] = []
    failures: list[tuple[Path, OSError]] = []
    attempted = 0
    for path in paths:
        attempted += 1
        try:
            target = move_path(path, destination_dir)
        except OSError as exc:
            logger.warning("move failed for %s: %s", path, exc)
            failures.append((path, exc))
            continue
        if target is not None:
            moved.append(target)
    logger.info("moved %d of %d entries into %s", len(moved), attempted, destination_dir)
    if failures:
        raise BatchOperationError("move", failures, attempted)
    return moved


__all__ = [
    "delete_path",
    "move_path",
    "delete_paths",
    "move_paths",
]
