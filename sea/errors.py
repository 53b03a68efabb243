"""Exception types raised by the browser core and its collaborators."""

from __future__ import annotations

from pathlib import Path


class SeaError(Exception):
    """Base class for all browser errors."""


class DirectoryReadError(SeaError):
    """A directory could not be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cannot read {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class ArenaResetError(SeaError):
    """The listing arena could not be reset while views into it were alive."""


class BatchOperationError(SeaError):
    """One or more entries of a delete/move batch failed.

    Every target is attempted; ``failures`` holds ``(path, exception)`` pairs
    for the ones that did not succeed.
    """

    def __init__(self, operation: str, failures: list[tuple[Path, OSError]], attempted: int) -> None:
        self.operation = operation
        self.failures = list(failures)
        self.attempted = attempted
        super().__init__(self.summary())

    def summary(self) -> str:
        """Return a one-line description suitable for the status row."""
        if not self.failures:
            return f"{self.operation}: no failures"
        first_path, first_exc = self.failures[0]
        reason = getattr(first_exc, "strerror", None) or str(first_exc)
        return (
            f"{self.operation}: {len(self.failures)} of {self.attempted} failed "
            f"({first_path.name}: {reason})"
        )


__all__ = [
    "SeaError",
    "DirectoryReadError",
    "ArenaResetError",
    "BatchOperationError",
]
