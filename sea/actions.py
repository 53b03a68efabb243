"""Closed set of browser actions and the key-to-action decoder."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass


class Action(enum.Enum):
    """One discrete user intent, produced from exactly one key token."""

    QUIT = "quit"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    TOP = "top"
    BOTTOM = "bottom"
    TOGGLE_SELECT = "toggle_select"
    SELECT_ALL = "select_all"
    INVERT_SELECTION = "invert_selection"
    DELETE = "delete"
    MOVE = "move"
    PASTE = "paste"
    TOGGLE_HIDDEN = "toggle_hidden"
    SEARCH = "search"


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action."""

    keys: tuple[str, ...]
    action: Action


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("q",), Action.QUIT),
    KeyBinding(("h", "LEFT"), Action.LEFT),
    KeyBinding(("j", "DOWN"), Action.DOWN),
    KeyBinding(("k", "UP"), Action.UP),
    KeyBinding(("l", "RIGHT"), Action.RIGHT),
    KeyBinding(("g",), Action.TOP),
    KeyBinding(("G",), Action.BOTTOM),
    KeyBinding((" ",), Action.TOGGLE_SELECT),
    KeyBinding(("a",), Action.SELECT_ALL),
    KeyBinding(("A",), Action.INVERT_SELECTION),
    KeyBinding(("d",), Action.DELETE),
    KeyBinding(("v",), Action.MOVE),
    KeyBinding(("p",), Action.PASTE),
    KeyBinding((".",), Action.TOGGLE_HIDDEN),
    KeyBinding(("/",), Action.SEARCH),
)


class ActionDecoder:
    """Key-token lookup table with an optional normalization strategy."""

    def __init__(
        self,
        bindings: tuple[KeyBinding, ...] = DEFAULT_BINDINGS,
        normalize: Callable[[str], str] | None = None,
    ) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._actions: dict[str, Action] = {}
        self.register_bindings(*bindings)

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyBinding) -> ActionDecoder:
        """Register one binding, overwriting existing actions for same keys."""
        for key in binding.keys:
            self._actions[self._normalize(key)] = binding.action
        return self

    def register_bindings(self, *bindings: KeyBinding) -> ActionDecoder:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def decode(self, key: str) -> Action | None:
        """Return the action bound to ``key``; unknown keys yield ``None``."""
        if not key:
            return None
        return self._actions.get(self._normalize(key))


_DEFAULT_DECODER = ActionDecoder()


def decode_action(key: str) -> Action | None:
    """Decode one key token with the default bindings."""
    return _DEFAULT_DECODER.decode(key)


__all__ = [
    "Action",
    "KeyBinding",
    "DEFAULT_BINDINGS",
    "ActionDecoder",
    "decode_action",
]
