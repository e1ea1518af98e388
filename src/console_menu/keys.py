"""Key bindings and keyboard input helpers for console_menu.

A binding table maps the six semantic actions a menu understands
(escape, up, down, left, right, enter) to the physical keys that trigger
them. Physical keys are the strings ``readchar.readkey()`` returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

import readchar

if TYPE_CHECKING:
    from .terminal import TerminalPort

logger = logging.getLogger(__name__)


class Key(IntEnum):
    """Semantic actions, valued by their position in a binding table."""

    ESCAPE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    ENTER = 5


class IgnoreMode(Enum):
    """Contexts in which a binding is skipped while reading a key."""

    NO_IGNORE = "no_ignore"
    IGNORE_ESCAPE = "ignore_escape"
    IGNORE_VERTICAL = "ignore_vertical"
    IGNORE_HORIZONTAL = "ignore_horizontal"
    IGNORE_ENTER = "ignore_enter"


ENTER_KEYS = frozenset({readchar.key.ENTER, "\r", "\n"})
ESCAPE_KEYS = frozenset({readchar.key.ESC, "\x1b\x1b"})
BACKSPACE_KEYS = frozenset({readchar.key.BACKSPACE, "\x7f", "\b"})
DELETE_KEYS = frozenset({readchar.key.DELETE, "\x1b[3~"})


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in ENTER_KEYS


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in ESCAPE_KEYS


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in BACKSPACE_KEYS


def is_delete(key: str) -> bool:
    """Check if key is the forward delete key."""
    return key in DELETE_KEYS


def is_left(key: str) -> bool:
    """Check if key is the left arrow."""
    return key == readchar.key.LEFT


def is_right(key: str) -> bool:
    """Check if key is the right arrow."""
    return key == readchar.key.RIGHT


def is_printable(key: str) -> bool:
    """Check if key is a single printable character."""
    return len(key) == 1 and key.isprintable()


@dataclass(frozen=True)
class KeyAction:
    """One row of a binding table.

    Attributes:
        response: The semantic action this binding produces.
        keys: Physical keys that trigger it.
        ignore_modes: Reading modes in which this binding is skipped.
    """

    response: Key
    keys: frozenset[str]
    ignore_modes: frozenset[IgnoreMode] = frozenset()

    @classmethod
    def of(
        cls,
        response: Key,
        keys: str | Iterable[str],
        ignore_modes: IgnoreMode | Iterable[IgnoreMode] = (),
    ) -> KeyAction:
        """Build a binding from a single key/mode or any iterable of them."""
        if isinstance(keys, str):
            keys = (keys,)
        if isinstance(ignore_modes, IgnoreMode):
            ignore_modes = (ignore_modes,)
        return cls(response, frozenset(keys), frozenset(ignore_modes))

    def matches(self, key: str) -> bool:
        return key in self.keys

    def is_ignored(self, modes: Iterable[IgnoreMode]) -> bool:
        return any(mode in self.ignore_modes for mode in modes)


KeyBindings = Sequence[KeyAction]
KeyReader = Callable[["TerminalPort", Sequence[IgnoreMode], KeyBindings], KeyAction]


def default_keybinds() -> list[KeyAction]:
    """Return the default binding table (arrow keys, Enter and Escape)."""
    return [
        KeyAction.of(Key.ESCAPE, ESCAPE_KEYS, IgnoreMode.IGNORE_ESCAPE),
        KeyAction.of(Key.UP, readchar.key.UP, IgnoreMode.IGNORE_VERTICAL),
        KeyAction.of(Key.DOWN, readchar.key.DOWN, IgnoreMode.IGNORE_VERTICAL),
        KeyAction.of(Key.LEFT, readchar.key.LEFT, IgnoreMode.IGNORE_HORIZONTAL),
        KeyAction.of(Key.RIGHT, readchar.key.RIGHT, IgnoreMode.IGNORE_HORIZONTAL),
        KeyAction.of(Key.ENTER, ENTER_KEYS, IgnoreMode.IGNORE_ENTER),
    ]


def normalize_keybinds(keybinds: KeyBindings | None) -> list[KeyAction]:
    """Return a usable binding table, falling back to the defaults.

    A table needs one entry per semantic action, in ``Key`` order.
    """
    if keybinds is None:
        return default_keybinds()
    keybinds = list(keybinds)
    if len(keybinds) < len(Key):
        logger.warning(
            "Binding table has %d entries, expected %d; using defaults",
            len(keybinds),
            len(Key),
        )
        return default_keybinds()
    return keybinds


def is_action(action: KeyAction, keybinds: KeyBindings, key: Key) -> bool:
    """Check if ``action`` is the binding for ``key`` in the table."""
    return action == keybinds[key]


def get_key(
    terminal: TerminalPort,
    modes: Sequence[IgnoreMode] = (IgnoreMode.NO_IGNORE,),
    keybinds: KeyBindings | None = None,
) -> KeyAction:
    """Block until the user presses a key bound to an action.

    Keys with no binding, and bindings ignored in any of ``modes``, are
    skipped.

    Returns:
        The first binding in the table that matches the pressed key.
    """
    if keybinds is None:
        keybinds = default_keybinds()

    while True:
        key = terminal.read_key()
        for action in keybinds:
            if not action.is_ignored(modes) and action.matches(key):
                return action
