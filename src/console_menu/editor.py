"""In-place single-line text editor.

The editor owns one line of the screen starting at a fixed origin. Every
keystroke rewrites the buffer at the origin, followed by the decoration
text that was drawn after the value, and puts the cursor back where the
user is typing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

from . import ansi
from .keys import is_backspace, is_delete, is_enter, is_left, is_printable, is_right
from .metrics import display_width

if TYPE_CHECKING:
    from .terminal import TerminalPort

logger = logging.getLogger(__name__)


class TextValidatorStatus(Enum):
    """Verdict of a text validator on a committed value."""

    VALID = "valid"
    RETRY = "retry"
    INVALID = "invalid"


# (text, key or None for a removal, cursor index) -> allowed
KeyValidator = Callable[[str, "str | None", int], bool]
# text -> (status, message to show or None)
TextValidator = Callable[[str], "tuple[TextValidatorStatus, str | None]"]


@dataclass
class LineEditState:
    """Buffer and cursor of an editing session.

    Attributes:
        buffer: Characters of the value being edited.
        cursor: Insertion point, between 0 and ``len(buffer)``.
        origin: Screen (column, row) of the first character.
        decoration: Text drawn right after the buffer.
    """

    buffer: list[str] = field(default_factory=list)
    cursor: int = 0
    origin: tuple[int, int] = (0, 0)
    decoration: str = ""

    def __post_init__(self):
        self.cursor = max(0, min(self.cursor, len(self.buffer)))

    @classmethod
    def from_text(
        cls, text: str, origin: tuple[int, int] = (0, 0), decoration: str = ""
    ) -> LineEditState:
        """Start a session on text with the cursor at its end."""
        return cls(list(text), len(text), origin, decoration)

    @property
    def text(self) -> str:
        return "".join(self.buffer)


@dataclass
class EditResult:
    text: str
    status: TextValidatorStatus = TextValidatorStatus.VALID

    @property
    def accepted(self) -> bool:
        return self.status is TextValidatorStatus.VALID


class LineEditor:
    """Single-line editor drawing on a terminal port.

    Args:
        terminal: Where to draw and read keys from.
        max_input_length: Maximum value width. None fits the value between
            the origin and the decoration on the terminal line; -1 is unlimited.
        length_as_display_length: Measure width in columns instead of characters.
        key_validator: Called as ``key_validator(text, key, cursor)``.
        override_default_key_validator: When True the key validator gates
            every key before the default handling. When False it is only
            asked about insertions and removals (``key`` is None for a
            removal and ``cursor`` the index of the character going away).
        escape_codes_enabled: Ignore escape sequences when measuring.
        read_key: Key reader (defaults to ``terminal.read_key``).
    """

    def __init__(
        self,
        terminal: TerminalPort,
        max_input_length: int | None = None,
        length_as_display_length: bool = True,
        key_validator: KeyValidator | None = None,
        override_default_key_validator: bool = True,
        escape_codes_enabled: bool = True,
        read_key: Callable[[], str] | None = None,
    ):
        self.terminal = terminal
        self.max_input_length = max_input_length
        self.length_as_display_length = length_as_display_length
        self.key_validator = key_validator
        self.override_default_key_validator = override_default_key_validator
        self.escape_codes_enabled = escape_codes_enabled
        self.read_key = read_key or terminal.read_key

    def _measure(self, text: str, starting_column: int) -> int:
        if self.length_as_display_length:
            return display_width(text, starting_column, self.escape_codes_enabled)
        return len(text)

    def max_length(self, state: LineEditState) -> int:
        """Return the widest value that fits, or -1 for no limit."""
        if self.max_input_length is not None:
            return self.max_input_length

        column = state.origin[0]
        decoration = state.decoration.split("\n")[0]
        decoration_width = self._measure(decoration, column + self._measure(state.text, column))
        return self.terminal.width - (column + decoration_width)

    def _fits(self, state: LineEditState, char: str) -> bool:
        limit = self.max_length(state)
        if limit < 0:
            return True
        candidate = state.buffer[: state.cursor] + [char] + state.buffer[state.cursor :]
        return self._measure("".join(candidate), state.origin[0]) <= limit

    def _allows(self, text: str, key: str | None, cursor: int) -> bool:
        if self.key_validator is None or self.override_default_key_validator:
            return True
        return self.key_validator(text, key, cursor)

    def handle_key(self, state: LineEditState, key: str) -> bool:
        """Apply one keystroke to the state.

        Returns:
            True when the key commits the value (Enter).
        """
        text = state.text
        if (
            self.key_validator is not None
            and self.override_default_key_validator
            and not self.key_validator(text, key, state.cursor)
        ):
            return False

        if is_enter(key):
            return True

        if is_backspace(key):
            if state.cursor > 0 and self._allows(text, None, state.cursor - 1):
                del state.buffer[state.cursor - 1]
                state.cursor -= 1
        elif is_delete(key):
            if state.cursor < len(state.buffer) and self._allows(text, None, state.cursor):
                del state.buffer[state.cursor]
        elif is_left(key):
            state.cursor = max(state.cursor - 1, 0)
        elif is_right(key):
            state.cursor = min(state.cursor + 1, len(state.buffer))
        elif (
            is_printable(key)
            and self._fits(state, key)
            and self._allows(text, key, state.cursor)
        ):
            state.buffer.insert(state.cursor, key)
            state.cursor += 1
        return False

    def redraw(self, state: LineEditState) -> None:
        """Rewrite the buffer and decoration at the origin and place the cursor."""
        column, row = state.origin
        text = state.text
        self.terminal.set_cursor_position(column, row)
        self.terminal.write(ansi.CLEAR_LINE + text + state.decoration)
        offset = display_width(text[: state.cursor], column, self.escape_codes_enabled)
        self.terminal.set_cursor_position(column + offset, row)

    def read_input(self, origin: tuple[int, int], decoration: str = "", initial: str = "") -> str:
        """Edit until Enter and return the buffer."""
        state = LineEditState.from_text(initial, origin, decoration)
        while True:
            self.redraw(state)
            if self.handle_key(state, self.read_key()):
                return state.text

    def show_message(
        self, origin: tuple[int, int], message: str, text: str, decoration: str = ""
    ) -> None:
        """Show message in place of the value until a key is pressed, then restore."""
        self.terminal.set_cursor_position(*origin)
        self.terminal.write(ansi.CLEAR_LINE + message)
        self.read_key()
        self.redraw(LineEditState.from_text(text, origin, decoration))

    def edit(
        self,
        origin: tuple[int, int],
        decoration: str = "",
        initial: str = "",
        text_validator: TextValidator | None = None,
    ) -> EditResult:
        """Edit a value and check it with text_validator on every commit.

        A RETRY verdict starts another pass from the rejected text.

        Returns:
            The committed text with the validator's final verdict.
        """
        text = initial
        while True:
            text = self.read_input(origin, decoration, text)
            if text_validator is None:
                return EditResult(text)

            status, message = text_validator(text)
            if message is not None:
                self.show_message(origin, message, text, decoration)
            if status is not TextValidatorStatus.RETRY:
                return EditResult(text, status)
            logger.debug("Validator asked to retry %r", text)
