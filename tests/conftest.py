"""Pytest fixtures for console-menu tests."""

from __future__ import annotations

import pytest

from console_menu.keys import default_keybinds, get_key
from console_menu.menu import MenuContext
from console_menu.metrics import strip_escape_codes
from console_menu.scroll import ScrollSettings
from console_menu.themes import CursorIcon


class FakeTerminal:
    """Scripted stand-in for a real terminal.

    Keys are handed out in order; running out of keys fails the test
    instead of blocking. Writes are recorded and move a virtual cursor.
    """

    def __init__(self, keys=(), width=80, height=24, lines=()):
        self.keys = list(keys)
        self.lines = list(lines)
        self.width = width
        self.height = height
        self.output: list[str] = []
        self.positions: list[tuple[int, int]] = []
        self.column = 0
        self.row = 0

    @property
    def text(self) -> str:
        return "".join(self.output)

    def _advance(self, text: str) -> None:
        for char in strip_escape_codes(text):
            if char == "\n":
                self.row += 1
                self.column = 0
            else:
                self.column += 1

    def write(self, text: str) -> None:
        self.output.append(text)
        self._advance(text)

    def write_line(self, text: str = "") -> None:
        self.write(text + "\n")

    def get_cursor_position(self) -> tuple[int, int]:
        return self.column, self.row

    def set_cursor_position(self, column: int, row: int) -> None:
        self.positions.append((column, row))
        self.column, self.row = column, row

    def move_cursor(self, column_offset: int, row_offset: int) -> None:
        self.column = max(0, min(self.column + column_offset, self.width - 1))
        self.row = max(0, self.row - row_offset)

    def read_key(self, echo: bool = False) -> str:
        if not self.keys:
            raise AssertionError("FakeTerminal ran out of scripted keys")
        return self.keys.pop(0)

    def read_line(self) -> str:
        return self.lines.pop(0)


@pytest.fixture
def make_terminal():
    """Factory for scripted terminals: make_terminal(keys, width=80, ...)."""
    return FakeTerminal


@pytest.fixture
def make_context():
    """Factory for a MenuContext around a list of items."""

    def factory(items=(), terminal=None, selected=0, frame=None, keybinds=None):
        items = list(items)
        return MenuContext(
            items=items,
            selected=selected,
            start=0,
            end=len(items),
            cursor_icon=CursorIcon(),
            scroll_settings=ScrollSettings(),
            keybinds=keybinds or default_keybinds(),
            terminal=terminal or FakeTerminal(),
            get_key=get_key,
            frame=frame,
        )

    return factory
