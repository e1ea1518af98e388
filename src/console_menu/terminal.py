"""Terminal access for console_menu.

Menus never talk to stdin/stdout directly. They go through a
``TerminalPort``, which ``ConsoleTerminal`` implements on top of a Rich
console for output and readchar for raw key input.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

import readchar
from rich.console import Console
from rich.control import Control

from . import ansi
from .errors import TerminalError
from .keys import is_printable

CURSOR_REPORT_RE = re.compile(r"\x1b\[(\d+);(\d+)R")

# Longest reply accepted for a cursor position report
_MAX_REPORT_LENGTH = 32


@runtime_checkable
class TerminalPort(Protocol):
    """Everything a menu needs from a terminal.

    Positions are 0-based ``(column, row)`` pairs.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_cursor_position(self) -> tuple[int, int]: ...

    def set_cursor_position(self, column: int, row: int) -> None: ...

    def move_cursor(self, column_offset: int, row_offset: int) -> None:
        """Move relative to the cursor; a positive ``row_offset`` moves up."""
        ...

    def write(self, text: str) -> None: ...

    def write_line(self, text: str = "") -> None: ...

    def read_key(self, echo: bool = False) -> str: ...

    def read_line(self) -> str: ...


class ConsoleTerminal:
    """TerminalPort bound to the real terminal.

    Args:
        console: Rich Console used for output (creates a new one if None).
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    @property
    def width(self) -> int:
        return self.console.size.width

    @property
    def height(self) -> int:
        return self.console.size.height

    def write(self, text: str) -> None:
        # Menu text carries its own escape sequences; bypass Rich markup.
        file = self.console.file
        file.write(text)
        file.flush()

    def write_line(self, text: str = "") -> None:
        self.write(text + "\n")

    def set_cursor_position(self, column: int, row: int) -> None:
        self.console.control(Control.move_to(max(column, 0), max(row, 0)))

    def move_cursor(self, column_offset: int, row_offset: int) -> None:
        # The terminal stops the cursor at the screen edges.
        self.console.control(Control.move(column_offset, -row_offset))

    def get_cursor_position(self) -> tuple[int, int]:
        """Ask the terminal where the cursor is.

        Raises:
            TerminalError: If the terminal does not answer with a position report.
        """
        self.write(ansi.REPORT_CURSOR_POSITION)

        reply = ""
        while not reply.endswith("R"):
            reply += readchar.readchar()
            if len(reply) > _MAX_REPORT_LENGTH:
                break

        match = CURSOR_REPORT_RE.search(reply)
        if not match:
            raise TerminalError(f"Unexpected cursor position report: {reply!r}")
        row, column = int(match.group(1)), int(match.group(2))
        return column - 1, row - 1

    def read_key(self, echo: bool = False) -> str:
        key = readchar.readkey()
        if echo and is_printable(key):
            self.write(key)
        return key

    def read_line(self) -> str:
        return self.console.input()
