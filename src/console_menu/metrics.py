"""Display width calculations for terminal text.

Menu lines mix plain glyphs with tabs, carriage returns, backspaces and
ANSI escape sequences. These helpers work out how many columns a string
really occupies, and go the other way: which character of a string ends
at a given width.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[^@-~]*[@-~]")

TAB_SIZE = 8


def strip_escape_codes(text: str) -> str:
    """Remove all ANSI escape sequences from text."""
    return ANSI_ESCAPE_RE.sub("", text)


@dataclass
class _WidthScan:
    """Running state of a left-to-right width scan."""

    starting_column: int = 0
    length: int = 0
    max_length: int = 0
    previous_escape: bool = False

    @property
    def width(self) -> int:
        return max(self.length, self.max_length)

    def advance(self, char: str) -> None:
        if char == "\t":
            self.length += TAB_SIZE - (self.starting_column + self.length) % TAB_SIZE
        elif char == "\r":
            self.max_length = max(self.length, self.max_length)
            self.length = -self.starting_column
        elif char == "\b":
            self.length -= 1
        elif char == "\x1b":
            self.previous_escape = True
        elif char != "\0":
            if self.previous_escape:
                self.previous_escape = False
            else:
                self.length += 1


def char_display_width(char: str, starting_column: int = 0) -> int:
    """Return the width of a single character printed at ``starting_column``."""
    scan = _WidthScan(starting_column)
    scan.advance(char)
    return scan.width


def display_width(text: str, starting_column: int = 0, escape_codes_enabled: bool = True) -> int:
    """Return the number of columns text occupies on the terminal.

    Args:
        text: The text to measure.
        starting_column: Column the text starts at (tab stops depend on it).
        escape_codes_enabled: Strip ANSI escape sequences before measuring.
    """
    if escape_codes_enabled:
        text = strip_escape_codes(text)

    scan = _WidthScan(starting_column)
    for char in text:
        scan.advance(char)
    return scan.width


def _literal_to_raw_index(raw: str, literal_index: int) -> int:
    """Map an index into the stripped text back into the raw text."""
    literal_seen = 0
    position = 0
    for match in ANSI_ESCAPE_RE.finditer(raw):
        literal_len = match.start() - position
        if literal_seen + literal_len > literal_index:
            break
        literal_seen += literal_len
        position = match.end()
    return position + (literal_index - literal_seen)


def offset_for_width(
    text: str,
    width: int,
    start_index: int = 0,
    starting_column: int = 0,
    escape_codes_enabled: bool = True,
) -> int | None:
    """Return the index of the last character that fits in ``width`` columns.

    Scanning starts at ``start_index``. The returned index always points into
    ``text`` itself, escape sequences included. If the whole text is narrower
    than ``width`` the index of its last character is returned.

    Returns:
        The character index, or None if the text has no visible characters
        or not even the first character fits.
    """
    raw = text[start_index:]
    measured = strip_escape_codes(raw) if escape_codes_enabled else raw
    if not measured:
        return None

    scan = _WidthScan(starting_column)
    last_index = len(measured) - 1
    for index, char in enumerate(measured):
        scan.advance(char)
        if scan.width >= width:
            last_index = index if scan.width == width else index - 1
            break

    if last_index < 0:
        return None
    if escape_codes_enabled and len(measured) != len(raw):
        last_index = _literal_to_raw_index(raw, last_index)
    return start_index + last_index
