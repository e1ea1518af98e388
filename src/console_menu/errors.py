"""Exception types raised by console_menu."""

from __future__ import annotations


class ConsoleMenuError(Exception):
    """Base class for console_menu errors."""


class NoSelectableItemsError(ConsoleMenuError, ValueError):
    """Raised when a menu has no item the cursor can land on."""

    def __init__(self, message: str = "Menu must have at least one selectable item"):
        super().__init__(message)


class ConfigError(ConsoleMenuError):
    """Raised when a config value cannot be turned into menu settings."""


class TerminalError(ConsoleMenuError):
    """Raised when the terminal does not answer a cursor position query."""
