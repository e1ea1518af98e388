"""Keyboard-driven menus for text terminals.

Example:
    from console_menu import Item, OptionsMenu

    menu = OptionsMenu(
        title="Settings",
        items=[
            Item.toggle("Debug: "),
            Item.text("Name: ", value="Alice", old_value_as_starting_value=True),
            Item.button("Save", lambda ctx, key: "save"),
        ],
    )
    result = menu.display()  # "save", or CANCELLED after Escape
"""

__version__ = "0.1.0"

from .components import (
    AdvancedSlider,
    Button,
    Choice,
    Label,
    MenuItem,
    MultiButton,
    MultiButtonOption,
    Slider,
    TextField,
    Toggle,
    open_menu,
)
from .editor import EditResult, LineEditor, LineEditState, TextValidatorStatus
from .errors import ConfigError, ConsoleMenuError, NoSelectableItemsError, TerminalError
from .events import Redraw
from .keys import IgnoreMode, Key, KeyAction, default_keybinds, get_key
from .menu import CANCELLED, Item, MenuContext, OptionsMenu, SelectList
from .metrics import display_width, offset_for_width, strip_escape_codes
from .scroll import ScrollIcon, ScrollSettings, compute_window
from .terminal import ConsoleTerminal, TerminalPort
from .themes import DEFAULT_CURSOR_ICON, CursorIcon

__all__ = [
    "__version__",
    # Menus
    "OptionsMenu",
    "SelectList",
    "Item",
    "MenuContext",
    "CANCELLED",
    # Components
    "MenuItem",
    "Label",
    "Toggle",
    "Choice",
    "Slider",
    "AdvancedSlider",
    "Button",
    "MultiButton",
    "MultiButtonOption",
    "TextField",
    "open_menu",
    # Editing
    "LineEditor",
    "LineEditState",
    "EditResult",
    "TextValidatorStatus",
    # Keys
    "Key",
    "KeyAction",
    "IgnoreMode",
    "default_keybinds",
    "get_key",
    # Layout
    "ScrollSettings",
    "ScrollIcon",
    "compute_window",
    "CursorIcon",
    "DEFAULT_CURSOR_ICON",
    "Redraw",
    # Text metrics
    "display_width",
    "offset_for_width",
    "strip_escape_codes",
    # Terminal
    "TerminalPort",
    "ConsoleTerminal",
    # Errors
    "ConsoleMenuError",
    "NoSelectableItemsError",
    "ConfigError",
    "TerminalError",
]
