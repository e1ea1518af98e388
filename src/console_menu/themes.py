"""Cursor glyphs for console_menu items.

The cursor icon is drawn on both sides of every visible item: the
selected pair around the focused item, the unselected pair around the
rest. Keep both left glyphs the same width so items line up.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CursorIcon:
    """Glyphs drawn around menu items.

    Attributes:
        selected: Left of the focused item.
        selected_right: Right of the focused item.
        unselected: Left of every other item.
        unselected_right: Right of every other item.
    """

    selected: str = ">"
    selected_right: str = ""
    unselected: str = " "
    unselected_right: str = ""

    def pair(self, is_selected: bool) -> tuple[str, str]:
        """Return the (left, right) glyphs for an item."""
        if is_selected:
            return self.selected, self.selected_right
        return self.unselected, self.unselected_right


# Default cursor used when none is specified
DEFAULT_CURSOR_ICON = CursorIcon()
