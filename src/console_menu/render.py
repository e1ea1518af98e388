"""Drawing a menu frame on the terminal.

A frame is written top to bottom: clear-screen text, title, top scroll
indicator, one text per visible item, bottom scroll indicator. Each step
can be intercepted through the menu's hooks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .events import AfterDisplayEvent, DisplayEvent, ItemDisplayedEvent, ItemTextEvent
from .themes import CursorIcon

if TYPE_CHECKING:
    from .components import MenuItem
    from .menu import MenuContext, OptionsMenu


@dataclass
class Frame:
    """What the last draw put on screen.

    Attributes:
        text: The full text written.
        start: Index of the first visible item.
        end: Index after the last visible item.
        total: Number of items in the menu.
        item_texts: Text written for each visible item, by item index.
        bottom: Bottom scroll indicator.
    """

    text: str
    start: int
    end: int
    total: int
    item_texts: dict[int, str] = field(default_factory=dict)
    bottom: str = ""

    def text_after(self, index: int) -> str:
        """Return everything drawn below the item at index, bottom indicator included."""
        following = "".join(
            text for item_index, text in self.item_texts.items() if item_index > index
        )
        return following + self.bottom


def render_item_text(
    item: MenuItem | None, is_selected: bool, cursor_icon: CursorIcon, ctx: MenuContext | None = None
) -> str:
    """Render one item with the cursor glyphs for its state (None is a blank line)."""
    if item is None:
        return "\n"
    icon, icon_right = cursor_icon.pair(is_selected)
    return item.render(icon, icon_right, ctx)


def render_frame(menu: OptionsMenu, ctx: MenuContext) -> Frame | None:
    """Write one frame of ``menu`` to ``ctx.terminal``.

    Returns:
        The drawn Frame, or None if a before_display hook replaced the frame.
    """
    terminal = ctx.terminal
    hooks = menu.hooks

    display_event = hooks.emit("before_display", menu, DisplayEvent())
    if display_event.override_text is not None:
        terminal.write_line(display_event.override_text)
        return None

    scroll_icon = ctx.scroll_settings.icon
    head = menu.clear_screen_text
    if menu.title is not None:
        head += f"{menu.title}\n\n"
    head += scroll_icon.top(ctx.start)
    terminal.write(head)

    item_texts: dict[int, str] = {}
    for index in range(ctx.start, ctx.end):
        item = ctx.items[index]
        before = hooks.emit("before_item_text", menu, ItemTextEvent(index, item))
        if before.override_text is not None:
            text = before.override_text
        else:
            text = render_item_text(item, index == ctx.selected, ctx.cursor_icon, ctx)
            after = hooks.emit("after_item_text", menu, ItemTextEvent(index, item, text))
            if after.override_text is not None:
                text = after.override_text

        terminal.write(text)
        item_texts[index] = text
        hooks.emit("after_item_displayed", menu, ItemDisplayedEvent(index, text))

    bottom = scroll_icon.bottom(ctx.end, len(ctx.items))
    terminal.write_line(bottom)
    hooks.emit("after_display", menu, AfterDisplayEvent(ctx.end))

    return Frame(
        text=head + "".join(item_texts.values()) + bottom + "\n",
        start=ctx.start,
        end=ctx.end,
        total=len(ctx.items),
        item_texts=item_texts,
        bottom=bottom,
    )
