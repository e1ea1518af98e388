"""Menu item components for console_menu.

This module provides the building blocks for interactive menus:
- MenuItem: Base class for all items
- Label: Plain, unselectable line of text
- Toggle: Boolean on/off switch
- Choice: One value out of a list, cycled with Left/Right
- Slider: Integer in a range, drawn as a bar
- AdvancedSlider: Slider over named steps
- Button: Runs a callback on Enter
- MultiButton: Several buttons on one line
- TextField: Editable single-line value

Items render themselves to plain text (escape sequences included) and
react to semantic key actions. They never hold a reference to the menu
showing them; everything they need arrives in a ``MenuContext``.
"""

from __future__ import annotations

import logging
from dataclasses import KW_ONLY, dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from .editor import KeyValidator, LineEditor, TextValidator, TextValidatorStatus
from .events import EventHooks, KeyPressedEvent, TextCreatedEvent
from .keys import Key, KeyAction, is_action
from .metrics import display_width

if TYPE_CHECKING:
    from .menu import MenuContext, OptionsMenu

logger = logging.getLogger(__name__)

ITEM_HOOKS = ["before_text", "after_text", "key_pressed"]

ButtonAction = Callable[["MenuContext", KeyAction], Any]


@dataclass(eq=False)
class MenuItem:
    """Base class for menu items.

    An item's line is built as: icon, pre text, the item's own special
    text, pre value, value (when ``display_value``), post value, right
    icon and a newline.

    Attributes:
        pre_text: Text before the item's special text (usually its label).
        pre_value: Text between the special text and the value.
        display_value: Whether to show the value.
        post_value: Text after the value.
        multiline: Repeat the cursor icons on every line of the texts above.
        hooks: Per-item hooks: before_text, after_text, key_pressed.
    """

    _: KW_ONLY
    pre_text: str = ""
    pre_value: str = ""
    display_value: bool = False
    post_value: str = ""
    multiline: bool = False
    hooks: EventHooks = field(default_factory=lambda: EventHooks(ITEM_HOOKS), repr=False)

    @property
    def is_selectable(self) -> bool:
        return True

    @property
    def is_clickable(self) -> bool:
        return False

    @property
    def is_only_clickable(self) -> bool:
        return False

    def decorate(self, text: str, icon: str, icon_right: str) -> str:
        """Wrap every line break of text in the cursor icons (multiline items only)."""
        if self.multiline:
            return text.replace("\n", f"{icon_right}\n{icon}")
        return text

    def render_special(self) -> str:
        return ""

    def render_value(self) -> str:
        return ""

    def make_text(self, icon: str, icon_right: str) -> str:
        parts = [self.pre_text, self.render_special(), self.pre_value]
        if self.display_value:
            parts.append(self.render_value())
        parts.append(self.post_value)
        body = "".join(self.decorate(part, icon, icon_right) for part in parts)
        return f"{icon}{body}{icon_right}\n"

    def render(self, icon: str, icon_right: str, ctx: MenuContext | None = None) -> str:
        """Render this item as the text of its menu line(s).

        Args:
            icon: Cursor glyph drawn left of the item.
            icon_right: Cursor glyph drawn right of the item.
            ctx: The menu being drawn, if any.

        Returns:
            The item's text, ending in a newline unless a hook replaced it.
        """
        before = self.hooks.emit("before_text", self, TextCreatedEvent(icon, icon_right, ctx))
        if before.override_text is not None:
            return before.override_text

        text = self.make_text(icon, icon_right)
        after = self.hooks.emit(
            "after_text", self, TextCreatedEvent(icon, icon_right, ctx, text=text)
        )
        return text if after.override_text is None else after.override_text

    def handle_key(self, action: KeyAction, ctx: MenuContext) -> Any:
        """React to a key pressed while this item is focused.

        Returns:
            True/False to request or skip a redraw, None for no redraw, or
            any other value to make the menu return it.
        """
        event = self.hooks.emit("key_pressed", self, KeyPressedEvent(action, ctx.keybinds))
        if event.cancel:
            return event.redraw.resolve(False)
        return self.handle_key_event(event, ctx)

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        return event.redraw.resolve(False)


@dataclass(eq=False)
class Label(MenuItem):
    """Non-selectable line of text. The cursor skips over it."""

    text: str = ""

    @property
    def is_selectable(self) -> bool:
        return False

    def render(self, icon: str, icon_right: str, ctx: MenuContext | None = None) -> str:
        return self.text + "\n"


@dataclass(eq=False)
class Toggle(MenuItem):
    """Boolean switch, flipped with Enter.

    Attributes:
        value: Current state.
        symbol: Shown when on.
        symbol_off: Shown when off.
    """

    value: bool = False
    symbol: str = "on"
    symbol_off: str = "off"

    @property
    def is_clickable(self) -> bool:
        return True

    @property
    def is_only_clickable(self) -> bool:
        return True

    def render_special(self) -> str:
        return self.symbol if self.value else self.symbol_off

    def render_value(self) -> str:
        return str(int(self.value))

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        if is_action(event.action, event.keybinds, Key.ENTER):
            self.value = not self.value
            logger.debug("Toggle %r set to %s", self.pre_text, self.value)
        return event.redraw.resolve(True)


@dataclass(eq=False)
class Choice(MenuItem):
    """One value out of a list; Left/Right cycle through it and wrap.

    Attributes:
        choices: Texts to pick from.
        value: Index of the current choice.
    """

    choices: list[str] = field(default_factory=list)
    value: int = 0

    def __post_init__(self):
        if not self.choices:
            raise ValueError("Choice needs at least one choice")
        self.value = max(0, min(self.value, len(self.choices) - 1))

    def render_special(self) -> str:
        return self.choices[self.value]

    def render_value(self) -> str:
        return f"{self.value + 1}/{len(self.choices)}"

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        if is_action(event.action, event.keybinds, Key.RIGHT):
            step = 1
        elif is_action(event.action, event.keybinds, Key.LEFT):
            step = -1
        else:
            return event.redraw.resolve(False)

        self.value = (self.value + step) % len(self.choices)
        return event.redraw.resolve(True)


@dataclass(eq=False)
class Slider(MenuItem):
    """Integer between ``min_value`` and ``max_value`` moved by ``step``.

    Drawn as one symbol per step: ``symbol`` below the value,
    ``symbol_empty`` from the value up.
    """

    min_value: int
    max_value: int
    step: int = 1
    value: int = 0
    symbol: str = "#"
    symbol_empty: str = "-"

    def __post_init__(self):
        if self.step <= 0:
            raise ValueError(f"Slider step must be positive, got {self.step}")
        self.min_value, self.max_value = (
            min(self.min_value, self.max_value),
            max(self.min_value, self.max_value),
        )
        self.value = max(self.min_value, min(self.value, self.max_value))

    def render_special(self) -> str:
        return "".join(
            self.symbol_empty if x >= self.value else self.symbol
            for x in range(self.min_value, self.max_value, self.step)
        )

    def render_value(self) -> str:
        return str(self.value)

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        if is_action(event.action, event.keybinds, Key.RIGHT):
            new_value = self.value + self.step
        elif is_action(event.action, event.keybinds, Key.LEFT):
            new_value = self.value - self.step
        else:
            return event.redraw.resolve(False)

        if not self.min_value <= new_value <= self.max_value:
            return event.redraw.resolve(False)
        self.value = new_value
        return event.redraw.resolve(True)


@dataclass(eq=False)
class Button(MenuItem):
    """Clickable button.

    Pressing Enter calls ``action(ctx, key_action)``. A None result
    redraws the menu, anything else is handed back to the menu as the
    button's outcome (a non-bool value exits the menu with it).

    Attributes:
        text: Button label.
        action: Callback run on Enter.
    """

    text: str = ""
    action: ButtonAction | None = None

    @property
    def is_clickable(self) -> bool:
        return True

    @property
    def is_only_clickable(self) -> bool:
        return True

    def render_special(self) -> str:
        return self.text

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        if not is_action(event.action, event.keybinds, Key.ENTER):
            return event.redraw.resolve(False)

        result = self.action(ctx, event.action) if self.action is not None else None
        if result is None:
            return event.redraw.resolve(True)
        return result


@dataclass(eq=False)
class MultiButtonOption:
    """One button of a MultiButton.

    Attributes:
        active_text: Shown when this button is the current one.
        inactive_text: Shown otherwise (defaults to ``active_text``).
        action: Callback run on Enter, as for Button.
    """

    active_text: str
    inactive_text: str | None = None
    action: ButtonAction | None = None

    def __post_init__(self):
        if self.inactive_text is None:
            self.inactive_text = self.active_text


@dataclass(eq=False)
class MultiButton(MenuItem):
    """Row of buttons on one line; Left/Right pick one, Enter presses it.

    Attributes:
        buttons: The buttons, left to right.
        value: Index of the current button.
        splitter: Drawn between buttons without their own splitter.
        splitters: Per-gap splitters; gap ``i`` sits after button ``i``.
    """

    buttons: list[MultiButtonOption] = field(default_factory=list)
    value: int = 0
    splitter: str = " "
    splitters: list[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.buttons:
            raise ValueError("MultiButton needs at least one button")
        self.value = max(0, min(self.value, len(self.buttons) - 1))

    @property
    def is_clickable(self) -> bool:
        return True

    def render_special(self) -> str:
        parts = []
        for index, button in enumerate(self.buttons):
            if index:
                gap = index - 1
                parts.append(self.splitters[gap] if gap < len(self.splitters) else self.splitter)
            parts.append(button.active_text if index == self.value else button.inactive_text)
        return "".join(parts)

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        if is_action(event.action, event.keybinds, Key.RIGHT):
            self.value = (self.value + 1) % len(self.buttons)
            return event.redraw.resolve(True)
        if is_action(event.action, event.keybinds, Key.LEFT):
            self.value = (self.value - 1) % len(self.buttons)
            return event.redraw.resolve(True)
        if not is_action(event.action, event.keybinds, Key.ENTER):
            return event.redraw.resolve(False)

        button = self.buttons[self.value]
        logger.debug("MultiButton pressed %r", button.active_text)
        result = button.action(ctx, event.action) if button.action is not None else None
        if result is None:
            return event.redraw.resolve(True)
        return result


class AdvancedSlider(Slider):
    """Slider over a list of named steps that shows the current name.

    Example:
        AdvancedSlider(["Easy", "Normal", "Hard"], 1, pre_text="Difficulty: ")
    """

    def __init__(self, display_values: list[str], value: int = 0, **kwargs):
        if not display_values:
            raise ValueError("AdvancedSlider needs at least one value")
        self.display_values = list(display_values)
        kwargs.setdefault("display_value", True)
        super().__init__(0, len(self.display_values) - 1, value=value, **kwargs)

    def render_value(self) -> str:
        return self.display_values[self.value]


def open_menu(menu: OptionsMenu) -> ButtonAction:
    """Build a Button action that shows ``menu`` and comes back when it exits.

    The nested menu reuses the caller's terminal, bindings and key reader.
    """

    def action(ctx: MenuContext, key_action: KeyAction) -> None:
        menu.display(ctx.keybinds, ctx.get_key, terminal=ctx.terminal)

    return action


@dataclass(eq=False)
class TextField(MenuItem):
    """Editable text value.

    Press Enter to edit the value in place, Enter again to commit.

    Attributes:
        value: Current text.
        old_value_as_starting_value: Start editing from the current value
            instead of an empty buffer.
        max_input_length: Width limit for the value (None fits it to the terminal).
        length_as_display_length: Measure the value in columns, not characters.
        text_validator: Checks the whole value on commit.
        key_validator: Checks single keystrokes.
        override_default_key_validator: Let ``key_validator`` gate every key
            before the default handling instead of only insertions and removals.
        escape_codes_enabled: Ignore escape sequences when measuring.
        accept_invalid: Keep a value the text validator called INVALID.
    """

    value: str = ""
    old_value_as_starting_value: bool = False
    max_input_length: int | None = None
    length_as_display_length: bool = True
    text_validator: TextValidator | None = None
    key_validator: KeyValidator | None = None
    override_default_key_validator: bool = True
    escape_codes_enabled: bool = True
    accept_invalid: bool = False

    @property
    def is_clickable(self) -> bool:
        return True

    @property
    def is_only_clickable(self) -> bool:
        return True

    def render_special(self) -> str:
        return self.value

    def _measure(self, text: str, starting_column: int = 0) -> int:
        if self.length_as_display_length:
            return display_width(text, starting_column, self.escape_codes_enabled)
        return len(text)

    def handle_key_event(self, event: KeyPressedEvent, ctx: MenuContext) -> Any:
        if not is_action(event.action, event.keybinds, Key.ENTER):
            return event.redraw.resolve(False)

        terminal = ctx.terminal
        if ctx.frame is None or not any(item is self for item in ctx.items):
            terminal.write_line(self.pre_text)
            self.value = terminal.read_line()
            return event.redraw.resolve(True)

        icon, icon_right = ctx.cursor_icon.pair(True)
        line_before = (icon + self.decorate(self.pre_text, icon, icon_right)).split("\n")[-1]
        decoration = self.decorate(self.post_value, icon, icon_right) + icon_right
        lines_below = (decoration + ctx.frame.text_after(ctx.selected) + "\n").count("\n") + 1

        _, row = terminal.get_cursor_position()
        origin = (self._measure(line_before), max(row - lines_below, 0))

        editor = LineEditor(
            terminal,
            max_input_length=self.max_input_length,
            length_as_display_length=self.length_as_display_length,
            key_validator=self.key_validator,
            override_default_key_validator=self.override_default_key_validator,
            escape_codes_enabled=self.escape_codes_enabled,
        )
        initial = self.value if self.old_value_as_starting_value else ""
        result = editor.edit(origin, decoration, initial, self.text_validator)

        if result.status is TextValidatorStatus.VALID or self.accept_invalid:
            self.value = result.text
        else:
            logger.debug("Rejected value %r for %r", result.text, self.pre_text)
        return event.redraw.resolve(True)
