"""Keyboard-driven terminal menus.

This module provides the OptionsMenu controller, the Item factory for
building its items, and SelectList for picking one string out of many.

Example:
    from console_menu import Item, OptionsMenu

    menu = OptionsMenu(
        title="Settings",
        items=[
            Item.toggle("Sound: "),
            Item.slider("Volume: ", 0, 10, value=5),
            None,
            Item.button("Done", lambda ctx, key: "done"),
        ],
    )
    result = menu.display()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from .components import (
    AdvancedSlider,
    Button,
    ButtonAction,
    Choice,
    Label,
    MenuItem,
    MultiButton,
    MultiButtonOption,
    Slider,
    TextField,
    Toggle,
)
from .errors import NoSelectableItemsError
from .events import BeforeExitEvent, EventHooks, KeyPressedEvent, SelectionChangedEvent
from .keys import IgnoreMode, Key, KeyAction, KeyBindings, KeyReader, is_action, normalize_keybinds
from .keys import get_key as read_bound_key
from .render import Frame, render_frame
from .scroll import ScrollSettings, compute_window, initial_start
from .selection import first_selectable, has_selectable, is_selectable, move_selection
from .terminal import ConsoleTerminal, TerminalPort
from .themes import DEFAULT_CURSOR_ICON, CursorIcon

logger = logging.getLogger(__name__)

DEFAULT_CLEAR_SCREEN_LINES = 70
DEFAULT_CLEAR_SCREEN_TEXT = "\n" * DEFAULT_CLEAR_SCREEN_LINES

MENU_HOOKS = [
    "before_display",
    "before_item_text",
    "after_item_text",
    "after_item_displayed",
    "after_display",
    "key_pressed",
    "selection_changed",
    "before_exit",
]


class _Cancelled:
    """Returned by a menu the user left with Escape."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "CANCELLED"


CANCELLED = _Cancelled()


class Item:
    """Factory for creating menu items.

    Provides convenient static methods for creating different item types:
    - label(): Plain text line
    - toggle(): Boolean switch
    - choice(): One of several values
    - slider(): Integer in a range
    - advanced_slider(): Named steps on a bar
    - button(): Clickable action
    - multi_button(): Several actions on one line
    - text(): Text input field
    """

    @staticmethod
    def label(text: str) -> Label:
        return Label(text)

    @staticmethod
    def toggle(label: str, value: bool = False, **kwargs) -> Toggle:
        """Create a boolean toggle item.

        Args:
            label: Text shown before the switch.
            value: Initial state.
            **kwargs: Any other Toggle field (symbol, symbol_off, post_value, ...).

        Returns:
            Toggle that can be added to a menu.
        """
        return Toggle(value, pre_text=label, **kwargs)

    @staticmethod
    def choice(label: str, choices: Sequence[str], value: int = 0, **kwargs) -> Choice:
        return Choice(list(choices), value, pre_text=label, **kwargs)

    @staticmethod
    def slider(label: str, min_value: int, max_value: int, value: int = 0, **kwargs) -> Slider:
        """Create a slider item.

        Args:
            label: Text shown before the bar.
            min_value: Lowest value.
            max_value: Highest value.
            value: Initial value (clamped into the range).
            **kwargs: Any other Slider field (step, symbol, display_value, ...).
        """
        return Slider(min_value, max_value, value=value, pre_text=label, **kwargs)

    @staticmethod
    def button(text: str, action: ButtonAction | None = None, **kwargs) -> Button:
        """Create a button item.

        Args:
            text: Button label.
            action: Called as ``action(ctx, key_action)`` on Enter.

        Returns:
            Button whose non-None action result exits the menu.
        """
        return Button(text, action, **kwargs)

    @staticmethod
    def advanced_slider(label: str, values: Sequence[str], value: int = 0, **kwargs) -> AdvancedSlider:
        return AdvancedSlider(list(values), value, pre_text=label, **kwargs)

    @staticmethod
    def multi_button(
        buttons: Sequence[MultiButtonOption], value: int = 0, **kwargs
    ) -> MultiButton:
        """Create a row of buttons.

        Args:
            buttons: The buttons, left to right.
            value: Index of the initially focused button.
            **kwargs: Any other MultiButton field (splitter, splitters, pre_text, ...).
        """
        return MultiButton(list(buttons), value, **kwargs)

    @staticmethod
    def text(label: str, value: str = "", **kwargs) -> TextField:
        return TextField(value, pre_text=label, **kwargs)


@dataclass(frozen=True)
class MenuContext:
    """Read-only view of a running menu handed to its items.

    Attributes:
        items: The menu's items (None entries are blank lines).
        selected: Index of the focused item.
        start: Index of the first visible item.
        end: Index after the last visible item.
        cursor_icon: Glyphs drawn around items.
        scroll_settings: The menu's scroll settings.
        keybinds: Binding table in use.
        terminal: Terminal the menu draws on.
        get_key: Key reader in use.
        frame: The last frame drawn, if any.
    """

    items: Sequence[MenuItem | None]
    selected: int
    start: int
    end: int
    cursor_icon: CursorIcon
    scroll_settings: ScrollSettings
    keybinds: KeyBindings
    terminal: TerminalPort
    get_key: KeyReader
    frame: Frame | None = None


class OptionsMenu:
    """Menu of items navigated with Up/Down and operated with Left/Right/Enter.

    Args:
        items: Items to show, top to bottom. None draws a blank line.
        title: Text drawn above the items.
        cursor_icon: Glyphs drawn around items.
        can_escape: Whether Escape leaves the menu.
        scroll_settings: How many items to show and when to scroll.
        clear_screen_text: Written before every frame (defaults to 70 newlines).
        terminal: Terminal to draw on (a ConsoleTerminal when None).

    Raises:
        NoSelectableItemsError: If no item can be selected.

    Hooks (see ``self.hooks``): before_display, before_item_text,
    after_item_text, after_item_displayed, after_display, key_pressed,
    selection_changed, before_exit.
    """

    def __init__(
        self,
        items: Sequence[MenuItem | None],
        title: str | None = None,
        cursor_icon: CursorIcon | None = None,
        can_escape: bool = True,
        scroll_settings: ScrollSettings | None = None,
        clear_screen_text: str | None = None,
        terminal: TerminalPort | None = None,
    ):
        self.items = list(items)
        if not has_selectable(self.items):
            raise NoSelectableItemsError()

        self.title = title
        self.cursor_icon = cursor_icon or DEFAULT_CURSOR_ICON
        self.can_escape = can_escape
        self.scroll_settings = scroll_settings or ScrollSettings()
        self.clear_screen_text = (
            DEFAULT_CLEAR_SCREEN_TEXT if clear_screen_text is None else clear_screen_text
        )
        self.hooks = EventHooks(MENU_HOOKS)
        self._terminal = terminal

        self.selected = first_selectable(self.items)
        self.start_index = initial_start(self.selected, len(self.items), self.scroll_settings)

    @property
    def terminal(self) -> TerminalPort:
        if self._terminal is None:
            self._terminal = ConsoleTerminal()
        return self._terminal

    def _check_selectable(self) -> None:
        if not has_selectable(self.items):
            raise NoSelectableItemsError()

    def _ensure_selection(self) -> bool:
        """Move off an item that stopped being selectable.

        Returns:
            True if the selection moved and the menu needs a redraw.
        """
        if 0 <= self.selected < len(self.items) and is_selectable(self.items[self.selected]):
            return False
        logger.warning("Selected item %r is no longer selectable", self.selected)
        self.selected = first_selectable(self.items)
        return True

    def _context(
        self,
        keybinds: KeyBindings,
        reader: KeyReader,
        terminal: TerminalPort,
        frame: Frame | None = None,
    ) -> MenuContext:
        if frame is None:
            start, end = compute_window(
                len(self.items), self.selected, self.start_index, self.scroll_settings
            )
            self.start_index = start
        else:
            start, end = frame.start, frame.end
        return MenuContext(
            items=self.items,
            selected=self.selected,
            start=start,
            end=end,
            cursor_icon=self.cursor_icon,
            scroll_settings=self.scroll_settings,
            keybinds=keybinds,
            terminal=terminal,
            get_key=reader,
            frame=frame,
        )

    def render(
        self,
        keybinds: KeyBindings | None = None,
        get_key: KeyReader | None = None,
        terminal: TerminalPort | None = None,
    ) -> Frame | None:
        """Draw the menu once with the current selection.

        Returns:
            The drawn Frame, or None if a before_display hook replaced it.
        """
        ctx = self._context(
            normalize_keybinds(keybinds), get_key or read_bound_key, terminal or self.terminal
        )
        return render_frame(self, ctx)

    def _read_action(self, ctx: MenuContext, enter_needed: bool) -> KeyAction:
        item = self.items[self.selected]
        keybinds = ctx.keybinds
        if item.is_clickable:
            mode = IgnoreMode.IGNORE_HORIZONTAL if item.is_only_clickable else IgnoreMode.NO_IGNORE
            return ctx.get_key(ctx.terminal, (mode,), keybinds)

        while True:
            action = ctx.get_key(ctx.terminal, (IgnoreMode.NO_IGNORE,), keybinds)
            if not is_action(action, keybinds, Key.ENTER):
                return action
            if not enter_needed:
                return keybinds[Key.ESCAPE]

    def _move_selection(self, direction: int, redraw: bool) -> bool:
        previous = self.selected
        selected = move_selection(previous, direction, self.items)

        event = self.hooks.emit(
            "selection_changed", self, SelectionChangedEvent(previous, selected)
        )
        if event.selected != selected:
            if 0 <= event.selected < len(self.items) and is_selectable(self.items[event.selected]):
                selected = event.selected
            else:
                logger.warning("Ignoring unselectable selection %r from hook", event.selected)

        self.selected = selected
        return event.redraw.resolve(redraw or previous != selected)

    def _exit(self, value: Any, triggered_by_item: bool) -> BeforeExitEvent:
        return self.hooks.emit("before_exit", self, BeforeExitEvent(value, triggered_by_item))

    def display(
        self,
        keybinds: KeyBindings | None = None,
        get_key: KeyReader | None = None,
        terminal: TerminalPort | None = None,
    ) -> Any:
        """Show the menu and block until it exits.

        Args:
            keybinds: Binding table (tables with fewer than six entries fall
                back to the defaults).
            get_key: Key reader called as ``get_key(terminal, modes, keybinds)``.
            terminal: Terminal to use instead of the menu's own.

        Returns:
            The value an item exited with, or CANCELLED if the user escaped.

        Raises:
            NoSelectableItemsError: If no item is (or stays) selectable.
        """
        self._check_selectable()
        keybinds = normalize_keybinds(keybinds)
        reader = get_key or read_bound_key
        terminal = terminal or self.terminal

        self.selected = first_selectable(self.items)
        self.start_index = initial_start(self.selected, len(self.items), self.scroll_settings)

        frame = None
        needs_redraw = True
        while True:
            if self._ensure_selection():
                needs_redraw = True
            if needs_redraw:
                frame = render_frame(self, self._context(keybinds, reader, terminal))
            ctx = self._context(keybinds, reader, terminal, frame)

            # Items may be swapped by actions and hooks between keys
            enter_needed = any(item is not None and item.is_clickable for item in self.items)
            action = self._read_action(ctx, enter_needed)
            key_event = self.hooks.emit("key_pressed", self, KeyPressedEvent(action, keybinds))
            needs_redraw = key_event.redraw.resolve(False)
            if key_event.cancel:
                continue

            if is_action(action, keybinds, Key.UP) or is_action(action, keybinds, Key.DOWN):
                direction = -1 if is_action(action, keybinds, Key.UP) else 1
                needs_redraw = self._move_selection(direction, needs_redraw)

            elif is_action(action, keybinds, Key.ESCAPE):
                if not self.can_escape:
                    continue
                exit_event = self._exit(None, triggered_by_item=False)
                if not exit_event.cancel:
                    logger.debug("Menu %r escaped", self.title)
                    return CANCELLED
                needs_redraw = exit_event.redraw.resolve(True)

            else:
                outcome = self.items[self.selected].handle_key(action, ctx)
                if isinstance(outcome, bool):
                    needs_redraw = outcome
                elif outcome is not None:
                    exit_event = self._exit(outcome, triggered_by_item=True)
                    if not exit_event.cancel:
                        logger.debug("Menu %r exited with %r", self.title, outcome)
                        return outcome
                    needs_redraw = exit_event.redraw.resolve(needs_redraw)


@dataclass(eq=False)
class _Answer(MenuItem):
    """One entry of a SelectList; Enter picks it."""

    text: str = ""
    index: int = 0
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
        if self.action is None:
            return self.index

        result = self.action(ctx, event.action)
        if result is None:
            return event.redraw.resolve(True)
        return result


class SelectList:
    """Pick one string out of a list.

    Args:
        answers: Texts to pick from. None draws a blank line.
        question: Text drawn above the answers.
        actions: Optional callbacks by answer index, called as
            ``action(ctx, key_action)``. A non-None result is returned,
            None shows the list again.
        exclude_nulls: Count answer indexes without the None entries.
        can_escape: Whether Escape leaves the list (returning -1).
        multiline: Repeat the cursor icons on every line of an answer.
        cursor_icon: Glyphs drawn around answers.
        scroll_settings: How many answers to show and when to scroll.
        clear_screen_text: Written before every frame.
        terminal: Terminal to draw on.
    """

    def __init__(
        self,
        answers: Sequence[str | None],
        question: str | None = None,
        actions: Sequence[ButtonAction | None] | None = None,
        exclude_nulls: bool = False,
        can_escape: bool = False,
        multiline: bool = False,
        cursor_icon: CursorIcon | None = None,
        scroll_settings: ScrollSettings | None = None,
        clear_screen_text: str | None = None,
        terminal: TerminalPort | None = None,
    ):
        actions = list(actions or [])
        items: list[MenuItem | None] = []
        index = 0
        for answer in answers:
            if answer is None:
                items.append(None)
                if not exclude_nulls:
                    index += 1
                continue
            action = actions[index] if index < len(actions) else None
            items.append(_Answer(answer, index, action, multiline=multiline))
            index += 1

        self.answers = list(answers)
        self.menu = OptionsMenu(
            items,
            title=question,
            cursor_icon=cursor_icon,
            can_escape=can_escape,
            scroll_settings=scroll_settings,
            clear_screen_text=clear_screen_text,
            terminal=terminal,
        )

    @property
    def hooks(self) -> EventHooks:
        return self.menu.hooks

    def display(
        self,
        keybinds: KeyBindings | None = None,
        get_key: KeyReader | None = None,
        terminal: TerminalPort | None = None,
    ) -> Any:
        """Show the list and return the picked index (-1 if escaped)."""
        result = self.menu.display(keybinds, get_key, terminal)
        if result is CANCELLED:
            return -1
        return result
