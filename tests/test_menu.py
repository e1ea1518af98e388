"""Tests for the OptionsMenu controller and SelectList."""

import logging
from dataclasses import dataclass

import pytest
import readchar

from console_menu.components import (
    Button,
    Choice,
    Label,
    MenuItem,
    MultiButton,
    MultiButtonOption,
    Slider,
    Toggle,
)
from console_menu.errors import NoSelectableItemsError
from console_menu.events import Redraw
from console_menu.keys import IgnoreMode, Key, KeyAction, default_keybinds
from console_menu.menu import CANCELLED, OptionsMenu, SelectList
from console_menu.scroll import ScrollSettings

UP = readchar.key.UP
DOWN = readchar.key.DOWN
LEFT = readchar.key.LEFT
RIGHT = readchar.key.RIGHT
ENTER = "\r"
ESC = readchar.key.ESC


def returns(value):
    return lambda ctx, key_action: value


@dataclass(eq=False)
class Quiet(MenuItem):
    """Item that never asks for a redraw."""

    def handle_key_event(self, event, ctx):
        return None


@pytest.fixture
def run_menu(make_terminal):
    """Build a menu on a scripted terminal and count the frames it draws."""

    def factory(items, keys, **kwargs):
        terminal = make_terminal(keys)
        kwargs.setdefault("clear_screen_text", "")
        menu = OptionsMenu(items, terminal=terminal, **kwargs)
        menu.frames = 0

        def count(sender, event):
            menu.frames += 1

        menu.hooks.on("after_display", count)
        return menu, terminal

    return factory


class TestConstruction:
    def test_needs_a_selectable_item(self):
        with pytest.raises(NoSelectableItemsError):
            OptionsMenu([Label("x"), None])

    def test_starts_on_first_selectable(self, make_terminal):
        menu = OptionsMenu([Label("x"), None, Toggle()], terminal=make_terminal())
        assert menu.selected == 2
        assert menu.start_index == 0

    def test_initial_start_respects_up_margin(self, make_terminal):
        items = [Label(str(n)) for n in range(4)] + [Toggle()]
        settings = ScrollSettings(max_visible=2, up_margin=1)
        menu = OptionsMenu(items, scroll_settings=settings, terminal=make_terminal())
        assert menu.start_index == 3


class TestDisplay:
    def test_single_selectable_item_keeps_focus(self, run_menu):
        menu, _ = run_menu([Label("x"), None, Toggle()], [UP, DOWN, ESC])

        assert menu.display() is CANCELLED
        assert menu.selected == 2
        assert menu.frames == 1

    def test_button_result_is_returned(self, run_menu):
        toggle = Toggle()
        menu, terminal = run_menu([toggle, Button("Done", returns("done"))], [ENTER, DOWN, ENTER])

        assert menu.display() == "done"
        assert toggle.value is True
        assert terminal.keys == []

    def test_escape_cancels(self, run_menu):
        menu, _ = run_menu([Toggle()], [ESC])
        result = menu.display()
        assert result is CANCELLED
        assert not result

    def test_escape_ignored_when_disabled(self, run_menu):
        menu, _ = run_menu([Button("Done", returns("done"))], [ESC, ENTER], can_escape=False)

        assert menu.display() == "done"
        assert menu.selected == 0
        assert menu.frames == 1

    def test_up_wraps(self, run_menu):
        menu, _ = run_menu(
            [Button("A", returns("a")), Button("B", returns("b"))], [UP, ENTER]
        )
        assert menu.display() == "b"

    def test_enter_escapes_when_nothing_is_clickable(self, run_menu):
        menu, _ = run_menu([Choice(["a", "b"])], [ENTER])
        assert menu.display() is CANCELLED

    def test_enter_ignored_on_unclickable_item(self, run_menu):
        choice = Choice(["a", "b"])
        menu, _ = run_menu(
            [choice, Button("Done", returns("done"))], [ENTER, RIGHT, DOWN, ENTER]
        )

        assert menu.display() == "done"
        assert choice.value == 1

    def test_horizontal_keys_skipped_for_clickable_only_items(self, run_menu):
        toggle = Toggle()
        menu, _ = run_menu(
            [toggle, Button("Done", returns("done"))], [LEFT, RIGHT, DOWN, ENTER]
        )
        seen = []
        menu.hooks.on("key_pressed", lambda m, event: seen.append(event.action.response))

        assert menu.display() == "done"
        assert seen == [Key.DOWN, Key.ENTER]
        assert toggle.value is False

    def test_slider_receives_arrows(self, run_menu):
        slider = Slider(0, 10, value=5)
        menu, _ = run_menu([slider, Button("Done", returns("done"))], [RIGHT, RIGHT, LEFT, DOWN, ENTER])

        assert menu.display() == "done"
        assert slider.value == 6

    def test_multi_button_receives_arrows(self, run_menu):
        multi = MultiButton(
            [MultiButtonOption("A", action=returns("a")), MultiButtonOption("B", action=returns("b"))]
        )
        menu, _ = run_menu([multi], [RIGHT, ENTER])

        assert menu.display() == "b"

    def test_unchanged_item_skips_redraw(self, run_menu):
        menu, _ = run_menu([Quiet(), Button("Done", returns("done"))], [RIGHT, DOWN, ENTER])

        assert menu.display() == "done"
        assert menu.frames == 2

    def test_display_restarts_from_first_selectable(self, run_menu):
        menu, terminal = run_menu(
            [Button("A", returns("a")), Button("B", returns("b"))], [DOWN, ENTER, ENTER]
        )
        assert menu.display() == "b"
        assert menu.display() == "a"

    def test_fails_fast_when_items_stop_being_selectable(self, run_menu):
        def remove_everything(ctx, key_action):
            menu.items[0] = Label("gone")
            return None

        menu, _ = run_menu([Button("Break", remove_everything)], [ENTER])

        with pytest.raises(NoSelectableItemsError):
            menu.display()

    def test_moves_off_selected_item_removed_by_hook(self, run_menu, caplog):
        toggle = Toggle()
        menu, terminal = run_menu([toggle, Button("Done", returns("done"))], [DOWN, ENTER, ESC])

        def remove_selected(sender, event):
            sender.items[event.selected] = None

        menu.hooks.on("selection_changed", remove_selected)

        with caplog.at_level(logging.WARNING, logger="console_menu.menu"):
            assert menu.display() is CANCELLED
        assert menu.selected == 0
        assert toggle.value is True
        assert terminal.keys == []
        assert "no longer selectable" in caplog.text

    def test_enter_escapes_once_last_clickable_item_is_gone(self, run_menu):
        def replace_self(ctx, key_action):
            menu.items[1] = Label("gone")
            return None

        menu, terminal = run_menu(
            [Choice(["a", "b"]), Button("Go", replace_self)], [DOWN, ENTER, ENTER]
        )

        assert menu.display() is CANCELLED
        assert menu.selected == 0
        assert terminal.keys == []


class TestKeybinds:
    def test_short_table_falls_back_to_defaults(self, run_menu):
        menu, terminal = run_menu([Toggle()], ["q", ESC])
        assert menu.display(keybinds=[KeyAction.of(Key.ESCAPE, "q")]) is CANCELLED
        assert terminal.keys == []

    def test_custom_bindings(self, run_menu):
        keybinds = default_keybinds()
        keybinds[Key.UP] = KeyAction.of(Key.UP, "k", IgnoreMode.IGNORE_VERTICAL)
        keybinds[Key.DOWN] = KeyAction.of(Key.DOWN, "j", IgnoreMode.IGNORE_VERTICAL)
        menu, _ = run_menu(
            [Button("A", returns("a")), Button("B", returns("b"))], [DOWN, "j", ENTER]
        )

        assert menu.display(keybinds=keybinds) == "b"

    def test_custom_reader_gets_modes(self, run_menu):
        keybinds = default_keybinds()
        script = iter([keybinds[Key.DOWN], keybinds[Key.DOWN], keybinds[Key.ENTER]])
        seen = []

        def reader(terminal, modes, table):
            seen.append(tuple(modes))
            return next(script)

        menu, _ = run_menu(
            [Toggle(), Choice(["a", "b"]), Button("Done", returns("done"))], []
        )

        assert menu.display(keybinds, reader) == "done"
        assert seen == [
            (IgnoreMode.IGNORE_HORIZONTAL,),
            (IgnoreMode.NO_IGNORE,),
            (IgnoreMode.IGNORE_HORIZONTAL,),
        ]


class TestHooks:
    def test_before_exit_can_cancel_escape(self, run_menu):
        menu, _ = run_menu([Button("Done", returns("done"))], [ESC, ENTER])
        exits = []

        def keep_open(sender, event):
            exits.append((event.value, event.triggered_by_item))
            if not event.triggered_by_item:
                event.cancel = True

        menu.hooks.on("before_exit", keep_open)

        assert menu.display() == "done"
        assert exits == [(None, False), ("done", True)]
        assert menu.frames == 2

    def test_before_exit_can_cancel_item_exit(self, run_menu):
        menu, _ = run_menu([Button("Done", returns("done"))], [ENTER, ESC])
        menu.hooks.on(
            "before_exit",
            lambda sender, event: setattr(event, "cancel", event.triggered_by_item),
        )
        assert menu.display() is CANCELLED

    def test_key_pressed_cancel(self, run_menu):
        menu, _ = run_menu(
            [Button("A", returns("a")), Button("B", returns("b"))], [DOWN, ENTER]
        )
        menu.hooks.on(
            "key_pressed",
            lambda sender, event: setattr(event, "cancel", event.action.response is Key.DOWN),
        )
        assert menu.display() == "a"

    def test_key_pressed_can_force_redraw(self, run_menu):
        menu, _ = run_menu([Button("Done", returns("done"))], [ESC, ENTER], can_escape=False)
        menu.hooks.on("key_pressed", lambda sender, event: setattr(event, "redraw", Redraw.force()))

        assert menu.display() == "done"
        assert menu.frames == 2

    def test_selection_changed_redirect(self, run_menu):
        items = [Button("A", returns("a")), Button("B", returns("b")), Button("C", returns("c"))]
        menu, _ = run_menu(items, [DOWN, ENTER])

        def skip_b(sender, event):
            if event.selected == 1:
                event.selected = 2

        menu.hooks.on("selection_changed", skip_b)
        assert menu.display() == "c"

    def test_selection_changed_can_suppress_redraw(self, run_menu):
        menu, _ = run_menu(
            [Button("A", returns("a")), Button("B", returns("b"))], [DOWN, ENTER]
        )
        menu.hooks.on(
            "selection_changed",
            lambda sender, event: setattr(event, "redraw", Redraw.force(False)),
        )

        assert menu.display() == "b"
        assert menu.selected == 1
        assert menu.frames == 1

    @pytest.mark.parametrize("target", [1, 99])
    def test_selection_changed_rejects_unselectable(self, run_menu, caplog, target):
        items = [Button("A", returns("a")), Label("x"), Button("C", returns("c"))]
        menu, _ = run_menu(items, [DOWN, ENTER])
        menu.hooks.on("selection_changed", lambda sender, event: setattr(event, "selected", target))

        with caplog.at_level(logging.WARNING, logger="console_menu.menu"):
            assert menu.display() == "c"
        assert "Ignoring unselectable selection" in caplog.text


class TestScrolling:
    def test_window_follows_selection(self, run_menu):
        items = [Toggle(pre_text=str(n)) for n in range(6)]
        menu, terminal = run_menu(
            items, [DOWN, DOWN, DOWN, DOWN, ESC], scroll_settings=ScrollSettings(max_visible=3)
        )

        assert menu.display() is CANCELLED
        assert menu.selected == 4
        assert menu.start_index == 2
        assert terminal.output[-4:] == [" 2off\n", " 3off\n", ">4off\n", "\n"]


class TestSelectList:
    def test_returns_position_counting_nulls(self, make_terminal):
        select = SelectList(["a", None, "b"], clear_screen_text="", terminal=make_terminal([DOWN, ENTER]))
        assert select.display() == 2

    def test_exclude_nulls(self, make_terminal):
        select = SelectList(
            ["a", None, "b"], exclude_nulls=True, clear_screen_text="", terminal=make_terminal([DOWN, ENTER])
        )
        assert select.display() == 1

    def test_escape(self, make_terminal):
        select = SelectList(["a"], can_escape=True, clear_screen_text="", terminal=make_terminal([ESC]))
        assert select.display() == -1

    def test_escape_ignored_by_default(self, make_terminal):
        select = SelectList(["a"], clear_screen_text="", terminal=make_terminal([ESC, ENTER]))
        assert select.display() == 0

    def test_question_is_title(self, make_terminal):
        terminal = make_terminal([ENTER])
        SelectList(["a", "b"], question="Pick", clear_screen_text="", terminal=terminal).display()
        assert terminal.text == "Pick\n\n>a\n b\n\n"

    def test_actions(self, make_terminal):
        select = SelectList(
            ["a", None, "b"],
            actions=[None, returns("custom")],
            exclude_nulls=True,
            clear_screen_text="",
            terminal=make_terminal([DOWN, ENTER]),
        )
        assert select.display() == "custom"

    def test_action_returning_none_redraws(self, make_terminal):
        select = SelectList(
            ["a", "b"],
            actions=[returns(None)],
            clear_screen_text="",
            terminal=make_terminal([ENTER, DOWN, ENTER]),
        )
        assert select.display() == 1

    def test_hooks_are_the_menus(self, make_terminal):
        select = SelectList(["a"], terminal=make_terminal())
        assert select.hooks is select.menu.hooks

    def test_all_nulls_rejected(self):
        with pytest.raises(NoSelectableItemsError):
            SelectList([None, None])
