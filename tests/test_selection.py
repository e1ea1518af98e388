"""Tests for cursor movement over item lists."""

import pytest

from console_menu.components import Label, Toggle
from console_menu.errors import NoSelectableItemsError
from console_menu.selection import (
    first_selectable,
    has_selectable,
    is_selectable,
    move_selection,
)


@pytest.fixture
def items():
    return [Label("title"), None, Toggle(), Label("group"), Toggle(), None]


def test_is_selectable():
    assert is_selectable(Toggle()) is True
    assert is_selectable(Label("x")) is False
    assert is_selectable(None) is False


def test_first_selectable(items):
    assert first_selectable(items) == 2


def test_move_down_skips_unselectable(items):
    assert move_selection(2, 1, items) == 4


def test_move_wraps_both_ways(items):
    assert move_selection(4, 1, items) == 2
    assert move_selection(2, -1, items) == 4


def test_single_selectable_stays_put():
    items = [Label("x"), None, Toggle()]
    assert move_selection(2, 1, items) == 2
    assert move_selection(2, -1, items) == 2


def test_no_selectable_raises():
    items = [Label("x"), None]
    assert has_selectable(items) is False
    with pytest.raises(NoSelectableItemsError):
        first_selectable(items)
    with pytest.raises(NoSelectableItemsError):
        move_selection(0, 1, items)


def test_error_is_a_value_error():
    with pytest.raises(ValueError):
        first_selectable([None])


@pytest.mark.parametrize("direction", [1, -1])
def test_full_cycle_returns_to_start(items, direction):
    start = first_selectable(items)
    selected = start
    for step in range(1, len(items) + 1):
        selected = move_selection(selected, direction, items)
        assert is_selectable(items[selected])
        if selected == start:
            break
    assert selected == start
    assert step <= len(items)
