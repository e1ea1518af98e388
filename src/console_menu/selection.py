"""Cursor movement over a menu's item list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from .errors import NoSelectableItemsError

if TYPE_CHECKING:
    from .components import MenuItem

logger = logging.getLogger(__name__)


def is_selectable(item: MenuItem | None) -> bool:
    """Check if the cursor can land on item (blank lines are never selectable)."""
    return item is not None and item.is_selectable


def has_selectable(items: Sequence[MenuItem | None]) -> bool:
    return any(is_selectable(item) for item in items)


def first_selectable(items: Sequence[MenuItem | None]) -> int:
    """Return the index of the first selectable item.

    Raises:
        NoSelectableItemsError: If no item is selectable.
    """
    for index, item in enumerate(items):
        if is_selectable(item):
            return index
    raise NoSelectableItemsError()


def move_selection(selected: int, direction: int, items: Sequence[MenuItem | None]) -> int:
    """Step from ``selected`` in ``direction`` (+1/-1) to the next selectable item.

    Wraps around both ends of the list and returns to ``selected`` itself
    when it is the only selectable item.

    Raises:
        NoSelectableItemsError: If no item is selectable.
    """
    if not has_selectable(items):
        raise NoSelectableItemsError()

    count = len(items)
    index = selected
    while True:
        index = (index + direction) % count
        if is_selectable(items[index]):
            break

    logger.debug("Selection moved %d -> %d", selected, index)
    return index
