"""Scroll window over a menu's item list."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScrollIcon:
    """Indicator lines drawn above and below the visible items.

    Attributes:
        top_continue: Shown at the top when items are hidden above.
        bottom_continue: Shown at the bottom when items are hidden below.
        top_end: Shown at the top when the first item is visible.
        bottom_end: Shown at the bottom when the last item is visible.
    """

    top_continue: str | None = None
    bottom_continue: str | None = None
    top_end: str | None = None
    bottom_end: str | None = None

    def top(self, start: int) -> str:
        return (self.top_end if start == 0 else self.top_continue) or ""

    def bottom(self, end: int, total: int) -> str:
        return (self.bottom_end if end == total else self.bottom_continue) or ""


@dataclass(frozen=True)
class ScrollSettings:
    """How many items a menu shows at once and when it scrolls.

    Attributes:
        max_visible: Maximum number of visible items (-1 for no limit).
        up_margin: Items kept visible above the selection.
        down_margin: Items kept visible below the selection.
        icon: Indicator lines around the visible items.
    """

    max_visible: int = -1
    up_margin: int = 0
    down_margin: int = 0
    icon: ScrollIcon = field(default_factory=ScrollIcon)

    def __post_init__(self):
        if self.max_visible < 0:
            object.__setattr__(self, "max_visible", -1)

    @property
    def is_bounded(self) -> bool:
        return self.max_visible != -1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def initial_start(selected: int, total: int, settings: ScrollSettings) -> int:
    """Return the window start used when a menu opens."""
    return _clamp(selected - settings.up_margin, 0, max(total - 1, 0))


def compute_window(
    total: int, selected: int, current_start: int, settings: ScrollSettings
) -> tuple[int, int]:
    """Return the ``(start, end)`` slice of items to draw.

    The window follows the selection: it is pulled up to keep
    ``up_margin`` items above it, then pushed down to keep ``down_margin``
    items below it, then clamped to the list. Each margin is capped at
    ``max_visible - 1`` so the selection always stays inside the window.
    When the margins do not fit together the down margin wins.
    """
    if not settings.is_bounded or settings.max_visible >= total:
        return 0, total

    max_visible = settings.max_visible
    up_margin = min(settings.up_margin, max_visible - 1)
    down_margin = min(settings.down_margin, max_visible - 1)

    start = current_start
    if start > selected - up_margin:
        start = selected - up_margin
    if start + max_visible - 1 < selected + down_margin:
        start = selected + down_margin - (max_visible - 1)

    start = _clamp(start, 0, total - 1)
    end = _clamp(start + max_visible, 0, total)
    start = _clamp(end - max_visible, 0, total - 1)
    return start, end
