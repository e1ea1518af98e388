"""Hook events raised by menus and items.

Every interception point of a menu or an item is a named hook. Handlers
are called as ``handler(sender, event)`` and communicate back by mutating
the event: setting ``override_text`` replaces generated text, setting
``cancel`` stops the default behavior, and ``redraw`` forces the screen to
redraw (or not).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, ClassVar

if TYPE_CHECKING:
    from .keys import KeyAction, KeyBindings
    from .menu import MenuContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redraw:
    """A tri-state redraw request: leave it to the default, or force it."""

    value: bool | None = None

    DEFAULT: ClassVar[Redraw]

    @classmethod
    def force(cls, value: bool = True) -> Redraw:
        return cls(bool(value))

    @property
    def is_default(self) -> bool:
        return self.value is None

    def resolve(self, default: bool) -> bool:
        """Return the forced value, or ``default`` if nothing was forced."""
        return default if self.value is None else self.value


Redraw.DEFAULT = Redraw()


@dataclass
class DisplayEvent:
    """Raised before a menu draws; set ``override_text`` to draw that instead."""

    override_text: str | None = None

    @property
    def handled(self) -> bool:
        return self.override_text is not None


@dataclass
class ItemTextEvent:
    """Raised before and after the text of one visible item is created.

    ``text`` is None before creation and holds the created text after it.
    """

    index: int
    item: Any
    text: str | None = None
    override_text: str | None = None

    @property
    def handled(self) -> bool:
        return self.override_text is not None


@dataclass
class ItemDisplayedEvent:
    index: int
    text: str

    handled: ClassVar[bool] = False


@dataclass
class AfterDisplayEvent:
    end_index: int

    handled: ClassVar[bool] = False


@dataclass
class KeyPressedEvent:
    """Raised when a bound key is pressed, before the menu or item reacts."""

    action: KeyAction
    keybinds: KeyBindings
    cancel: bool = False
    redraw: Redraw = Redraw.DEFAULT

    @property
    def handled(self) -> bool:
        return self.cancel


@dataclass
class SelectionChangedEvent:
    """Raised after Up/Down moved the cursor.

    Handlers may point ``selected`` at another selectable item.
    """

    previous: int
    selected: int
    redraw: Redraw = Redraw.DEFAULT

    handled: ClassVar[bool] = False


@dataclass
class BeforeExitEvent:
    """Raised before the menu returns ``value``; set ``cancel`` to keep it open."""

    value: Any
    triggered_by_item: bool
    cancel: bool = False
    redraw: Redraw = Redraw.DEFAULT

    @property
    def handled(self) -> bool:
        return self.cancel


@dataclass
class TextCreatedEvent:
    """Raised by an item before and after it renders its own text."""

    icon: str
    icon_right: str
    ctx: MenuContext | None
    text: str | None = None
    override_text: str | None = None

    @property
    def handled(self) -> bool:
        return self.override_text is not None


Handler = Callable[[Any, Any], None]


@dataclass
class EventHooks:
    """A fixed set of named hooks, each with an ordered list of handlers.

    Example:
        hooks = EventHooks(["before_exit"])
        hooks.on("before_exit", lambda menu, event: setattr(event, "cancel", True))
    """

    names: list[str]
    _handlers: dict[str, list[Handler]] = field(init=False, repr=False)

    def __post_init__(self):
        self._handlers = {name: [] for name in self.names}

    def _get(self, name: str) -> list[Handler]:
        try:
            return self._handlers[name]
        except KeyError:
            raise ValueError(f"Unknown hook: {name!r}") from None

    def on(self, name: str, handler: Handler) -> Handler:
        """Register ``handler`` for the hook ``name`` and return it."""
        self._get(name).append(handler)
        return handler

    def off(self, name: str, handler: Handler) -> None:
        handlers = self._get(name)
        if handler in handlers:
            handlers.remove(handler)

    def has_handlers(self, name: str) -> bool:
        return bool(self._get(name))

    def emit(self, name: str, sender: Any, event):
        """Call the handlers of ``name`` in order until one handles the event.

        Returns:
            The (possibly mutated) event.
        """
        for handler in list(self._get(name)):
            handler(sender, event)
            if event.handled:
                logger.debug("Hook %s handled by %r", name, handler)
                break
        return event
