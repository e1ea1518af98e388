"""Command line interface for console-menu.

Only used to try the library out: ``console-menu demo`` shows a menu with
every item kind and prints what it returned.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from rich.console import Console

from . import __version__
from .components import Button, Choice, Label, Slider, TextField, Toggle, open_menu
from .config import (
    get_log_path,
    keybinds_from_config,
    load_config,
    menu_kwargs_from_config,
)
from .editor import TextValidatorStatus
from .errors import ConfigError
from .menu import CANCELLED, OptionsMenu, SelectList
from .terminal import ConsoleTerminal, TerminalPort

console = Console()

COLORS = ["Red", "Green", "Blue", None, "Black", "White"]


def _configure_logging(debug: bool) -> None:
    """Send debug logs to the debug log file; the terminal belongs to the menu."""
    if not debug:
        return
    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("console_menu")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def _validate_name(text: str) -> tuple[TextValidatorStatus, str | None]:
    if not text.strip():
        return TextValidatorStatus.RETRY, "Name can't be empty (press any key)"
    return TextValidatorStatus.VALID, None


def build_demo_menu(
    cfg: dict[str, Any], terminal: TerminalPort | None = None, max_visible: int | None = None
) -> OptionsMenu:
    """Build the demo menu from a loaded config."""
    kwargs = menu_kwargs_from_config(cfg)
    if max_visible is not None:
        kwargs["scroll_settings"] = replace(kwargs["scroll_settings"], max_visible=max_visible)

    colors = SelectList(
        COLORS,
        question="Favorite color?",
        exclude_nulls=True,
        can_escape=True,
        terminal=terminal,
        **kwargs,
    )
    about = OptionsMenu(
        [
            Label(f"console-menu {__version__}"),
            Label("Escape or Back returns to the main menu."),
            None,
            Button("Back", lambda ctx, key_action: "back"),
        ],
        title="About",
        terminal=terminal,
        **kwargs,
    )

    sound = Toggle(True, pre_text="Sound: ")
    difficulty = Choice(
        ["Easy", "Normal", "Hard"],
        1,
        pre_text="Difficulty: ",
        pre_value=" (",
        display_value=True,
        post_value=")",
    )
    volume = Slider(0, 10, value=5, pre_text="Volume: ", pre_value=" ", display_value=True)
    name = TextField(
        "Player",
        pre_text="Name: ",
        old_value_as_starting_value=True,
        text_validator=_validate_name,
        escape_codes_enabled=cfg.get("escape_codes", True),
    )
    picked: dict[str, str | None] = {"color": None}

    def pick_color(ctx, key_action) -> None:
        index = colors.display(ctx.keybinds, ctx.get_key, ctx.terminal)
        if index >= 0:
            picked["color"] = [c for c in COLORS if c is not None][index]

    def done(ctx, key_action) -> dict[str, Any]:
        return {
            "sound": sound.value,
            "difficulty": difficulty.choices[difficulty.value],
            "volume": volume.value,
            "name": name.value,
            "color": picked["color"],
        }

    items = [
        Label("Use the arrow keys to move, Enter to activate."),
        None,
        sound,
        difficulty,
        volume,
        name,
        None,
        Button("Pick a color", pick_color),
        Button("About", open_menu(about)),
        Button("Done", done),
    ]
    return OptionsMenu(items, title="console-menu demo", terminal=terminal, **kwargs)


def cmd_demo(args: argparse.Namespace) -> None:
    """Run the demo menu."""
    cfg = load_config(Path(args.config) if args.config else None)
    _configure_logging(bool(cfg.get("debug", False)))

    terminal = ConsoleTerminal(console)
    try:
        keybinds = keybinds_from_config(cfg)
        menu = build_demo_menu(cfg, terminal=terminal, max_visible=args.max_visible)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)

    result = menu.display(keybinds)
    if result is CANCELLED:
        console.print("[dim]Cancelled[/dim]")
    else:
        console.print(result)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="console-menu",
        description="console-menu: keyboard-driven terminal menus",
    )
    parser.add_argument("--version", action="version", version=f"console-menu {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    # demo
    demo_p = subparsers.add_parser("demo", help="Show a demo menu")
    demo_p.add_argument("--max-visible", type=int, help="Items shown at once (default: all)")
    demo_p.add_argument("--config", help="Config file (default: ~/.config/console-menu/config.yaml)")
    demo_p.set_defaults(func=cmd_demo)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if hasattr(args, "func"):
            args.func(args)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        print()
        sys.exit(130)
