"""Tests for the console-menu CLI."""

import logging

import pytest
import readchar

from console_menu import __version__, cli, config
from console_menu.menu import CANCELLED

DOWN = readchar.key.DOWN
ENTER = "\r"


class TestParser:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--version"])
        assert exc.value.code == 0
        assert f"console-menu {__version__}" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        cli.main([])
        assert "usage: console-menu" in capsys.readouterr().out

    def test_demo_options(self):
        args = cli.build_parser().parse_args(["demo", "--max-visible", "4", "--config", "x.yaml"])
        assert (args.max_visible, args.config, args.func) == (4, "x.yaml", cli.cmd_demo)


def test_keyboard_interrupt_exits_130(monkeypatch):
    def interrupted(args):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "cmd_demo", interrupted)
    with pytest.raises(SystemExit) as exc:
        cli.main(["demo"])
    assert exc.value.code == 130


def test_bad_config_exits_1(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("keybinds:\n  up: [nonsense]\n")

    with pytest.raises(SystemExit) as exc:
        cli.main(["demo", "--config", str(path)])

    assert exc.value.code == 1
    assert "Unknown key name" in capsys.readouterr().out


def test_debug_logging_goes_to_file(tmp_path, monkeypatch):
    log_path = tmp_path / "logs" / "debug.log"
    monkeypatch.setattr(cli, "get_log_path", lambda: log_path)
    package_logger = logging.getLogger("console_menu")
    level = package_logger.level

    cli._configure_logging(True)
    try:
        logging.getLogger("console_menu.menu").debug("hello from the menu")
        for handler in package_logger.handlers:
            handler.flush()
        assert "hello from the menu" in log_path.read_text()
    finally:
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(level)


def test_logging_off_without_debug(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "get_log_path", lambda: tmp_path / "debug.log")
    cli._configure_logging(False)
    assert not (tmp_path / "debug.log").exists()


class TestDemoMenu:
    @pytest.fixture
    def cfg(self, tmp_path):
        return config.load_config(tmp_path / "missing.yaml")

    def test_done_returns_values(self, cfg, make_terminal):
        terminal = make_terminal([ENTER] + [DOWN] * 6 + [ENTER])
        menu = cli.build_demo_menu(cfg, terminal=terminal)

        assert menu.display() == {
            "sound": False,
            "difficulty": "Normal",
            "volume": 5,
            "name": "Player",
            "color": None,
        }

    def test_pick_color(self, cfg, make_terminal):
        keys = [DOWN] * 4 + [ENTER] + [DOWN] * 3 + [ENTER] + [DOWN] * 2 + [ENTER]
        menu = cli.build_demo_menu(cfg, terminal=make_terminal(keys))

        result = menu.display()

        assert result["color"] == "Black"
        assert result["sound"] is True

    def test_escape_cancels(self, cfg, make_terminal):
        menu = cli.build_demo_menu(cfg, terminal=make_terminal([readchar.key.ESC]))
        assert menu.display() is CANCELLED

    def test_max_visible(self, cfg, make_terminal):
        menu = cli.build_demo_menu(cfg, terminal=make_terminal(), max_visible=3)
        assert menu.scroll_settings.max_visible == 3
