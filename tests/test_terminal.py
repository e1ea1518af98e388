"""Tests for the Rich/readchar terminal."""

import io

import pytest
import readchar
from rich.console import Console

from console_menu import ansi
from console_menu.errors import TerminalError
from console_menu.terminal import ConsoleTerminal, TerminalPort


@pytest.fixture
def terminal(monkeypatch):
    monkeypatch.setenv("TERM", "xterm-256color")
    console = Console(file=io.StringIO(), force_terminal=True, width=40, height=10)
    return ConsoleTerminal(console)


def output(terminal):
    return terminal.console.file.getvalue()


def test_is_a_terminal_port(terminal):
    assert isinstance(terminal, TerminalPort)


def test_size(terminal):
    assert (terminal.width, terminal.height) == (40, 10)


def test_write_is_raw(terminal):
    terminal.write("[bold]x[/bold]\x1b[1m")
    terminal.write_line("y")
    assert output(terminal) == "[bold]x[/bold]\x1b[1my\n"


def test_set_cursor_position(terminal):
    terminal.set_cursor_position(2, 3)
    assert output(terminal) == "\x1b[4;3H"


def test_move_cursor_up(terminal):
    terminal.move_cursor(0, 2)
    assert output(terminal) == "\x1b[2A"


class TestCursorPosition:
    def test_parses_report(self, terminal, monkeypatch):
        reply = iter("\x1b[5;12R")
        monkeypatch.setattr(readchar, "readchar", lambda: next(reply))

        assert terminal.get_cursor_position() == (11, 4)
        assert output(terminal) == ansi.REPORT_CURSOR_POSITION

    def test_garbage_raises(self, terminal, monkeypatch):
        monkeypatch.setattr(readchar, "readchar", lambda: "x")
        with pytest.raises(TerminalError):
            terminal.get_cursor_position()


class TestReadKey:
    def test_echoes_printable_keys(self, terminal, monkeypatch):
        keys = iter(["a", readchar.key.UP])
        monkeypatch.setattr(readchar, "readkey", lambda: next(keys))

        assert terminal.read_key(echo=True) == "a"
        assert terminal.read_key(echo=True) == readchar.key.UP
        assert output(terminal) == "a"

    def test_no_echo_by_default(self, terminal, monkeypatch):
        monkeypatch.setattr(readchar, "readkey", lambda: "a")
        assert terminal.read_key() == "a"
        assert output(terminal) == ""


def test_read_line(terminal, monkeypatch):
    monkeypatch.setattr(terminal.console, "input", lambda *args, **kwargs: "typed")
    assert terminal.read_line() == "typed"
