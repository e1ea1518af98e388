"""ANSI escape strings written by the menu and the line editor.

Cursor movement goes through ``rich.control.Control``; only the sequences
Rich has no helper for live here.
"""

CLEAR_LINE = "\x1b[0K"
REPORT_CURSOR_POSITION = "\x1b[6n"
