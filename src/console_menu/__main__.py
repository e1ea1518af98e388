"""Allow running as python -m console_menu."""

from .cli import main

main()
