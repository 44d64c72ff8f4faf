"""Version output for -V/--version."""
from __future__ import annotations

import sys

from rich.console import Console

from core.theme import theme as _theme


def cmd_version() -> int:
    """Show the tool version and the Python it runs on."""
    from cli.helpers import PROG, get_version

    py_version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    console = Console(highlight=False, soft_wrap=True)
    console.print(f"{_theme.markup(_theme.heading, PROG)} {get_version()} "
                  f"{_theme.markup(_theme.muted, f'(Python {py_version})')}")
    return 0
