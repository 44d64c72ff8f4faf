"""
core/theme.py
Semantic color theme for the hello-env console output.

Supports:
  - NO_COLOR=1 → disable all colors
  - HELLO_ENV_THEME=minimal → alternative theme

Usage:
    from core.theme import theme
    console.print(f"[{theme.warning}]Warning[/{theme.warning}]")
"""

from __future__ import annotations

import os

_STYLES = ("accent", "success", "warning", "error", "muted", "info", "heading")


class Theme:
    """Semantic color definitions for consistent CLI appearance."""

    def __init__(self, environ=None):
        environ = os.environ if environ is None else environ
        self._no_color = bool(environ.get("NO_COLOR"))
        self._theme_name = environ.get("HELLO_ENV_THEME", "default")

        if self._no_color:
            self._apply_no_color()
        elif self._theme_name == "minimal":
            self._apply_minimal()
        else:
            self._apply_default()

    def _apply_default(self):
        self.accent = "bold cyan"
        self.success = "green"
        self.warning = "yellow"
        self.error = "bold red"
        self.muted = "dim"
        self.info = "cyan"
        self.heading = "bold"

    def _apply_minimal(self):
        """Minimal theme — fewer colors, cleaner look."""
        self.accent = "bold"
        self.success = ""
        self.warning = "yellow"
        self.error = "red"
        self.muted = "dim"
        self.info = ""
        self.heading = "bold"

    def _apply_no_color(self):
        for attr in _STYLES:
            setattr(self, attr, "")

    def markup(self, style: str, text: str) -> str:
        """Wrap already-escaped *text* in a rich style tag (no-op for empty styles)."""
        if not style:
            return text
        return f"[{style}]{text}[/{style}]"


# Singleton instance
theme = Theme()
