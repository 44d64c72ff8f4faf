"""Load command — read env files into the environment and report what happened."""
from __future__ import annotations

import logging
import os
import subprocess
import sys

from rich.console import Console
from rich.markup import escape

from core.env_loader import (
    EnvEntry, LoadRequest, LoadResult, NullReporter, load_env, to_shell_exports,
)
from core.theme import theme as _theme

logger = logging.getLogger(__name__)


class ConsoleReporter(NullReporter):
    """Prints loader progress; per-variable lines only when verbose."""

    def __init__(self, console: Console, verbose: bool = False):
        self.console = console
        self.verbose = verbose

    def file_started(self, path: str) -> None:
        self.console.print(f"Loading variables from {escape(path)}...")

    def file_missing(self, path: str) -> None:
        self.console.print(f"{_theme.markup(_theme.warning, 'Warning:')} "
                           f"File not found: {escape(path)}")

    def file_failed(self, path: str, error: Exception) -> None:
        self.console.print(f"{_theme.markup(_theme.error, 'Error:')} "
                           f"Could not read {escape(path)}: {escape(str(error))}")

    def entry_loaded(self, entry: EnvEntry) -> None:
        if self.verbose:
            self.console.print(f"  {_theme.markup(_theme.success, 'Loaded')} "
                               f"{escape(entry.name)} = {escape(entry.value)}")

    def entry_skipped(self, entry: EnvEntry) -> None:
        if self.verbose:
            self.console.print(f"  {_theme.markup(_theme.muted, 'Skipping')} "
                               f"{escape(entry.name)} (already set)")


def print_summary(console: Console, request: LoadRequest, result: LoadResult):
    console.print(f"Loaded {result.loaded} variables from {len(request.files)} file(s).")
    if result.skipped > 0:
        console.print(f"Skipped {result.skipped} existing variables. "
                      f"Use --overwrite to replace them.")


def print_listing(console: Console, result: LoadResult):
    """Variable names per file, never values."""
    console.print(_theme.markup(_theme.heading, "Environment variables loaded:"))
    for source in result.sources:
        console.print(f"From {escape(source.path)}:")
        for name in dict.fromkeys(source.names):
            console.print(f"  {escape(name)}")


def run_command(command: list[str], console: Console) -> int:
    """Run *command* with the current (loaded) environment and return its status."""
    logger.debug("Running command: %s", command)
    try:
        return subprocess.run(command, env=os.environ).returncode
    except OSError as e:
        console.print(f"{_theme.markup(_theme.error, 'Error:')} "
                      f"Cannot run {escape(command[0])}: {escape(str(e))}")
        return 127


def cmd_load(request: LoadRequest, shell: bool = False,
             command: list[str] | None = None) -> int:
    """
    Load the requested files into os.environ.

    shell:   print `export` lines for the loaded variables on stdout
    command: run this command afterwards with the loaded environment
    In both modes progress output goes to stderr.
    """
    console = Console(stderr=shell or bool(command), highlight=False,
                      soft_wrap=True, emoji=False)
    reporter = ConsoleReporter(console, verbose=request.verbose)

    result = load_env(request, environ=os.environ, reporter=reporter)

    print_summary(console, request, result)
    if request.list_names:
        print_listing(console, result)

    if shell:
        for line in to_shell_exports(result.applied):
            sys.stdout.write(line + "\n")
        sys.stdout.flush()

    if not result.ok:
        return 1
    if command:
        return run_command(command, console)
    return 0
