#!/usr/bin/env python3
"""
main.py  —  hello-env CLI
Usage:
  hello-env                        # load .env from the current directory
  hello-env .env.dev               # load .env.dev
  hello-env .env .env.dev          # load several files, in order
  hello-env -o -v .env             # overwrite existing values, show each variable
  hello-env -l .env                # list variable names after loading
  eval "$(hello-env -s .env)"      # export into the calling shell
  hello-env .env -- python app.py  # run a command with the loaded environment
"""

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from core.theme import theme as _theme

DESCRIPTION = "Load environment variables from .env files."

EPILOG = """\
examples:
  hello-env                        load from .env in the current directory
  hello-env .env.dev               load from .env.dev
  hello-env .env .env.dev          load from multiple files
  eval "$(hello-env -s .env)"      export the variables into the current shell
  hello-env .env -- make test      run a command with the variables set

note: a program cannot change the environment of the shell that started it.
      Use --shell with eval, or pass the command to run after --.

configuration:
  .hello-env.yaml (or the file named by HELLO_ENV_CONFIG) may set files,
  overwrite, verbose, list, log_level, log_format and log_file.
  HELLO_ENV_LOG_LEVEL, HELLO_ENV_LOG_FORMAT and HELLO_ENV_LOG_FILE override it.
"""

HELP_FLAGS = ("-h", "--help")

FLAGS = [
    (HELP_FLAGS, "Show this help message"),
    (("-l", "--list"), "List variables after loading (values hidden)"),
    (("-v", "--verbose"), "Show variables being loaded with their values"),
    (("-o", "--overwrite"), "Overwrite existing environment variables"),
    (("-s", "--shell"), "Print export statements for eval; progress goes to stderr"),
    (("-V", "--version"), "Show version and exit"),
]
KNOWN_FLAGS = {opt for opts, _ in FLAGS for opt in opts}


class UsageError(Exception):
    """Bad command-line arguments."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="hello-env",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    for opts, help_text in FLAGS:
        parser.add_argument(*opts, action="store_true", help=help_text)
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="Env files to load (default: .env)")
    return parser


def split_command(argv: list[str]) -> tuple[list[str], list[str] | None]:
    """Split ``[opts/files] -- command ...`` at the first ``--``."""
    if "--" not in argv:
        return argv, None
    i = argv.index("--")
    return argv[:i], argv[i + 1:]


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    console = Console(stderr=True, highlight=False, soft_wrap=True)
    console.print(f"{_theme.markup(_theme.error, 'Error:')} {escape(message)}")
    parser.print_help(sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    argv, command = split_command(argv)
    parser = build_parser()

    # Help wins over everything else, unknown flags included
    if any(a in HELP_FLAGS for a in argv):
        parser.print_help()
        return 0

    # Exact flags only: no abbreviations, no bundled short flags, no "-1" as a path
    unknown = [a for a in argv if a.startswith("-") and a != "-" and a not in KNOWN_FLAGS]
    if unknown:
        return _usage_error(parser, f"Unknown option {unknown[0]}")

    try:
        args, extras = parser.parse_known_intermixed_args(argv)
    except UsageError as e:
        return _usage_error(parser, str(e))
    if extras:
        return _usage_error(parser, f"Unknown option {extras[0]}")
    if command is not None and not command:
        return _usage_error(parser, "No command given after --")

    from core.settings import ConfigError, load_settings
    try:
        settings = load_settings()
    except ConfigError as e:
        console = Console(stderr=True, highlight=False, soft_wrap=True)
        for err in e.errors:
            console.print(f"{_theme.markup(_theme.error, 'Config error:')} {escape(err)}")
        return 1

    from core.logging_config import setup_logging
    setup_logging(settings.log_level,
                  structured=settings.log_format == "json",
                  log_file=settings.log_file)

    from cli import dispatch_command
    return dispatch_command(args, settings, command=command)


if __name__ == "__main__":
    sys.exit(main())
