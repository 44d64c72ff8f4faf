"""
core/env_loader.py
.env file loader — parses KEY=VALUE files and applies them to an environment.

Supports:
  - `KEY=value`, `export KEY=value`
  - one outer pair of "double" or 'single' quotes stripped from values
  - full-line `#` comments and trailing ` # comments`
  - skip-or-overwrite policy for variables that are already set

Usage:
    from core.env_loader import load_env, LoadRequest
    result = load_env(LoadRequest(files=[".env", ".env.local"]))

    from core.env_loader import load_dotenv
    load_dotenv()          # quiet one-liner for application start-up
"""

from __future__ import annotations

import logging
import os
import re
import shlex
from dataclasses import dataclass, field
from typing import Iterable, Iterator, MutableMapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_FILE = ".env"

# ── Line patterns ─────────────────────────────────────────────────────────

_BLANK_OR_COMMENT_RE = re.compile(r"^\s*(#|$)")
_EXPORT_RE = re.compile(r"^\s*export\s+([^=]+)=(.*)$")
_ASSIGN_RE = re.compile(r"^\s*([^=]+)=(.*)$")
_INLINE_COMMENT_RE = re.compile(r"\s+#")
_SHELL_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_QUOTES = ("'", '"')


# ── Data model ────────────────────────────────────────────────────────────

@dataclass
class EnvEntry:
    """One accepted assignment from an env file."""
    name: str
    value: str
    lineno: int = 0


@dataclass
class LoadRequest:
    files: list[str] = field(default_factory=lambda: [DEFAULT_FILE])
    list_names: bool = False
    verbose: bool = False
    overwrite: bool = False


@dataclass
class SourceFile:
    """A file that was read, with the variable names found in it."""
    path: str
    names: list[str] = field(default_factory=list)


@dataclass
class LoadResult:
    loaded: int = 0
    skipped: int = 0
    files: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    applied: dict[str, str] = field(default_factory=dict)
    sources: list[SourceFile] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


# ── Reporting hooks ───────────────────────────────────────────────────────

class NullReporter:
    """Receives loader progress events. Subclass and override what you need."""

    def file_started(self, path: str) -> None:
        pass

    def file_missing(self, path: str) -> None:
        pass

    def file_failed(self, path: str, error: Exception) -> None:
        pass

    def entry_loaded(self, entry: EnvEntry) -> None:
        pass

    def entry_skipped(self, entry: EnvEntry) -> None:
        pass


# ── Parsing ───────────────────────────────────────────────────────────────

def strip_inline_comment(line: str) -> str:
    """Drop a trailing ``# comment`` (a ``#`` preceded by whitespace).

    If the value right after the first ``=`` opens a quote that is closed
    later on the line, ``#`` characters inside that quoted span are kept:

    'A=b # c'       → 'A=b'
    'A="b # c"'     → 'A="b # c"'
    'A="b" # c'     → 'A="b"'
    'URL=http://x/#top' → unchanged
    """
    search_from = 0
    eq = line.find("=")
    if eq != -1 and eq + 1 < len(line) and line[eq + 1] in _QUOTES:
        close = line.find(line[eq + 1], eq + 2)
        if close != -1:
            search_from = close + 1
    m = _INLINE_COMMENT_RE.search(line, search_from)
    if m:
        return line[:m.start()]
    return line


def unquote(value: str) -> str:
    """Strip one outer pair of matching quotes; inner text is left as-is."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def parse_line(line: str, lineno: int = 0) -> Optional[EnvEntry]:
    """Parse a single env-file line.

    Returns None for blank lines, comments, lines that are not assignments,
    assignments whose name is empty after trimming, and assignments
    containing a NUL byte (no environment can hold one).
    """
    line = line.rstrip("\r\n")
    if _BLANK_OR_COMMENT_RE.match(line):
        return None

    line = strip_inline_comment(line)
    m = _EXPORT_RE.match(line) or _ASSIGN_RE.match(line)
    if not m:
        return None

    name = m.group(1).strip()
    if not name:
        return None
    value = unquote(m.group(2))
    if "\x00" in name or "\x00" in value:
        logger.debug("Line %d: NUL byte in assignment, skipped", lineno)
        return None
    return EnvEntry(name=name, value=value, lineno=lineno)


def iter_entries(lines: Iterable[str]) -> Iterator[EnvEntry]:
    """Yield parsed entries from an iterable of lines, in order."""
    for lineno, line in enumerate(lines, start=1):
        entry = parse_line(line, lineno)
        if entry is not None:
            yield entry


def iter_env_file(path: str) -> Iterator[EnvEntry]:
    """Lazily parse a UTF-8 file. Raises OSError / UnicodeDecodeError on read failure."""
    with open(path, encoding="utf-8") as f:
        yield from iter_entries(f)


# ── Loading ───────────────────────────────────────────────────────────────

def _apply(entry: EnvEntry, environ: MutableMapping[str, str],
           overwrite: bool, result: LoadResult,
           reporter: NullReporter) -> None:
    # An empty existing value counts as unset
    if environ.get(entry.name) and not overwrite:
        result.skipped += 1
        logger.debug("Skipping %s (already set)", entry.name)
        reporter.entry_skipped(entry)
        return

    environ[entry.name] = entry.value
    result.applied[entry.name] = entry.value
    result.loaded += 1
    logger.debug("Loaded %s", entry.name)
    reporter.entry_loaded(entry)


def load_env(request: LoadRequest,
             environ: Optional[MutableMapping[str, str]] = None,
             reporter: Optional[NullReporter] = None) -> LoadResult:
    """
    Load every file in *request* into *environ* (default: os.environ).

    Files are processed in order. Missing files are reported and skipped.
    A file that cannot be read is recorded in ``result.failed`` and the
    remaining files are still processed; lines applied before the failure
    stay applied.
    """
    if environ is None:
        environ = os.environ
    if reporter is None:
        reporter = NullReporter()

    result = LoadResult()
    for path in request.files:
        if not os.path.isfile(path):
            logger.info("Env file not found: %s", path)
            result.missing.append(path)
            reporter.file_missing(path)
            continue

        reporter.file_started(path)
        result.files.append(path)
        source = SourceFile(path=path)
        result.sources.append(source)

        try:
            for entry in iter_env_file(path):
                source.names.append(entry.name)
                _apply(entry, environ, request.overwrite, result, reporter)
        except (OSError, UnicodeDecodeError) as e:
            logger.info("Could not read %s: %s", path, e)
            result.failed[path] = str(e)
            reporter.file_failed(path, e)

    logger.info("Loaded %d variables (%d skipped) from %d file(s)",
                result.loaded, result.skipped, len(request.files),
                extra={"extra_data": {"files": request.files,
                                      "missing": result.missing,
                                      "failed": sorted(result.failed)}})
    return result


def load_dotenv(path: str = DEFAULT_FILE, override: bool = False,
                environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """
    Load a single .env file without any output.

    Returns True if the file existed and was read completely.
    """
    result = load_env(LoadRequest(files=[path], overwrite=override),
                      environ=environ)
    return bool(result.files) and result.ok


# ── Shell export ──────────────────────────────────────────────────────────

def to_shell_exports(values: dict[str, str]) -> list[str]:
    """Render ``export NAME=value`` lines for ``eval`` in a POSIX shell.

    Names a shell cannot export are left out.
    """
    lines = []
    for name, value in values.items():
        if not _SHELL_NAME_RE.match(name):
            logger.warning("Not exporting %r: not a valid shell variable name", name)
            continue
        lines.append(f"export {name}={shlex.quote(value)}")
    return lines
