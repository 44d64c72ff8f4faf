"""
core/logging_config.py
Logging setup for hello-env.
Human-readable console output on stderr, optional log file in text or JSON lines.
"""

from __future__ import annotations
import json
import logging
import time

TEXT_FORMAT = "[%(asctime)s][%(name)s] %(message)s"
TEXT_DATEFMT = "%H:%M:%S"


# ── Structured JSON Formatter ─────────────────────────────────────────────

class StructuredFormatter(logging.Formatter):
    """
    JSON log formatter for machine-parseable logs.
    Fields: ts, level, logger, msg, extra, exception
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # Extra fields
        if hasattr(record, "extra_data"):
            entry["extra"] = record.extra_data

        # Include exception info
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


# ── Setup ─────────────────────────────────────────────────────────────────

def setup_logging(level: str = "WARNING", structured: bool = False,
                  log_file: str = ""):
    """
    Configure the root logger.
    Args:
        level: log level (DEBUG/INFO/WARNING/ERROR)
        structured: if True, the log file gets JSON lines instead of text
        log_file: path of a log file; empty means console only
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(numeric)

    # Remove existing handlers
    for h in root.handlers[:]:
        root.removeHandler(h)

    # Console handler (human-readable always, stderr keeps stdout clean for --shell)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT))
    console.setLevel(numeric)
    root.addHandler(console)

    if log_file:
        if structured:
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(
                "[%(asctime)s][%(name)s][%(levelname)s] %(message)s",
                datefmt=TEXT_DATEFMT,
            )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric)
        root.addHandler(file_handler)

    return root
