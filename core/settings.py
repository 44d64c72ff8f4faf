"""
core/settings.py
Tool configuration — optional YAML file plus HELLO_ENV_* environment overrides.

Precedence (lowest first):
  1. .hello-env.yaml in the working directory, or the file named by HELLO_ENV_CONFIG
  2. HELLO_ENV_LOG_LEVEL / HELLO_ENV_LOG_FORMAT / HELLO_ENV_LOG_FILE
  3. command-line flags (applied by the CLI)

Example .hello-env.yaml:
    files: [.env, .env.local]
    overwrite: false
    verbose: true
    log_level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HELLO_ENV_CONFIG"
DEFAULT_CONFIG_PATH = ".hello-env.yaml"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = {"text", "json"}

_BOOL_KEYS = {"overwrite", "verbose", "list"}
_STR_KEYS = {"log_level", "log_format", "log_file"}
_KNOWN_KEYS = _BOOL_KEYS | _STR_KEYS | {"files"}

_ENV_OVERRIDES = {
    "HELLO_ENV_LOG_LEVEL": "log_level",
    "HELLO_ENV_LOG_FORMAT": "log_format",
    "HELLO_ENV_LOG_FILE": "log_file",
}


class ConfigError(ValueError):
    """Raised when the settings file or overrides are invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass
class Settings:
    files: list[str] = field(default_factory=list)
    overwrite: bool = False
    verbose: bool = False
    list_names: bool = False
    log_level: str = "WARNING"
    log_format: str = "text"
    log_file: str = ""


def config_path(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the settings file to read, or None when there is none."""
    environ = os.environ if environ is None else environ
    explicit = environ.get(CONFIG_ENV_VAR, "")
    if explicit:
        return explicit
    if os.path.isfile(DEFAULT_CONFIG_PATH):
        return DEFAULT_CONFIG_PATH
    return None


def _read_yaml(path: str) -> tuple[Optional[dict], list[str]]:
    if not os.path.isfile(path):
        return None, ["Config file not found: " + path]
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return None, [f"YAML parse error in {path}: {e}"]
    except OSError as e:
        return None, [f"Cannot read {path}: {e}"]

    if data is None:
        return {}, []
    if not isinstance(data, dict):
        return None, [f"Config {path} must be a mapping, got {type(data).__name__}"]
    return data, []


def _check_values(data: Mapping, origin: str) -> list[str]:
    errors: list[str] = []
    for key in sorted(set(data) - _KNOWN_KEYS):
        errors.append(f"{origin}: unknown key '{key}'")

    files = data.get("files")
    if files is not None:
        if not isinstance(files, list) or not all(isinstance(p, str) and p for p in files):
            errors.append(f"{origin}: 'files' must be a list of paths")

    for key in sorted(_BOOL_KEYS & set(data)):
        if not isinstance(data[key], bool):
            errors.append(f"{origin}: '{key}' must be true or false")

    for key in sorted(_STR_KEYS & set(data)):
        if not isinstance(data[key], str):
            errors.append(f"{origin}: '{key}' must be a string")

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() not in VALID_LOG_LEVELS:
        errors.append(f"{origin}: invalid log_level '{level}' "
                      f"(expected one of {', '.join(sorted(VALID_LOG_LEVELS))})")

    fmt = data.get("log_format")
    if isinstance(fmt, str) and fmt not in VALID_LOG_FORMATS:
        errors.append(f"{origin}: invalid log_format '{fmt}' (expected text or json)")
    return errors


def validate_config(path: str) -> tuple[dict, list[str]]:
    """Read and validate a settings file.

    Returns (data, errors); data is empty whenever errors is non-empty.
    """
    data, errors = _read_yaml(path)
    if errors:
        return {}, errors
    errors = _check_values(data, path)
    return ({} if errors else data), errors


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the settings file and environment overrides.

    Raises ConfigError listing every problem found.
    """
    environ = os.environ if environ is None else environ
    data: dict = {}
    errors: list[str] = []

    path = config_path(environ)
    if path:
        raw, errors = validate_config(path)
        data.update(raw)
        logger.debug("Settings file: %s", path)

    overrides = {key: environ[var] for var, key in _ENV_OVERRIDES.items()
                 if environ.get(var)}
    errors.extend(_check_values(overrides, "environment"))
    data.update(overrides)

    if errors:
        raise ConfigError(errors)

    return Settings(
        files=list(data.get("files") or []),
        overwrite=data.get("overwrite", False),
        verbose=data.get("verbose", False),
        list_names=data.get("list", False),
        log_level=data.get("log_level", "WARNING").upper(),
        log_format=data.get("log_format", "text"),
        log_file=data.get("log_file", ""),
    )
