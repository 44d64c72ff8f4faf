"""Shared utilities for CLI modules."""
from __future__ import annotations

import os
import tomllib
from importlib import metadata

DIST_NAME = "hello-env"
PROG = "hello-env"


def get_version() -> str:
    """Installed distribution version, else pyproject.toml, else '0.1.0'."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        pass

    pyproject = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                             "pyproject.toml")
    if os.path.exists(pyproject):
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            return data.get("project", {}).get("version", "0.1.0")
        except (OSError, tomllib.TOMLDecodeError):
            pass
    return "0.1.0"
