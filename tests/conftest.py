"""
tests/conftest.py
Shared fixtures for hello-env tests.
Provides an isolated working directory and a restorable process environment.
"""

import logging
import os

import pytest


@pytest.fixture
def tmp_workdir(tmp_path, monkeypatch):
    """Run the test inside an empty temporary directory with no settings file."""
    monkeypatch.chdir(tmp_path)
    for var in ("HELLO_ENV_CONFIG", "HELLO_ENV_LOG_LEVEL",
                "HELLO_ENV_LOG_FORMAT", "HELLO_ENV_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def restore_environ():
    """Snapshot os.environ and put it back after the test, whatever was loaded."""
    saved = dict(os.environ)
    yield os.environ
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def write_env(tmp_workdir):
    """Write an env file into the working directory and return its name."""
    def _write(name: str, text: str) -> str:
        with open(name, "w", encoding="utf-8") as f:
            f.write(text)
        return name
    return _write
