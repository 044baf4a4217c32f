"""
Pytest configuration and fixtures for bootwrap tests.
"""

import os
import sys
from pathlib import Path

import pytest
import structlog

SRC_DIR = Path(__file__).parent.parent / "src"


@pytest.fixture(autouse=True)
def reset_structlog():
    """
    Restore structlog defaults after every test.

    Tests that call setup_logging() would otherwise leak their renderer and
    output stream into the next test.
    """
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def python_child():
    """Build argv for a Python child process running ``code``."""

    def _build(code: str) -> list:
        return [sys.executable, "-c", code]

    return _build


@pytest.fixture
def cli_env():
    """Environment for running ``python -m bootwrap`` from the source tree."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    env["BOOTWRAP_LOG_FORMAT"] = "json"
    return env
