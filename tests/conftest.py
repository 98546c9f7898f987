from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest

# Register fixture plugins from tests/fixtures/
pytest_plugins = [
    "tests.fixtures.cases",
    "tests.fixtures.hosts",
]


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for the test environment.

    Runs for every test so log output goes to stderr at WARNING level and
    never mixes with test stdout.
    """
    from requisite.logging import clear_context, configure_logging

    configure_logging(level=logging.WARNING)
    yield
    clear_context()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory so tests that
    chdir() do not leak into each other.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    """Remove REQUISITE_ environment variables and isolate the home dir."""
    for key in list(os.environ):
        if key.startswith("REQUISITE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(temp_dir / "home"))


@pytest.fixture
def sample_config_yaml() -> str:
    """Project config overriding one value in every section."""
    return """\
tokens:
  ceiling: 1000
permissions:
  settings_action: app_settings
trace:
  log_transitions: false
"""
