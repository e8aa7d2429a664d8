"""Shared test fixtures and configuration.

Keeps the application log out of the real user log directory and provides
fakes for the terminal-facing collaborators.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log records to *tmp_path* and reset the logger singleton."""
    import pomodoro_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("pomodoro_cli").handlers.clear()
    with patch("pomodoro_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        yield
    logging.getLogger("pomodoro_cli").handlers.clear()
    logger_mod._logger = None


@pytest.fixture()
def string_console(monkeypatch) -> Console:
    """A terminal-like Console writing to a StringIO buffer."""
    monkeypatch.setenv("TERM", "xterm-256color")
    return Console(
        file=StringIO(),
        force_terminal=True,
        color_system=None,
        width=20,
        height=6,
    )


class FakeNow:
    """Controllable wall clock for session tests."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 5, 6, 9, 0)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture()
def fake_now() -> FakeNow:
    return FakeNow()
