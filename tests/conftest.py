"""Shared fixtures for github-to-gitlab tests."""

from __future__ import annotations

import pytest

from logging_utils import Logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Each test starts without a session log or registered secrets."""
    yield
    Logger.close_session_log()
    Logger._log_path = None
    Logger._secrets.clear()
