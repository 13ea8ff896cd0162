"""Shared pytest fixtures."""

import pytest

from aicommit import output
from aicommit.config import Config


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """No ANSI codes, whatever NO_COLOR / FORCE_COLOR the runner has."""
    monkeypatch.setattr(output, "COLORS_ENABLED", False)
    monkeypatch.setattr(output, "STDERR_COLORS_ENABLED", False)


@pytest.fixture
def config():
    return Config(url="http://localhost:11434/api/chat", model="llama3.1")
