"""Shared pytest fixtures."""

import pytest

from ai_notes.config import set_config


@pytest.fixture
def anyio_backend():
    """Run anyio tests on asyncio only."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_config():
    """Start every test from a freshly loaded configuration."""
    set_config(None)
    yield
    set_config(None)
