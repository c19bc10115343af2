"""Global test fixtures for the tresponse test suite."""

from __future__ import annotations

import os

import pytest

from tresponse.core.config import clear_config_cache
from tresponse.core.context import response_context


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all TRESPONSE_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("TRESPONSE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_config(clean_env):
    """Every test starts from default settings."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture(autouse=True)
def fresh_response(reset_config):
    """Bind a fresh ResponseState for each test and yield it."""
    with response_context() as state:
        yield state

