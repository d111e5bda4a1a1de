"""
Shared test configuration and fixtures for dnsprove tests.

Keeps the process environment from leaking DNSPROVE_* settings into tests and
provides ready-made settings objects.
"""

import os

import pytest

from sg.govtech.dnsprove.config import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove DNSPROVE_* and logging variables so defaults apply."""
    for key in list(os.environ):
        if key.startswith("DNSPROVE_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("LOGGING_CONFIG_FILE", raising=False)


@pytest.fixture
def settings() -> Settings:
    """Default settings: DoH resolver, openatts records."""
    return Settings()


@pytest.fixture
def system_settings() -> Settings:
    return Settings(resolver="system")


@pytest.fixture
def worldatts_settings() -> Settings:
    return Settings(record_type="worldatts")
