"""Shared fixtures for calculagraph tests."""

import pytest

from calculagraph.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings around each test so env changes do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
