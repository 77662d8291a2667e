"""Shared fixtures for the paramguard test suite."""

import pytest

from paramguard.security.exposure import reset_default_config


@pytest.fixture(autouse=True)
def _clean_default_config():
    """Every test starts and ends with the built-in exposure default."""
    reset_default_config()
    yield
    reset_default_config()
