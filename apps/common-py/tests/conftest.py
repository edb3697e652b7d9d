"""Pytest configuration for common-py tests."""

import pytest

from user_common.services.user_store import InMemoryUserStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no external services")


@pytest.fixture
def store() -> InMemoryUserStore:
    """Create a store holding the seed users."""
    return InMemoryUserStore()
