"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from user_api.config import Settings
from user_api.main import create_app
from user_common.services.user_store import InMemoryUserStore

TOKEN = "Bearer mysecrettoken"


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to the defaults, independent of the environment."""
    return Settings(auth_token=TOKEN, https_redirect=False, body_log_limit=4096)


@pytest.fixture
def store() -> InMemoryUserStore:
    """Create a store holding the seed users."""
    return InMemoryUserStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryUserStore) -> FastAPI:
    """Create an application backed by the test store."""
    return create_app(settings, store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header accepted by /users routes."""
    return {"Authorization": TOKEN}
