"""Shared fixtures for the test suite."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.infrastructure.config import Settings
from app.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at a fresh in-memory database."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        create_tables_on_startup=True,
        debug=False,
        log_level="WARNING",
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Create an application bound to the test settings."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
