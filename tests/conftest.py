"""
pytest Fixtures for Books API Tests

Every test gets its own application instance. The catalog is created by
the app's lifespan, which TestClient runs when used as a context manager,
so each test starts from the three seed books and ids begin at 4.
"""

from collections.abc import Generator
from datetime import date

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from book_catalog.config import Settings
from book_catalog.dependencies import get_catalog
from book_catalog.main import create_app
from book_catalog.services.catalog import BookCatalog

# =============================================================================
# APPLICATION FIXTURES
# =============================================================================


@pytest.fixture
def app() -> FastAPI:
    """Application configured for production (error details hidden)."""
    return create_app(Settings(environment="production"))


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with the lifespan running (catalog seeded)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def catalog(client: TestClient) -> BookCatalog:
    """The catalog owned by the app behind ``client``."""
    return client.app.state.catalog


@pytest.fixture
def current_year() -> int:
    return date.today().year


# =============================================================================
# FAILURE FIXTURES
# =============================================================================


class ExplodingCatalog:
    """Stand-in catalog whose every operation fails unexpectedly."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RuntimeError("catalog exploded")

        return fail


def _broken_client(environment: str) -> Generator[TestClient, None, None]:
    app = create_app(Settings(environment=environment))
    app.dependency_overrides[get_catalog] = lambda: ExplodingCatalog()
    # Let the catch-all handler's response through instead of re-raising
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client() -> Generator[TestClient, None, None]:
    """Production app whose catalog raises on every call."""
    yield from _broken_client("production")


@pytest.fixture
def broken_dev_client() -> Generator[TestClient, None, None]:
    """Development app whose catalog raises on every call."""
    yield from _broken_client("development")


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_book(client: TestClient) -> dict:
    """Create a book through the API and return its JSON."""
    response = client.post(
        "/books",
        json={"title": "Dune", "author": "Frank Herbert", "year": 1965},
    )
    assert response.status_code == 201
    return response.json()["data"]
