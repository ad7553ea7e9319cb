"""
Pytest configuration and fixtures for the Pixel Beacon tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from beacon.config import Settings  # noqa: E402
from beacon.dependencies import get_view_store  # noqa: E402
from beacon.main import create_app  # noqa: E402
from beacon.services.view_store import ViewStore  # noqa: E402
from utils.fixtures import CLIENT_ADDRESS  # noqa: E402
from utils.mocks import MockViewStore  # noqa: E402


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file per test"""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'beacon_test.db'}",
        create_tables_on_startup=True,
        log_json=False,
        debug=False,
        environment="test",
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings, configure_logging=False)


@pytest.fixture
async def running_app(app: FastAPI) -> AsyncGenerator[FastAPI, None]:
    """Run the application lifespan so the engine and view store exist"""
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
def view_store(running_app: FastAPI) -> ViewStore:
    return running_app.state.view_store


def make_client(app: FastAPI) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app, client=CLIENT_ADDRESS)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest.fixture
async def client(running_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async client talking to the app backed by a real SQLite store"""
    async with make_client(running_app) as async_client:
        yield async_client


@pytest.fixture
def mock_store() -> MockViewStore:
    return MockViewStore()


@pytest.fixture
async def mock_client(app: FastAPI, mock_store: MockViewStore) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async client whose handlers use the in-memory mock store (no lifespan)"""
    app.dependency_overrides[get_view_store] = lambda: mock_store
    async with make_client(app) as async_client:
        yield async_client
    app.dependency_overrides.clear()
