"""Shared pytest fixtures for unit and integration tests."""

import os
import tempfile
import uuid

# Point the app at a throwaway SQLite file before anything imports splitter.config
_DB_DIR = tempfile.mkdtemp(prefix="splitter-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'splitter-test.db')}"
os.environ["ENVIRONMENT"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient

from splitter.config import settings
from splitter.database import AsyncSessionLocal, drop_db, init_db
from splitter.main import app


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def database():
    """Fresh schema per test."""
    await init_db()
    yield
    await drop_db()


@pytest.fixture
async def db_session(database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def async_client(database, api_base: str):
    """Async HTTP client bound to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=api_base, timeout=30.0) as client:
        yield client


@pytest.fixture
def unique_suffix() -> str:
    """Unique suffix for test data to avoid collisions."""
    return str(uuid.uuid4())[:8]


@pytest.fixture
async def created_bill(async_client: AsyncClient, unique_suffix: str) -> dict:
    """A bill with 10% discount, 5% service charge and 6% tax."""
    resp = await async_client.post(
        "/bills",
        json={
            "place_name": f"Mamak {unique_suffix}",
            "discount_percentage": "10",
            "service_charge_percentage": "5",
            "tax_percentage": "6",
            "pay_to_name": "Aisyah",
            "pay_to_method": "DuitNow",
            "pay_to_details": "012-3456789",
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
async def bill_with_people(async_client: AsyncClient, created_bill: dict) -> dict:
    """created_bill plus Alice and Bob; returns ids keyed by name."""
    bill_id = created_bill["id"]
    ids = {"bill_id": bill_id}
    for name in ("Alice", "Bob"):
        resp = await async_client.post(f"/bills/{bill_id}/people", json={"name": name})
        assert resp.status_code == 201, resp.text
        ids[name] = resp.json()["data"]["id"]
    return ids
