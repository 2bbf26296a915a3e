"""
ScanGate — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (settings, fake gateway, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings: Settings built without reading the environment
    ├── sample_records: Three records in a fixed order
    ├── fake_gateway: In-memory TableGateway double
    ├── test_app: create_app() wired to the fake gateway
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any scangate import: scangate.main builds a module-level app
# whose Settings come from the environment. Dummy credentials keep botocore
# from searching the host for real ones.
os.environ["TABLE_NAME"] = "test-table"
os.environ["AWS_REGION"] = "ap-south-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

from scangate.config import Settings  # noqa: E402
from scangate.exceptions import ScanFailedError  # noqa: E402
from scangate.main import create_app  # noqa: E402
from scangate.services.table_gateway import TableGateway  # noqa: E402


class FakeTableGateway(TableGateway):
    """
    In-memory TableGateway.

    Returns `result` from scan_table, or raises `error` when set.
    Records every table name it was asked to scan.
    """

    def __init__(
        self,
        result: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ):
        self.result = result if result is not None else {"Items": [], "Count": 0, "ScannedCount": 0}
        self.error = error
        self.calls: List[str] = []
        self.connected = False
        self.closed = False

    async def scan_table(self, table_name: str) -> Dict[str, Any]:
        self.calls.append(table_name)
        if self.error is not None:
            raise self.error
        return self.result

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    """Settings for the tests; explicit values, not environment."""
    return Settings(
        aws_region="ap-south-1",
        table_name="test-table",
        log_level="WARNING",
        _env_file=None,
    )


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Three records as the store returns them, in store order."""
    return [
        {"id": 3, "name": "gamma", "active": True},
        {"id": 1, "name": "alpha", "tags": ["a", "b"]},
        {"id": 2, "name": "beta", "price": 9.5, "meta": {"nested": None}},
    ]


@pytest.fixture
def fake_gateway(sample_records) -> FakeTableGateway:
    return FakeTableGateway(
        result={"Items": sample_records, "Count": 3, "ScannedCount": 3}
    )


@pytest.fixture
def failing_gateway() -> FakeTableGateway:
    return FakeTableGateway(
        error=ScanFailedError(
            table_name="test-table",
            message="DynamoDB rejected scan: Requested resource not found",
            context={"error_code": "ResourceNotFoundException"},
        )
    )


@pytest.fixture
def test_app(test_settings, fake_gateway):
    return create_app(settings=test_settings, gateway=fake_gateway)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app wired to `fake_gateway`.

    Usage:
        async def test_scan(test_client):
            response = await test_client.get("/testdb")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def failing_client(test_settings, failing_gateway):
    """HTTPX AsyncClient talking to an app whose gateway always fails."""
    app = create_app(settings=test_settings, gateway=failing_gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
