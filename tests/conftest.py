"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncIterator, Generator, Sequence
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import MagicMock

import pytest
import strawberry
from psycopg import Connection  # type: ignore[import]

from txledger.ledger import LedgerConfig
from txledger.ledger.records import TransactionRecord, record_to_row


class FakeLedgerConnection:
    """In-memory stand-in for LedgerConnection."""

    def __init__(self, driver: "FakeLedgerDriver"):
        self._driver = driver

    async def fetch_transactions(self, account_number: str) -> list[dict[str, Any]]:
        self._driver.reads.append(account_number)
        if self._driver.query_error is not None:
            raise self._driver.query_error
        return [dict(row) for row in self._driver.rows if row["account_number"] == account_number]

    async def insert_transactions(self, records: Sequence[TransactionRecord]) -> None:
        if self._driver.query_error is not None:
            raise self._driver.query_error
        self._driver.inserts.append(list(records))
        self._driver.rows.extend(record_to_row(r) for r in records)


class FakeLedgerDriver:
    """Records connection opens/releases and the statements issued through them."""

    def __init__(self, config: LedgerConfig | None = None):
        self.config = config or LedgerConfig(
            ledger_name="test-ledger", server_url="postgresql://test@localhost"
        )
        self.rows: list[dict[str, Any]] = []
        self.inserts: list[list[TransactionRecord]] = []
        self.reads: list[str] = []
        self.opened = 0
        self.released = 0
        self.connect_error: Exception | None = None
        self.query_error: Exception | None = None
        self.disposed = False

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[FakeLedgerConnection]:
        self.config.validate()
        if self.connect_error is not None:
            raise self.connect_error
        self.opened += 1
        try:
            yield FakeLedgerConnection(self)
        finally:
            self.released += 1

    async def ping(self) -> tuple[bool, str | None]:
        return True, None

    async def dispose(self) -> None:
        self.disposed = True


@pytest.fixture
def fake_ledger() -> FakeLedgerDriver:
    """A fake ledger driver with no rows."""
    return FakeLedgerDriver()


@pytest.fixture
def mock_info(fake_ledger: FakeLedgerDriver):
    """Create a mock GraphQL info object whose context carries the fake ledger."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock(), "ledger": fake_ledger}
    return info


@pytest.fixture(scope="function")
def test_database(
    postgresql: Connection[Any],
) -> Generator[tuple[str, str], None, None]:
    """Return the server URL and database name of the running pytest-postgresql instance."""
    info = postgresql.info
    password = getattr(info, "password", None) or ""
    server_url = f"postgresql://{info.user}:{password}@{info.host}:{info.port}"
    yield server_url, info.dbname


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
