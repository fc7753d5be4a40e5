"""
Ledger connection management

Every resolver call opens its own connection and releases it before returning
or raising. Connections are never pooled: the engine uses ``NullPool`` so a
released connection is closed at the server as well.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from ..logging import get_logger
from .exceptions import LedgerConfigurationError
from .records import TransactionRecord, record_to_row
from .tables import target_metadata, transactions_table

if TYPE_CHECKING:
    from sqlalchemy.engine import RowMapping

    from ..config import Settings

logger = get_logger(__name__)


@dataclass
class LedgerConfig:
    """Where the ledger lives."""

    ledger_name: str | None
    server_url: str
    echo: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> LedgerConfig:
        return cls(
            ledger_name=settings.ledger_name,
            server_url=settings.ledger_server_url,
            echo=settings.sql_echo,
        )

    def validate(self) -> None:
        """Raise LedgerConfigurationError if the ledger name is unset or blank."""
        if not self.ledger_name or not self.ledger_name.strip():
            raise LedgerConfigurationError("LEDGER_NAME environment variable is required")

    def get_ledger_url(self) -> URL:
        """Build the async driver URL for the configured ledger."""
        self.validate()
        url = make_url(self.server_url)
        if url.drivername in ("postgresql", "postgres"):
            url = url.set(drivername="postgresql+asyncpg")
        return url.set(database=self.ledger_name)


class LedgerConnection:
    """The two statements the API issues against an open ledger connection."""

    def __init__(self, connection: AsyncConnection):
        self._connection = connection

    async def fetch_transactions(self, account_number: str) -> Sequence[RowMapping]:
        """Select every row recorded against an account, in ledger order."""
        stmt = select(
            transactions_table.c.account_number,
            transactions_table.c.timestamp,
            transactions_table.c.amount,
            transactions_table.c.description,
        ).where(transactions_table.c.account_number == account_number)

        result = await self._connection.execute(stmt)
        return result.mappings().all()

    async def insert_transactions(self, records: Sequence[TransactionRecord]) -> None:
        """Append all records with a single INSERT statement."""
        if not records:
            raise ValueError("At least one transaction record is required")

        stmt = insert(transactions_table).values([record_to_row(r) for r in records])
        await self._connection.execute(stmt)


class LedgerDriver:
    """Creates per-operation ledger connections from an explicit LedgerConfig."""

    def __init__(self, config: LedgerConfig):
        self.config = config
        self._engine: AsyncEngine | None = None

    def get_engine(self) -> AsyncEngine:
        """Get the ledger engine, creating it on first use.

        Creating the engine does not connect; the first connection is made by
        ``connection()``.
        """
        if self._engine is None:
            url = self.config.get_ledger_url()
            self._engine = create_async_engine(url, poolclass=NullPool, echo=self.config.echo)
            logger.info(
                "Ledger engine created",
                ledger=self.config.ledger_name,
                url=url.render_as_string(hide_password=True),
            )
        return self._engine

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[LedgerConnection]:
        """Open a ledger connection scoped to one transaction.

        The transaction commits when the block exits normally and rolls back
        when it raises. The connection is closed on every exit path.

        Raises:
            LedgerConfigurationError: Before any network activity, if the
                ledger name is not configured
        """
        self.config.validate()
        engine = self.get_engine()

        conn = await engine.connect()
        try:
            async with conn.begin():
                yield LedgerConnection(conn)
        finally:
            await conn.close()

    async def ping(self) -> tuple[bool, str | None]:
        """
        Check that the ledger answers a trivial query.

        Returns:
            tuple: (success: bool, error_message: str | None)
        """
        try:
            engine = self.get_engine()
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True, None
        except LedgerConfigurationError as e:
            return False, str(e)
        except Exception as e:
            error_str = str(e)
            if "does not exist" in error_str and "database" in error_str:
                return False, (
                    f"Ledger '{self.config.ledger_name}' does not exist on the ledger server: "
                    f"{error_str}\nCreate the database, then run 'txledger ledger init'."
                )
            if "Connection refused" in error_str or "could not connect" in error_str:
                return False, (
                    f"Cannot connect to ledger server: {error_str}\n"
                    f"Please check that the ledger server is running and reachable."
                )
            return False, f"Ledger connection error ({type(e).__name__}): {error_str}"

    async def create_schema(self) -> None:
        """Create the transactions table if it does not exist yet."""
        engine = self.get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(target_metadata.create_all)
        logger.info("Ledger schema ensured", ledger=self.config.ledger_name)

    async def dispose(self) -> None:
        """Dispose of the engine, if one was created."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None


def create_ledger_driver() -> LedgerDriver:
    """Build a driver from the global settings."""
    from ..config import settings

    return LedgerDriver(LedgerConfig.from_settings(settings))
