"""
Tests for transaction mutation resolvers
"""

from datetime import datetime
from decimal import Decimal

import pytest

from txledger.graphql.resolvers.transaction import log_transaction, transfer
from txledger.graphql.types.transaction import Transaction, Transfer
from txledger.ledger import LedgerConfig, LedgerConfigurationError


class TestLogTransaction:
    """Tests for the log_transaction resolver."""

    @pytest.mark.asyncio
    async def test_deposit_is_recorded_as_5000_cents(self, mock_info, fake_ledger):
        result = await log_transaction(mock_info, "A1", 50.00, "deposit")

        assert isinstance(result, Transaction)
        assert result.account_number == "A1"
        assert result.description == "deposit"
        assert result.amount == 50.0

        assert len(fake_ledger.inserts) == 1
        [record] = fake_ledger.inserts[0]
        assert record.amount == Decimal("50.00")
        assert record.amount.scaleb(2) == 5000
        assert record.amount.as_tuple().exponent == -2

    @pytest.mark.asyncio
    async def test_returns_the_constructed_record(self, mock_info, fake_ledger):
        result = await log_transaction(mock_info, "A1", 12.345, "coffee")

        [record] = fake_ledger.inserts[0]
        assert result.amount == 12.34
        assert result.timestamp == record.timestamp
        assert result.timestamp.tzinfo is not None
        assert result.timestamp.microsecond % 1000 == 0

    @pytest.mark.asyncio
    async def test_negative_amount_is_accepted(self, mock_info, fake_ledger):
        result = await log_transaction(mock_info, "A1", -3.5, "fee")

        assert result.amount == -3.5
        assert fake_ledger.inserts[0][0].amount == Decimal("-3.50")

    @pytest.mark.asyncio
    async def test_connection_released(self, mock_info, fake_ledger):
        await log_transaction(mock_info, "A1", 1.0, "deposit")

        assert fake_ledger.opened == 1
        assert fake_ledger.released == 1

    @pytest.mark.asyncio
    async def test_insert_failure_propagates_and_releases(self, mock_info, fake_ledger):
        fake_ledger.query_error = RuntimeError("ledger unavailable")

        with pytest.raises(RuntimeError, match="ledger unavailable"):
            await log_transaction(mock_info, "A1", 1.0, "deposit")

        assert fake_ledger.released == 1
        assert fake_ledger.rows == []

    @pytest.mark.asyncio
    async def test_missing_configuration_fails_before_connecting(self, mock_info, fake_ledger):
        fake_ledger.config = LedgerConfig(ledger_name=None, server_url="postgresql://localhost")

        with pytest.raises(LedgerConfigurationError):
            await log_transaction(mock_info, "A1", 1.0, "deposit")

        assert fake_ledger.opened == 0
        assert fake_ledger.inserts == []


class TestTransfer:
    """Tests for the transfer resolver."""

    @pytest.mark.asyncio
    async def test_rent_transfer(self, mock_info, fake_ledger):
        result = await transfer(mock_info, "A1", "A2", 20.00, "rent")

        assert isinstance(result, Transfer)
        assert result.debit.account_number == "A1"
        assert result.debit.amount == -20.0
        assert result.credit.account_number == "A2"
        assert result.credit.amount == 20.0
        assert result.debit.description == result.credit.description == "rent"

        [debit, credit] = fake_ledger.inserts[0]
        assert debit.amount.scaleb(2) == -2000
        assert credit.amount.scaleb(2) == 2000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0.125, 12.345, 99.99, 1e6 + 0.005, -5.0])
    async def test_debit_is_exact_negation_of_credit(self, mock_info, fake_ledger, amount):
        result = await transfer(mock_info, "A1", "A2", amount, "move")

        [debit, credit] = fake_ledger.inserts[0]
        assert debit.amount == -credit.amount
        assert result.debit.amount == -result.credit.amount

    @pytest.mark.asyncio
    async def test_both_rows_in_one_statement_on_one_connection(self, mock_info, fake_ledger):
        await transfer(mock_info, "A1", "A2", 20.00, "rent")

        assert fake_ledger.opened == 1
        assert fake_ledger.released == 1
        assert len(fake_ledger.inserts) == 1
        assert len(fake_ledger.inserts[0]) == 2

    @pytest.mark.asyncio
    async def test_same_account_is_not_rejected(self, mock_info, fake_ledger):
        result = await transfer(mock_info, "A1", "A1", 5.0, "self")

        assert result.debit.account_number == result.credit.account_number == "A1"
        assert len(fake_ledger.rows) == 2

    @pytest.mark.asyncio
    async def test_timestamps_are_independent_ledger_timestamps(self, mock_info, fake_ledger):
        result = await transfer(mock_info, "A1", "A2", 5.0, "rent")

        for tx in (result.debit, result.credit):
            assert isinstance(tx.timestamp, datetime)
            assert tx.timestamp.tzinfo is not None
        assert result.debit.timestamp <= result.credit.timestamp

    @pytest.mark.asyncio
    async def test_failure_writes_nothing_and_releases(self, mock_info, fake_ledger):
        fake_ledger.query_error = RuntimeError("conflict")

        with pytest.raises(RuntimeError, match="conflict"):
            await transfer(mock_info, "A1", "A2", 5.0, "rent")

        assert fake_ledger.rows == []
        assert fake_ledger.released == 1
