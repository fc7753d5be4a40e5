"""
Ledger-native representation of a transaction record.

Amounts are fixed-point decimals with exponent -2 (integer cents). Timestamps
are timezone-aware and carry millisecond precision, keeping the local UTC
offset they were created with.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from .exceptions import LedgerRowError

CENTS = Decimal("0.01")

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class TransactionRecord:
    """A single immutable ledger row."""

    account_number: str
    timestamp: datetime
    amount: Decimal
    description: str


def encode_amount(amount: float) -> Decimal:
    """Convert a float of whole currency units into a decimal with exponent -2.

    Uses ``round(amount * 100)`` on the float product, so ties round half to
    even and representation error decides near-ties: 12.345 -> 12.34,
    0.125 -> 0.12, 50.0 -> 50.00.
    """
    return Decimal(round(amount * 100)).scaleb(-2)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def current_timestamp(clock: Clock | None = None) -> datetime:
    """Return the current local time with its UTC offset, truncated to milliseconds."""
    now = (clock or _local_now)()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def new_transaction(
    account_number: str,
    amount: Decimal,
    description: str,
    clock: Clock | None = None,
) -> TransactionRecord:
    """Build a transaction stamped with the current instant."""
    return TransactionRecord(
        account_number=account_number,
        timestamp=current_timestamp(clock),
        amount=amount,
        description=description,
    )


def _field(row: Mapping[str, Any], name: str, expected: type | tuple[type, ...]) -> Any:
    try:
        value = row[name]
    except KeyError:
        raise LedgerRowError(name, "is missing") from None

    # bool is an int subclass but never a valid ledger amount
    if value is None or isinstance(value, bool) or not isinstance(value, expected):
        raise LedgerRowError(name, f"has unexpected type {type(value).__name__}")
    return value


def record_from_row(row: Mapping[str, Any]) -> TransactionRecord:
    """Map a ledger row onto a TransactionRecord.

    Raises:
        LedgerRowError: If a field is absent, null or of the wrong type
    """
    timestamp = _field(row, "timestamp", datetime)
    account_number = _field(row, "account_number", str)
    description = _field(row, "description", str)
    amount = _field(row, "amount", (Decimal, int))

    return TransactionRecord(
        account_number=account_number,
        timestamp=timestamp,
        amount=Decimal(amount).quantize(CENTS),
        description=description,
    )


def record_to_row(record: TransactionRecord) -> dict[str, Any]:
    """Column values for inserting a record."""
    return {
        "account_number": record.account_number,
        "timestamp": record.timestamp,
        "amount": record.amount,
        "description": record.description,
    }
