"""
Transaction GraphQL type definitions
"""

from datetime import datetime

import strawberry


@strawberry.type
class Transaction:
    """A single ledger entry against an account."""

    account_number: str
    timestamp: datetime
    amount: float
    description: str


@strawberry.type
class Transfer:
    """The debit and credit written by one transfer."""

    debit: Transaction
    credit: Transaction
