from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...ledger.records import TransactionRecord, encode_amount, new_transaction
from ...logging import get_logger
from ..context import get_ledger_from_info

if TYPE_CHECKING:
    from ..types.transaction import Transaction, Transfer

logger = get_logger(__name__)


def to_graphql_transaction(record: TransactionRecord) -> Transaction:
    """Convert a ledger record to the GraphQL Transaction type."""
    from ..types.transaction import Transaction as TransactionType

    return TransactionType(
        account_number=record.account_number,
        timestamp=record.timestamp,
        amount=float(record.amount),
        description=record.description,
    )


# Mutation resolvers
async def log_transaction(
    info: strawberry.Info, account_number: str, amount: float, description: str
) -> Transaction:
    """
    Append one transaction to the ledger.

    No sign or range check is made: negative amounts are recorded as debits.
    The returned value is the record that was sent, not a read-back.
    """
    ledger = get_ledger_from_info(info)
    record = new_transaction(account_number, encode_amount(amount), description)

    async with ledger.connection() as conn:
        await conn.insert_transactions([record])

    logger.info(
        "Transaction logged",
        account_number=record.account_number,
        amount=str(record.amount),
    )

    return to_graphql_transaction(record)


async def transfer(
    info: strawberry.Info,
    from_account: str,
    to_account: str,
    amount: float,
    description: str,
) -> Transfer:
    """
    Debit ``from_account`` and credit ``to_account`` with one INSERT.

    Both rows commit together or not at all; that guarantee comes from the
    ledger transaction, nothing here checks it. The accounts are not required
    to differ and the amount is not required to be positive.
    """
    ledger = get_ledger_from_info(info)

    credit_amount = encode_amount(amount)
    debit = new_transaction(from_account, -credit_amount, description)
    credit = new_transaction(to_account, credit_amount, description)

    async with ledger.connection() as conn:
        await conn.insert_transactions([debit, credit])

    logger.info(
        "Transfer logged",
        from_account=from_account,
        to_account=to_account,
        amount=str(credit_amount),
    )

    from ..types.transaction import Transfer as TransferType

    return TransferType(
        debit=to_graphql_transaction(debit),
        credit=to_graphql_transaction(credit),
    )
