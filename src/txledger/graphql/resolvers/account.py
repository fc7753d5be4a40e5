from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...ledger.records import record_from_row
from ...logging import get_logger
from ..context import get_ledger_from_info
from .transaction import to_graphql_transaction

if TYPE_CHECKING:
    from ..types.account import Account
    from ..types.transaction import Transaction

logger = get_logger(__name__)


async def resolve_account(info: strawberry.Info, account_number: str) -> Account:
    """
    Resolve an account by number.

    Accounts are not stored entities, so this never touches the ledger and
    never fails for an unknown account.
    """
    _ = info
    from ..types.account import Account as AccountType

    return AccountType(account_number=account_number)


async def resolve_account_transactions(account: Account, info: strawberry.Info) -> list[Transaction]:
    """
    Resolve the transactions recorded against an account.

    Order is whatever the ledger returns.
    """
    ledger = get_ledger_from_info(info)

    async with ledger.connection() as conn:
        rows = await conn.fetch_transactions(account.account_number)
        records = [record_from_row(row) for row in rows]

    logger.debug(
        "Account transactions fetched",
        account_number=account.account_number,
        count=len(records),
    )

    return [to_graphql_transaction(record) for record in records]
