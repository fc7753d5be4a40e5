"""
Account GraphQL type definitions
"""

import strawberry

from .transaction import Transaction


@strawberry.type
class Account:
    """An account is the set of ledger transactions sharing an account number."""

    account_number: str

    @strawberry.field
    async def transactions(self, info: strawberry.Info) -> list[Transaction]:
        """Get every transaction recorded against this account."""
        from ..resolvers.account import resolve_account_transactions

        return await resolve_account_transactions(self, info)
