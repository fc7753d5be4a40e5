"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.transaction import Transaction, Transfer


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="logTransaction")
    async def log_transaction(
        self, info: strawberry.Info, account_number: str, amount: float, description: str
    ) -> Transaction:
        """Append a single transaction to the ledger."""
        from ..resolvers.transaction import log_transaction

        return await log_transaction(info, account_number, amount, description)

    @strawberry.mutation
    async def transfer(
        self,
        info: strawberry.Info,
        from_account: str,
        to_account: str,
        amount: float,
        description: str,
    ) -> Transfer:
        """Debit one account and credit another in a single ledger write."""
        from ..resolvers.transaction import transfer

        return await transfer(info, from_account, to_account, amount, description)
