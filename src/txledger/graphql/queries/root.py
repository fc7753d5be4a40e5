"""
Root GraphQL query definitions
"""

import strawberry

from ..types.account import Account


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(deprecation_reason="Use `account` instead.")
    def hello(self) -> str | None:
        """Static greeting kept from the first schema revision."""
        return "Hello world!"

    @strawberry.field
    async def account(self, info: strawberry.Info, account_number: str) -> Account:
        """Get an account by number. The account does not need to have any transactions."""
        from ..resolvers.account import resolve_account

        return await resolve_account(info, account_number)
