"""
Access to request-scoped collaborators from GraphQL resolvers.
"""

import strawberry

from ..ledger import LedgerDriver


def get_ledger_from_info(info: strawberry.Info) -> LedgerDriver:
    """Get the ledger driver the GraphQL context was built with."""
    try:
        return info.context["ledger"]
    except KeyError:
        raise RuntimeError("GraphQL context has no ledger driver") from None
