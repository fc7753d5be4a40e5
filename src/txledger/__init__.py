"""
txledger
GraphQL API for recording and querying account transactions on an append-only ledger
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
