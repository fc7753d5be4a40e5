"""
Ledger access for txledger
"""

from .connection import LedgerConfig, LedgerConnection, LedgerDriver, create_ledger_driver
from .exceptions import LedgerConfigurationError, LedgerError, LedgerRowError
from .records import TransactionRecord

__all__ = [
    "LedgerConfig",
    "LedgerConfigurationError",
    "LedgerConnection",
    "LedgerDriver",
    "LedgerError",
    "LedgerRowError",
    "TransactionRecord",
    "create_ledger_driver",
]
