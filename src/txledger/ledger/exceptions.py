"""Exceptions raised by the ledger layer."""


class LedgerError(Exception):
    """Base exception for ledger operations."""

    pass


class LedgerConfigurationError(LedgerError):
    """The ledger cannot be reached because required configuration is missing."""

    pass


class LedgerRowError(LedgerError):
    """A row returned by the ledger is missing a field or carries the wrong type."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Ledger row field '{field}' {message}")
