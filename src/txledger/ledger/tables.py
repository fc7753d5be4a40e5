"""
Ledger table definitions.

The ledger holds a single append-only ``transactions`` table. Rows are only
ever inserted; nothing in this package issues UPDATE or DELETE against it.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    DateTime,
    Identity,
    Index,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for deterministic constraint/index names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for ledger tables."""

    metadata = MetaData(naming_convention=naming_convention)


class Transactions(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="transactions_pkey"),
        Index("idx_transactions_account_number", "account_number"),
    )

    # Surrogate key; never exposed through the API
    id: Mapped[int] = mapped_column(BigInteger, Identity(always=True))
    account_number: Mapped[str] = mapped_column(String(255), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(True), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


transactions_table = Transactions.__table__
target_metadata = Base.metadata
