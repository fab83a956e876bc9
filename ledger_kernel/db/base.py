"""
Module: ledger_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.  Provides
    the integer primary key convention, the type annotation map for consistent
    column types, and the TrackedBase mixin for audit timestamps.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel.  ALL model files import from here.  This module MUST NOT
    import from models/, services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Decimal precision: type_annotation_map maps Python Decimal to
      MoneyNumeric, which is exact on every backend.  NEVER use float for
      monetary amounts.
    - UTC timestamps: every datetime column is written as UTC and read back
      timezone-aware, whatever the backend stores natively.
    - Audit timestamps: TrackedBase provides created_at and updated_at.
"""

from datetime import UTC, datetime
from decimal import ROUND_HALF_EVEN, Decimal
from typing import ClassVar

from sqlalchemy import BigInteger, DateTime, Integer, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

# SQLite only auto-assigns rowids to "INTEGER PRIMARY KEY" columns
PrimaryKey = BigInteger().with_variant(Integer(), "sqlite")

MONEY_SCALE = 9


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime that round-trips as UTC on every backend.

    Contract:
        Aware values are converted to UTC before binding; naive values are
        assumed to already be UTC.  Loaded values always carry tzinfo=UTC,
        including on SQLite, which stores datetimes without an offset.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class MoneyNumeric(TypeDecorator):
    """
    Exact Decimal column for monetary amounts.

    Contract:
        PostgreSQL stores NUMERIC(38, 9).  SQLite has no exact decimal type,
        so there the value is stored as a BIGINT count of 10**-9 units and
        every comparison, sum and balance update runs in integer arithmetic.
        The SQLite range is therefore about +/- 9.2e9.
    """

    impl = Numeric(38, MONEY_SCALE)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Numeric(38, MONEY_SCALE))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        scaled = Decimal(value).scaleb(MONEY_SCALE)
        return int(scaled.to_integral_value(rounding=ROUND_HALF_EVEN))

    def process_result_value(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return Decimal(int(value)).scaleb(-MONEY_SCALE)


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - id is an auto-incrementing integer primary key.
        - Decimal maps to MoneyNumeric (NUMERIC(38, 9) on PostgreSQL).
        - datetime maps to UTCDateTime.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: MoneyNumeric(),
        datetime: UTCDateTime(),
    }

    id: Mapped[int] = mapped_column(
        PrimaryKey,
        primary_key=True,
        autoincrement=True,
    )


class TrackedBase(Base):
    """
    Abstract base with audit timestamps.

    Guarantees:
        - created_at is set to server NOW() on INSERT and never changes.
        - updated_at is set on INSERT and refreshed on every ORM UPDATE.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
