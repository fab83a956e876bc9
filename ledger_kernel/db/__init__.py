"""Database layer - engine, base classes, types."""

from ledger_kernel.db.base import Base, MoneyNumeric, PrimaryKey, TrackedBase, UTCDateTime
from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    session_scope,
)
from ledger_kernel.db.types import ZERO, Money, parse_amount

__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TrackedBase",
    "PrimaryKey",
    "UTCDateTime",
    "MoneyNumeric",
    "Money",
    "parse_amount",
    "ZERO",
]
