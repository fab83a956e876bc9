"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every service in the kernel layer.  All concrete services inherit
    from BaseService, receiving a SQLAlchemy ``Session`` whose transaction
    is owned by the caller.

Invariants enforced:
    Transaction boundaries: services execute and flush within the caller's
    transaction and never commit or rollback themselves.  A service that
    fails during its mutation step raises TransactionFailureError; the
    caller's scope then rolls the whole unit back.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
    """

    def __init__(self, session: Session):
        self.session = session


class WriteConflictError(Exception):
    """A conditional write matched fewer rows than the precondition promised."""

    def __init__(self, table: str, row_id: int):
        self.table = table
        self.row_id = row_id
        super().__init__(f"Conditional update on {table} row {row_id} matched no row")
