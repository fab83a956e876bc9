"""
ledger_services.facade -- the public operation surface of the ledger.

Responsibility:
    Owns the unit of work.  Every public operation opens one session,
    constructs the kernel selectors/services it needs, and either commits
    or rolls back before returning.  Transport adapters (HTTP handlers,
    the CLI) call this class and nothing below it.

Invariants enforced:
    - One transaction per operation; no session outlives a call.
    - A failure at commit time is reported as TransactionFailureError,
      like a failure during the mutation step itself.
    - Read operations never commit.

Usage:
    facade = LedgerFacade.from_config(get_active_config())
    job = facade.pay_job(requester_id=1, job_id=2)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ledger_config.schema import LedgerConfig
from ledger_kernel.db.engine import get_session_factory, init_engine_from_url
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.dtos import (
    ContractInfo,
    JobInfo,
    NoContent,
    ProfileInfo,
)
from ledger_kernel.exceptions import TransactionFailureError
from ledger_kernel.logging_config import LogContext, configure_logging, get_logger
from ledger_kernel.selectors.contract_selector import ContractSelector
from ledger_kernel.selectors.job_selector import JobSelector
from ledger_kernel.selectors.reporting_selector import ReportingSelector
from ledger_kernel.services.deposit_service import DEFAULT_CAP_RATIO, DepositService
from ledger_kernel.services.payment_service import PaymentService
from ledger_kernel.services.profile_service import ProfileService

logger = get_logger("services.facade")


class LedgerFacade:
    """Session-per-call entry point for every ledger operation."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Clock | None = None,
        cap_ratio: Decimal = DEFAULT_CAP_RATIO,
    ):
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._cap_ratio = cap_ratio

    @classmethod
    def from_config(cls, config: LedgerConfig, clock: Clock | None = None) -> LedgerFacade:
        """Initialize the engine and logging from configuration."""
        configure_logging(level=config.logging.level)
        init_engine_from_url(
            config.database.url,
            echo=config.database.echo,
            pool_size=config.database.pool_size,
            max_overflow=config.database.max_overflow,
            pool_timeout=config.database.pool_timeout,
        )
        return cls(get_session_factory(), clock=clock, cap_ratio=config.deposit.cap_ratio)

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    @contextmanager
    def _read(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        finally:
            session.rollback()
            session.close()

    @contextmanager
    def _write(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            try:
                session.commit()
            except SQLAlchemyError as exc:
                logger.error(
                    "commit_failed", extra={"failed_operation": operation}, exc_info=True
                )
                raise TransactionFailureError(operation, str(exc)) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def resolve_profile(self, credential: str | int | None) -> ProfileInfo:
        with self._read() as session:
            return ProfileService(session).resolve(credential)

    # ------------------------------------------------------------------
    # Contract / job views
    # ------------------------------------------------------------------

    def get_contract(self, requester_id: int, contract_id: int) -> ContractInfo:
        with self._read() as session:
            return ContractSelector(session).get_for(requester_id, contract_id)

    def list_contracts(self, requester_id: int) -> list[ContractInfo]:
        with self._read() as session:
            return ContractSelector(session).list_active_for(requester_id)

    def list_unpaid_jobs(self, requester_id: int) -> list[JobInfo]:
        with self._read() as session:
            return JobSelector(session).list_unpaid_for(requester_id)

    # ------------------------------------------------------------------
    # Money movement
    # ------------------------------------------------------------------

    def pay_job(self, requester_id: int, job_id: int) -> JobInfo:
        with LogContext.bind(operation="pay_job"), self._write("pay_job") as session:
            return PaymentService(session, clock=self._clock).pay_job(requester_id, job_id)

    def deposit_to_client(self, target_id: int, amount: object) -> ProfileInfo | NoContent:
        with LogContext.bind(operation="deposit"), self._write("deposit") as session:
            return DepositService(session, cap_ratio=self._cap_ratio).deposit_to_client(
                target_id, amount
            )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def best_profession(self, start: object, end: object) -> dict[str, str | None]:
        with self._read() as session:
            return ReportingSelector(session).best_profession(start, end)
