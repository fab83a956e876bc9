"""
PaymentService -- pay one job, moving its price from client to contractor.

Responsibility:
    Validates and executes a single job payment.  The three effects of a
    payment (client debit, contractor credit, job marked paid) are written
    in the caller's transaction and either all commit or none do.

Architecture position:
    Kernel > Services.  Uses selectors/filters.py for the payable-job
    predicate and domain/guard.py for the role check.

Invariants enforced:
    - Preconditions are checked in a fixed order before any write:
        1. requester is a client              -> UnauthorizedError
        2. job is payable by the requester    -> JobNotFoundError
        3. client and contractor rows re-read under FOR UPDATE
        4. client balance >= price            -> InsufficientFundsError
    - Conservation: the debit and the credit use the same Decimal price.
    - Non-negative balance: the debit is a conditional UPDATE
      (``WHERE balance >= price``), so a concurrent spend of the same
      balance affects zero rows instead of overdrawing.
    - Single payment: the paid flag is set with ``WHERE paid = false``.

Failure modes:
    - TransactionFailureError when any write fails or affects an unexpected
      number of rows.  The underlying error is chained and logged; the caller
      must roll back (db.engine.session_scope and the facade both do).
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session, contains_eager

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.dtos import JobInfo
from ledger_kernel.domain.guard import authorize_client
from ledger_kernel.exceptions import (
    InsufficientFundsError,
    JobNotFoundError,
    ProfileNotFoundError,
    TransactionFailureError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile
from ledger_kernel.selectors.filters import client_of, payable_contract, unpaid_job
from ledger_kernel.services.base import BaseService, WriteConflictError

logger = get_logger("services.payment")


class PaymentService(BaseService):
    """Executes job payments."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()

    def pay_job(self, requesting_profile_id: int, job_id: int) -> JobInfo:
        """
        Pay a job on behalf of its client.

        Returns:
            The job, now paid, with its contract.

        Raises:
            ProfileNotFoundError: Requesting profile does not exist.
            UnauthorizedError: Requesting profile is not a client.
            JobNotFoundError: Job absent, already paid, under a contract
                that is not in progress, or owned by another client.
            InsufficientFundsError: Client balance below the job price.
            TransactionFailureError: The atomic write step failed.
        """
        with LogContext.bind(
            operation="pay_job", profile_id=requesting_profile_id, job_id=job_id
        ):
            requester = self.session.get(Profile, requesting_profile_id)
            if requester is None:
                raise ProfileNotFoundError(requesting_profile_id)
            authorize_client(requester)

            job = self._find_payable_job(requester.id, job_id)
            client, contractor = self._lock_parties(
                requester.id, job.contract.contractor_id
            )

            if client.balance < job.price:
                logger.info(
                    "payment_rejected_insufficient_funds",
                    extra={"balance": client.balance, "price": job.price},
                )
                raise InsufficientFundsError(
                    client.id, job.id, client.balance, job.price
                )

            self._transfer(job, client, contractor)

            self.session.refresh(job)
            logger.info(
                "job_paid",
                extra={
                    "price": job.price,
                    "client_id": client.id,
                    "contractor_id": contractor.id,
                    "payment_date": job.payment_date,
                },
            )
            return JobInfo.from_model(job)

    def _find_payable_job(self, client_id: int, job_id: int) -> Job:
        job = self.session.execute(
            select(Job)
            .join(Job.contract)
            .options(contains_eager(Job.contract))
            .where(
                Job.id == job_id,
                unpaid_job(),
                payable_contract(),
                client_of(client_id),
            )
            .with_for_update(of=Job)
        ).scalar_one_or_none()
        if job is None:
            logger.info("payment_rejected_job_not_payable")
            raise JobNotFoundError(job_id, client_id)
        return job

    def _lock_parties(self, client_id: int, contractor_id: int) -> tuple[Profile, Profile]:
        """Re-read both balances under row locks, in id order."""
        rows = self.session.execute(
            select(Profile)
            .where(Profile.id.in_((client_id, contractor_id)))
            .order_by(Profile.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalars().all()
        by_id = {p.id: p for p in rows}
        if contractor_id not in by_id:
            raise ProfileNotFoundError(contractor_id)
        return by_id[client_id], by_id[contractor_id]

    def _transfer(self, job: Job, client: Profile, contractor: Profile) -> None:
        price: Decimal = job.price
        paid_at = self._clock.now()
        try:
            debit = self.session.execute(
                update(Profile)
                .where(Profile.id == client.id, Profile.balance >= price)
                .values(balance=Profile.balance - price)
                .execution_options(synchronize_session=False)
            )
            if debit.rowcount != 1:
                raise WriteConflictError("profiles", client.id)

            credit = self.session.execute(
                update(Profile)
                .where(Profile.id == contractor.id)
                .values(balance=Profile.balance + price)
                .execution_options(synchronize_session=False)
            )
            if credit.rowcount != 1:
                raise WriteConflictError("profiles", contractor.id)

            marked = self.session.execute(
                update(Job)
                .where(Job.id == job.id, unpaid_job())
                .values(paid=True, payment_date=paid_at)
                .execution_options(synchronize_session=False)
            )
            if marked.rowcount != 1:
                raise WriteConflictError("jobs", job.id)

            self.session.flush()
        except Exception as exc:
            logger.error(
                "payment_transaction_failed",
                extra={"price": price},
                exc_info=True,
            )
            raise TransactionFailureError("pay_job", str(exc)) from exc

        self.session.refresh(client)
        self.session.refresh(contractor)
