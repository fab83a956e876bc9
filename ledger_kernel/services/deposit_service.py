"""
DepositService -- top up a client balance within the deposit allowance.

A client may deposit at most ``cap_ratio`` (25% by default) of the total it
currently owes: the summed price of its unpaid jobs under in-progress
contracts, taken at the moment of the deposit.  Payments that land between
the allowance check and the commit are not serialized against the deposit;
the overshoot that allows is bounded by one deposit.

Preconditions, in order:
    1. amount is a finite, non-negative number   -> InvalidAmountError
       amount == 0 returns NO_CONTENT untouched
    2. target exists and is a client             -> ProfileNotFoundError
    3. outstanding total is non-zero             -> NoOutstandingJobsError
    4. amount <= outstanding * cap_ratio         -> DepositLimitExceededError
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ledger_kernel.db.types import ZERO, parse_amount
from ledger_kernel.domain.dtos import NO_CONTENT, NoContent, ProfileInfo
from ledger_kernel.exceptions import (
    DepositLimitExceededError,
    InvalidAmountError,
    NoOutstandingJobsError,
    ProfileNotFoundError,
    TransactionFailureError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.profile import Profile, ProfileRole
from ledger_kernel.selectors.job_selector import JobSelector
from ledger_kernel.services.base import BaseService, WriteConflictError

logger = get_logger("services.deposit")

DEFAULT_CAP_RATIO = Decimal("0.25")


class DepositService(BaseService):
    """Executes client deposits."""

    def __init__(self, session: Session, cap_ratio: Decimal = DEFAULT_CAP_RATIO):
        super().__init__(session)
        self.cap_ratio = cap_ratio

    def deposit_to_client(
        self, target_profile_id: int, amount: object
    ) -> ProfileInfo | NoContent:
        """
        Add ``amount`` to a client's balance.

        Returns:
            The refreshed profile, or NO_CONTENT for a zero amount.

        Raises:
            InvalidAmountError: amount missing, non-numeric, or negative.
            ProfileNotFoundError: target absent or not a client.
            NoOutstandingJobsError: nothing owed to deposit against.
            DepositLimitExceededError: amount above the allowance.
            TransactionFailureError: the balance update failed.
        """
        with LogContext.bind(operation="deposit", profile_id=target_profile_id):
            value = parse_amount(amount)
            if value < ZERO:
                raise InvalidAmountError(amount, "must not be negative")
            if value == ZERO:
                logger.debug("deposit_noop")
                return NO_CONTENT

            client = self.session.execute(
                select(Profile)
                .where(Profile.id == target_profile_id, Profile.role == ProfileRole.CLIENT)
                .with_for_update()
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
            if client is None:
                raise ProfileNotFoundError(target_profile_id)

            outstanding = JobSelector(self.session).outstanding_total(client.id)
            if outstanding == ZERO:
                logger.info("deposit_rejected_no_outstanding_jobs")
                raise NoOutstandingJobsError(client.id)

            allowance = outstanding * self.cap_ratio
            if value > allowance:
                logger.info(
                    "deposit_rejected_limit_exceeded",
                    extra={
                        "amount": value,
                        "allowance": allowance,
                        "outstanding_total": outstanding,
                    },
                )
                raise DepositLimitExceededError(client.id, value, allowance, outstanding)

            self._credit(client, value)

            logger.info(
                "deposit_applied",
                extra={"amount": value, "balance": client.balance},
            )
            return ProfileInfo.from_model(client)

    def _credit(self, client: Profile, amount: Decimal) -> None:
        try:
            result = self.session.execute(
                update(Profile)
                .where(Profile.id == client.id)
                .values(balance=Profile.balance + amount)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise WriteConflictError("profiles", client.id)
            self.session.flush()
        except Exception as exc:
            logger.error(
                "deposit_transaction_failed", extra={"amount": amount}, exc_info=True
            )
            raise TransactionFailureError("deposit", str(exc)) from exc

        self.session.refresh(client)
