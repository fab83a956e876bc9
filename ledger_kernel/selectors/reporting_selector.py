"""
Module: ledger_kernel.selectors.reporting_selector
Responsibility: Read-only aggregates over paid jobs in a time window.
Architecture position: Kernel > Selectors.

Reports:
    best_profession -- the contractor profession with the largest summed
        price of paid jobs whose payment_date falls in the window.  Ties are
        broken by profession name, ascending.  No paid jobs -> None.

Failure modes:
    - InvalidTimeRangeError for a missing, unparseable or inverted window.
"""

from decimal import Decimal

from sqlalchemy import func, select

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.time_range import parse_time_range
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.contract import Contract
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.reporting")


class ReportingSelector(BaseSelector):
    """Earnings aggregates over paid jobs."""

    def best_profession(self, start: object, end: object) -> dict[str, str | None]:
        """
        Profession that earned the most in ``[start, end]``.

        Returns:
            ``{"profession": name}``, or ``{"profession": None}`` when no job
            was paid in the window.
        """
        lower, upper = parse_time_range(start, end)

        total = func.sum(Job.price).label("total")
        rows = self.session.execute(
            select(Profile.profession, total)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.contractor_id == Profile.id)
            .where(Job.paid.is_(True), Job.payment_date.between(lower, upper))
            .group_by(Profile.profession)
        ).all()

        if not rows:
            logger.info(
                "best_profession_empty",
                extra={"start": lower, "end": upper},
            )
            return {"profession": None}

        # Totals are compared as Decimal so the tie-break does not depend on
        # the backend's ordering of equal sums.
        best = min(rows, key=lambda row: (-Decimal(row.total or ZERO), row.profession))
        logger.info(
            "best_profession_computed",
            extra={
                "start": lower,
                "end": upper,
                "profession": best.profession,
                "total": best.total,
                "groups": len(rows),
            },
        )
        return {"profession": best.profession}
