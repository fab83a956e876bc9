"""
JobSelector -- job views and the outstanding-obligations aggregate.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import contains_eager

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.dtos import JobInfo
from ledger_kernel.models.job import Job
from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.filters import (
    outstanding_jobs,
    owned_by,
    payable_contract,
    unpaid_job,
)


class JobSelector(BaseSelector):
    """Read-only job queries."""

    def list_unpaid_for(self, profile_id: int) -> list[JobInfo]:
        """
        Unpaid jobs under the profile's in-progress contracts.

        Covers both sides: a client sees what it owes, a contractor sees
        what it is owed.
        """
        jobs = self.session.execute(
            select(Job)
            .join(Job.contract)
            .options(contains_eager(Job.contract))
            .where(unpaid_job(), payable_contract(), owned_by(profile_id))
            .order_by(Job.id)
        ).scalars().all()
        return [JobInfo.from_model(j) for j in jobs]

    def outstanding_total(self, client_id: int) -> Decimal:
        """
        Sum of prices the client still owes under in-progress contracts.

        Summed in Decimal on the Python side so the result is exact on every
        backend.
        """
        jobs = self.session.execute(outstanding_jobs(client_id)).scalars().all()
        return sum((job.price for job in jobs), ZERO)
