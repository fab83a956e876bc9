"""
Module: ledger_kernel.models.job
Responsibility: ORM persistence for jobs, the priced units of work under a
    contract.  Payment is a one-way, one-time transition of a job.
Architecture position: Kernel > Models.  May import from db/ and sibling
    models only.

Invariants enforced:
    - price > 0 (ck_job_price_positive).
    - Once paid is True, price, paid and payment_date never change.  The
      payment service sets the flag with a conditional UPDATE
      (``WHERE paid = false``), so a second payer affects zero rows.
    - payment_date is NULL until the payment commits, then set exactly once.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import PrimaryKey, TrackedBase
from ledger_kernel.db.types import Money

if TYPE_CHECKING:
    from ledger_kernel.models.contract import Contract


class Job(TrackedBase):
    """A billable unit of work under exactly one contract."""

    __tablename__ = "jobs"

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_job_price_positive"),
        Index("idx_job_contract", "contract_id"),
        Index("idx_job_paid", "paid"),
        Index("idx_job_payment_date", "payment_date"),
    )

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    price: Mapped[Money] = mapped_column(nullable=False)

    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    payment_date: Mapped[datetime | None] = mapped_column(nullable=True)

    contract_id: Mapped[int] = mapped_column(
        PrimaryKey,
        ForeignKey("contracts.id"),
        nullable=False,
    )

    contract: Mapped["Contract"] = relationship(back_populates="jobs")

    def __repr__(self) -> str:
        state = "paid" if self.paid else "unpaid"
        return f"<Job {self.id}: {self.price} ({state}) contract={self.contract_id}>"
