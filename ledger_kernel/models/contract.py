"""
Module: ledger_kernel.models.contract
Responsibility: ORM persistence for contracts, the agreement that binds one
    client Profile to one contractor Profile and gates which of its jobs may
    be paid.
Architecture position: Kernel > Models.  May import from db/ and sibling
    models only.

Invariants enforced:
    - client_id and contractor_id are both required.
    - Only IN_PROGRESS contracts are payable; TERMINATED contracts are
      excluded from every active view (enforced by selectors/filters.py).

Non-goals:
    - Status transitions are managed outside the kernel.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import PrimaryKey, TrackedBase

if TYPE_CHECKING:
    from ledger_kernel.models.job import Job
    from ledger_kernel.models.profile import Profile


class ContractStatus(str, Enum):
    """Contract lifecycle status."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


class Contract(TrackedBase):
    """Agreement between exactly one client and one contractor."""

    __tablename__ = "contracts"

    __table_args__ = (
        Index("idx_contract_client", "client_id"),
        Index("idx_contract_contractor", "contractor_id"),
        Index("idx_contract_status", "status"),
    )

    terms: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[ContractStatus] = mapped_column(
        SAEnum(
            ContractStatus,
            name="contract_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ContractStatus.NEW,
    )

    client_id: Mapped[int] = mapped_column(
        PrimaryKey,
        ForeignKey("profiles.id"),
        nullable=False,
    )

    contractor_id: Mapped[int] = mapped_column(
        PrimaryKey,
        ForeignKey("profiles.id"),
        nullable=False,
    )

    client: Mapped["Profile"] = relationship(foreign_keys=[client_id])

    contractor: Mapped["Profile"] = relationship(foreign_keys=[contractor_id])

    jobs: Mapped[list["Job"]] = relationship(
        back_populates="contract",
        order_by="Job.id",
    )

    @property
    def is_payable(self) -> bool:
        return self.status is ContractStatus.IN_PROGRESS

    def __repr__(self) -> str:
        return (
            f"<Contract {self.id}: client={self.client_id} "
            f"contractor={self.contractor_id} ({self.status.value})>"
        )
