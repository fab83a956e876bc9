"""
Module: ledger_kernel.models.profile
Responsibility: ORM persistence for the parties of the ledger.  A Profile is
    either a client (pays for jobs, receives deposits) or a contractor
    (receives payments), and carries the only stored monetary state: its
    current balance.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - balance >= 0 (ck_profile_balance_non_negative).  The payment and
      deposit services refuse violating mutations before they are written;
      the constraint is the last line should a writer bypass them.
    - role is immutable after creation and is one of ProfileRole.

Failure modes:
    - IntegrityError on a write that would leave a negative balance.
"""

from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase
from ledger_kernel.db.types import Money


class ProfileRole(str, Enum):
    """Closed set of profile roles."""

    CLIENT = "client"
    CONTRACTOR = "contractor"


class Profile(TrackedBase):
    """
    A party in the ledger.

    Guarantees:
        - role is one of ProfileRole, loaded as the enum member.
        - balance is a Decimal, never negative at a commit boundary.

    Non-goals:
        - No transaction history is stored; balance is current state only.
    """

    __tablename__ = "profiles"

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_profile_balance_non_negative"),
        Index("idx_profile_type", "type"),
    )

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)

    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Free text, only used by reporting
    profession: Mapped[str] = mapped_column(String(255), nullable=False)

    balance: Mapped[Money] = mapped_column(nullable=False, default=Decimal("0"))

    role: Mapped[ProfileRole] = mapped_column(
        "type",
        SAEnum(
            ProfileRole,
            name="profile_role",
            native_enum=False,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_client(self) -> bool:
        return self.role is ProfileRole.CLIENT

    def __repr__(self) -> str:
        return f"<Profile {self.id}: {self.full_name} ({self.role.value})>"
