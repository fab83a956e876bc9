"""
Immutable DTOs returned by selectors and services.

Callers never receive ORM instances: every public method converts to one of
these frozen dataclasses before the session is closed.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from ledger_kernel.models.contract import Contract, ContractStatus
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile, ProfileRole


@dataclass(frozen=True)
class ProfileInfo:
    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Decimal
    role: ProfileRole

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_model(cls, profile: Profile) -> ProfileInfo:
        return cls(
            id=profile.id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            profession=profile.profession,
            balance=profile.balance,
            role=profile.role,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data


@dataclass(frozen=True)
class ContractInfo:
    id: int
    terms: str
    status: ContractStatus
    client_id: int
    contractor_id: int

    @classmethod
    def from_model(cls, contract: Contract) -> ContractInfo:
        return cls(
            id=contract.id,
            terms=contract.terms,
            status=contract.status,
            client_id=contract.client_id,
            contractor_id=contract.contractor_id,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class JobInfo:
    """A job together with the contract it belongs to."""

    id: int
    description: str
    price: Decimal
    paid: bool
    payment_date: datetime | None
    contract_id: int
    contract: ContractInfo

    @classmethod
    def from_model(cls, job: Job) -> JobInfo:
        return cls(
            id=job.id,
            description=job.description,
            price=job.price,
            paid=job.paid,
            payment_date=job.payment_date,
            contract_id=job.contract_id,
            contract=ContractInfo.from_model(job.contract),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "price": self.price,
            "paid": self.paid,
            "payment_date": self.payment_date,
            "contract_id": self.contract_id,
            "contract": self.contract.to_dict(),
        }


class NoContent:
    """Sentinel for operations that succeed without a body."""

    _instance: NoContent | None = None

    def __new__(cls) -> NoContent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CONTENT"

    def __bool__(self) -> bool:
        return False


NO_CONTENT = NoContent()
