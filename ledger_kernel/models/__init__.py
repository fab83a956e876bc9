"""ORM models. Importing this package registers every table on Base.metadata."""

from ledger_kernel.models.contract import Contract, ContractStatus
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile, ProfileRole

__all__ = [
    "Contract",
    "ContractStatus",
    "Job",
    "Profile",
    "ProfileRole",
]
