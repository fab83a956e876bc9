"""Read-only selectors over profiles, contracts and jobs."""

from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.contract_selector import ContractSelector
from ledger_kernel.selectors.job_selector import JobSelector
from ledger_kernel.selectors.reporting_selector import ReportingSelector

__all__ = [
    "BaseSelector",
    "ContractSelector",
    "JobSelector",
    "ReportingSelector",
]
