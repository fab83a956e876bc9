"""
Composable query predicates.

Ownership and payability rules are written once here and passed into every
query that needs them, so the contract views, the unpaid-jobs listing, the
payment lookup and the deposit allowance can never disagree about which rows
a profile may see or act on.
"""

from sqlalchemy import ColumnElement, Select, or_, select

from ledger_kernel.models.contract import Contract, ContractStatus
from ledger_kernel.models.job import Job


def owned_by(profile_id: int) -> ColumnElement[bool]:
    """Contract has the profile as its client or its contractor."""
    return or_(Contract.client_id == profile_id, Contract.contractor_id == profile_id)


def client_of(profile_id: int) -> ColumnElement[bool]:
    """Contract has the profile as its client."""
    return Contract.client_id == profile_id


def active_contract() -> ColumnElement[bool]:
    """Contract is not terminated."""
    return Contract.status != ContractStatus.TERMINATED


def payable_contract() -> ColumnElement[bool]:
    """Contract is in progress, the only state whose jobs may be paid."""
    return Contract.status == ContractStatus.IN_PROGRESS


def unpaid_job() -> ColumnElement[bool]:
    return Job.paid.is_(False)


def outstanding_jobs(client_id: int) -> Select:
    """Unpaid jobs under in-progress contracts of the given client."""
    return (
        select(Job)
        .join(Job.contract)
        .where(unpaid_job(), payable_contract(), client_of(client_id))
    )
