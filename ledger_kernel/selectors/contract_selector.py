"""
ContractSelector -- contract views scoped to the requesting profile.

A contract is visible only to its client and its contractor.  A contract
that exists but belongs to someone else is reported exactly like one that
does not exist.
"""

from sqlalchemy import select

from ledger_kernel.domain.dtos import ContractInfo
from ledger_kernel.exceptions import ContractNotFoundError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.contract import Contract
from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.filters import active_contract, owned_by

logger = get_logger("selectors.contract")


class ContractSelector(BaseSelector):
    """Read-only contract queries."""

    def get_for(self, profile_id: int, contract_id: int) -> ContractInfo:
        """
        Get a contract the profile is a party to.

        Raises:
            ContractNotFoundError: If absent or not owned by the profile.
        """
        contract = self.session.execute(
            select(Contract).where(Contract.id == contract_id, owned_by(profile_id))
        ).scalar_one_or_none()
        if contract is None:
            logger.info(
                "contract_not_visible",
                extra={"contract_id": contract_id, "profile_id": profile_id},
            )
            raise ContractNotFoundError(contract_id, profile_id)
        return ContractInfo.from_model(contract)

    def list_active_for(self, profile_id: int) -> list[ContractInfo]:
        """List the profile's non-terminated contracts, ordered by id."""
        contracts = self.session.execute(
            select(Contract)
            .where(owned_by(profile_id), active_contract())
            .order_by(Contract.id)
        ).scalars().all()
        return [ContractInfo.from_model(c) for c in contracts]
