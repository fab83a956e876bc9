"""
ledger_services -- orchestration above the kernel.

``LedgerFacade`` owns transaction boundaries for each public operation;
``to_outcome`` folds results and typed failures into transport-neutral
outcomes.
"""

from ledger_services.facade import LedgerFacade
from ledger_services.outcomes import Outcome, to_outcome

__all__ = ["LedgerFacade", "Outcome", "to_outcome"]
