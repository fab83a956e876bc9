"""Kernel services. Every service flushes within the caller's transaction."""

from ledger_kernel.services.base import BaseService, WriteConflictError
from ledger_kernel.services.deposit_service import DepositService
from ledger_kernel.services.payment_service import PaymentService
from ledger_kernel.services.profile_service import ProfileService

__all__ = [
    "BaseService",
    "DepositService",
    "PaymentService",
    "ProfileService",
    "WriteConflictError",
]
