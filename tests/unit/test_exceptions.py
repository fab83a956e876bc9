"""
Tests for the exception taxonomy.

Every failure carries a stable machine-readable code and a suggested
transport status; adapters depend on both.
"""

from decimal import Decimal

import pytest

from ledger_kernel.exceptions import (
    AuthenticationError,
    BadRequestError,
    ContractNotFoundError,
    DepositLimitExceededError,
    ForbiddenError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTimeRangeError,
    JobNotFoundError,
    LedgerKernelError,
    NoOutstandingJobsError,
    NotFoundError,
    ProfileNotFoundError,
    TransactionFailureError,
    UnauthenticatedError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "error, code, status, parent",
    [
        (ProfileNotFoundError(9), "PROFILE_NOT_FOUND", 404, NotFoundError),
        (ContractNotFoundError(5, 1), "CONTRACT_NOT_FOUND", 404, NotFoundError),
        (JobNotFoundError(2, 1), "JOB_NOT_FOUND", 404, NotFoundError),
        (UnauthenticatedError("abc"), "UNAUTHENTICATED", 401, AuthenticationError),
        (
            UnauthorizedError(6, "contractor", "client"),
            "UNAUTHORIZED_ROLE",
            401,
            LedgerKernelError,
        ),
        (
            InsufficientFundsError(4, 5, Decimal("1.3"), Decimal("200")),
            "INSUFFICIENT_FUNDS",
            402,
            LedgerKernelError,
        ),
        (NoOutstandingJobsError(3), "NO_OUTSTANDING_JOBS", 403, ForbiddenError),
        (
            DepositLimitExceededError(1, Decimal("60"), Decimal("50.25"), Decimal("201")),
            "DEPOSIT_LIMIT_EXCEEDED",
            403,
            ForbiddenError,
        ),
        (InvalidAmountError("abc"), "INVALID_AMOUNT", 400, BadRequestError),
        (
            InvalidTimeRangeError("b", "a", "start is after end"),
            "INVALID_TIME_RANGE",
            400,
            BadRequestError,
        ),
        (
            TransactionFailureError("pay_job", "boom"),
            "TRANSACTION_FAILED",
            400,
            LedgerKernelError,
        ),
    ],
)
def test_codes_and_statuses(error, code, status, parent):
    assert isinstance(error, parent)
    assert isinstance(error, LedgerKernelError)
    assert error.code == code
    assert error.http_status == status


class TestStructuredFields:
    def test_insufficient_funds_carries_amounts(self):
        err = InsufficientFundsError(4, 5, Decimal("1.3"), Decimal("200"))
        assert err.profile_id == 4
        assert err.job_id == 5
        assert err.balance == Decimal("1.3")
        assert err.price == Decimal("200")

    def test_deposit_limit_carries_allowance(self):
        err = DepositLimitExceededError(1, Decimal("60"), Decimal("50.25"), Decimal("201"))
        assert err.amount == Decimal("60")
        assert err.allowance == Decimal("50.25")
        assert err.outstanding_total == Decimal("201")

    def test_transaction_failure_names_operation(self):
        err = TransactionFailureError("deposit", "connection reset")
        assert err.operation == "deposit"
        assert "deposit" in str(err)
        assert "connection reset" in str(err)

    def test_contract_not_found_does_not_reveal_owner(self):
        assert str(ContractNotFoundError(5, 1)) == str(ContractNotFoundError(5))
