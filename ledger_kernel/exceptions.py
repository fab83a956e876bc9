"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Money-movement operations have several distinct ways to be refused, and the
caller must be able to tell them apart without parsing messages:

  - The job does not exist, or is not yours           -> NotFoundError
  - You are a contractor trying to pay                -> UnauthorizedError
  - Your balance is below the job price               -> InsufficientFundsError
  - The deposit exceeds the allowance                 -> ForbiddenError
  - The input is malformed                            -> BadRequestError
  - The atomic commit itself failed                   -> TransactionFailureError

Every exception therefore has:
  1. A TYPED class (catch by type, not message)
  2. A ``code`` class attribute (machine-readable, API-safe)
  3. An ``http_status`` class attribute (suggested transport status)
  4. Structured attributes (ids, amounts), never just a message string

Example:
    try:
        payment_service.pay_job(profile_id, job_id)
    except InsufficientFundsError as e:
        notify(f"Balance {e.balance} is below {e.price}")
    except NotFoundError:
        ...

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- NotFoundError
    |   +-- ProfileNotFoundError
    |   +-- ContractNotFoundError
    |   +-- JobNotFoundError
    |
    +-- AuthenticationError
    |   +-- UnauthenticatedError
    |
    +-- UnauthorizedError
    |
    +-- InsufficientFundsError
    |
    +-- ForbiddenError
    |   +-- NoOutstandingJobsError
    |   +-- DepositLimitExceededError
    |
    +-- BadRequestError
    |   +-- InvalidAmountError
    |   +-- InvalidTimeRangeError
    |
    +-- TransactionFailureError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                    | Status | When Raised
-------------|-------------------------|--------|------------------------------
Not found    | PROFILE_NOT_FOUND       | 404    | Profile absent / not a client
             | CONTRACT_NOT_FOUND      | 404    | Contract absent or not yours
             | JOB_NOT_FOUND           | 404    | Job absent, paid, or not yours
-------------|-------------------------|--------|------------------------------
Auth         | UNAUTHENTICATED         | 401    | Credential missing or unknown
             | UNAUTHORIZED_ROLE       | 401    | Wrong role for the mutation
-------------|-------------------------|--------|------------------------------
Payment      | INSUFFICIENT_FUNDS      | 402    | Balance below job price
-------------|-------------------------|--------|------------------------------
Deposit      | NO_OUTSTANDING_JOBS     | 403    | Nothing to deposit against
             | DEPOSIT_LIMIT_EXCEEDED  | 403    | Amount above the allowance
-------------|-------------------------|--------|------------------------------
Input        | INVALID_AMOUNT          | 400    | Amount missing / non-numeric
             | INVALID_TIME_RANGE      | 400    | Report window missing / bad
-------------|-------------------------|--------|------------------------------
Store        | TRANSACTION_FAILED      | 400    | Atomic commit failed

===============================================================================
DESIGN DECISIONS
===============================================================================

1. Ownership failures are folded into NotFoundError. A client asking for a
   job of another client sees exactly what it would see for a job id that
   does not exist.

2. TransactionFailureError always chains the underlying exception
   (``raise ... from exc``). The cause is logged, never returned.

3. ``http_status`` is a suggestion for transport adapters. The kernel never
   speaks HTTP itself.
"""

from decimal import Decimal


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must define a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"
    http_status: int = 500


# Not-found exceptions


class NotFoundError(LedgerKernelError):
    """Base exception for entities that are absent or not visible."""

    code: str = "NOT_FOUND"
    http_status: int = 404


class ProfileNotFoundError(NotFoundError):
    """Profile with given ID was not found (or has the wrong role)."""

    code: str = "PROFILE_NOT_FOUND"

    def __init__(self, profile_id: int | str):
        self.profile_id = profile_id
        super().__init__(f"Profile not found: {profile_id}")


class ContractNotFoundError(NotFoundError):
    """Contract is absent or the requester is not a party to it."""

    code: str = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: int | str, profile_id: int | str | None = None):
        self.contract_id = contract_id
        self.profile_id = profile_id
        super().__init__(f"Contract not found: {contract_id}")


class JobNotFoundError(NotFoundError):
    """
    Job is not payable by the requester.

    Raised when the job does not exist, is already paid, belongs to a
    contract that is not in progress, or belongs to another client.
    """

    code: str = "JOB_NOT_FOUND"

    def __init__(self, job_id: int | str, profile_id: int | str | None = None):
        self.job_id = job_id
        self.profile_id = profile_id
        super().__init__(f"Job not found: {job_id}")


# Authentication / authorization exceptions


class AuthenticationError(LedgerKernelError):
    """Base exception for credential resolution failures."""

    code: str = "AUTHENTICATION_ERROR"
    http_status: int = 401


class UnauthenticatedError(AuthenticationError):
    """The inbound credential does not resolve to a profile."""

    code: str = "UNAUTHENTICATED"

    def __init__(self, credential: str | None):
        self.credential = credential
        super().__init__(f"Credential does not resolve to a profile: {credential!r}")


class UnauthorizedError(LedgerKernelError):
    """The requesting profile has the wrong role for the operation."""

    code: str = "UNAUTHORIZED_ROLE"
    http_status: int = 401

    def __init__(self, profile_id: int | str, role: str, required_role: str):
        self.profile_id = profile_id
        self.role = role
        self.required_role = required_role
        super().__init__(
            f"Profile {profile_id} has role {role!r}, "
            f"operation requires {required_role!r}"
        )


# Payment exceptions


class InsufficientFundsError(LedgerKernelError):
    """
    Client balance is below the job price.

    A business-rule rejection, not a system fault.
    """

    code: str = "INSUFFICIENT_FUNDS"
    http_status: int = 402

    def __init__(
        self,
        profile_id: int | str,
        job_id: int | str,
        balance: Decimal,
        price: Decimal,
    ):
        self.profile_id = profile_id
        self.job_id = job_id
        self.balance = balance
        self.price = price
        super().__init__(
            f"Profile {profile_id} balance {balance} is below "
            f"price {price} of job {job_id}"
        )


# Deposit exceptions


class ForbiddenError(LedgerKernelError):
    """Base exception for deposits refused by the allowance rule."""

    code: str = "FORBIDDEN"
    http_status: int = 403


class NoOutstandingJobsError(ForbiddenError):
    """The client has no unpaid jobs under in-progress contracts."""

    code: str = "NO_OUTSTANDING_JOBS"

    def __init__(self, profile_id: int | str):
        self.profile_id = profile_id
        super().__init__(
            f"Profile {profile_id} has no outstanding jobs to deposit against"
        )


class DepositLimitExceededError(ForbiddenError):
    """The deposit amount is above the fraction of outstanding obligations."""

    code: str = "DEPOSIT_LIMIT_EXCEEDED"

    def __init__(
        self,
        profile_id: int | str,
        amount: Decimal,
        allowance: Decimal,
        outstanding_total: Decimal,
    ):
        self.profile_id = profile_id
        self.amount = amount
        self.allowance = allowance
        self.outstanding_total = outstanding_total
        super().__init__(
            f"Deposit {amount} for profile {profile_id} exceeds "
            f"allowance {allowance} (outstanding {outstanding_total})"
        )


# Input exceptions


class BadRequestError(LedgerKernelError):
    """Base exception for malformed or missing input."""

    code: str = "BAD_REQUEST"
    http_status: int = 400


class InvalidAmountError(BadRequestError):
    """Amount is missing, non-numeric, non-finite, or negative."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, value: object, reason: str = "must be a finite number"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid amount {value!r}: {reason}")


class InvalidTimeRangeError(BadRequestError):
    """Reporting window is missing, unparseable, or inverted."""

    code: str = "INVALID_TIME_RANGE"

    def __init__(self, start: object, end: object, reason: str):
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"Invalid time range [{start!r}, {end!r}]: {reason}")


# Store exceptions


class TransactionFailureError(LedgerKernelError):
    """
    The atomic mutation step failed and was rolled back.

    Covers store errors, constraint violations and write conflicts
    detected at commit time. No partial effect is ever visible.
    """

    code: str = "TRANSACTION_FAILED"
    http_status: int = 400

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Transaction failed during {operation}: {reason}")
