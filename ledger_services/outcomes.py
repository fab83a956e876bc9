"""
Outcome mapping for transport adapters.

Each ledger invocation yields exactly one outcome: a success with its body,
or one typed failure.  ``to_outcome`` is the single place where kernel
exceptions become status codes; anything that is not a LedgerKernelError is
a bug and propagates untouched.

    200  success with body
    204  success without body (zero deposit)
    400  BadRequestError, TransactionFailureError
    401  UnauthorizedError, AuthenticationError
    402  InsufficientFundsError
    403  ForbiddenError
    404  NotFoundError
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ledger_kernel.domain.dtos import NoContent
from ledger_kernel.exceptions import LedgerKernelError


@dataclass(frozen=True)
class Outcome:
    status: int
    body: Any = None
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        return self.status < 400


def _serialize(result: Any) -> Any:
    if hasattr(result, "to_dict"):
        return result.to_dict()
    if isinstance(result, list):
        return [_serialize(item) for item in result]
    return result


def to_outcome(call: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    """Invoke ``call`` and fold its result or typed failure into an Outcome."""
    try:
        result = call(*args, **kwargs)
    except LedgerKernelError as exc:
        return Outcome(
            status=exc.http_status,
            body={"error": exc.code, "message": str(exc)},
            error_code=exc.code,
        )
    if isinstance(result, NoContent):
        return Outcome(status=204)
    return Outcome(status=200, body=_serialize(result))
