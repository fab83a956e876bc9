"""
Module: ledger_kernel.db.types
Responsibility: The monetary column type and inbound amount parsing.
    Centralizes precision and parsing so that every model and service uses
    identical rules.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    CRITICAL: No floats anywhere in the ledger kernel.  All monetary amounts
           use Decimal.  Float input is accepted at the boundary only and is
           converted through its shortest repr, never through binary
           expansion.

Failure modes:
    - InvalidAmountError on None, bool, strings, NaN, infinities, and
      amounts with non-zero digits beyond the money scale.
"""

from decimal import Decimal
from typing import Annotated

from ledger_kernel.db.base import MONEY_SCALE, MoneyNumeric
from ledger_kernel.exceptions import InvalidAmountError

# 38 digits total, 9 decimal places; exact on SQLite as well
Money = Annotated[Decimal, MoneyNumeric()]

ZERO = Decimal("0")


def parse_amount(value: object) -> Decimal:
    """
    Convert an inbound amount to Decimal.

    Accepts int, Decimal and float.  Strings are rejected: transports
    convert their text to a number before calling in.  bool is rejected
    even though it subclasses int: ``True`` is not an amount.

    Raises:
        InvalidAmountError: If value is missing, not a number, not finite,
            or finer than the money scale.
    """
    if value is None:
        raise InvalidAmountError(value, "amount is required")
    if isinstance(value, bool):
        raise InvalidAmountError(value)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    else:
        raise InvalidAmountError(value)

    if not amount.is_finite():
        raise InvalidAmountError(value)
    if _finer_than_money_scale(amount):
        raise InvalidAmountError(value, f"more than {MONEY_SCALE} decimal places")
    return amount


def _finer_than_money_scale(amount: Decimal) -> bool:
    """True when storage would have to round non-zero digits away."""
    _, digits, exponent = amount.as_tuple()
    excess = -MONEY_SCALE - exponent
    return excess > 0 and any(digits[-excess:])
