"""
Authorization guard.

Role checks shared by the payment and deposit services.  Pure predicates over
already-loaded profiles: no store access, no side effects.  Ownership is not
checked here; it is a filter on every lookup (see selectors/filters.py).
"""

from typing import Protocol, assert_never

from ledger_kernel.exceptions import UnauthorizedError
from ledger_kernel.models.profile import ProfileRole


class HasRole(Protocol):
    """Anything carrying a profile id and role (ORM Profile or ProfileInfo)."""

    id: int
    role: ProfileRole


def is_client(role: ProfileRole) -> bool:
    if role is ProfileRole.CLIENT:
        return True
    if role is ProfileRole.CONTRACTOR:
        return False
    assert_never(role)


def authorize_client(profile: HasRole) -> None:
    """
    Allow the operation only for client profiles.

    Gates every mutation that debits a client balance.

    Raises:
        UnauthorizedError: If the profile is not a client.
    """
    if not is_client(profile.role):
        raise UnauthorizedError(
            profile.id, profile.role.value, ProfileRole.CLIENT.value
        )
