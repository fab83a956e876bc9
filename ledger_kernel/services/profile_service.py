"""
Service layer for profile lookup and credential resolution.

The inbound credential is the opaque value of the ``profile_id`` header: a
decimal profile id.  Anything that does not name an existing profile is
reported as unauthenticated; mapping that to a transport status is the
caller's concern.
"""

from __future__ import annotations

from ledger_kernel.domain.dtos import ProfileInfo
from ledger_kernel.exceptions import ProfileNotFoundError, UnauthenticatedError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.profile import Profile
from ledger_kernel.services.base import BaseService

logger = get_logger("services.profile")


class ProfileService(BaseService):
    """Profile reads and credential resolution."""

    def get_by_id(self, profile_id: int) -> ProfileInfo:
        """
        Raises:
            ProfileNotFoundError: If the profile doesn't exist.
        """
        profile = self.session.get(Profile, profile_id)
        if profile is None:
            raise ProfileNotFoundError(profile_id)
        return ProfileInfo.from_model(profile)

    def resolve(self, credential: str | int | None) -> ProfileInfo:
        """
        Resolve a credential to its profile.

        Raises:
            UnauthenticatedError: If the credential is missing, is not an
                integer id, or names no profile.
        """
        if credential is None or isinstance(credential, bool):
            raise UnauthenticatedError(None if credential is None else str(credential))
        try:
            profile_id = int(str(credential).strip())
        except ValueError:
            raise UnauthenticatedError(str(credential)) from None

        profile = self.session.get(Profile, profile_id)
        if profile is None:
            logger.info("credential_rejected", extra={"credential": str(credential)})
            raise UnauthenticatedError(str(credential))
        return ProfileInfo.from_model(profile)
