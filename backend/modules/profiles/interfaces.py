"""
Profiles module interface.

The routing guard depends only on IProfileLookup.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import HandleAvailability, PlayerProfile


@runtime_checkable
class IProfileLookup(Protocol):
    """Read access to player profiles keyed by identity."""

    async def find_profile_by_identity(self, user_id: str) -> Optional[PlayerProfile]:
        """
        Find the player profile owned by an identity.

        Args:
            user_id: Identity provider user ID

        Returns:
            PlayerProfile if a row exists, None otherwise

        Raises:
            TransientFetchError: If the profile store cannot be reached
        """
        ...


@runtime_checkable
class IProfileService(IProfileLookup, Protocol):
    """Profile lookup plus the profile-completion operations."""

    async def update_profile(
        self,
        user_id: str,
        name: str,
        gamer_handle: str,
    ) -> PlayerProfile:
        """
        Set the display name and gamer handle for an identity's player.

        Raises:
            InvalidProfileError: If name or handle are out of range
            ProfileNotFoundError: If the identity has no player row
            HandleTakenError: If another player uses the handle
        """
        ...

    async def check_handle(self, gamer_handle: str) -> HandleAvailability:
        """Check whether a gamer handle is free, with suggestions if not."""
        ...
