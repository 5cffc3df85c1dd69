"""
Profile service implementation.

Backs the routing guard's profile lookup and the profile-completion flow.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from modules.auth.exceptions import TransientFetchError

from .interfaces import IProfileService
from .models import (
    HANDLE_MAX_LENGTH,
    HANDLE_MIN_LENGTH,
    NAME_MIN_LENGTH,
    HandleAvailability,
    PlayerProfile,
)
from .repository import ProfileRepository
from .exceptions import HandleTakenError, InvalidProfileError, ProfileNotFoundError

logger = logging.getLogger(__name__)


def suggest_handles(gamer_handle: str) -> list[str]:
    """Alternatives offered when a handle is taken."""
    year = datetime.now(timezone.utc).year
    return [f"{gamer_handle}1", f"{gamer_handle}_pro", f"{gamer_handle}{year}"]


class ProfileService(IProfileService):
    """
    Profile service backed by the players table.
    """

    def __init__(self, repository: ProfileRepository):
        self._repository = repository

    async def find_profile_by_identity(self, user_id: str) -> Optional[PlayerProfile]:
        """Look up the identity's player row."""
        try:
            return self._repository.get_by_auth_user_id(user_id)
        except httpx.HTTPError as e:
            raise TransientFetchError(f"Profile lookup failed: {e}", service="supabase_db")

    async def update_profile(
        self,
        user_id: str,
        name: str,
        gamer_handle: str,
    ) -> PlayerProfile:
        """Complete the profile with a name and a unique handle."""
        name = name.strip()
        gamer_handle = gamer_handle.strip()

        if not name or not gamer_handle:
            raise InvalidProfileError("Name and gamer handle are required")
        if len(name) < NAME_MIN_LENGTH:
            raise InvalidProfileError(f"Name must be at least {NAME_MIN_LENGTH} characters")
        if not HANDLE_MIN_LENGTH <= len(gamer_handle) <= HANDLE_MAX_LENGTH:
            raise InvalidProfileError(
                f"Gamer handle must be between {HANDLE_MIN_LENGTH} and {HANDLE_MAX_LENGTH} characters"
            )

        profile = await self.find_profile_by_identity(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)

        owner = self._repository.find_handle_owner(gamer_handle, exclude_player_id=profile.player_id)
        if owner is not None:
            logger.info(f"Handle {gamer_handle!r} already taken by player {owner}")
            raise HandleTakenError(gamer_handle)

        updated = self._repository.update_name_and_handle(profile.player_id, name, gamer_handle)
        if updated is None or not updated.name_present or not updated.gamer_handle:
            raise InvalidProfileError("Profile update succeeded but data is incomplete")

        logger.info(f"Completed profile for player {updated.player_id}")
        return updated

    async def check_handle(self, gamer_handle: str) -> HandleAvailability:
        """Check handle availability; lookup failures report it as available."""
        gamer_handle = gamer_handle.strip()
        try:
            owner = self._repository.find_handle_owner(gamer_handle)
        except Exception:
            logger.warning(f"Handle availability check failed for {gamer_handle!r}")
            return HandleAvailability(available=True)

        if owner is None:
            return HandleAvailability(available=True)
        return HandleAvailability(available=False, suggestions=suggest_handles(gamer_handle))
