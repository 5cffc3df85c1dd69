"""
Profiles module.

Reads player profiles for routing decisions and completes profiles
(name and gamer handle) for new players.

Public API:
- IProfileLookup: Lookup used by the routing guard
- IProfileService: Lookup plus profile completion
- PlayerProfile, ProfileCheck: Profile data
"""

from .interfaces import IProfileLookup, IProfileService
from .models import (
    PlayerProfile,
    ProfileCheck,
    UpdateProfileRequest,
    HandleAvailability,
)
from .exceptions import ProfileNotFoundError, HandleTakenError, InvalidProfileError

__all__ = [
    # Interfaces
    "IProfileLookup",
    "IProfileService",
    # Models
    "PlayerProfile",
    "ProfileCheck",
    "UpdateProfileRequest",
    "HandleAvailability",
    # Exceptions
    "ProfileNotFoundError",
    "HandleTakenError",
    "InvalidProfileError",
]
