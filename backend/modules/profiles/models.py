"""
Profiles module data models.

A player profile lives in the external ``players`` table; the routing
layer only needs the ProfileCheck projection.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


HANDLE_MIN_LENGTH = 3
HANDLE_MAX_LENGTH = 20
NAME_MIN_LENGTH = 2


class PlayerProfile(BaseModel):
    """A player row from the profile store."""

    player_id: str = Field(..., description="Player ID")
    auth_user_id: Optional[str] = Field(None, description="Identity the player belongs to")
    email: Optional[str] = Field(None, description="Player email")
    name: Optional[str] = Field(None, description="Display name, absent until set")
    gamer_handle: Optional[str] = Field(None, description="Public gamer handle")

    @property
    def name_present(self) -> bool:
        return bool(self.name and self.name.strip())


class ProfileCheck(BaseModel):
    """
    Projection of a profile used for routing decisions.

    ``exists`` is False when the identity has no player row yet.
    """

    exists: bool
    name_present: bool = False
    player_id: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_profile(cls, profile: Optional[PlayerProfile]) -> "ProfileCheck":
        if profile is None:
            return cls(exists=False)
        return cls(
            exists=True,
            name_present=profile.name_present,
            player_id=profile.player_id,
        )

    @property
    def complete(self) -> bool:
        return self.exists and self.name_present


class UpdateProfileRequest(BaseModel):
    """Request to complete or change a profile."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, description="Display name")
    gamer_handle: str = Field(
        ...,
        min_length=HANDLE_MIN_LENGTH,
        max_length=HANDLE_MAX_LENGTH,
        description="Gamer handle",
    )

    @field_validator("name", "gamer_handle")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()


class HandleAvailability(BaseModel):
    """Result of a gamer handle availability check."""

    available: bool
    suggestions: list[str] = Field(default_factory=list)
