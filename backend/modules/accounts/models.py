"""
Accounts module data models.

An account is either a demonstration account (seeded, regenerated on
every read) or a real account (created on registration).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class AccountClassification(str, Enum):
    """Which partition an email belongs to."""

    DEMONSTRATION = "demonstration"
    REAL = "real"
    UNKNOWN = "unknown"  # Not classified; never stored


class PlayerStats(BaseModel):
    """Aggregate match statistics for a player."""

    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    clean_sheets: int = 0
    points: int = 0
    win_rate: float = 0.0
    form: list[str] = Field(default_factory=list, description="Last five results, newest first")
    leagues_won: int = 0
    knockouts_won: int = 0


class Player(BaseModel):
    """Player payload stored with an account."""

    id: str = Field(..., description="Player ID")
    email: str = Field(..., description="Account email (partition key)")
    name: Optional[str] = Field(None, description="Display name")
    gamer_handle: Optional[str] = Field(None, description="Gamer handle")
    role: str = Field(default="player", description="Player role")
    status: str = Field(default="active", description="Account status")
    joined_at: datetime = Field(..., description="Registration time")
    stats: PlayerStats = Field(default_factory=PlayerStats)


class AccountRecord(BaseModel):
    """A classified account."""

    email: str
    classification: AccountClassification
    player: Player

    model_config = {"frozen": True}

    @field_validator("classification")
    @classmethod
    def must_be_partitioned(cls, v: AccountClassification) -> AccountClassification:
        if v == AccountClassification.UNKNOWN:
            raise ValueError("Account records are either demonstration or real")
        return v


class AccountListing(BaseModel):
    """Both partitions, as returned to account management screens."""

    demonstration: list[AccountRecord]
    real: list[AccountRecord]


class AccountStats(BaseModel):
    """Account counts plus the most recently joined real accounts."""

    total_accounts: int
    demonstration_accounts: int
    real_accounts: int
    recent_accounts: list[AccountRecord]


class ClassificationResponse(BaseModel):
    """Classification lookup result."""

    email: str
    classification: AccountClassification


class BulkDeleteRequest(BaseModel):
    """Request to delete several accounts at once."""

    emails: list[str]


class BulkDeleteResult(BaseModel):
    """Outcome of a bulk delete."""

    deleted: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Bulk delete completed. Deleted: {len(self.deleted)}, Failed: {len(self.failed)}"


class UserDataPayload(BaseModel):
    """Auxiliary per-user data cached alongside an account."""

    data: dict[str, Any] = Field(default_factory=dict)
