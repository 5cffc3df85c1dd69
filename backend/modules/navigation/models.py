"""
Navigation module data models.

Route targets, guard states, and the snapshot the guard keeps of its
last settlement.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.auth.models import Session
from modules.profiles.models import ProfileCheck


# Logical screen paths (stable contract with the client)
ROOT_PATH = "/"
AUTH_PATH = "/auth"
AUTH_CALLBACK_PATH = "/auth/callback"
PASSWORD_RESET_PATH = "/auth/reset-password"
COMPLETE_PROFILE_PATH = "/complete-profile"
ONBOARDING_PATH = "/onboarding"
HOME_PATH = "/home"


class GuardState(str, Enum):
    """Settled state of the routing guard."""

    UNKNOWN = "unknown"  # Session not yet resolved
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_INCOMPLETE_PROFILE = "authenticated_incomplete_profile"
    AUTHENTICATED_COMPLETE = "authenticated_complete"


class RouteDecision(BaseModel):
    """Output of the decision function."""

    state: GuardState
    redirect: Optional[str] = Field(None, description="Path to replace the current one with")

    model_config = {"frozen": True}


@dataclass(frozen=True)
class GuardInputs:
    """Everything a decision depends on."""

    user_id: Optional[str]
    profile: Optional[ProfileCheck]
    path: str


@dataclass(frozen=True)
class GuardSnapshot:
    """
    The guard's last settlement.

    A new settlement only happens when the inputs differ from the
    snapshot's inputs.
    """

    state: GuardState
    inputs: GuardInputs
    redirect: Optional[str]
    cause: str


class ResolveRouteRequest(BaseModel):
    """Request to resolve the canonical route for a path."""

    path: str = Field(default=ROOT_PATH, description="Current client path")


class ResolveRouteResponse(BaseModel):
    """Canonical route for the caller's session."""

    state: GuardState
    redirect: Optional[str] = None


class CallbackStatus(str, Enum):
    """Outcome of the auth callback page."""

    REDIRECTING = "redirecting"
    ERROR = "error"


class CallbackResult(BaseModel):
    """Result of completing an auth callback."""

    status: CallbackStatus
    redirect: Optional[str] = None
    error: Optional[str] = None
    session: Optional[Session] = Field(None, description="Session issued by the exchange")


class PasswordResetStatus(str, Enum):
    """States of the password reset screen."""

    CHECKING = "checking"
    READY = "ready"
    UPDATING = "updating"
    SUCCESS = "success"
    ERROR = "error"


class PasswordResetResult(BaseModel):
    """State of the password reset flow after a step."""

    status: PasswordResetStatus
    error: Optional[str] = None
    redirect: Optional[str] = None
