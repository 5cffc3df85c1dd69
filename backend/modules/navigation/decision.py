"""
The routing decision function.

decide() is pure: the same (session presence, profile, path) always
gives the same RouteDecision.
"""

from typing import Optional
from urllib.parse import urlencode, urlsplit

from modules.profiles.models import ProfileCheck

from .models import (
    AUTH_PATH,
    COMPLETE_PROFILE_PATH,
    HOME_PATH,
    ONBOARDING_PATH,
    ROOT_PATH,
    GuardState,
    RouteDecision,
)


def normalize_path(path: Optional[str]) -> str:
    """Drop query and fragment; absent or empty paths are the root."""
    if not path:
        return ROOT_PATH
    cleaned = urlsplit(path).path or ROOT_PATH
    if len(cleaned) > 1:
        cleaned = cleaned.rstrip("/")
    return cleaned


def _in_area(path: str, area: str) -> bool:
    return path == area or path.startswith(area + "/")


def in_auth_area(path: Optional[str]) -> bool:
    return _in_area(normalize_path(path), AUTH_PATH)


def on_completion_screen(path: Optional[str]) -> bool:
    return _in_area(normalize_path(path), COMPLETE_PROFILE_PATH)


def is_root(path: Optional[str]) -> bool:
    return normalize_path(path) == ROOT_PATH


def complete_profile_url(player_id: Optional[str]) -> str:
    """Completion screen URL, carrying the player id when known."""
    if not player_id:
        return COMPLETE_PROFILE_PATH
    return f"{COMPLETE_PROFILE_PATH}?{urlencode({'playerId': player_id})}"


def decide(
    session_present: bool,
    profile: Optional[ProfileCheck],
    path: Optional[str],
) -> RouteDecision:
    """
    Decide the settled state and the redirect (if any) for the inputs.

    Args:
        session_present: Whether the user has a session
        profile: Profile projection; required when a session is present
        path: Current location

    Returns:
        RouteDecision with the settled state and an optional redirect
    """
    if not session_present:
        redirect = None if in_auth_area(path) else AUTH_PATH
        return RouteDecision(state=GuardState.UNAUTHENTICATED, redirect=redirect)

    if profile is None:
        raise ValueError("A profile check is required when a session is present")

    if not profile.complete:
        redirect = None if on_completion_screen(path) else complete_profile_url(profile.player_id)
        return RouteDecision(state=GuardState.AUTHENTICATED_INCOMPLETE_PROFILE, redirect=redirect)

    current = normalize_path(path)
    leave = (
        in_auth_area(current)
        or on_completion_screen(current)
        or _in_area(current, ONBOARDING_PATH)
        or is_root(current)
    )
    return RouteDecision(
        state=GuardState.AUTHENTICATED_COMPLETE,
        redirect=HOME_PATH if leave else None,
    )
