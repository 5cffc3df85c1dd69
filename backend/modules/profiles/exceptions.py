"""
Profiles module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    """Raised when no player row exists for an identity."""

    def __init__(self, user_id: str):
        super().__init__(
            "Player not found",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class HandleTakenError(ValidationError):
    """Raised when a gamer handle belongs to another player."""

    def __init__(self, gamer_handle: str):
        super().__init__(
            "This gamer handle is already taken. Please choose another one.",
            code="HANDLE_TAKEN",
            details={"gamer_handle": gamer_handle},
        )


class InvalidProfileError(ValidationError):
    """Raised when profile fields are missing or out of range."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PROFILE")
