"""
Accounts module exceptions.
"""

from shared.exceptions import TrashfootError, ValidationError


class InvalidIdentityError(ValidationError):
    """Raised when an account email is missing or blank."""

    def __init__(self, message: str = "Invalid email for real account creation"):
        super().__init__(message, code="INVALID_IDENTITY")


class InconsistentClassificationError(TrashfootError):
    """
    Raised when the classification map and the real-account map disagree.

    This must never happen in correct operation.
    """

    def __init__(self, email: str, reason: str):
        super().__init__(
            f"Inconsistent classification for {email}: {reason}",
            code="INCONSISTENT_CLASSIFICATION",
            details={"email": email, "reason": reason},
        )
