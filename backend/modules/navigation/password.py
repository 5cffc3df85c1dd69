"""
Password reset flow.

Runs after a recovery callback: requires an active session, validates
the new password, and shows provider failures verbatim.
"""

import logging

from modules.auth.interfaces import ISessionSource
from shared.exceptions import ExternalServiceError

from .models import HOME_PATH, PasswordResetResult, PasswordResetStatus

logger = logging.getLogger(__name__)

NO_RECOVERY_SESSION_MESSAGE = (
    "No active recovery session. Please use the password reset link again."
)


class PasswordResetFlow:
    """
    State of the "set a new password" screen.

    check_session() must succeed before submit() is accepted.
    """

    def __init__(self, session_source: ISessionSource, min_length: int = 8):
        self._session_source = session_source
        self._min_length = min_length
        self.status = PasswordResetStatus.CHECKING

    async def check_session(self) -> PasswordResetResult:
        """Confirm a recovery session exists."""
        self.status = PasswordResetStatus.CHECKING
        try:
            session = await self._session_source.get_session()
        except ExternalServiceError as e:
            self.status = PasswordResetStatus.ERROR
            return PasswordResetResult(status=self.status, error=e.message)

        if session is None:
            self.status = PasswordResetStatus.ERROR
            return PasswordResetResult(status=self.status, error=NO_RECOVERY_SESSION_MESSAGE)

        self.status = PasswordResetStatus.READY
        return PasswordResetResult(status=self.status)

    async def submit(self, password: str, confirm: str) -> PasswordResetResult:
        """
        Update the password.

        Validation problems keep the form ready with an error message.
        """
        if self.status != PasswordResetStatus.READY:
            return PasswordResetResult(
                status=self.status,
                error=NO_RECOVERY_SESSION_MESSAGE,
            )

        if len(password) < self._min_length:
            return PasswordResetResult(
                status=self.status,
                error=f"Password must be at least {self._min_length} characters.",
            )
        if password != confirm:
            return PasswordResetResult(status=self.status, error="Passwords do not match.")

        self.status = PasswordResetStatus.UPDATING
        try:
            await self._session_source.update_password(password)
        except ExternalServiceError as e:
            logger.info(f"Password update rejected: {e.message}")
            self.status = PasswordResetStatus.ERROR
            return PasswordResetResult(status=self.status, error=e.message or "Failed to update password.")

        self.status = PasswordResetStatus.SUCCESS
        return PasswordResetResult(status=self.status, redirect=HOME_PATH)
