"""
Accounts module interface.

Account management handlers depend on IAccountStore, never on the
concrete store, so tests can construct isolated instances.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    AccountClassification,
    AccountListing,
    AccountRecord,
    AccountStats,
    BulkDeleteResult,
    Player,
)


@runtime_checkable
class IAccountStore(Protocol):
    """
    Interface for the demonstration/real account partition.

    Every email is classified as exactly one of demonstration, real,
    or unknown at any instant.
    """

    def classify(self, email: str) -> AccountClassification:
        """Look up which partition an email belongs to."""
        ...

    def list_demonstration(self) -> list[AccountRecord]:
        """Regenerate and return the demonstration accounts."""
        ...

    def list_real(self) -> list[AccountRecord]:
        """Snapshot of the real accounts."""
        ...

    def list_all(self) -> AccountListing:
        """Both partitions."""
        ...

    def create_real(self, player: Player) -> AccountRecord:
        """
        Create or overwrite a real account.

        Raises:
            InvalidIdentityError: If the email is blank
        """
        ...

    def delete(self, email: str) -> bool:
        """
        Delete an account.

        Returns:
            True if the email was classified, False otherwise
        """
        ...

    def bulk_delete(self, emails: list[str]) -> BulkDeleteResult:
        """Delete several accounts, reporting which ones were not found."""
        ...

    def get_stats(self) -> AccountStats:
        """Account counts and recent real accounts."""
        ...

    def save_user_data(self, email: str, data: dict[str, Any]) -> None:
        """Cache auxiliary data for a classified account."""
        ...

    def get_user_data(self, email: str) -> Optional[dict[str, Any]]:
        """Get cached auxiliary data, if any."""
        ...
