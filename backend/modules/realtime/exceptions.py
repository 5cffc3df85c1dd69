"""
Realtime module exceptions.
"""

from shared.exceptions import ExternalServiceError


class SubscriptionError(ExternalServiceError):
    """Raised when a change stream cannot be established."""

    def __init__(self, table: str, reason: str):
        super().__init__(
            f"Failed to subscribe to {table}: {reason}",
            service="supabase_realtime",
            code="SUBSCRIPTION_FAILED",
            details={"table": table, "reason": reason},
        )
        self.table = table
