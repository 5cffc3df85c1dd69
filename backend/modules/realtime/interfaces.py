"""
Realtime module interface.

The aggregator depends on IChangeFeed; SupabaseChangeFeed is the
production implementation.
"""

from typing import Callable, Protocol, runtime_checkable

from .models import ChangeEvent


ChangeCallback = Callable[[ChangeEvent], None]


@runtime_checkable
class ISubscriptionHandle(Protocol):
    """An open change stream for one table."""

    table: str

    @property
    def closed(self) -> bool:
        ...

    async def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        ...


@runtime_checkable
class IChangeFeed(Protocol):
    """Opens per-table change streams."""

    async def subscribe(self, table: str, callback: ChangeCallback) -> ISubscriptionHandle:
        """
        Open a change stream for a table.

        Raises:
            SubscriptionError: If the stream cannot be established
        """
        ...
