"""
Realtime module.

Turns row-level change streams on several tables into one coalesced
"data changed" signal.

Public API:
- IChangeFeed: Interface for opening per-table change streams
- ChangeAggregator: Owns subscriptions and emits ChangeSignal ticks
- ChangeSignal, ChangeEvent: Data models
- SubscriptionError: Raised when a stream cannot be established
"""

from .interfaces import IChangeFeed, ISubscriptionHandle, ChangeCallback
from .models import ChangeEvent, ChangeOperation, ChangeSignal, AggregatorStatus
from .aggregator import ChangeAggregator
from .exceptions import SubscriptionError

__all__ = [
    # Interfaces
    "IChangeFeed",
    "ISubscriptionHandle",
    "ChangeCallback",
    # Models
    "ChangeEvent",
    "ChangeOperation",
    "ChangeSignal",
    "AggregatorStatus",
    # Aggregator
    "ChangeAggregator",
    # Exceptions
    "SubscriptionError",
]
