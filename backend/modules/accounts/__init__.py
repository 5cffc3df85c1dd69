"""
Accounts module.

Partitions accounts into demonstration (seeded, regenerated on read)
and real (registered) and serves consistent reads and writes.

Public API:
- IAccountStore: Interface for the partition store
- AccountPartitionStore: In-process implementation
- AccountRecord, AccountClassification, Player: Account data
- InvalidIdentityError, InconsistentClassificationError
"""

from .interfaces import IAccountStore
from .store import AccountPartitionStore
from .demonstration import generate_demonstration_players
from .models import (
    AccountClassification,
    AccountListing,
    AccountRecord,
    AccountStats,
    BulkDeleteResult,
    Player,
    PlayerStats,
)
from .exceptions import InvalidIdentityError, InconsistentClassificationError

__all__ = [
    # Interface
    "IAccountStore",
    # Implementation
    "AccountPartitionStore",
    "generate_demonstration_players",
    # Models
    "AccountClassification",
    "AccountListing",
    "AccountRecord",
    "AccountStats",
    "BulkDeleteResult",
    "Player",
    "PlayerStats",
    # Exceptions
    "InvalidIdentityError",
    "InconsistentClassificationError",
]
