"""
In-process account partition store.

Holds the classification map (email -> demonstration | real), the real
account map, and auxiliary per-user data. One instance is constructed
per application and injected into request handlers.
"""

import logging
import threading
from typing import Any, Callable, Optional

from shared.exceptions import ValidationError

from .demonstration import generate_demonstration_players
from .interfaces import IAccountStore
from .models import (
    AccountClassification,
    AccountListing,
    AccountRecord,
    AccountStats,
    BulkDeleteResult,
    Player,
)
from .exceptions import InconsistentClassificationError, InvalidIdentityError

logger = logging.getLogger(__name__)

RECENT_ACCOUNTS_LIMIT = 5

DemonstrationGenerator = Callable[[int], list[Player]]


def normalize_email(email: Optional[str]) -> str:
    """Trim an email; None becomes the empty string."""
    return (email or "").strip()


class AccountPartitionStore(IAccountStore):
    """
    Account store partitioning emails into demonstration and real.

    Demonstration players are produced by ``generator(seed)`` on every
    read and never cached. Only their classification markers are stored.

    All mutations run under a lock and are followed by an invariant check,
    so readers never observe a classification without its record.
    """

    def __init__(
        self,
        seed: int,
        generator: DemonstrationGenerator = generate_demonstration_players,
    ):
        self._seed = seed
        self._generator = generator
        self._lock = threading.RLock()
        self._classification: dict[str, AccountClassification] = {}
        self._real: dict[str, Player] = {}
        self._user_data: dict[str, dict[str, Any]] = {}

        for player in self._generator(seed):
            email = normalize_email(player.email)
            if email:
                self._classification[email] = AccountClassification.DEMONSTRATION

        logger.info(
            f"Initialized account store with {len(self._classification)} demonstration accounts"
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def classify(self, email: str) -> AccountClassification:
        """Look up which partition an email belongs to."""
        email = normalize_email(email)
        if not email:
            return AccountClassification.UNKNOWN
        with self._lock:
            return self._classification.get(email, AccountClassification.UNKNOWN)

    def is_demonstration(self, email: str) -> bool:
        return self.classify(email) == AccountClassification.DEMONSTRATION

    def is_real(self, email: str) -> bool:
        return self.classify(email) == AccountClassification.REAL

    def list_demonstration(self) -> list[AccountRecord]:
        """
        Regenerate the demonstration dataset.

        Only players whose email is still classified as demonstration are
        returned, so deleted or re-registered emails stay out.
        """
        players = self._generator(self._seed)
        with self._lock:
            return [
                AccountRecord(
                    email=normalize_email(p.email),
                    classification=AccountClassification.DEMONSTRATION,
                    player=p,
                )
                for p in players
                if self._classification.get(normalize_email(p.email))
                == AccountClassification.DEMONSTRATION
            ]

    def list_real(self) -> list[AccountRecord]:
        """Snapshot of the real accounts."""
        with self._lock:
            return [
                AccountRecord(email=email, classification=AccountClassification.REAL, player=player)
                for email, player in self._real.items()
            ]

    def list_all(self) -> AccountListing:
        return AccountListing(demonstration=self.list_demonstration(), real=self.list_real())

    def get_stats(self) -> AccountStats:
        """Account counts plus the most recently joined real accounts."""
        demonstration = self.list_demonstration()
        real = self.list_real()
        recent = sorted(real, key=lambda r: r.player.joined_at, reverse=True)
        return AccountStats(
            total_accounts=len(demonstration) + len(real),
            demonstration_accounts=len(demonstration),
            real_accounts=len(real),
            recent_accounts=recent[:RECENT_ACCOUNTS_LIMIT],
        )

    def get_user_data(self, email: str) -> Optional[dict[str, Any]]:
        with self._lock:
            data = self._user_data.get(normalize_email(email))
            return dict(data) if data is not None else None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_real(self, player: Player) -> AccountRecord:
        """
        Create or overwrite a real account.

        Any previous classification of the email (including demonstration)
        is replaced by real.
        """
        email = normalize_email(player.email)
        if not email:
            raise InvalidIdentityError()

        if player.email != email:
            player = player.model_copy(update={"email": email})

        with self._lock:
            previous = self._classification.get(email)
            self._real[email] = player
            self._classification[email] = AccountClassification.REAL
            self._check_invariant()

        if previous == AccountClassification.DEMONSTRATION:
            logger.info(f"Reclassified demonstration account as real: {email}")
        logger.info(f"Created real account: {email}")
        return AccountRecord(email=email, classification=AccountClassification.REAL, player=player)

    def delete(self, email: str) -> bool:
        """
        Delete an account.

        Real accounts lose their record, classification, and user data.
        Demonstration accounts lose their classification marker and user
        data; the generated player is then excluded from listings.
        """
        email = normalize_email(email)
        if not email:
            return False

        with self._lock:
            classification = self._classification.get(email)
            if classification is None:
                return False

            if classification == AccountClassification.REAL:
                del self._real[email]
            del self._classification[email]
            self._user_data.pop(email, None)
            self._check_invariant()

        logger.info(f"Deleted {classification.value} account: {email}")
        return True

    def bulk_delete(self, emails: list[str]) -> BulkDeleteResult:
        """Delete several accounts; unknown emails are reported as failed."""
        if not emails:
            raise ValidationError("No emails provided for deletion", code="EMPTY_BULK_DELETE")

        result = BulkDeleteResult()
        for email in emails:
            if self.delete(email):
                result.deleted.append(email)
            else:
                result.failed.append(email)

        logger.info(result.message)
        return result

    def save_user_data(self, email: str, data: dict[str, Any]) -> None:
        """Cache auxiliary data for a classified account."""
        email = normalize_email(email)
        if not email:
            raise InvalidIdentityError("Invalid email for user data")

        with self._lock:
            if email not in self._classification:
                raise InvalidIdentityError(f"No account for {email}")
            self._user_data[email] = dict(data)
        logger.debug(f"Saved user data for {email} ({len(data)} keys)")

    def _check_invariant(self) -> None:
        """Fail loudly if the two maps disagree. Caller holds the lock."""
        for email in self._real:
            if self._classification.get(email) != AccountClassification.REAL:
                raise InconsistentClassificationError(email, "real record without real classification")
        for email, classification in self._classification.items():
            if classification == AccountClassification.REAL and email not in self._real:
                raise InconsistentClassificationError(email, "real classification without record")
