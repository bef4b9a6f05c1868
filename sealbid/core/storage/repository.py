"""
Auction Repository - Storage contract used by the protocol engine.

The engine never reads-then-writes on its own. Every mutation is a
conditional update that re-checks its precondition inside the same
atomic unit as the write, so two concurrent callers cannot both pass a
"field is empty" check:

    set_commit_if_absent                 commit_x IS NULL
    clear_commit_if_counterpart_absent   commit_other IS NULL
    set_reveal_if_absent                 bid_x IS NULL, both commits present

Implementations:
    InMemoryAuctionRepository  per-auction locks, for tests and embedding
    StorageManager             SQLite, single-statement conditional UPDATEs
"""

import dataclasses
import threading
import time
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Optional

from sealbid.core.auction.record import AuctionRecord, Seat
from sealbid.core.errors import IdentifierCollision
from sealbid.core.tokens import TokenScheme
from sealbid.crypto import constant_time_equals
from sealbid.utils.logger import get_logger

logger = get_logger("storage.repository")


class AuctionRepository(ABC):
    """Durable keyed storage for auction records."""

    def __init__(self, tokens: Optional[TokenScheme] = None):
        self.tokens = tokens or TokenScheme()

    def create(
        self,
        title: str,
        description: Optional[str] = None,
        item_url: Optional[str] = None,
    ) -> AuctionRecord:
        """
        Create a new auction with a fresh id and two fresh seat tokens.

        Raises:
            IdentifierCollision: id or a token already exists (never overwrites)
        """
        seat_a_token, seat_b_token = self.tokens.generate_seat_tokens()
        record = AuctionRecord(
            id=self.tokens.generate_auction_id(),
            title=title,
            description=description,
            item_url=item_url,
            seat_a_token=seat_a_token,
            seat_b_token=seat_b_token,
            created_at=int(time.time()),
        )
        self.insert(record)
        return record

    @abstractmethod
    def insert(self, record: AuctionRecord) -> None:
        """Store a new record. Raises IdentifierCollision on duplicate id/token."""

    @abstractmethod
    def find_by_id(self, auction_id: str) -> Optional[AuctionRecord]:
        ...

    @abstractmethod
    def find_by_id_and_token(self, auction_id: str, token: str) -> Optional[AuctionRecord]:
        """Record whose id matches and whose seat A or B token equals `token`."""

    @abstractmethod
    def set_commit_if_absent(self, auction_id: str, seat: Seat, digest: str) -> bool:
        """Set the seat's commit; False if a commit already exists."""

    @abstractmethod
    def clear_commit_if_counterpart_absent(self, auction_id: str, seat: Seat) -> bool:
        """Clear the seat's commit; False if the other seat has committed."""

    @abstractmethod
    def set_reveal_if_absent(
        self,
        auction_id: str,
        seat: Seat,
        bid: Decimal,
        secret: str,
        expected_commit: str,
    ) -> bool:
        """
        Store bid and secret for the seat.

        False if the seat already revealed, either commit is missing, or the
        seat's commit is no longer `expected_commit`.
        """

    def close(self) -> None:
        """Release resources held by the repository."""


class InMemoryAuctionRepository(AuctionRepository):
    """
    Process-local repository.

    Each auction gets its own lock; auctions never contend with each other.
    Records are copied on the way in and out so callers cannot mutate
    stored state.
    """

    def __init__(self, tokens: Optional[TokenScheme] = None):
        super().__init__(tokens)
        self._records: Dict[str, AuctionRecord] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._tokens_in_use: set = set()
        self._registry_lock = threading.Lock()

    def insert(self, record: AuctionRecord) -> None:
        with self._registry_lock:
            if (
                record.id in self._records
                or record.seat_a_token in self._tokens_in_use
                or record.seat_b_token in self._tokens_in_use
                or record.seat_a_token == record.seat_b_token
            ):
                logger.error("Identifier collision while creating auction")
                raise IdentifierCollision()
            self._records[record.id] = dataclasses.replace(record)
            self._locks[record.id] = threading.Lock()
            self._tokens_in_use.update((record.seat_a_token, record.seat_b_token))

    def _lock_for(self, auction_id: str) -> Optional[threading.Lock]:
        with self._registry_lock:
            return self._locks.get(auction_id)

    def find_by_id(self, auction_id: str) -> Optional[AuctionRecord]:
        lock = self._lock_for(auction_id)
        if lock is None:
            return None
        with lock:
            return dataclasses.replace(self._records[auction_id])

    def find_by_id_and_token(self, auction_id: str, token: str) -> Optional[AuctionRecord]:
        record = self.find_by_id(auction_id)
        if record is None:
            return None
        if constant_time_equals(record.seat_a_token, token) or constant_time_equals(
            record.seat_b_token, token
        ):
            return record
        return None

    def set_commit_if_absent(self, auction_id: str, seat: Seat, digest: str) -> bool:
        lock = self._lock_for(auction_id)
        if lock is None:
            return False
        with lock:
            record = self._records[auction_id]
            if record.commit_for(seat) is not None:
                return False
            setattr(record, f"commit_{seat.value.lower()}", digest)
            return True

    def clear_commit_if_counterpart_absent(self, auction_id: str, seat: Seat) -> bool:
        lock = self._lock_for(auction_id)
        if lock is None:
            return False
        with lock:
            record = self._records[auction_id]
            if record.commit_for(seat.other) is not None or record.has_reveal(seat):
                return False
            setattr(record, f"commit_{seat.value.lower()}", None)
            return True

    def set_reveal_if_absent(
        self,
        auction_id: str,
        seat: Seat,
        bid: Decimal,
        secret: str,
        expected_commit: str,
    ) -> bool:
        lock = self._lock_for(auction_id)
        if lock is None:
            return False
        with lock:
            record = self._records[auction_id]
            if (
                record.has_reveal(seat)
                or not record.both_committed
                or record.commit_for(seat) != expected_commit
            ):
                return False
            suffix = seat.value.lower()
            setattr(record, f"bid_{suffix}", bid)
            setattr(record, f"secret_{suffix}", secret)
            return True


__all__ = ["AuctionRepository", "InMemoryAuctionRepository"]
