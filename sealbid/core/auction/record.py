"""
Auction Record - Stored state of a two-seat sealed-bid auction.

The record holds only nullable per-seat fields. The lifecycle state is
never persisted; it is derived from which fields are present every time
the record is read:

    OPEN       no commits, or a single commit
    COMMITTED  both commits present, fewer than two reveals
    REVEALED   both bids present (terminal)
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional
import time


# =============================================================================
# Enums
# =============================================================================


class Seat(str, Enum):
    """One of the two fixed negotiating positions."""
    A = "A"
    B = "B"

    @property
    def other(self) -> "Seat":
        return Seat.B if self is Seat.A else Seat.A

    def __str__(self) -> str:
        return self.value


class AuctionState(IntEnum):
    """Lifecycle state of an auction (derived, never stored)."""
    OPEN = 0
    COMMITTED = 1
    REVEALED = 2

    @property
    def phase(self) -> str:
        """Label reported to callers: the step the parties are on."""
        return _PHASE_LABELS[self]


_PHASE_LABELS = {
    AuctionState.OPEN: "commit",
    AuctionState.COMMITTED: "reveal",
    AuctionState.REVEALED: "revealed",
}


# =============================================================================
# Data Structures
# =============================================================================


@dataclass
class AuctionRecord:
    """
    One auction as held by the repository.

    id, metadata, seat tokens and created_at are immutable after creation.
    commit_*, bid_* and secret_* are the only mutable fields.
    """
    id: str
    title: str
    seat_a_token: str
    seat_b_token: str
    description: Optional[str] = None
    item_url: Optional[str] = None
    commit_a: Optional[str] = None
    commit_b: Optional[str] = None
    bid_a: Optional[Decimal] = None
    bid_b: Optional[Decimal] = None
    secret_a: Optional[str] = None
    secret_b: Optional[str] = None
    created_at: int = field(default_factory=lambda: int(time.time()))

    def commit_for(self, seat: Seat) -> Optional[str]:
        return self.commit_a if seat is Seat.A else self.commit_b

    def bid_for(self, seat: Seat) -> Optional[Decimal]:
        return self.bid_a if seat is Seat.A else self.bid_b

    def token_for(self, seat: Seat) -> str:
        return self.seat_a_token if seat is Seat.A else self.seat_b_token

    def has_commit(self, seat: Seat) -> bool:
        return bool(self.commit_for(seat))

    def has_reveal(self, seat: Seat) -> bool:
        return self.bid_for(seat) is not None

    @property
    def both_committed(self) -> bool:
        return self.has_commit(Seat.A) and self.has_commit(Seat.B)

    @property
    def both_revealed(self) -> bool:
        return self.has_reveal(Seat.A) and self.has_reveal(Seat.B)

    @property
    def state(self) -> AuctionState:
        """Derive lifecycle state from the stored fields."""
        if self.both_revealed:
            return AuctionState.REVEALED
        if self.both_committed:
            return AuctionState.COMMITTED
        return AuctionState.OPEN

    @property
    def phase(self) -> str:
        return self.state.phase


__all__ = [
    "Seat",
    "AuctionState",
    "AuctionRecord",
]
