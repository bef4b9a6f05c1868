"""
Commit-Reveal Binding - Commitment hashes for sealed bids.

A party commits to a bid by publishing

    C = SHA256("<bid to 2 decimals>|<secret>|<auction id>|<seat>")

as lowercase hex. At reveal time the server recomputes C from the
disclosed bid and secret, using the auction id and the seat resolved
from the caller's token, and accepts the reveal only on an exact match.

Binding the auction id and the seat into the payload stops a commitment
from being replayed in another auction or copied by the other seat.

The same function is used client-side to build a commitment and
server-side to verify it.
"""

import secrets
from dataclasses import dataclass
from typing import Any, Optional, Union

from sealbid.crypto import sha256_hex, constant_time_equals
from sealbid.core.auction.bid import canonical_bid
from sealbid.core.auction.record import Seat


# =============================================================================
# Constants
# =============================================================================

PAYLOAD_SEPARATOR = "|"

# Entropy for client-generated secrets (bytes)
DEFAULT_SECRET_BYTES = 16


# =============================================================================
# Hash Binder
# =============================================================================


def commitment_payload(
    bid: Any,
    secret: str,
    auction_id: str,
    seat: Union[Seat, str],
) -> str:
    """
    Build the text payload bound by a commitment.

    Args:
        bid: Bid (any accepted form; canonicalized to two decimals)
        secret: The party's secret string, used verbatim
        auction_id: Auction identifier
        seat: Seat label ("A" or "B")

    Returns:
        "bid|secret|auction_id|seat"
    """
    seat_label = Seat(seat).value
    return PAYLOAD_SEPARATOR.join((canonical_bid(bid), secret, auction_id, seat_label))


def compute_commit_hash(
    bid: Any,
    secret: str,
    auction_id: str,
    seat: Union[Seat, str],
) -> str:
    """
    Compute the commitment digest for a bid.

    Returns:
        64-char lowercase hex SHA-256 digest
    """
    return sha256_hex(commitment_payload(bid, secret, auction_id, seat))


def verify_commitment(
    commitment: str,
    bid: Any,
    secret: str,
    auction_id: str,
    seat: Union[Seat, str],
) -> bool:
    """Whether (bid, secret) reproduces `commitment` for this auction and seat."""
    return constant_time_equals(compute_commit_hash(bid, secret, auction_id, seat), commitment)


# =============================================================================
# Client-side Helpers
# =============================================================================


def generate_secret(nbytes: int = DEFAULT_SECRET_BYTES) -> str:
    """Generate a random secret suitable for blinding a bid."""
    return secrets.token_urlsafe(nbytes)


@dataclass
class SealedBid:
    """
    A party's locally held bid and the commitment to publish.

    Only `commitment` leaves the party's machine before the reveal phase.
    """
    auction_id: str
    seat: Seat
    bid: str          # Canonical two-decimal text
    secret: str
    commitment: str


def create_sealed_bid(
    bid: Any,
    auction_id: str,
    seat: Union[Seat, str],
    secret: Optional[str] = None,
) -> SealedBid:
    """
    Create a commitment for a bid, generating a secret if none is given.

    Args:
        bid: Bid value (validated by the caller)
        auction_id: Auction identifier
        seat: Seat label
        secret: Optional secret; a random one is generated when omitted

    Returns:
        SealedBid holding everything needed to reveal later
    """
    seat = Seat(seat)
    if secret is None:
        secret = generate_secret()
    return SealedBid(
        auction_id=auction_id,
        seat=seat,
        bid=canonical_bid(bid),
        secret=secret,
        commitment=compute_commit_hash(bid, secret, auction_id, seat),
    )


__all__ = [
    "commitment_payload",
    "compute_commit_hash",
    "verify_commitment",
    "generate_secret",
    "create_sealed_bid",
    "SealedBid",
    "PAYLOAD_SEPARATOR",
]
