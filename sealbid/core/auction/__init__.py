"""
sealbid Auction Module.

This module provides the building blocks of a two-seat sealed-bid auction:
- Auction record, seats and derived lifecycle state
- Bid validation and canonical form
- Commitment hashing (commit-reveal binding)
- Boundary payloads
"""

from sealbid.core.auction.record import (
    AuctionRecord,
    AuctionState,
    Seat,
)

from sealbid.core.auction.bid import (
    validate_bid,
    is_valid_bid,
    parse_bid,
    format_bid,
    canonical_bid,
    MAX_BID,
    BID_DECIMALS,
)

from sealbid.core.auction.commit_reveal import (
    commitment_payload,
    compute_commit_hash,
    verify_commitment,
    generate_secret,
    create_sealed_bid,
    SealedBid,
)

from sealbid.core.auction.views import (
    CreatedAuction,
    CommitmentReceipt,
    AuctionStatus,
    AuctionResult,
)

__all__ = [
    # Record
    "AuctionRecord",
    "AuctionState",
    "Seat",
    # Bids
    "validate_bid",
    "is_valid_bid",
    "parse_bid",
    "format_bid",
    "canonical_bid",
    "MAX_BID",
    "BID_DECIMALS",
    # Commit-Reveal
    "commitment_payload",
    "compute_commit_hash",
    "verify_commitment",
    "generate_secret",
    "create_sealed_bid",
    "SealedBid",
    # Views
    "CreatedAuction",
    "CommitmentReceipt",
    "AuctionStatus",
    "AuctionResult",
]
