"""
Auction Protocol Engine - Commit-reveal state machine for two-seat auctions.

This module implements the protocol operations:
1. create        open a new auction, issue id and seat tokens
2. commit        seat publishes a hash commitment to its bid
3. reset_commit  seat withdraws its commitment while the other seat has none
4. reveal        seat discloses bid and secret, verified against its commitment
5. get_status    derived phase and per-seat progress
6. get_result    winner and payment once both bids are revealed

The phase is never stored. It is derived from the record on each read:

    commit    fewer than two commits
    reveal    both commits, fewer than two reveals
    revealed  both reveals (terminal)

Every mutation is delegated to a conditional update on the repository,
which re-checks its precondition atomically. The checks made here on the
freshly read record produce precise errors; the repository's check is
what holds under concurrency. A rejected operation never changes state.
"""

from typing import Any, Optional

from sealbid.core.auction.bid import validate_bid, parse_bid, format_bid
from sealbid.core.auction.commit_reveal import verify_commitment
from sealbid.core.auction.record import AuctionRecord, Seat
from sealbid.core.auction.views import (
    AuctionResult,
    AuctionStatus,
    CommitmentReceipt,
    CreatedAuction,
)
from sealbid.core.config import AuctionConfig
from sealbid.core.errors import (
    AlreadyCommitted,
    AlreadyRevealed,
    Conflict,
    HashMismatch,
    NotFound,
    PreconditionFailed,
    ValidationError,
)
from sealbid.core.tokens import TokenScheme
from sealbid.utils.logger import get_logger
from sealbid.utils.validation import (
    clean_optional,
    validate_commit_digest,
    validate_optional_string,
    validate_secret,
    validate_title,
)

logger = get_logger("engine")

WINNER_TIE = "TIE"


class AuctionEngine:
    """
    Applies protocol operations against an auction repository.

    Args:
        repository: AuctionRepository holding the records
        config: Limits (title length, bid ceiling); defaults if omitted
        tokens: Token scheme used for seat resolution
    """

    def __init__(
        self,
        repository,
        config: Optional[AuctionConfig] = None,
        tokens: Optional[TokenScheme] = None,
    ):
        self.repository = repository
        self.config = config or AuctionConfig()
        self.tokens = tokens or getattr(repository, "tokens", None) or TokenScheme(
            seat_token_bytes=self.config.seat_token_bytes,
            auction_id_bytes=self.config.auction_id_bytes,
        )

    # =========================================================================
    # Create
    # =========================================================================

    def create(
        self,
        title: Any,
        description: Any = None,
        item_url: Any = None,
    ) -> CreatedAuction:
        """
        Create an auction in the commit phase.

        Raises:
            ValidationError: title missing, not a string, blank, or too long;
                description / item_url not strings
        """
        for valid, err in (
            validate_title(title, self.config.max_title_length),
            validate_optional_string(description, "description"),
            validate_optional_string(item_url, "item_url"),
        ):
            if not valid:
                raise ValidationError(err)

        record = self.repository.create(
            title.strip(),
            clean_optional(description),
            clean_optional(item_url),
        )
        logger.info("Auction created")
        return CreatedAuction(
            auction_id=record.id,
            seat_a_token=record.seat_a_token,
            seat_b_token=record.seat_b_token,
        )

    # =========================================================================
    # Commit Phase
    # =========================================================================

    def commit(self, auction_id: str, seat_token: str, digest: Any) -> CommitmentReceipt:
        """
        Record a seat's commitment. One-shot: a second commit fails even
        with the same digest; use reset_commit to change a bid.

        Raises:
            ValidationError: digest is not 64 lowercase hex chars
            NotFound: unknown auction or token
            AlreadyCommitted: seat already has a commitment
        """
        valid, err = validate_commit_digest(digest)
        if not valid:
            raise ValidationError(err)

        record, seat = self.tokens.resolve_seat(self.repository, auction_id, seat_token)

        if record.has_commit(seat):
            logger.debug(f"Commit rejected for seat {seat}: already committed")
            raise AlreadyCommitted()

        if not self.repository.set_commit_if_absent(record.id, seat, digest):
            logger.debug(f"Commit rejected for seat {seat}: lost race")
            raise AlreadyCommitted()

        logger.info(f"Commit accepted for seat {seat}")
        return CommitmentReceipt(seat=seat)

    def reset_commit(self, auction_id: str, seat_token: str) -> CommitmentReceipt:
        """
        Clear a seat's commitment so it can commit again.

        Only allowed while the other seat has not committed, so a party
        cannot reopen the window after the counterpart has locked in.

        Raises:
            NotFound: unknown auction or token
            Conflict: the other seat has already committed
        """
        record, seat = self.tokens.resolve_seat(self.repository, auction_id, seat_token)

        if record.has_commit(seat.other):
            logger.debug(f"Reset rejected for seat {seat}: counterpart committed")
            raise Conflict()

        if not self.repository.clear_commit_if_counterpart_absent(record.id, seat):
            logger.debug(f"Reset rejected for seat {seat}: counterpart committed concurrently")
            raise Conflict()

        logger.info(f"Commit reset for seat {seat}")
        return CommitmentReceipt(seat=seat)

    # =========================================================================
    # Reveal Phase
    # =========================================================================

    def reveal(self, auction_id: str, seat_token: str, bid: Any, secret: Any) -> CommitmentReceipt:
        """
        Disclose a seat's bid and secret.

        The digest is recomputed from the canonical bid, the secret, this
        auction's id and the resolved seat. On mismatch nothing changes and
        the seat may retry.

        Raises:
            ValidationError: bid outside the accepted domain or empty secret
            NotFound: unknown auction or token
            PreconditionFailed: either seat has not committed
            AlreadyRevealed: seat already revealed
            HashMismatch: bid/secret do not reproduce the stored commitment
        """
        valid, err = validate_bid(bid, self.config.max_bid)
        if not valid:
            raise ValidationError(err)
        valid, err = validate_secret(secret)
        if not valid:
            raise ValidationError(err)

        record, seat = self.tokens.resolve_seat(self.repository, auction_id, seat_token)

        if not record.both_committed:
            raise PreconditionFailed()

        if record.has_reveal(seat):
            raise AlreadyRevealed()

        stored_commit = record.commit_for(seat)
        if not verify_commitment(stored_commit, bid, secret, record.id, seat):
            logger.warning(f"Reveal mismatch for seat {seat}")
            raise HashMismatch()

        amount = parse_bid(bid)
        if not self.repository.set_reveal_if_absent(record.id, seat, amount, secret, stored_commit):
            self._raise_reveal_conflict(record.id, seat)

        logger.info(f"Reveal accepted for seat {seat}")
        return CommitmentReceipt(seat=seat)

    def _raise_reveal_conflict(self, auction_id: str, seat: Seat) -> None:
        """Explain why a conditional reveal update did not apply."""
        current = self.repository.find_by_id(auction_id)
        if current is None:
            raise NotFound()
        if current.has_reveal(seat):
            raise AlreadyRevealed()
        if not current.both_committed:
            raise PreconditionFailed()
        raise HashMismatch()

    # =========================================================================
    # Queries
    # =========================================================================

    def get_status(self, auction_id: str, seat_token: Optional[str] = None) -> AuctionStatus:
        """
        Report phase, per-seat progress and public metadata.

        A seat token that does not resolve is ignored, not reported.

        Raises:
            NotFound: unknown auction
        """
        record = self._find(auction_id)

        my_seat = None
        if seat_token:
            try:
                my_seat = self.tokens.seat_of(record, seat_token)
            except NotFound:
                my_seat = None

        return AuctionStatus(
            phase=record.phase,
            has_commit_a=record.has_commit(Seat.A),
            has_commit_b=record.has_commit(Seat.B),
            has_reveal_a=record.has_reveal(Seat.A),
            has_reveal_b=record.has_reveal(Seat.B),
            title=record.title,
            description=record.description,
            item_url=record.item_url,
            my_seat=my_seat,
            revealed=record.both_revealed,
        )

    def get_result(self, auction_id: str) -> AuctionResult:
        """
        Winner and payment once both bids are revealed.

        Highest bid wins and pays its own bid; equal bids are a TIE with
        no payment amount.

        Raises:
            NotFound: unknown auction
        """
        record = self._find(auction_id)

        if not record.both_revealed:
            return AuctionResult(revealed=False)

        winner, payment = decide_winner(record)
        return AuctionResult(
            revealed=True,
            title=record.title,
            description=record.description,
            item_url=record.item_url,
            bid_a=format_bid(record.bid_a),
            bid_b=format_bid(record.bid_b),
            winner=winner,
            payment_amount=payment,
        )

    def _find(self, auction_id: str) -> AuctionRecord:
        if not isinstance(auction_id, str) or not auction_id:
            raise NotFound("Auction not found")
        record = self.repository.find_by_id(auction_id)
        if record is None:
            raise NotFound("Auction not found")
        return record


def decide_winner(record: AuctionRecord):
    """
    Compare revealed bids strictly.

    Returns:
        (winner label, payment amount text or None on tie)
    """
    if record.bid_a > record.bid_b:
        return Seat.A.value, format_bid(record.bid_a)
    if record.bid_b > record.bid_a:
        return Seat.B.value, format_bid(record.bid_b)
    return WINNER_TIE, None


__all__ = ["AuctionEngine", "decide_winner", "WINNER_TIE"]
