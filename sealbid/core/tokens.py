"""
Access Token Scheme - Capability tokens for auction seats.

An auction has an id and two seat tokens. Holding a seat token is the
only proof of being that seat; there are no accounts. Tokens are drawn
from a CSPRNG with at least 128 bits of entropy and are never equal to
each other within an auction.

Seat resolution merges "unknown auction" and "wrong token" into one
NotFound so a caller cannot probe which half of a link was wrong.
"""

from typing import Tuple

from sealbid.crypto import random_token, constant_time_equals
from sealbid.core.auction.record import AuctionRecord, Seat
from sealbid.core.errors import NotFound
from sealbid.utils.logger import get_logger

logger = get_logger("tokens")


# =============================================================================
# Constants
# =============================================================================

DEFAULT_SEAT_TOKEN_BYTES = 24   # 192 bits
DEFAULT_AUCTION_ID_BYTES = 16   # 128 bits


# =============================================================================
# Token Scheme
# =============================================================================


class TokenScheme:
    """
    Generates auction ids and seat tokens and resolves tokens to seats.

    Args:
        seat_token_bytes: Random bytes per seat token
        auction_id_bytes: Random bytes per auction id
    """

    def __init__(
        self,
        seat_token_bytes: int = DEFAULT_SEAT_TOKEN_BYTES,
        auction_id_bytes: int = DEFAULT_AUCTION_ID_BYTES,
    ):
        # random_token enforces the entropy floor; fail at construction time
        random_token(seat_token_bytes)
        random_token(auction_id_bytes)
        self.seat_token_bytes = seat_token_bytes
        self.auction_id_bytes = auction_id_bytes

    def generate_token(self) -> str:
        return random_token(self.seat_token_bytes)

    def generate_auction_id(self) -> str:
        return random_token(self.auction_id_bytes)

    def generate_seat_tokens(self) -> Tuple[str, str]:
        """Two distinct seat tokens (A, B)."""
        token_a = self.generate_token()
        token_b = self.generate_token()
        while constant_time_equals(token_a, token_b):
            token_b = self.generate_token()
        return token_a, token_b

    @staticmethod
    def seat_of(record: AuctionRecord, token: str) -> Seat:
        """
        Determine which seat a token belongs to.

        Raises:
            NotFound: if the token matches neither seat
        """
        if not isinstance(token, str) or not token:
            raise NotFound()
        # Evaluate both comparisons so timing does not depend on the seat
        is_a = constant_time_equals(record.seat_a_token, token)
        is_b = constant_time_equals(record.seat_b_token, token)
        if is_a:
            return Seat.A
        if is_b:
            return Seat.B
        raise NotFound()

    def resolve_seat(self, repository, auction_id: str, token: str) -> Tuple[AuctionRecord, Seat]:
        """
        Resolve (auction id, seat token) to the record and seat.

        Args:
            repository: AuctionRepository to read from
            auction_id: Auction identifier
            token: Caller's seat token

        Returns:
            (record, seat)

        Raises:
            NotFound: unknown id or a token matching neither seat
        """
        if not isinstance(auction_id, str) or not isinstance(token, str) or not token:
            raise NotFound()

        record = repository.find_by_id_and_token(auction_id, token)
        if record is None:
            logger.debug("Seat resolution failed")
            raise NotFound()

        return record, self.seat_of(record, token)


# Module-level scheme with default entropy
default_scheme = TokenScheme()


def generate_token() -> str:
    """Generate a seat token (192 bits)."""
    return default_scheme.generate_token()


def generate_auction_id() -> str:
    """Generate an auction id (128 bits)."""
    return default_scheme.generate_auction_id()


def resolve_seat(repository, auction_id: str, token: str) -> Tuple[AuctionRecord, Seat]:
    """Resolve a seat using the default scheme."""
    return default_scheme.resolve_seat(repository, auction_id, token)


__all__ = [
    "TokenScheme",
    "generate_token",
    "generate_auction_id",
    "resolve_seat",
    "DEFAULT_SEAT_TOKEN_BYTES",
    "DEFAULT_AUCTION_ID_BYTES",
]
