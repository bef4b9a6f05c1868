"""
Bid Validator - Numeric domain and canonical form of sealed bids.

A bid is accepted when:
- it is a number or a numeric string (plain decimal notation only)
- 0 < bid <= 100000
- the text the caller supplied has at most two fractional digits

The fractional-digit check runs on the caller's own text, so "150.001"
is rejected even though it would round cleanly to "150.00".

Accepted bids are reduced to a canonical two-decimal string ("150.00"),
which is the only form ever fed into a commitment hash.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Tuple

# =============================================================================
# Constants
# =============================================================================

MIN_BID_EXCLUSIVE = Decimal("0")
MAX_BID = Decimal("100000")
BID_DECIMALS = 2

_QUANTUM = Decimal(1).scaleb(-BID_DECIMALS)  # Decimal("0.01")

# Optional sign, digits, optional fraction; no exponent, no thousands separators
_BID_TEXT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.(?P<frac>[0-9]*))?|\.(?P<frac_only>[0-9]+))")


# =============================================================================
# Validation
# =============================================================================


def bid_text(raw: Any) -> str:
    """
    Return the textual form of a bid as supplied by the caller.

    Raises:
        ValueError: if raw is not a number or a string
    """
    if isinstance(raw, bool):
        raise ValueError("bid must be a number or numeric string, got bool")
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise ValueError("bid must be finite")
        return repr(raw)
    if isinstance(raw, (int, Decimal)):
        return str(raw)
    raise ValueError(f"bid must be a number or numeric string, got {type(raw).__name__}")


def validate_bid(raw: Any, max_bid: Decimal = MAX_BID) -> Tuple[bool, str]:
    """
    Validate a bid against the accepted numeric domain.

    Args:
        raw: Caller-supplied bid (int, float, Decimal or str)
        max_bid: Inclusive upper bound

    Returns:
        (is_valid, error_message)
    """
    try:
        text = bid_text(raw)
    except ValueError as e:
        return False, f"Invalid bid: {e}"

    match = _BID_TEXT_RE.fullmatch(text)
    if match is None:
        return False, "Invalid bid: not a number"

    value = Decimal(text)
    if value <= MIN_BID_EXCLUSIVE:
        return False, "Invalid bid: must be > 0"
    if value > max_bid:
        return False, f"Invalid bid: must be <= {max_bid}"

    fraction = match.group("frac") or match.group("frac_only") or ""
    if len(fraction) > BID_DECIMALS:
        return False, f"Invalid bid: max {BID_DECIMALS} decimals"

    return True, ""


def is_valid_bid(raw: Any, max_bid: Decimal = MAX_BID) -> bool:
    """Boolean form of validate_bid."""
    valid, _ = validate_bid(raw, max_bid)
    return valid


# =============================================================================
# Canonical Form
# =============================================================================


def parse_bid(raw: Any) -> Decimal:
    """
    Parse an already-validated bid into a two-decimal Decimal.

    Raises:
        ValueError: if raw is not numeric
    """
    try:
        value = Decimal(bid_text(raw))
    except InvalidOperation:
        raise ValueError("bid is not a number") from None
    if not value.is_finite():
        raise ValueError("bid must be finite")
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def format_bid(value: Decimal) -> str:
    """Format a numeric bid with exactly two decimals."""
    return f"{Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP):.{BID_DECIMALS}f}"


def canonical_bid(raw: Any) -> str:
    """Canonical two-decimal text of a bid ("150" -> "150.00")."""
    return format_bid(parse_bid(raw))


__all__ = [
    "validate_bid",
    "is_valid_bid",
    "parse_bid",
    "format_bid",
    "canonical_bid",
    "bid_text",
    "MAX_BID",
    "BID_DECIMALS",
]
