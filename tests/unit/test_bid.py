"""
Tests for bid validation and canonical form.

Tests cover:
1. Accepted numeric domain (0 < bid <= 100000)
2. Two-decimal limit checked on the caller's text
3. Rejection of non-numeric input
4. Canonical two-decimal formatting
"""

import pytest
from decimal import Decimal

from sealbid.core.auction import (
    validate_bid,
    is_valid_bid,
    parse_bid,
    format_bid,
    canonical_bid,
)


# =============================================================================
# Validation Tests
# =============================================================================


class TestBidDomain:
    """Tests for the accepted numeric range."""

    @pytest.mark.parametrize("raw", [1, 0.01, "0.01", "150", "150.5", "150.50", 100000, "100000.00"])
    def test_accepts_values_in_range(self, raw):
        """Values in (0, 100000] with <= 2 decimals are accepted."""
        assert is_valid_bid(raw)

    @pytest.mark.parametrize("raw", [0, "0", "0.00", -1, "-5.00"])
    def test_rejects_zero_and_negative(self, raw):
        """Bids must be strictly positive."""
        valid, err = validate_bid(raw)
        assert not valid
        assert "> 0" in err

    @pytest.mark.parametrize("raw", [100000.01, "100000.01", 250000])
    def test_rejects_above_ceiling(self, raw):
        """Bids above 100000 are rejected."""
        valid, err = validate_bid(raw)
        assert not valid
        assert "100000" in err

    def test_custom_ceiling(self):
        """Ceiling can be lowered by the caller."""
        assert not is_valid_bid("500", max_bid=Decimal("100"))
        assert is_valid_bid("100", max_bid=Decimal("100"))


class TestBidText:
    """Tests for the fractional-digit check on the supplied text."""

    def test_third_decimal_rejected_even_if_zero(self):
        """'150.000' has three fractional digits and is rejected."""
        valid, err = validate_bid("150.000")
        assert not valid
        assert "decimals" in err

    def test_third_decimal_rejected_even_if_rounds_cleanly(self):
        """'150.001' is not silently rounded to 150.00."""
        assert not is_valid_bid("150.001")

    def test_float_text_is_checked(self):
        """Floats are checked through their repr."""
        assert is_valid_bid(150.25)
        assert not is_valid_bid(0.1 + 0.2)  # 0.30000000000000004

    def test_decimal_input(self):
        assert is_valid_bid(Decimal("99.99"))
        assert not is_valid_bid(Decimal("99.999"))

    def test_surrounding_whitespace_ignored(self):
        assert is_valid_bid("  42.10 ")

    def test_trailing_dot_and_leading_dot(self):
        assert is_valid_bid("150.")
        assert is_valid_bid(".5")


class TestNonNumeric:
    """Tests for input that is not a number at all."""

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "12abc", "1e3", "1,000", "NaN", "inf", None, [], {}, True, False, float("nan"), float("inf")],
    )
    def test_rejected(self, raw):
        assert not is_valid_bid(raw)


# =============================================================================
# Canonical Form Tests
# =============================================================================


class TestCanonicalForm:
    """Tests for two-decimal canonicalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("150", "150.00"),
            (150, "150.00"),
            (150.5, "150.50"),
            ("0.1", "0.10"),
            (".5", "0.50"),
            ("+7", "7.00"),
            (Decimal("100000"), "100000.00"),
        ],
    )
    def test_canonical_bid(self, raw, expected):
        assert canonical_bid(raw) == expected

    def test_parse_bid_returns_decimal(self):
        value = parse_bid("200")
        assert isinstance(value, Decimal)
        assert value == Decimal("200.00")

    def test_parse_bid_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_bid("not-a-bid")

    def test_format_bid(self):
        assert format_bid(Decimal("3")) == "3.00"
        assert format_bid(Decimal("3.1")) == "3.10"
