"""
Unit tests for cryptographic primitives.

Tests cover:
1. Hashing functions
2. Digest format checks
3. Random identifier generation
4. Constant-time comparison
"""

import hashlib

import pytest

from sealbid.crypto import (
    MIN_TOKEN_ENTROPY_BITS,
    SHA256_HEX_LENGTH,
    constant_time_equals,
    is_hex_digest,
    random_token,
    sha256,
    sha256_hex,
)


class TestHashing:
    """Tests for hash functions."""

    def test_sha256_deterministic(self):
        """Same input should produce same hash."""
        assert sha256(b"test data") == sha256(b"test data")
        assert len(sha256(b"test data")) == 32

    def test_sha256_hex_matches_hashlib(self):
        assert sha256_hex("150.00|peanut|abc|A") == hashlib.sha256(b"150.00|peanut|abc|A").hexdigest()

    def test_sha256_hex_encodes_utf8(self):
        assert sha256_hex("café") == hashlib.sha256("café".encode("utf-8")).hexdigest()
        assert len(sha256_hex("x")) == SHA256_HEX_LENGTH


class TestDigestFormat:

    def test_accepts_lowercase_hex(self):
        assert is_hex_digest(sha256_hex("x"))

    @pytest.mark.parametrize("value", [
        "A" * 64,
        "a" * 63,
        "a" * 65,
        "g" * 64,
        "a" * 64 + "\n",
        None,
        64,
    ])
    def test_rejects_malformed(self, value):
        assert not is_hex_digest(value)


class TestRandomTokens:
    """Tests for bearer identifier generation."""

    def test_length_and_alphabet(self):
        token = random_token(24)
        assert len(token) == 32
        assert all(c.isalnum() or c in "-_" for c in token)

    def test_tokens_are_unique(self):
        assert len({random_token(16) for _ in range(100)}) == 100

    def test_rejects_low_entropy(self):
        with pytest.raises(ValueError):
            random_token(MIN_TOKEN_ENTROPY_BITS // 8 - 1)


class TestConstantTimeEquals:

    def test_equal(self):
        assert constant_time_equals("abc", "abc")

    def test_not_equal(self):
        assert not constant_time_equals("abc", "abd")
        assert not constant_time_equals("abc", "abcd")
