"""
Tests for commitment hashing.

Tests cover:
1. Payload layout and digest format
2. Determinism
3. Sensitivity to every bound field
4. Verification and client-side helpers
"""

import hashlib
import itertools

import pytest

from sealbid.core.auction import (
    Seat,
    commitment_payload,
    compute_commit_hash,
    verify_commitment,
    create_sealed_bid,
    generate_secret,
)
from sealbid.crypto import is_hex_digest


AUCTION_ID = "q1w2e3r4t5y6u7i8o9p0aa"


# =============================================================================
# Payload Tests
# =============================================================================


class TestPayload:
    """Tests for the text bound by a commitment."""

    def test_payload_layout(self):
        """bid|secret|auction_id|seat with the bid at two decimals."""
        assert commitment_payload("150", "peanut", AUCTION_ID, "A") == f"150.00|peanut|{AUCTION_ID}|A"

    def test_seat_enum_and_label_agree(self):
        assert commitment_payload(1, "s", AUCTION_ID, Seat.B) == commitment_payload(1, "s", AUCTION_ID, "B")

    def test_unknown_seat_rejected(self):
        with pytest.raises(ValueError):
            commitment_payload(1, "s", AUCTION_ID, "C")

    def test_digest_matches_plain_sha256(self):
        """Any client can reproduce the digest with a stock SHA-256."""
        expected = hashlib.sha256(f"150.00|peanut|{AUCTION_ID}|A".encode("utf-8")).hexdigest()
        assert compute_commit_hash("150.00", "peanut", AUCTION_ID, "A") == expected

    def test_digest_is_lowercase_hex(self):
        digest = compute_commit_hash(42, "secret", AUCTION_ID, "B")
        assert is_hex_digest(digest)

    def test_unicode_secret(self):
        expected = hashlib.sha256(f"1.00|pâté🔒|{AUCTION_ID}|A".encode("utf-8")).hexdigest()
        assert compute_commit_hash(1, "pâté🔒", AUCTION_ID, "A") == expected


# =============================================================================
# Binding Tests
# =============================================================================


class TestBinding:
    """Tests that every field is bound by the digest."""

    def test_deterministic(self):
        """Same inputs produce same commitment."""
        c1 = compute_commit_hash("99.99", "salt", AUCTION_ID, "A")
        c2 = compute_commit_hash("99.99", "salt", AUCTION_ID, "A")
        assert c1 == c2

    def test_equivalent_bid_spellings_agree(self):
        """Canonicalization makes 150, '150' and '150.0' the same bid."""
        digests = {compute_commit_hash(b, "s", AUCTION_ID, "A") for b in (150, "150", "150.0", "150.00")}
        assert len(digests) == 1

    def test_each_field_changes_digest(self):
        base = compute_commit_hash("150.00", "peanut", AUCTION_ID, "A")
        assert compute_commit_hash("150.01", "peanut", AUCTION_ID, "A") != base
        assert compute_commit_hash("150.00", "peanuT", AUCTION_ID, "A") != base
        assert compute_commit_hash("150.00", "peanut", AUCTION_ID + "x", "A") != base
        assert compute_commit_hash("150.00", "peanut", AUCTION_ID, "B") != base

    def test_no_collisions_in_corpus(self):
        """Distinct tuples in a small corpus never collide."""
        bids = ["1.00", "1.01", "150.00", "100000.00"]
        secrets_ = ["a", "b", "peanut", "walnut", ""]
        ids = ["id1", "id2", AUCTION_ID]
        seats = ["A", "B"]

        seen = {}
        for tup in itertools.product(bids, secrets_, ids, seats):
            digest = compute_commit_hash(*tup)
            assert digest not in seen, f"{tup} collides with {seen.get(digest)}"
            seen[digest] = tup


# =============================================================================
# Verification Tests
# =============================================================================


class TestVerification:
    """Tests for reveal verification."""

    def test_verify_matching_reveal(self):
        commitment = compute_commit_hash("150.00", "peanut", AUCTION_ID, "A")
        assert verify_commitment(commitment, "150", "peanut", AUCTION_ID, "A")

    def test_one_char_secret_change_fails(self):
        commitment = compute_commit_hash("150.00", "peanut", AUCTION_ID, "A")
        assert not verify_commitment(commitment, "150.00", "peanuts", AUCTION_ID, "A")

    def test_commitment_not_portable_across_seats(self):
        """Seat B cannot reuse seat A's commitment."""
        commitment = compute_commit_hash("150.00", "peanut", AUCTION_ID, "A")
        assert not verify_commitment(commitment, "150.00", "peanut", AUCTION_ID, "B")


class TestSealedBid:
    """Tests for the client-side helper."""

    def test_create_with_secret(self):
        sealed = create_sealed_bid("150", AUCTION_ID, "A", secret="peanut")
        assert sealed.bid == "150.00"
        assert sealed.seat is Seat.A
        assert sealed.commitment == compute_commit_hash("150.00", "peanut", AUCTION_ID, "A")

    def test_create_generates_secret(self):
        s1 = create_sealed_bid("10", AUCTION_ID, "B")
        s2 = create_sealed_bid("10", AUCTION_ID, "B")
        assert s1.secret and s2.secret
        assert s1.secret != s2.secret
        assert s1.commitment != s2.commitment
        assert verify_commitment(s1.commitment, s1.bid, s1.secret, AUCTION_ID, "B")

    def test_generate_secret_length(self):
        assert len(generate_secret()) >= 22
