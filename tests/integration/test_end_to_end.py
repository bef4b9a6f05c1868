"""
End-to-end auction scenarios against the SQLite repository.

Scenarios:
1. Full auction: both commit, both reveal, higher bid wins
2. Reveal with a wrong secret is rejected and can be retried
3. Reset is allowed until the counterpart commits
"""

import hashlib

import pytest

from sealbid.core.auction import Seat
from sealbid.core.engine import AuctionEngine
from sealbid.core.errors import Conflict, HashMismatch
from sealbid.core.storage import StorageManager


@pytest.fixture
def storage(tmp_path):
    storage = StorageManager(tmp_path / "auctions.db")
    yield storage
    storage.close()


@pytest.fixture
def engine(storage):
    return AuctionEngine(storage)


def sha256_hex(text):
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def test_full_auction(engine):
    """Create, commit, reveal, and settle an auction B wins."""
    created = engine.create("Vintage lamp", "Brass", "https://example.com/lamp")
    auction_id = created.auction_id

    engine.commit(auction_id, created.seat_a_token, sha256_hex(f"150.00|peanut|{auction_id}|A"))
    engine.commit(auction_id, created.seat_b_token, sha256_hex(f"200.00|walnut|{auction_id}|B"))

    assert engine.get_status(auction_id).phase == "reveal"

    engine.reveal(auction_id, created.seat_a_token, "150.00", "peanut")
    engine.reveal(auction_id, created.seat_b_token, "200.00", "walnut")

    result = engine.get_result(auction_id).to_payload()
    assert result["revealed"] is True
    assert result["winner"] == "B"
    assert result["paymentAmount"] == "200.00"
    assert result["bidA"] == "150.00"
    assert result["bidB"] == "200.00"
    assert engine.get_status(auction_id).phase == "revealed"


def test_wrong_secret_then_retry(engine, storage):
    """A wrong secret is rejected, A's commit stays, and A can retry."""
    created = engine.create("Lamp")
    auction_id = created.auction_id
    commit_a = sha256_hex(f"150.00|peanut|{auction_id}|A")

    engine.commit(auction_id, created.seat_a_token, commit_a)
    engine.commit(auction_id, created.seat_b_token, sha256_hex(f"200.00|walnut|{auction_id}|B"))

    with pytest.raises(HashMismatch):
        engine.reveal(auction_id, created.seat_a_token, 150.00, "wrong")

    record = storage.find_by_id(auction_id)
    assert record.commit_a == commit_a
    assert record.bid_a is None
    assert engine.get_status(auction_id).phase == "reveal"

    engine.reveal(auction_id, created.seat_a_token, 150.00, "peanut")
    assert storage.find_by_id(auction_id).has_reveal(Seat.A)


def test_reset_until_counterpart_commits(engine, storage):
    """A may reset while B has not committed, but not afterwards."""
    created = engine.create("Lamp")
    auction_id = created.auction_id

    engine.commit(auction_id, created.seat_a_token, sha256_hex(f"150.00|peanut|{auction_id}|A"))
    engine.reset_commit(auction_id, created.seat_a_token)
    assert storage.find_by_id(auction_id).commit_a is None

    engine.commit(auction_id, created.seat_b_token, sha256_hex(f"200.00|walnut|{auction_id}|B"))
    engine.commit(auction_id, created.seat_a_token, sha256_hex(f"175.00|pecan|{auction_id}|A"))

    with pytest.raises(Conflict):
        engine.reset_commit(auction_id, created.seat_a_token)

    record = storage.find_by_id(auction_id)
    assert record.commit_a == sha256_hex(f"175.00|pecan|{auction_id}|A")
    assert record.state.phase == "reveal"


def test_auctions_are_isolated(engine):
    """A commitment in one auction cannot be revealed in another."""
    first = engine.create("One")
    second = engine.create("Two")

    digest = sha256_hex(f"10.00|s|{first.auction_id}|A")
    engine.commit(first.auction_id, first.seat_a_token, digest)
    engine.commit(second.auction_id, second.seat_a_token, digest)
    engine.commit(second.auction_id, second.seat_b_token, "b" * 64)

    with pytest.raises(HashMismatch):
        engine.reveal(second.auction_id, second.seat_a_token, "10.00", "s")
