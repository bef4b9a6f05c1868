"""
Boundary payloads returned by the auction engine.

These are transport-neutral: the request-handling layer decides how to
encode them. Field aliases use camelCase so `to_payload()` matches what
browser clients expect.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from sealbid.core.auction.record import Seat


class _View(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CreatedAuction(_View):
    """Identifiers handed to the creator. The only place seat tokens are returned."""
    auction_id: str = Field(alias="auctionId")
    seat_a_token: str = Field(alias="seatAToken")
    seat_b_token: str = Field(alias="seatBToken")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class CommitmentReceipt(_View):
    """Acknowledgement for commit, reset-commit and reveal."""
    ok: bool = True
    seat: Seat

    def to_payload(self) -> Dict[str, Any]:
        return {"ok": self.ok}


class AuctionStatus(_View):
    phase: str
    has_commit_a: bool = Field(alias="hasCommitA")
    has_commit_b: bool = Field(alias="hasCommitB")
    has_reveal_a: bool = Field(alias="hasRevealA")
    has_reveal_b: bool = Field(alias="hasRevealB")
    title: str
    description: Optional[str] = None
    item_url: Optional[str] = Field(default=None, alias="itemUrl")
    my_seat: Optional[Seat] = Field(default=None, alias="mySeat")
    revealed: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True, mode="json")
        # Seat identification is omitted, not nulled, for unresolved tokens
        if self.my_seat is None:
            payload.pop("mySeat")
        if not self.revealed:
            payload.pop("revealed")
        return payload


class AuctionResult(_View):
    revealed: bool
    title: Optional[str] = None
    description: Optional[str] = None
    item_url: Optional[str] = Field(default=None, alias="itemUrl")
    bid_a: Optional[str] = Field(default=None, alias="bidA")
    bid_b: Optional[str] = Field(default=None, alias="bidB")
    winner: Optional[str] = None
    payment_amount: Optional[str] = Field(default=None, alias="paymentAmount")

    def to_payload(self) -> Dict[str, Any]:
        if not self.revealed:
            return {"revealed": False}
        return self.model_dump(by_alias=True, mode="json")


__all__ = [
    "CreatedAuction",
    "CommitmentReceipt",
    "AuctionStatus",
    "AuctionResult",
]
