"""
Error taxonomy for the auction protocol.

Every protocol rejection is a subclass of AuctionError carrying a stable
`code`. Messages are written for the party that caused them and never
include auction ids, seat tokens, or anything about the counterpart's bid.
"""


class AuctionError(Exception):
    """Base class for all protocol outcomes other than success."""

    code = "auction_error"
    default_message = "Auction operation failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_payload(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(AuctionError):
    """Malformed input: title, bid format, commit digest format, secret."""

    code = "validation_error"
    default_message = "Invalid input"


class NotFound(AuctionError):
    """Unknown auction id or unresolvable seat token (deliberately merged)."""

    code = "not_found"
    default_message = "Auction not found or invalid token"


class AlreadyCommitted(AuctionError):
    code = "already_committed"
    default_message = "Commit already submitted"


class AlreadyRevealed(AuctionError):
    code = "already_revealed"
    default_message = "Already revealed"


class Conflict(AuctionError):
    """Reset attempted after the counterpart committed."""

    code = "conflict"
    default_message = "Cannot reset: other party has already committed"


class PreconditionFailed(AuctionError):
    """Reveal attempted before both commits exist."""

    code = "precondition_failed"
    default_message = "Both parties must commit before reveal"


class HashMismatch(AuctionError):
    """Reveal payload does not reproduce the stored commitment."""

    code = "hash_mismatch"
    default_message = "Hash mismatch: bid or secret does not match commit"


class InternalError(AuctionError):
    code = "internal_error"
    default_message = "Internal error"


class IdentifierCollision(InternalError):
    """Freshly generated id or seat token already exists in storage."""

    code = "identifier_collision"
    default_message = "Failed to create auction"


class StorageError(AuctionError):
    """Repository unavailable or failing. The only fatal kind."""

    code = "storage_error"
    default_message = "Storage unavailable"


__all__ = [
    "AuctionError",
    "ValidationError",
    "NotFound",
    "AlreadyCommitted",
    "AlreadyRevealed",
    "Conflict",
    "PreconditionFailed",
    "HashMismatch",
    "InternalError",
    "IdentifierCollision",
    "StorageError",
]
