"""
Cryptographic primitives for sealbid.

This module provides:
- Hashing functions (SHA-256)
- Random identifier generation (URL-safe, CSPRNG-backed)
- Constant-time comparison for bearer secrets

Design Notes:
-------------
Commitments are plain SHA-256 over a UTF-8 text payload so that any client
(browser, CLI, script) can reproduce them without a special library.

Identifiers are drawn from `secrets` and encoded with the URL-safe base64
alphabet, so they can be embedded in links without escaping.
"""

import hashlib
import hmac
import re
import secrets
from typing import Any


# =============================================================================
# Constants
# =============================================================================

# Length of a hex-encoded SHA-256 digest
SHA256_HEX_LENGTH = 64

# Minimum entropy accepted for any bearer identifier (bits)
MIN_TOKEN_ENTROPY_BITS = 128

_HEX_DIGEST_RE = re.compile(r"[0-9a-f]{64}")


# =============================================================================
# Hashing
# =============================================================================


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash.

    Used for: commitment digests.
    """
    return hashlib.sha256(data).digest()


def sha256_hex(text: str) -> str:
    """Compute the lowercase hex SHA-256 digest of a UTF-8 string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_hex_digest(value: Any) -> bool:
    """Whether value is exactly 64 lowercase hex characters."""
    return isinstance(value, str) and _HEX_DIGEST_RE.fullmatch(value) is not None


# =============================================================================
# Random Identifiers
# =============================================================================


def random_token(nbytes: int) -> str:
    """
    Generate a URL-safe random string carrying `nbytes` bytes of entropy.

    Args:
        nbytes: Number of random bytes (24 bytes -> 32 characters)

    Returns:
        URL-safe base64 string without padding
    """
    if nbytes * 8 < MIN_TOKEN_ENTROPY_BITS:
        raise ValueError(
            f"Token must carry at least {MIN_TOKEN_ENTROPY_BITS} bits, got {nbytes * 8}"
        )
    return secrets.token_urlsafe(nbytes)


def constant_time_equals(a: str, b: str) -> bool:
    """Compare two strings without leaking the mismatch position."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


__all__ = [
    "sha256",
    "sha256_hex",
    "is_hex_digest",
    "random_token",
    "constant_time_equals",
    "SHA256_HEX_LENGTH",
    "MIN_TOKEN_ENTROPY_BITS",
]
