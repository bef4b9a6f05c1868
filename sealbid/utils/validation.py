"""
Input Validation - Sanitization for external protocol inputs.

Provides validation for inbound values to prevent:
- Oversized metadata
- Malformed commitment digests
- Wrong-typed fields slipping into storage
"""

from typing import Any, Optional, Tuple

from sealbid.crypto import is_hex_digest, SHA256_HEX_LENGTH

# =============================================================================
# Constants
# =============================================================================

MAX_TITLE_LENGTH = 200
MAX_STRING_LENGTH = 4096
MAX_SECRET_LENGTH = 1024


# =============================================================================
# Validation Functions
# =============================================================================


def validate_string(
    value: Any,
    name: str,
    max_length: int = MAX_STRING_LENGTH,
    allow_empty: bool = True,
) -> Tuple[bool, str]:
    """
    Validate string input.

    Args:
        value: Value to validate
        name: Field name for error messages
        max_length: Maximum string length
        allow_empty: Whether a blank (whitespace-only) string is acceptable

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    if not allow_empty and not value.strip():
        return False, f"{name} is required"

    if len(value) > max_length:
        return False, f"{name} too long (max {max_length} chars)"

    return True, ""


def validate_title(value: Any, max_length: int = MAX_TITLE_LENGTH) -> Tuple[bool, str]:
    """Validate an auction title (required, bounded)."""
    if value is None:
        return False, "title is required"
    return validate_string(value, "title", max_length=max_length, allow_empty=False)


def validate_optional_string(value: Any, name: str) -> Tuple[bool, str]:
    """Validate an optional metadata field (None is accepted)."""
    if value is None:
        return True, ""
    return validate_string(value, name)


def validate_commit_digest(value: Any) -> Tuple[bool, str]:
    """
    Validate a commitment digest.

    Must be exactly 64 lowercase hex characters; uppercase is rejected
    rather than normalized so stored commits have a single spelling.
    """
    if not isinstance(value, str):
        return False, f"commit must be str, got {type(value).__name__}"

    if not is_hex_digest(value):
        return False, f"Invalid commit format: expected {SHA256_HEX_LENGTH} lowercase hex chars"

    return True, ""


def validate_secret(value: Any) -> Tuple[bool, str]:
    """Validate a reveal secret (non-empty string)."""
    if not isinstance(value, str) or value == "":
        return False, "secret is required"

    if len(value) > MAX_SECRET_LENGTH:
        return False, f"secret too long (max {MAX_SECRET_LENGTH} chars)"

    return True, ""


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Trim an optional field; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_string",
    "validate_title",
    "validate_optional_string",
    "validate_commit_digest",
    "validate_secret",
    "clean_optional",
    "MAX_TITLE_LENGTH",
    "MAX_STRING_LENGTH",
    "MAX_SECRET_LENGTH",
]
