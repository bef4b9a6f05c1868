"""
Configuration parameters for sealbid.

Defines protocol limits, identifier entropy, and operational paths.
Values can be overridden from a .env file or SEALBID_* environment variables.
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from sealbid.crypto import MIN_TOKEN_ENTROPY_BITS


@dataclass
class AuctionConfig:
    """Service-wide configuration parameters"""

    # Metadata limits
    max_title_length: int = 200

    # Bid domain (exclusive lower bound is zero)
    max_bid: Decimal = Decimal("100000")
    bid_decimals: int = 2

    # Identifier entropy in bytes
    seat_token_bytes: int = 24  # 192 bits
    auction_id_bytes: int = 16  # 128 bits

    # Paths
    db_path: Path = Path("data") / "auctions.db"
    log_dir: Path = Path("logs")

    # Logging
    log_level: int = logging.INFO
    log_to_file: bool = False

    def __post_init__(self):
        self.db_path = Path(self.db_path)
        self.log_dir = Path(self.log_dir)
        self.max_bid = Decimal(str(self.max_bid))
        for name in ("seat_token_bytes", "auction_id_bytes"):
            bits = getattr(self, name) * 8
            if bits < MIN_TOKEN_ENTROPY_BITS:
                raise ValueError(
                    f"{name} must provide at least {MIN_TOKEN_ENTROPY_BITS} bits, got {bits}"
                )


# Global config instance (can be overridden)
config = AuctionConfig()


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(env_file: Optional[str] = None) -> AuctionConfig:
    """
    Load configuration from the environment or use defaults.

    A .env file (explicit path, or the nearest one above the working
    directory) is read first; variables already present in the process
    environment win.

    Recognized variables:
        SEALBID_DB_PATH (or DB_PATH), SEALBID_LOG_DIR, SEALBID_LOG_LEVEL,
        SEALBID_LOG_TO_FILE, SEALBID_SEAT_TOKEN_BYTES, SEALBID_AUCTION_ID_BYTES

    Args:
        env_file: Optional path to a .env file

    Returns:
        AuctionConfig instance
    """
    if env_file:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    overrides = {}

    db_path = os.getenv("SEALBID_DB_PATH") or os.getenv("DB_PATH")
    if db_path:
        overrides["db_path"] = Path(db_path)

    log_dir = os.getenv("SEALBID_LOG_DIR")
    if log_dir:
        overrides["log_dir"] = Path(log_dir)

    log_level = os.getenv("SEALBID_LOG_LEVEL")
    if log_level:
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        overrides["log_level"] = level

    log_to_file = os.getenv("SEALBID_LOG_TO_FILE")
    if log_to_file:
        overrides["log_to_file"] = _env_flag(log_to_file)

    for name in ("seat_token_bytes", "auction_id_bytes"):
        raw = os.getenv(f"SEALBID_{name.upper()}")
        if raw:
            overrides[name] = int(raw)

    return AuctionConfig(**overrides)
