"""
Persistent Storage Module.

Provides the auction repository contract and its backends:
- SQLite (StorageManager over SQLiteAdapter)
- In-memory (per-auction locks)
"""

from sealbid.core.storage.repository import AuctionRepository, InMemoryAuctionRepository
from sealbid.core.storage.sqlite_adapter import SQLiteAdapter
from sealbid.core.storage.storage_manager import StorageManager

__all__ = [
    "AuctionRepository",
    "InMemoryAuctionRepository",
    "SQLiteAdapter",
    "StorageManager",
]
