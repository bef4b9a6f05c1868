from decimal import Decimal
from pathlib import Path
from typing import Optional
import sqlite3

from sealbid.core.auction.record import AuctionRecord, Seat
from sealbid.core.auction.bid import format_bid
from sealbid.core.storage.repository import AuctionRepository
from sealbid.core.storage.sqlite_adapter import SQLiteAdapter
from sealbid.core.tokens import TokenScheme
from sealbid.utils.logger import get_logger

logger = get_logger("storage.manager")


def _row_to_record(row: sqlite3.Row) -> AuctionRecord:
    return AuctionRecord(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        item_url=row["item_url"],
        seat_a_token=row["seat_a_token"],
        seat_b_token=row["seat_b_token"],
        commit_a=row["commit_a"],
        commit_b=row["commit_b"],
        bid_a=Decimal(row["bid_a"]) if row["bid_a"] is not None else None,
        bid_b=Decimal(row["bid_b"]) if row["bid_b"] is not None else None,
        secret_a=row["secret_a"],
        secret_b=row["secret_b"],
        created_at=row["created_at"],
    )


class StorageManager(AuctionRepository):
    """
    SQLite-backed auction repository.

    Coordinates persistence through the SQLite adapter:
    - Record creation and lookup
    - Conditional commit / reset / reveal updates
    """

    def __init__(
        self,
        db_path: Path,
        tokens: Optional[TokenScheme] = None,
    ):
        super().__init__(tokens)
        self.db_path = Path(db_path)
        self.adapter = SQLiteAdapter(self.db_path)

        logger.info(f"StorageManager initialized at {self.db_path}")

    @classmethod
    def in_directory(cls, data_dir: Path, db_name: str = "auctions.db", **kwargs) -> "StorageManager":
        return cls(Path(data_dir) / db_name, **kwargs)

    # =========================================================================
    # Records
    # =========================================================================

    def insert(self, record: AuctionRecord) -> None:
        self.adapter.insert_auction({
            "id": record.id,
            "title": record.title,
            "description": record.description,
            "item_url": record.item_url,
            "seat_a_token": record.seat_a_token,
            "seat_b_token": record.seat_b_token,
            "created_at": record.created_at,
        })

    def find_by_id(self, auction_id: str) -> Optional[AuctionRecord]:
        row = self.adapter.get_auction(auction_id)
        return _row_to_record(row) if row else None

    def find_by_id_and_token(self, auction_id: str, token: str) -> Optional[AuctionRecord]:
        row = self.adapter.get_auction_by_token(auction_id, token)
        return _row_to_record(row) if row else None

    def count(self) -> int:
        return self.adapter.count_auctions()

    # =========================================================================
    # Conditional Updates
    # =========================================================================

    def set_commit_if_absent(self, auction_id: str, seat: Seat, digest: str) -> bool:
        return self.adapter.set_commit_if_null(auction_id, seat.value, digest)

    def clear_commit_if_counterpart_absent(self, auction_id: str, seat: Seat) -> bool:
        return self.adapter.clear_commit_if_other_null(auction_id, seat.value)

    def set_reveal_if_absent(
        self,
        auction_id: str,
        seat: Seat,
        bid: Decimal,
        secret: str,
        expected_commit: str,
    ) -> bool:
        return self.adapter.set_reveal_if_null(
            auction_id, seat.value, format_bid(bid), secret, expected_commit
        )

    def close(self) -> None:
        self.adapter.close()
