import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, List, Dict, Any, Iterator

from sealbid.core.errors import IdentifierCollision, StorageError
from sealbid.utils.logger import get_logger

logger = get_logger("storage.sqlite")


# Column names per seat label; never built from caller input
_SEAT_COLUMNS = {
    "A": {"commit": "commit_a", "bid": "bid_a", "secret": "secret_a", "other_commit": "commit_b"},
    "B": {"commit": "commit_b", "bid": "bid_b", "secret": "secret_b", "other_commit": "commit_a"},
}


class SQLiteAdapter:
    """
    SQLite backend for auction records.

    Provides:
    1. Schema for the `auctions` table (one row per auction).
    2. Single-statement conditional updates. Each UPDATE carries its own
       precondition in the WHERE clause, so the check and the write are
       one atomic step and `rowcount` tells whether it applied.

    Bids are stored as canonical two-decimal TEXT so they round-trip exactly.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._conn_local = threading.local()
        self._connections: List[sqlite3.Connection] = []
        self._connections_lock = threading.Lock()

        # Ensure directory exists
        if not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()

    def _get_conn(self) -> sqlite3.Connection:
        """Get or create connection for current thread."""
        if not hasattr(self._conn_local, "conn"):
            try:
                conn = sqlite3.connect(
                    self.db_path,
                    timeout=30.0,
                    check_same_thread=False
                )
                conn.row_factory = sqlite3.Row
                # Enable WAL mode for better concurrency
                conn.execute("PRAGMA journal_mode=WAL;")
                conn.execute("PRAGMA synchronous=NORMAL;")
            except sqlite3.Error as e:
                logger.error(f"Failed to open database: {e}")
                raise StorageError() from e
            self._conn_local.conn = conn
            with self._connections_lock:
                self._connections.append(conn)
        return self._conn_local.conn

    @contextmanager
    def _errors(self) -> Iterator[None]:
        """Translate sqlite failures into storage errors."""
        try:
            yield
        except sqlite3.IntegrityError as e:
            logger.error("Identifier collision while creating auction")
            raise IdentifierCollision() from e
        except sqlite3.Error as e:
            logger.error(f"Storage failure: {type(e).__name__}")
            raise StorageError() from e

    def _init_schema(self):
        """Initialize database schema."""
        conn = self._get_conn()
        with self._errors(), conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS auctions (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT,
                    item_url TEXT,
                    seat_a_token TEXT NOT NULL UNIQUE,
                    seat_b_token TEXT NOT NULL UNIQUE,
                    commit_a TEXT,
                    commit_b TEXT,
                    bid_a TEXT,
                    bid_b TEXT,
                    secret_a TEXT,
                    secret_b TEXT,
                    created_at INTEGER NOT NULL DEFAULT (strftime('%s', 'now')),
                    CHECK (seat_a_token <> seat_b_token)
                )
            """)

    # =========================================================================
    # Inserts & Reads
    # =========================================================================

    def insert_auction(self, row: Dict[str, Any]):
        """Insert a new auction row. Fails on any duplicate id or token."""
        conn = self._get_conn()
        with self._errors(), conn:
            conn.execute(
                """
                INSERT INTO auctions
                    (id, title, description, item_url, seat_a_token, seat_b_token, created_at)
                VALUES
                    (:id, :title, :description, :item_url, :seat_a_token, :seat_b_token, :created_at)
                """,
                row,
            )

    def get_auction(self, auction_id: str) -> Optional[sqlite3.Row]:
        """Get auction row by id."""
        conn = self._get_conn()
        with self._errors():
            cursor = conn.execute("SELECT * FROM auctions WHERE id = ?", (auction_id,))
            return cursor.fetchone()

    def get_auction_by_token(self, auction_id: str, token: str) -> Optional[sqlite3.Row]:
        """Get auction row by id when `token` is one of its seat tokens."""
        conn = self._get_conn()
        with self._errors():
            cursor = conn.execute(
                "SELECT * FROM auctions WHERE id = ? AND (seat_a_token = ? OR seat_b_token = ?)",
                (auction_id, token, token),
            )
            return cursor.fetchone()

    def count_auctions(self) -> int:
        conn = self._get_conn()
        with self._errors():
            cursor = conn.execute("SELECT COUNT(*) AS cnt FROM auctions")
            return cursor.fetchone()["cnt"]

    # =========================================================================
    # Conditional Updates
    # =========================================================================

    def set_commit_if_null(self, auction_id: str, seat: str, digest: str) -> bool:
        cols = _SEAT_COLUMNS[seat]
        conn = self._get_conn()
        with self._errors(), conn:
            cursor = conn.execute(
                f"UPDATE auctions SET {cols['commit']} = ? "
                f"WHERE id = ? AND {cols['commit']} IS NULL",
                (digest, auction_id),
            )
            return cursor.rowcount == 1

    def clear_commit_if_other_null(self, auction_id: str, seat: str) -> bool:
        cols = _SEAT_COLUMNS[seat]
        conn = self._get_conn()
        with self._errors(), conn:
            cursor = conn.execute(
                f"UPDATE auctions SET {cols['commit']} = NULL "
                f"WHERE id = ? AND {cols['other_commit']} IS NULL AND {cols['bid']} IS NULL",
                (auction_id,),
            )
            return cursor.rowcount == 1

    def set_reveal_if_null(
        self,
        auction_id: str,
        seat: str,
        bid: str,
        secret: str,
        expected_commit: str,
    ) -> bool:
        cols = _SEAT_COLUMNS[seat]
        conn = self._get_conn()
        with self._errors(), conn:
            cursor = conn.execute(
                f"UPDATE auctions SET {cols['bid']} = ?, {cols['secret']} = ? "
                f"WHERE id = ? AND {cols['bid']} IS NULL "
                f"AND {cols['commit']} = ? AND {cols['other_commit']} IS NOT NULL",
                (bid, secret, auction_id, expected_commit),
            )
            return cursor.rowcount == 1

    def close(self):
        """Close every connection opened by this adapter."""
        with self._connections_lock:
            for conn in self._connections:
                conn.close()
            self._connections.clear()
        self._conn_local = threading.local()
