import logging
import sqlite3
from datetime import datetime
from typing import Optional

from database.db_manager import DatabaseManager
from models.transaction import Transaction
from utils.date_helpers import from_db_timestamp, to_db_timestamp
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            amount=row["amount"],
            type=row["type"],
            category=row["category"],
            date=from_db_timestamp(row["date"]),
        )

    def _select(self) -> str:
        return "SELECT id, amount, type, category, date FROM transactions"

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_page(self, limit: int, offset: int = 0) -> list[Transaction]:
        """Newest-first slice of the ledger; ``offset`` counts pages, not rows."""
        if limit <= 0 or offset < 0:
            return []
        conn = self._db.get_connection()
        try:
            rows = conn.execute(
                self._select() + " ORDER BY date DESC, id DESC LIMIT ? OFFSET ?",
                (limit, offset * limit),
            ).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        logger.debug("Fetched %d transactions (limit=%d, page=%d)", len(rows), limit, offset)
        return [self._row_to_model(r) for r in rows]

    def count(self) -> int:
        conn = self._db.get_connection()
        row = conn.execute("SELECT COUNT(*) AS cnt FROM transactions").fetchone()
        return row["cnt"]

    def sum_amounts(self) -> float:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COALESCE(SUM(amount), 0.0) AS total FROM transactions"
        ).fetchone()
        return row["total"]

    def create(
        self,
        amount: float,
        type_: str,
        date: datetime,
        category: str | None = None,
    ) -> Transaction:
        """Insert without committing; the caller owns the unit of work."""
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO transactions (amount, type, category, date)
               VALUES (?, ?, ?, ?)""",
            (amount, type_, category, to_db_timestamp(date)),
        )
        return Transaction(
            id=cursor.lastrowid,
            amount=amount,
            type=type_,
            category=category,
            date=date,
        )
