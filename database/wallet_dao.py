from datetime import datetime

from database.db_manager import DatabaseManager
from models.wallet import Wallet
from utils.date_helpers import from_db_aware, to_db_aware


class WalletDAO:
    """Access to the single ``wallet`` row (id = 1)."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Wallet:
        return Wallet(
            balance=row["balance"],
            rate=row["rate"],
            last_update=from_db_aware(row["last_update"]),
        )

    def get_or_create(self) -> Wallet:
        conn = self._db.get_connection()
        row = conn.execute("SELECT * FROM wallet WHERE id = 1").fetchone()
        if row is None:
            conn.execute("INSERT OR IGNORE INTO wallet(id, balance) VALUES (1, 0.0)")
            row = conn.execute("SELECT * FROM wallet WHERE id = 1").fetchone()
        return self._row_to_model(row)

    def add_to_balance(self, amount: float):
        """Not committed; runs inside the caller's unit of work."""
        self.get_or_create()
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE wallet SET balance = balance + ? WHERE id = 1", (amount,)
        )

    def set_rate(self, rate: float, updated_at: datetime | None):
        self.get_or_create()
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE wallet SET rate = ?, last_update = ? WHERE id = 1",
            (rate, to_db_aware(updated_at)),
        )
