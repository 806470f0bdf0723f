import logging
import os
import sqlite3

from utils.constants import DB_FILE, DEFAULT_SETTINGS
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS transactions (
                id        INTEGER PRIMARY KEY AUTOINCREMENT,
                amount    REAL NOT NULL CHECK(amount <> 0),
                type      TEXT NOT NULL CHECK(type IN ('income','expense')),
                category  TEXT,
                date      TEXT NOT NULL,
                CHECK((type = 'expense') = (category IS NOT NULL))
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date);

            CREATE TABLE IF NOT EXISTS wallet (
                id          INTEGER PRIMARY KEY CHECK(id = 1),
                balance     REAL NOT NULL DEFAULT 0.0,
                rate        REAL NOT NULL DEFAULT 0.0,
                last_update TEXT
            );

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        for key, value in DEFAULT_SETTINGS:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        self.save()

    def save(self):
        """Commit pending changes; storage failures surface as PersistenceError."""
        conn = self.get_connection()
        if not conn.in_transaction:
            return
        try:
            conn.commit()
        except sqlite3.Error as exc:
            logger.error("Commit failed: %s", exc)
            raise PersistenceError(str(exc)) from exc

    def rollback(self):
        if self._conn is not None and self._conn.in_transaction:
            self._conn.rollback()

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: open (creating if needed) the wallet database.

        db_folder: if provided, the DB file is stored in that directory instead of CWD.
        """
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            db_path = os.path.join(db_folder, DB_FILE)
        else:
            db_path = DB_FILE
        db = DatabaseManager(db_path)
        db.initialize()
        logger.info("Opened database %s", db_path)
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
