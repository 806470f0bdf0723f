import os

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.wallet_dao import WalletDAO
from services.ledger_service import LedgerService


def test_open_creates_database_in_folder(tmp_path):
    folder = tmp_path / "data"
    db = DatabaseManager.open(db_folder=str(folder))
    try:
        assert os.path.exists(folder / "transactions.db")
        tables = {
            r["name"] for r in db.get_connection().execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
        }
        assert {"transactions", "wallet", "app_settings"} <= tables
    finally:
        db.close()


def test_settings_roundtrip(db):
    assert db.get_setting("appearance_mode") == "system"
    db.set_setting("appearance_mode", "dark")
    assert db.get_setting("appearance_mode") == "dark"
    assert db.get_setting("missing", "fallback") == "fallback"


def test_initialize_is_idempotent(db):
    db.set_setting("appearance_mode", "light")
    db.initialize()
    assert db.get_setting("appearance_mode") == "light"


def test_wallet_table_holds_a_single_row(db, wallet_dao):
    wallet_dao.get_or_create()
    wallet_dao.get_or_create()
    db.save()
    count = db.get_connection().execute("SELECT COUNT(*) FROM wallet").fetchone()[0]
    assert count == 1


def test_data_survives_reopen(tmp_path, clock):
    db = DatabaseManager.open(db_folder=str(tmp_path))
    LedgerService(db, TransactionDAO(db), WalletDAO(db), clock=clock).add_transaction(0.25, "income")
    db.close()

    reopened = DatabaseManager.open(db_folder=str(tmp_path))
    try:
        ledger = LedgerService(reopened, TransactionDAO(reopened), WalletDAO(reopened), clock=clock)
        assert ledger.get_wallet().balance == 0.25
        assert TransactionDAO(reopened).count() == 1
    finally:
        reopened.close()
