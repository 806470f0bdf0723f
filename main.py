import logging
import os
import sqlite3
import sys

import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.wallet_dao import WalletDAO

from services.ledger_service import LedgerService
from services.network_service import NetworkService
from services.price_service import PriceService
from services.transaction_feed import TransactionFeed

from ui.app_window import AppWindow
from utils.app_config import (
    get_db_folder,
    get_log_level,
    get_page_size,
    get_price_endpoint,
    get_request_timeout,
    load_config,
)
from utils.log import build_logger

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: read pre-DB config ────────────────────────────────────────
    config = load_config()
    build_logger(get_log_level(config))

    # ── Database ─────────────────────────────────────────────────────────────
    try:
        db = DatabaseManager.open(db_folder=get_db_folder(config))
    except (sqlite3.Error, OSError) as exc:
        logger.critical("Cannot open the wallet database: %s", exc)
        sys.exit(1)

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    wallet_dao = WalletDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    ledger = LedgerService(db, tx_dao, wallet_dao)
    feed = TransactionFeed(tx_dao, page_size=get_page_size(config))
    ledger.add_listener(feed.refresh_after_insert)
    network = NetworkService(timeout=get_request_timeout(config))
    price_svc = PriceService(ledger, network, endpoint=get_price_endpoint(config))

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(ledger=ledger, feed=feed, price_service=price_svc)

    def on_close():
        network.close()
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
