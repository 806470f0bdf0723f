from datetime import datetime, timedelta

import pytest

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.wallet_dao import WalletDAO
from services.ledger_service import LedgerService
from services.transaction_feed import TransactionFeed


class FakeClock:
    """Deterministic clock; each call returns the current time then ticks."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def wallet_dao(db):
    return WalletDAO(db)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 18, 9, 0, 0))


@pytest.fixture
def ledger(db, tx_dao, wallet_dao, clock):
    return LedgerService(db, tx_dao, wallet_dao, clock=clock)


@pytest.fixture
def feed(tx_dao):
    return TransactionFeed(tx_dao, page_size=3)
