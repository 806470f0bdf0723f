import logging
import math
import sqlite3
from datetime import datetime
from typing import Callable

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.wallet_dao import WalletDAO
from models.transaction import Transaction
from models.wallet import Wallet
from utils.constants import EXPENSE_CATEGORIES, TRANSACTION_TYPES
from utils.date_helpers import now as local_now
from utils.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


def validate_transaction(amount: float | None, type_: str, category: str | None):
    """Raise ValidationError unless the fields describe a storable transaction."""
    if type_ not in TRANSACTION_TYPES:
        raise ValidationError(f"Invalid type: {type_}")
    if amount is None or not math.isfinite(amount):
        raise ValidationError("Enter a valid amount.")
    if amount == 0:
        raise ValidationError("Amount cannot be zero.")
    if type_ == "expense":
        if category is None:
            raise ValidationError("Choose a category for the expense.")
        if category not in EXPENSE_CATEGORIES:
            raise ValidationError(f"Unknown category: {category}")
    elif category is not None:
        raise ValidationError("Income cannot have a category.")


class LedgerService:
    """Owns the ledger and the wallet; keeps wallet.balance == sum(amounts)."""

    def __init__(
        self,
        db: DatabaseManager,
        tx_dao: TransactionDAO,
        wallet_dao: WalletDAO,
        clock: Callable[[], datetime] = local_now,
    ):
        self._db = db
        self._dao = tx_dao
        self._wallet_dao = wallet_dao
        self._clock = clock
        self._listeners: list[Callable[[Transaction], None]] = []

    def add_listener(self, callback: Callable[[Transaction], None]):
        """Call ``callback(tx)`` after every committed insert."""
        self._listeners.append(callback)

    def add_transaction(
        self, amount: float, type_: str, category: str | None = None
    ) -> Transaction:
        validate_transaction(amount, type_, category)
        try:
            tx = self._dao.create(
                amount=amount, type_=type_, date=self._clock(), category=category
            )
            self._wallet_dao.add_to_balance(amount)
            self.save()
        except sqlite3.Error as exc:
            self._db.rollback()
            logger.error("Could not record transaction: %s", exc)
            raise PersistenceError(str(exc)) from exc
        except PersistenceError:
            self._db.rollback()
            raise

        logger.info("Recorded %s of %s BTC (id=%d)", tx.type, tx.amount, tx.id)
        for callback in self._listeners:
            callback(tx)
        return tx

    def add_expense(self, amount: float | None, category: str | None) -> Transaction:
        """Record a spend of ``amount`` BTC (entered as a positive number)."""
        if amount is not None and amount < 0:
            raise ValidationError("Enter the amount without a sign.")
        return self.add_transaction(
            -amount if amount is not None else None, "expense", category
        )

    def replenish(self, amount: float | None) -> Transaction:
        if amount is not None and amount < 0:
            raise ValidationError("Enter the amount without a sign.")
        return self.add_transaction(amount, "income")

    def get_wallet(self) -> Wallet:
        try:
            wallet = self._wallet_dao.get_or_create()
            self.save()
        except sqlite3.Error as exc:
            self._db.rollback()
            raise PersistenceError(str(exc)) from exc
        return wallet

    def update_rate(self, rate: float = 0.0, updated_at: datetime | None = None):
        try:
            self._wallet_dao.set_rate(rate, updated_at)
            self.save()
        except sqlite3.Error as exc:
            self._db.rollback()
            raise PersistenceError(str(exc)) from exc

    def save(self):
        self._db.save()
