import logging
from datetime import date

from database.transaction_dao import TransactionDAO
from models.grouped_section import GroupedSection
from models.transaction import Transaction
from utils.constants import PAGE_SIZE
from utils.date_helpers import day_of
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
LOADED = "loaded"
LOADING_MORE = "loading_more"
EXHAUSTED = "exhausted"


def append_and_regroup(
    existing_rows: list[Transaction], new_rows: list[Transaction]
) -> list[GroupedSection[date, Transaction]]:
    """Day-grouped sections, newest day first, newest row first within a day."""
    sections = GroupedSection.group(
        list(existing_rows) + list(new_rows),
        by=lambda tx: day_of(tx.date),
        sort_key=lambda tx: tx.date,
    )
    sections.sort(key=lambda s: s.headline, reverse=True)
    return sections


class TransactionFeed:
    """Incrementally loaded, day-grouped view of the ledger for one list session.

    States: idle → loading → loaded ⇄ loading_more → exhausted. Exhausted is
    terminal; build a new feed to start over.
    """

    def __init__(self, tx_dao: TransactionDAO, page_size: int = PAGE_SIZE):
        self._dao = tx_dao
        self.page_size = page_size
        self.state = IDLE
        self.sections: list[GroupedSection[date, Transaction]] = []
        self._page = 0

    # ── Queries ──────────────────────────────────────────────────────────────

    @property
    def rows(self) -> list[Transaction]:
        return [tx for section in self.sections for tx in section.rows]

    @property
    def row_count(self) -> int:
        return sum(len(section.rows) for section in self.sections)

    @property
    def all_received(self) -> bool:
        return self.state == EXHAUSTED

    @property
    def can_load_more(self) -> bool:
        return self.state == LOADED

    def fetch_page(self, limit: int, offset: int) -> list[Transaction]:
        return self._dao.get_page(limit, offset)

    # ── Loading ──────────────────────────────────────────────────────────────

    def load_first_page(self) -> list[Transaction]:
        if self.state != IDLE:
            return []
        self.state = LOADING
        return self._load_next()

    def load_more(self) -> list[Transaction]:
        if self.state != LOADED:
            return []
        self.state = LOADING_MORE
        return self._load_next()

    def _load_next(self) -> list[Transaction]:
        try:
            page = self.fetch_page(self.page_size, self._page)
        except PersistenceError:
            self.state = LOADED if self.sections else IDLE
            raise

        if not page:
            self.state = EXHAUSTED
            logger.debug("All transactions received after %d page(s)", self._page)
            return []

        self._page += 1
        # A refresh after an insert shifts the window by one row, so the next
        # page can repeat a row that is already on screen.
        seen = {tx.id for tx in self.rows}
        fresh = [tx for tx in page if tx.id not in seen]
        self.sections = append_and_regroup(self.rows, fresh)
        self.state = LOADED
        return fresh

    def refresh_limit(self, count: int):
        """Re-fetch the newest ``count`` rows without touching pagination."""
        previous = self.state
        try:
            rows = self.fetch_page(count, 0)
        except PersistenceError:
            self.state = LOADED if self.sections else IDLE
            raise
        self.sections = append_and_regroup([], rows)
        if previous != EXHAUSTED:
            self.state = LOADED if rows else IDLE

    def refresh_after_insert(self, _tx: Transaction | None = None):
        self.refresh_limit(self.row_count + 1)
