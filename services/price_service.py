import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from services.ledger_service import LedgerService
from services.network_service import NetworkService
from utils.constants import PRICE_ENDPOINT, PRICE_REFRESH_HOURS
from utils.currency import parse_rate
from utils.date_helpers import parse_price_updated, utc_now, whole_hours_between
from utils.errors import DecodingFailed, NetworkRequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceQuote:
    rate: float
    updated: datetime


def should_refresh(last_update: datetime | None, now: datetime | None = None) -> bool:
    """True when there is no rate yet or the cached one is a whole hour old."""
    if last_update is None:
        return True
    elapsed = whole_hours_between(last_update, now or utc_now())
    return elapsed >= PRICE_REFRESH_HOURS


def decode_quote(payload: dict) -> PriceQuote:
    """Pull ``time.updated`` and ``bpi.USD.rate`` (or ``price.USD.rate``)."""
    try:
        prices = payload["bpi"] if "bpi" in payload else payload["price"]
        rate = parse_rate(prices["USD"]["rate"])
        updated = parse_price_updated(payload["time"]["updated"])
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise DecodingFailed(f"Unexpected price payload: {exc}") from exc
    if rate <= 0:
        raise DecodingFailed(f"Unexpected rate {rate}")
    return PriceQuote(rate=rate, updated=updated)


class PriceService:
    def __init__(
        self,
        ledger: LedgerService,
        network: NetworkService,
        endpoint: str = PRICE_ENDPOINT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._ledger = ledger
        self._network = network
        self._endpoint = endpoint
        self._clock = clock

    def needs_refresh(self) -> bool:
        return should_refresh(self._ledger.get_wallet().last_update, self._clock())

    def fetch_quote(self) -> PriceQuote:
        """Network only; safe to call off the UI thread."""
        return decode_quote(self._network.request(self._endpoint))

    def try_fetch_quote(self) -> PriceQuote | None:
        """Like fetch_quote, but a failed request yields None."""
        try:
            return self.fetch_quote()
        except NetworkRequestError as exc:
            logger.warning("Price refresh failed: %s", exc)
            return None

    def record(self, quote: PriceQuote | None):
        """Store a fetched quote, or mark the rate unknown when there is none."""
        if quote is None:
            self._ledger.update_rate()
            logger.warning("BTC/USD rate marked unknown")
        else:
            self._ledger.update_rate(quote.rate, quote.updated)
            logger.info("BTC/USD rate refreshed: %s", quote.rate)

    def refresh(self) -> PriceQuote | None:
        quote = self.try_fetch_quote()
        self.record(quote)
        return quote
