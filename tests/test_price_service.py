import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
import requests

from services.network_service import NetworkService
from services.price_service import PriceQuote, PriceService, decode_quote, should_refresh
from utils.errors import (
    BadStatusCode,
    DecodingFailed,
    InvalidEndpointPath,
    InvalidResponse,
)

ENDPOINT = "https://api.coindesk.com/v1/bpi/currentprice.json"

PAYLOAD = {
    "time": {"updated": "Mar 18, 2024 12:34:00 UTC"},
    "bpi": {"USD": {"code": "USD", "rate": "68,123.4567"}},
}


def _response(status=200, payload=PAYLOAD, json_error=False):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status
    if json_error:
        resp.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "", 0)
    else:
        resp.json.return_value = payload
    return resp


def _service(ledger, response=None, side_effect=None):
    session = MagicMock(spec=requests.Session)
    if side_effect is not None:
        session.request.side_effect = side_effect
    else:
        session.request.return_value = response
    network = NetworkService(session=session, timeout=5)
    return PriceService(ledger, network, endpoint=ENDPOINT), session


NOW = datetime(2024, 3, 18, 15, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(minutes=30), False),
        (timedelta(minutes=59), False),
        (timedelta(minutes=61), True),
        (timedelta(hours=5), True),
        (timedelta(minutes=-10), False),
    ],
)
def test_should_refresh_uses_whole_hours(age, expected):
    assert should_refresh(NOW - age, now=NOW) is expected


def test_should_refresh_without_previous_update():
    assert should_refresh(None) is True
    assert should_refresh(None, now=NOW) is True


def test_decode_quote_reads_rate_and_time():
    quote = decode_quote(PAYLOAD)
    assert quote.rate == pytest.approx(68123.4567)
    assert quote.updated == datetime(2024, 3, 18, 12, 34, tzinfo=timezone.utc)


def test_decode_quote_accepts_price_key():
    payload = {"time": PAYLOAD["time"], "price": {"USD": {"rate": "1,000.5"}}}
    assert decode_quote(payload).rate == pytest.approx(1000.5)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"time": {"updated": "yesterday"}, "bpi": {"USD": {"rate": "1"}}},
        {"time": PAYLOAD["time"], "bpi": {"USD": {"rate": "n/a"}}},
        {"time": PAYLOAD["time"], "bpi": {"EUR": {"rate": "1"}}},
        {"time": PAYLOAD["time"], "bpi": {"USD": {"rate": "0"}}},
    ],
)
def test_decode_quote_rejects_bad_payloads(payload):
    with pytest.raises(DecodingFailed):
        decode_quote(payload)


def test_refresh_success_updates_wallet(ledger):
    svc, session = _service(ledger, _response())
    quote = svc.refresh()
    assert quote == PriceQuote(68123.4567, datetime(2024, 3, 18, 12, 34, tzinfo=timezone.utc))
    wallet = ledger.get_wallet()
    assert wallet.rate == pytest.approx(68123.4567)
    assert wallet.last_update == quote.updated
    session.request.assert_called_once_with("GET", ENDPOINT, timeout=5)


def test_http_500_resets_cached_rate(ledger):
    ledger.update_rate(65000.0, NOW)
    svc, _ = _service(ledger, _response(status=500))
    assert svc.refresh() is None
    wallet = ledger.get_wallet()
    assert wallet.rate == 0.0
    assert wallet.last_update is None


def test_bad_json_resets_cached_rate(ledger):
    ledger.update_rate(65000.0, NOW)
    svc, _ = _service(ledger, _response(json_error=True))
    assert svc.refresh() is None
    assert ledger.get_wallet().rate == 0.0


def test_connection_error_resets_cached_rate(ledger):
    ledger.update_rate(65000.0, NOW)
    svc, _ = _service(ledger, side_effect=requests.exceptions.ConnectionError("offline"))
    assert svc.refresh() is None
    assert ledger.get_wallet().last_update is None


def test_network_errors_are_classified():
    session = MagicMock(spec=requests.Session)
    network = NetworkService(session=session)

    session.request.side_effect = requests.exceptions.MissingSchema("no scheme")
    with pytest.raises(InvalidEndpointPath):
        network.request("api.coindesk.com")

    session.request.side_effect = requests.exceptions.Timeout("slow")
    with pytest.raises(InvalidResponse):
        network.request(ENDPOINT)

    session.request.side_effect = None
    session.request.return_value = _response(status=404)
    with pytest.raises(BadStatusCode) as info:
        network.request(ENDPOINT)
    assert info.value.status_code == 404

    session.request.return_value = _response(payload=["not", "an", "object"])
    with pytest.raises(DecodingFailed):
        network.request(ENDPOINT)


def test_needs_refresh_follows_wallet_state(ledger):
    svc, _ = _service(ledger, _response())
    assert svc.needs_refresh() is True
    ledger.update_rate(65000.0, datetime.now(timezone.utc))
    assert svc.needs_refresh() is False


def test_record_none_marks_rate_unknown(ledger):
    ledger.update_rate(65000.0, NOW)
    svc, _ = _service(ledger, _response())
    svc.record(None)
    assert ledger.get_wallet().has_rate is False


def test_worker_path_records_quote_and_logs(ledger, caplog):
    svc, _ = _service(ledger, _response())
    with caplog.at_level(logging.INFO, logger="services.price_service"):
        quote = svc.try_fetch_quote()
        svc.record(quote)
    assert ledger.get_wallet().rate == pytest.approx(68123.4567)
    assert any("refreshed" in r.getMessage() for r in caplog.records)


def test_worker_path_failure_yields_none_and_resets_rate(ledger, caplog):
    ledger.update_rate(65000.0, NOW)
    svc, _ = _service(ledger, _response(status=503))
    with caplog.at_level(logging.WARNING, logger="services.price_service"):
        quote = svc.try_fetch_quote()
        svc.record(quote)
    assert quote is None
    wallet = ledger.get_wallet()
    assert wallet.rate == 0.0
    assert wallet.last_update is None
    assert any("failed" in r.getMessage() for r in caplog.records)
    assert wallet.has_rate is False


def test_recorded_quote_makes_wallet_report_a_rate(ledger):
    svc, _ = _service(ledger, _response())
    svc.record(svc.try_fetch_quote())
    wallet = ledger.get_wallet()
    assert wallet.has_rate is True
    assert wallet.balance == 0.0
