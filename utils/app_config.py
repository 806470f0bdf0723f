"""Pre-DB bootstrap configuration. Zero imports from the rest of the app
except the defaults in utils.constants.

Stores settings that must be known before opening the DB (db_folder, the
price endpoint, paging). Config lives in ~/.btc_wallet/config.json.
"""
import json
from pathlib import Path

from utils.constants import PAGE_SIZE, PRICE_ENDPOINT, REQUEST_TIMEOUT

CONFIG_DIR = Path.home() / ".btc_wallet"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(path or CONFIG_FILE, "r", encoding="utf-8") as f:
            config = json.load(f)
    except Exception:
        return {}
    return config if isinstance(config, dict) else {}


def get_db_folder(config: dict) -> str | None:
    """Return config["db_folder"] or None if not set."""
    return config.get("db_folder") or None


def get_price_endpoint(config: dict) -> str:
    return config.get("price_endpoint") or PRICE_ENDPOINT


def get_page_size(config: dict) -> int:
    try:
        size = int(config.get("page_size", PAGE_SIZE))
    except (TypeError, ValueError):
        return PAGE_SIZE
    return size if size > 0 else PAGE_SIZE


def get_request_timeout(config: dict) -> float:
    try:
        timeout = float(config.get("request_timeout", REQUEST_TIMEOUT))
    except (TypeError, ValueError):
        return REQUEST_TIMEOUT
    return timeout if timeout > 0 else REQUEST_TIMEOUT


def get_log_level(config: dict) -> str:
    return str(config.get("log_level", "INFO")).upper()
