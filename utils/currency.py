from utils.constants import BTC_FRACTION_DIGITS


def format_btc(amount: float, max_fraction_digits: int = BTC_FRACTION_DIGITS) -> str:
    """Format a bitcoin amount, e.g. '1,234.5' or '0.00046123'.

    Grouping uses ',' and the decimal separator is '.'; trailing zeros in the
    fraction are dropped.
    """
    text = f"{abs(amount):,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "0"):
        return "0"
    return f"-{text}" if amount < 0 else text


def format_signed_btc(amount: float) -> str:
    """Format with +/- sign, e.g. '+0.05 BTC'."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{format_btc(abs(amount))} BTC"


def format_rate(rate: float) -> str:
    return f"BTCUSD {rate:,.2f}"


def parse_amount(text: str | None) -> float | None:
    """Parse a user-typed amount, accepting ',' as the decimal separator."""
    if text is None:
        return None
    cleaned = text.strip().replace(",", ".")
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_rate(text: str) -> float:
    """Parse a rate string such as '68,123.4567' (',' is a thousands separator)."""
    if isinstance(text, (int, float)):
        return float(text)
    return float(text.replace(",", "").strip())
