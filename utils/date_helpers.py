from datetime import date, datetime, timezone

from utils.constants import PRICE_UPDATED_FORMAT, TIMESTAMP_FORMAT

_UTC_NAMES = {"UTC", "GMT", "Z"}


def now() -> datetime:
    """Local wall-clock time; transaction dates are stored in this calendar."""
    return datetime.now()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def day_of(moment: datetime) -> date:
    """Truncate a timestamp to its calendar day."""
    return moment.date()


def to_db_timestamp(moment: datetime) -> str:
    """Fixed-width text so that ORDER BY on the column is chronological."""
    return moment.strftime(TIMESTAMP_FORMAT)


def from_db_timestamp(value: str) -> datetime:
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def to_db_aware(moment: datetime | None) -> str | None:
    if moment is None:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.isoformat()


def from_db_aware(value: str | None) -> datetime | None:
    if not value:
        return None
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def parse_price_updated(value: str) -> datetime:
    """Parse the price feed's 'Mar 18, 2024 12:34:00 UTC' into an aware datetime.

    Raises ValueError on anything else.
    """
    parsed = datetime.strptime(value.strip(), PRICE_UPDATED_FORMAT)
    zone = value.strip().rsplit(" ", 1)[-1].upper()
    if parsed.tzinfo is None and zone not in _UTC_NAMES:
        raise ValueError(f"Unsupported time zone in {value!r}")
    return parsed.replace(tzinfo=timezone.utc) if parsed.tzinfo is None else parsed


def whole_hours_between(start: datetime, end: datetime) -> int:
    """Elapsed hours from start to end, truncated toward zero."""
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    return int((end - start).total_seconds() / 3600)


def format_day_header(day: date) -> str:
    """e.g. 'Monday, 18 March 2024'."""
    return f"{day:%A}, {day.day} {day:%B %Y}"


def format_time(moment: datetime) -> str:
    """e.g. '1:05 PM'."""
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment:%M} {'AM' if moment.hour < 12 else 'PM'}"
