import re
from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from . import clock

__all__ = ["dates_in_range", "parse_day", "parse_iso_day"]

_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_DAY_ALIASES = {
    "monday": "mon",
    "tuesday": "tue",
    "wednesday": "wed",
    "thursday": "thu",
    "friday": "fri",
    "saturday": "sat",
    "sunday": "sun",
}
_DAY_MAP = {"mon": 0, "tue": 1, "wed": 2, "thu": 3, "fri": 4, "sat": 5, "sun": 6}


def parse_iso_day(value: object) -> date | None:
    """Strict YYYY-MM-DD parse. Anything else (including impossible dates) is None."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DAY_RE.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_day(day_str: str, today: date | None = None) -> date | None:
    """Parses a day reference for custom ranges (e.g. 'today', 'yesterday', 'mon', 'YYYY-MM-DD').

    Weekday names resolve to the most recent such day, today included.
    """
    if today is None:
        today = clock.today()
    text = day_str.strip().lower()
    if not text:
        return None

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)
    text = _DAY_ALIASES.get(text, text)
    if text in _DAY_MAP:
        days_back = (today.weekday() - _DAY_MAP[text]) % 7
        return today - timedelta(days=days_back)
    iso = parse_iso_day(text)
    if iso:
        return iso
    try:
        return dateutil_parser.parse(
            day_str, default=datetime(today.year, today.month, today.day)
        ).date()
    except (ParserError, ValueError, OverflowError):
        return None


def dates_in_range(start: date | str, end: date | str) -> list[str]:
    """Inclusive, ascending ISO dates from start to end. Empty when start > end."""
    start_day = parse_iso_day(start) if isinstance(start, str) else start
    end_day = parse_iso_day(end) if isinstance(end, str) else end
    if start_day is None or end_day is None or start_day > end_day:
        return []
    span = (end_day - start_day).days
    return [(start_day + timedelta(days=i)).isoformat() for i in range(span + 1)]
