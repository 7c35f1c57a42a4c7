from datetime import date

from .dates import parse_iso_day

__all__ = [
    "format_date_short",
    "format_day_label",
    "format_pct",
    "format_time",
]

_MS_PER_MINUTE = 60_000


def format_time(ms: int | float) -> str:
    """Format milliseconds as 'Xh Ym'. Negative or missing values read as zero."""
    total_minutes = max(int(ms or 0), 0) // _MS_PER_MINUTE
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def format_date_short(day: date | str | None) -> str:
    """'2026-02-22' -> 'Feb 22, 2026'. Unparseable input is returned unchanged."""
    if day is None:
        return ""
    parsed = parse_iso_day(day) if isinstance(day, str) else day
    if parsed is None:
        return str(day)
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_day_label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


def format_pct(value: float) -> str:
    return f"{value:.0f}%"
