import logging
from datetime import date, timedelta

from .core.errors import UnknownChoiceError
from .core.models import RangeSelector, ResolvedRange
from .core.types import PRESETS
from .lib import clock

__all__ = ["PRESET_DAYS", "resolve_range", "selector_from"]

logger = logging.getLogger(__name__)

# Trailing windows ending today, inclusive.
PRESET_DAYS: dict[str, int] = {
    "today": 1,
    "week": 7,
    "month": 30,
    "year": 365,
}


def selector_from(preset: str, start: date | None = None, end: date | None = None) -> RangeSelector:
    """Build a validated selector. Explicit bounds are kept only for 'custom'."""
    preset = preset.strip().lower()
    if preset not in PRESETS:
        raise UnknownChoiceError("preset", preset, PRESETS)
    if preset != "custom":
        return RangeSelector(preset=preset)  # type: ignore[arg-type]
    return RangeSelector(preset="custom", start=start, end=end)


def resolve_range(selector: RangeSelector, *, today: date | None = None) -> ResolvedRange:
    """Resolve a selector against today. Never cached; call again when the day changes."""
    if today is None:
        today = clock.today()

    if selector.preset in PRESET_DAYS:
        days = PRESET_DAYS[selector.preset]
        return ResolvedRange(
            start=today - timedelta(days=days - 1), end=today, preset=selector.preset
        )

    if selector.preset != "custom":
        raise UnknownChoiceError("preset", selector.preset, PRESETS)

    start = selector.start or today
    end = selector.end or today
    if start > end:
        logger.debug("custom range %s..%s reversed, swapping", start, end)
        start, end = end, start
    return ResolvedRange(start=start, end=end, preset="custom")
