from datetime import date

import pytest

from rangereport.core.errors import ValidationError
from rangereport.core.models import RangeSelector
from rangereport.ranges import resolve_range, selector_from

TODAY = date(2026, 2, 22)


def test_today_is_single_day():
    rng = resolve_range(RangeSelector("today"), today=TODAY)
    assert rng.start == rng.end == TODAY
    assert rng.day_count == 1


def test_week_is_trailing_seven_days():
    rng = resolve_range(RangeSelector("week"), today=TODAY)
    assert rng.start == date(2026, 2, 16)
    assert rng.end == TODAY
    assert rng.day_count == 7


def test_month_is_trailing_thirty_days():
    rng = resolve_range(RangeSelector("month"), today=TODAY)
    assert rng.day_count == 30
    assert rng.end == TODAY


def test_year_is_trailing_365_days():
    rng = resolve_range(RangeSelector("year"), today=TODAY)
    assert rng.day_count == 365
    assert rng.preset == "year"


def test_custom_range_kept():
    rng = resolve_range(
        RangeSelector("custom", date(2026, 1, 1), date(2026, 1, 31)), today=TODAY
    )
    assert (rng.start, rng.end) == (date(2026, 1, 1), date(2026, 1, 31))


def test_custom_reversed_is_swapped():
    rng = resolve_range(
        RangeSelector("custom", date(2026, 1, 31), date(2026, 1, 1)), today=TODAY
    )
    assert rng.start == date(2026, 1, 1)
    assert rng.end == date(2026, 1, 31)


def test_custom_missing_bounds_default_to_today():
    rng = resolve_range(RangeSelector("custom", start=date(2026, 2, 20)), today=TODAY)
    assert (rng.start, rng.end) == (date(2026, 2, 20), TODAY)


def test_presets_follow_today():
    first = resolve_range(RangeSelector("today"), today=TODAY)
    second = resolve_range(RangeSelector("today"), today=date(2026, 2, 23))
    assert first.start != second.start


def test_range_contains():
    rng = resolve_range(RangeSelector("week"), today=TODAY)
    assert date(2026, 2, 16) in rng
    assert date(2026, 2, 15) not in rng
    assert "2026-02-20" not in rng


def test_selector_from_unknown_preset():
    with pytest.raises(ValidationError):
        selector_from("fortnight")


def test_selector_from_drops_bounds_for_presets():
    selector = selector_from("Week", date(2026, 1, 1), date(2026, 1, 2))
    assert selector == RangeSelector("week")


def test_custom_inputs_visible_only_for_custom():
    assert selector_from("custom").shows_custom_inputs is True
    assert selector_from("week").shows_custom_inputs is False
