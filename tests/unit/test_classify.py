import dataclasses
from datetime import date, datetime, timedelta

import pytest
from tests.conftest import NOW, TODAY, make_task

from rangereport.classify import classify, classify_all, resolve_due_date
from rangereport.core.models import RangeSelector
from rangereport.ranges import resolve_range

YESTERDAY = TODAY - timedelta(days=1)
WEEK = resolve_range(RangeSelector("week"), today=TODAY)
TODAY_ONLY = resolve_range(RangeSelector("today"), today=TODAY)


@pytest.mark.parametrize("rng", [WEEK, TODAY_ONLY])
@pytest.mark.parametrize("is_done", [False, True])
def test_no_due_concept_never_overdue_or_late(rng, is_done):
    task = make_task(is_done=is_done, done_on=NOW if is_done else None)
    c = classify(task, rng, now=NOW)
    assert c.is_overdue is False
    assert c.is_late is False
    assert c.due_date is None


def test_due_yesterday_not_done_is_overdue():
    c = classify(make_task(due_day=YESTERDAY), WEEK, now=NOW)
    assert c.is_overdue is True
    assert c.is_late is False


def test_due_today_not_done_is_not_overdue():
    c = classify(make_task(due_day=TODAY), WEEK, now=NOW)
    assert c.is_overdue is False


def test_done_same_day_as_due_is_not_late():
    late_evening = datetime.combine(TODAY, datetime.max.time()).replace(microsecond=0)
    c = classify(make_task(is_done=True, due_day=TODAY, done_on=late_evening), WEEK, now=NOW)
    assert c.is_late is False
    assert c.is_overdue is False


def test_done_day_after_due_is_late():
    c = classify(make_task(is_done=True, due_day=YESTERDAY, done_on=NOW), WEEK, now=NOW)
    assert c.is_late is True
    assert c.is_overdue is False
    assert c.missed_due is True


def test_done_without_done_on_is_not_late():
    c = classify(make_task(is_done=True, due_day=YESTERDAY), WEEK, now=NOW)
    assert c.is_late is False


def test_planned_at_fallback_uses_time_of_day_for_overdue():
    earlier = classify(make_task(planned_at=NOW - timedelta(hours=1)), WEEK, now=NOW)
    later = classify(make_task(planned_at=NOW + timedelta(hours=1)), WEEK, now=NOW)
    assert earlier.is_overdue is True
    assert later.is_overdue is False


def test_due_day_wins_over_planned_at():
    task = make_task(due_day=TODAY, planned_at=NOW - timedelta(days=3))
    assert resolve_due_date(task) == TODAY
    assert classify(task, WEEK, now=NOW).is_overdue is False


def test_planned_at_late_is_date_granular():
    planned = datetime.combine(YESTERDAY, datetime.min.time()).replace(hour=9)
    same_day = classify(
        make_task(is_done=True, planned_at=planned, done_on=planned + timedelta(hours=10)),
        WEEK,
        now=NOW,
    )
    next_day = classify(
        make_task(is_done=True, planned_at=planned, done_on=NOW), WEEK, now=NOW
    )
    assert same_day.is_late is False
    assert next_day.is_late is True


def test_per_day_time_limited_to_range():
    task = make_task(
        spent={
            TODAY: 3_600_000,
            TODAY - timedelta(days=6): 1_000,
            TODAY - timedelta(days=7): 999_999,
        }
    )
    c = classify(task, WEEK, now=NOW)
    assert c.per_day_time == {TODAY - timedelta(days=6): 1_000, TODAY: 3_600_000}
    assert c.time_in_range == 3_601_000
    assert c.in_scope is True


def test_out_of_range_time_is_out_of_scope():
    task = make_task(spent={TODAY - timedelta(days=30): 60_000})
    c = classify(task, WEEK, now=NOW)
    assert c.in_scope is False
    assert c.time_in_range == 0


def test_due_in_range_is_in_scope_without_time():
    c = classify(make_task(due_day=TODAY), WEEK, now=NOW)
    assert c.in_scope is True


def test_overdue_outside_range_stays_in_scope():
    c = classify(make_task(due_day=date(2025, 12, 1)), WEEK, now=NOW)
    assert c.is_overdue is True
    assert c.in_scope is True
    assert c.time_in_range == 0


def test_reclassification_sees_added_due_day():
    task = make_task()
    before = classify(task, WEEK, now=NOW)
    after = classify(dataclasses.replace(task, due_day=YESTERDAY), WEEK, now=NOW)
    assert before.is_overdue is False
    assert after.is_overdue is True


def test_classify_all_preserves_order():
    tasks = [make_task(id="a"), make_task(id="b"), make_task(id="c")]
    assert [c.task.id for c in classify_all(tasks, WEEK, now=NOW)] == ["a", "b", "c"]
