import math
from collections.abc import Callable, Sequence
from datetime import date, timedelta

from .core.errors import UnknownChoiceError
from .core.models import Bar, ClassifiedTask, Project, ResolvedRange, Slice
from .core.types import MAX_BUCKETS, METRIC_TYPES
from .lib.format import format_day_label, format_pct, format_time

__all__ = [
    "NO_PROJECT",
    "bucket",
    "bucket_bounds",
    "slices",
]

NO_PROJECT = "No project"

SLICE_COLORS = [
    "coral",
    "sky",
    "lime",
    "orchid",
    "butter",
    "seafoam",
    "cornflower",
    "rose",
    "apricot",
    "spring",
    "peach",
    "pale-mint",
]


def _check_metric(metric: str) -> None:
    if metric not in METRIC_TYPES:
        raise UnknownChoiceError("metric", metric, METRIC_TYPES)


def bucket_bounds(rng: ResolvedRange, max_buckets: int = MAX_BUCKETS) -> list[tuple[date, date]]:
    """Split the range into equal-width runs of ceil(days / max_buckets) days.

    The last run may be shorter. A single-day range is one bucket.
    """
    days = rng.day_count
    width = max(math.ceil(days / max(max_buckets, 1)), 1)
    bounds = []
    start = rng.start
    while start <= rng.end:
        end = min(start + timedelta(days=width - 1), rng.end)
        bounds.append((start, end))
        start = end + timedelta(days=1)
    return bounds


def _label(start: date, end: date) -> str:
    if start == end:
        return format_day_label(start)
    return f"{format_day_label(start)} - {format_day_label(end)}"


def _time_between(c: ClassifiedTask, start: date, end: date) -> int:
    return sum(ms for day, ms in c.per_day_time.items() if start <= day <= end)


def _count_due_between(
    classified: Sequence[ClassifiedTask], start: date, end: date, flag: Callable[[ClassifiedTask], bool]
) -> int:
    return sum(
        1 for c in classified if flag(c) and c.due_date is not None and start <= c.due_date <= end
    )


def bucket(
    classified: Sequence[ClassifiedTask],
    rng: ResolvedRange,
    metric: str = "time",
    max_buckets: int = MAX_BUCKETS,
) -> list[Bar]:
    """Bar chart columns for a metric. Time buckets by logged day, overdue/late by due date."""
    _check_metric(metric)
    bars = []
    for start, end in bucket_bounds(rng, max_buckets):
        if metric == "time":
            value = sum(_time_between(c, start, end) for c in classified)
        elif metric == "overdue":
            value = _count_due_between(classified, start, end, lambda c: c.missed_due)
        else:
            value = _count_due_between(classified, start, end, lambda c: c.is_late)
        bars.append(Bar(label=_label(start, end), start=start, end=end, value=value))
    return bars


def _time_by_project(
    classified: Sequence[ClassifiedTask], projects: Sequence[Project]
) -> list[tuple[str, int]]:
    titles = {p.id: p.title for p in projects}
    totals: dict[str, int] = {}
    for c in classified:
        if c.time_in_range <= 0:
            continue
        label = titles.get(c.task.project_id or "", NO_PROJECT) or NO_PROJECT
        totals[label] = totals.get(label, 0) + c.time_in_range
    return sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))


def _status_split(
    classified: Sequence[ClassifiedTask], metric: str
) -> list[tuple[str, int]]:
    with_due = [c for c in classified if c.in_scope and c.due_date is not None]
    if metric == "overdue":
        hit = sum(1 for c in with_due if c.missed_due)
        return [("Overdue", hit), ("On time", len(with_due) - hit)]
    done = [c for c in with_due if c.task.is_done]
    hit = sum(1 for c in done if c.is_late)
    return [("Late", hit), ("On time", len(done) - hit)]


def slices(
    classified: Sequence[ClassifiedTask],
    projects: Sequence[Project] = (),
    metric: str = "time",
) -> list[Slice]:
    """Pie segments with legend text. Shares sum to 1 unless everything is zero."""
    _check_metric(metric)
    if metric == "time":
        parts = _time_by_project(classified, projects)
    else:
        parts = _status_split(classified, metric)

    total = sum(value for _, value in parts)
    result = []
    for i, (label, value) in enumerate(parts):
        share = value / total if total else 0.0
        shown = format_time(value) if metric == "time" else str(value)
        result.append(
            Slice(
                label=label,
                value=value,
                share=share,
                color=SLICE_COLORS[i % len(SLICE_COLORS)],
                legend=f"{label}: {shown} ({format_pct(share * 100)})",
            )
        )
    return result
