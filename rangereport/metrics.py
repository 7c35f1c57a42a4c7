from collections.abc import Sequence

from .core.models import ClassifiedTask, Metrics, ResolvedRange
from .lib.format import format_pct, format_time


def _due_in_range(c: ClassifiedTask, rng: ResolvedRange | None) -> bool:
    return rng is not None and c.due_date is not None and c.due_date in rng


def _counts_as_completed(c: ClassifiedTask, rng: ResolvedRange | None) -> bool:
    if not c.in_scope or not c.task.is_done:
        return False
    return c.time_in_range > 0 or _due_in_range(c, rng)


def _progress(done: int, total: int) -> float:
    if total == 0:
        return 0.0
    return min(max(done / total * 100, 0.0), 100.0)


def aggregate(classified: Sequence[ClassifiedTask], rng: ResolvedRange | None = None) -> Metrics:
    """Summary stats over classified tasks.

    Sub-tasks count like top-level tasks. Duplicate ids are not collapsed here;
    dedupe the snapshot first. Overdue/late are counted over every task, in scope or not.
    """
    total_time = sum(c.time_in_range for c in classified)
    in_scope = [c for c in classified if c.in_scope]
    completed = sum(1 for c in in_scope if _counts_as_completed(c, rng))
    total = len(in_scope)

    return Metrics(
        total_time=total_time,
        completed=completed,
        total=total,
        progress=_progress(completed, total),
        overdue=sum(1 for c in classified if c.missed_due),
        late=sum(1 for c in classified if c.is_late),
    )


def render_metrics(metrics: Metrics) -> list[str]:
    return [
        f"  time:     {format_time(metrics.total_time)}",
        f"  done:     {metrics.completed} ({metrics.total} total)",
        f"  progress: {format_pct(metrics.progress)}",
        f"  overdue:  {metrics.overdue}",
        f"  late:     {metrics.late}",
    ]


def render_metrics_headline(metrics: Metrics) -> str:
    parts = [
        format_time(metrics.total_time),
        f"{metrics.completed}/{metrics.total} done",
        format_pct(metrics.progress),
    ]
    if metrics.overdue:
        parts.append(f"{metrics.overdue} overdue")
    if metrics.late:
        parts.append(f"{metrics.late} late")
    return "  ".join(parts)


__all__ = [
    "aggregate",
    "render_metrics",
    "render_metrics_headline",
]
