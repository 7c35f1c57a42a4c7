from collections.abc import Iterable
from datetime import date, datetime

from .core.models import ClassifiedTask, ResolvedRange, Task
from .lib import clock

__all__ = ["classify", "classify_all", "resolve_due_date"]


def resolve_due_date(task: Task) -> date | None:
    """dueDay wins; plannedAt is the fallback; otherwise the task has no due concept."""
    if task.due_day is not None:
        return task.due_day
    if task.planned_at is not None:
        return task.planned_at.date()
    return None


def _is_overdue(task: Task, now: datetime) -> bool:
    if task.is_done:
        return False
    if task.due_day is not None:
        return task.due_day < now.date()
    if task.planned_at is not None:
        return task.planned_at < now
    return False


def _is_late(task: Task, due: date | None) -> bool:
    if not task.is_done or task.done_on is None or due is None:
        return False
    return task.done_on.date() > due


def classify(task: Task, rng: ResolvedRange, *, now: datetime | None = None) -> ClassifiedTask:
    """Classify one task against a resolved range.

    Overdue/late are range-independent. Per-day time and scope depend on the range.
    """
    if now is None:
        now = clock.now()

    due = resolve_due_date(task)
    per_day = {day: ms for day, ms in sorted(task.time_spent_on_day.items()) if day in rng}
    is_overdue = _is_overdue(task, now)
    is_late = _is_late(task, due)
    in_scope = bool(per_day) or (due is not None and due in rng) or is_overdue or is_late

    return ClassifiedTask(
        task=task,
        in_scope=in_scope,
        is_overdue=is_overdue,
        is_late=is_late,
        time_in_range=sum(per_day.values()),
        per_day_time=per_day,
        due_date=due,
    )


def classify_all(
    tasks: Iterable[Task], rng: ResolvedRange, *, now: datetime | None = None
) -> list[ClassifiedTask]:
    if now is None:
        now = clock.now()
    return [classify(t, rng, now=now) for t in tasks]
