from collections.abc import Callable, Sequence
from datetime import date

from .core.errors import UnknownChoiceError
from .core.models import ClassifiedTask, Project, Row, SortState
from .core.types import SORT_COLUMNS

__all__ = ["BADGE_LATE", "BADGE_OVERDUE", "project_rows", "sort_rows", "sort_rows_by_state"]

BADGE_OVERDUE = "Overdue"
BADGE_LATE = "Late"


def _badges(c: ClassifiedTask) -> tuple[str, ...]:
    badges = []
    if c.missed_due:
        badges.append(BADGE_OVERDUE)
    if c.is_late:
        badges.append(BADGE_LATE)
    return tuple(badges)


def _row_date(c: ClassifiedTask) -> date | None:
    logged = [day for day, ms in c.per_day_time.items() if ms > 0]
    if logged:
        return max(logged)
    return c.due_date


def project_rows(classified: Sequence[ClassifiedTask], projects: Sequence[Project] = ()) -> list[Row]:
    """One row per in-scope task, in input order. Zero-time overdue/late tasks are kept."""
    titles = {p.id: p.title for p in projects}
    return [
        Row(
            task_id=c.task.id,
            date=_row_date(c),
            title=c.task.title,
            project=titles.get(c.task.project_id) if c.task.project_id else None,
            time_spent=c.time_in_range,
            badges=_badges(c),
            is_done=c.task.is_done,
        )
        for c in classified
        if c.in_scope
    ]


_SORT_KEYS: dict[str, Callable[[Row], object]] = {
    "date": lambda r: r.date,
    "title": lambda r: r.title.lower(),
    "project": lambda r: r.project.lower() if r.project else None,
    "time": lambda r: r.time_spent,
    "status": lambda r: (len(r.badges), r.badges),
}


def sort_rows(rows: Sequence[Row], column: str, descending: bool = False) -> list[Row]:
    """Stable ascending sort with None as the minimum; descending is its exact reverse."""
    key = _SORT_KEYS.get(column)
    if key is None:
        raise UnknownChoiceError("column", column, SORT_COLUMNS)

    def _total_key(row: Row) -> tuple[bool, object]:
        value = key(row)
        return (value is not None, value)

    ordered = sorted(rows, key=_total_key)
    if descending:
        ordered.reverse()
    return ordered


def sort_rows_by_state(rows: Sequence[Row], state: SortState) -> list[Row]:
    return sort_rows(rows, state.column, state.descending)
