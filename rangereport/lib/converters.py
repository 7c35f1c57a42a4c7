import logging
import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from rangereport.core.models import Project, Task

from .dates import parse_iso_day

logger = logging.getLogger(__name__)

TaskRow = Mapping[str, Any]
ProjectRow = Mapping[str, Any]


def _is_number(val: object) -> bool:
    return isinstance(val, (int, float)) and not isinstance(val, bool)


def _parse_number(val: object) -> float | None:
    """Finite numeric value from a number or numeric string; None for anything else."""
    if _is_number(val):
        raw = val
    elif isinstance(val, str) and val.strip():
        raw = val.strip()
    else:
        return None
    try:
        result = float(raw)  # type: ignore[arg-type]
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def _parse_timestamp_ms(val: object) -> datetime | None:
    """Parse an epoch-milliseconds value (or ISO string) into a local datetime."""
    number = _parse_number(val)
    if number is not None:
        try:
            return datetime.fromtimestamp(number / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(val, str) and val:
        try:
            parsed = datetime.fromisoformat(val.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed
    return None


def _parse_time_spent(task_id: str, val: object) -> dict[date, int]:
    if not isinstance(val, Mapping):
        if val is not None:
            logger.warning("task %s: ignoring non-mapping timeSpentOnDay", task_id)
        return {}
    spent: dict[date, int] = {}
    for key, raw in val.items():
        day = parse_iso_day(key)
        ms = _parse_number(raw)
        if day is None or ms is None or ms < 0:
            logger.warning("task %s: dropping time entry %r=%r", task_id, key, raw)
            continue
        spent[day] = spent.get(day, 0) + int(ms)
    return spent


def row_to_task(row: TaskRow) -> Task:
    """
    Converts a raw task record (camelCase keys, as exported by the task tool) into a Task.
    Malformed optional fields are treated as absent.
    """
    task_id = str(row.get("id", ""))

    due_raw = row.get("dueDay")
    due_day = parse_iso_day(due_raw)
    if due_raw not in (None, "") and due_day is None:
        logger.warning("task %s: ignoring malformed dueDay %r", task_id, due_raw)

    planned_raw = row.get("plannedAt")
    planned_at = _parse_timestamp_ms(planned_raw)
    if planned_raw not in (None, "") and planned_at is None:
        logger.warning("task %s: ignoring malformed plannedAt %r", task_id, planned_raw)

    done_raw = row.get("doneOn")
    done_on = _parse_timestamp_ms(done_raw)
    if done_raw not in (None, "") and done_on is None:
        logger.warning("task %s: ignoring malformed doneOn %r", task_id, done_raw)

    parent_id = row.get("parentId")
    project_id = row.get("projectId")
    return Task(
        id=task_id,
        title=str(row.get("title") or ""),
        is_done=bool(row.get("isDone", False)),
        parent_id=str(parent_id) if parent_id else None,
        project_id=str(project_id) if project_id else None,
        done_on=done_on,
        due_day=due_day,
        planned_at=planned_at,
        time_spent_on_day=_parse_time_spent(task_id, row.get("timeSpentOnDay")),
    )


def row_to_project(row: ProjectRow) -> Project:
    return Project(id=str(row.get("id", "")), title=str(row.get("title") or ""))
