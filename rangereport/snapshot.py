"""Read task/project snapshots exported by the task tool.

Two shapes are accepted: plain lists (``tasks``, ``archivedTasks``,
``projects``) and the entity-state backup shape (``task.entities``,
``archiveYoung.task.entities``, ``archiveOld.task.entities``,
``project.entities``). Active and archived tasks are merged by id, later
sources winning, so a task that was just archived is counted once.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .core.errors import SnapshotError
from .core.models import Project, Task
from .pipeline import coerce_projects, dedupe_tasks

__all__ = ["load_snapshot", "parse_snapshot"]

logger = logging.getLogger(__name__)

_ARCHIVE_KEYS = ("archiveYoung", "archiveOld")


def _entities(state: object) -> list[Mapping[str, Any]]:
    """Records from an entity-state slice ({ids, entities}) or a plain list."""
    if isinstance(state, list):
        return [r for r in state if isinstance(r, Mapping)]
    if not isinstance(state, Mapping):
        return []
    entities = state.get("entities")
    if not isinstance(entities, Mapping):
        return []
    ids = state.get("ids")
    if isinstance(ids, list):
        ordered = [entities[i] for i in ids if i in entities]
    else:
        ordered = list(entities.values())
    return [r for r in ordered if isinstance(r, Mapping)]


def parse_snapshot(data: object) -> tuple[list[Task], list[Project]]:
    if not isinstance(data, Mapping):
        raise SnapshotError("snapshot must be a JSON object")
    if "data" in data and isinstance(data["data"], Mapping) and "task" not in data:
        data = data["data"]

    sources: list[list[Mapping[str, Any]]] = []
    if "tasks" in data or "archivedTasks" in data:
        sources.append(_entities(data.get("tasks")))
        sources.append(_entities(data.get("archivedTasks")))
    else:
        sources.append(_entities(data.get("task")))
        for key in _ARCHIVE_KEYS:
            archive = data.get(key)
            if isinstance(archive, Mapping):
                sources.append(_entities(archive.get("task")))

    raw_projects = data.get("projects", data.get("project"))
    tasks = dedupe_tasks(*sources)
    projects = coerce_projects(_entities(raw_projects))
    logger.debug("snapshot: %d tasks, %d projects", len(tasks), len(projects))
    return tasks, projects


def load_snapshot(path: Path) -> tuple[list[Task], list[Project]]:
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SnapshotError(f"snapshot not found: {path}") from None
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"unreadable snapshot {path}: {e}") from e
    return parse_snapshot(data)
