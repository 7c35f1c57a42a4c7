"""Date-range reporting over task-tracker snapshots."""

from .classify import classify, classify_all
from .core.models import (
    ClassifiedTask,
    Metrics,
    Project,
    RangeSelector,
    ReportView,
    ResolvedRange,
    SortState,
    Task,
)
from .metrics import aggregate
from .pipeline import ReportController, dedupe_tasks, process_data
from .ranges import resolve_range

__all__ = [
    "ClassifiedTask",
    "Metrics",
    "Project",
    "RangeSelector",
    "ReportController",
    "ReportView",
    "ResolvedRange",
    "SortState",
    "Task",
    "aggregate",
    "classify",
    "classify_all",
    "dedupe_tasks",
    "process_data",
    "resolve_range",
]
