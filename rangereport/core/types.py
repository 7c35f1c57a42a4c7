"""Core type definitions."""

from typing import Literal, get_args

Preset = Literal["today", "week", "month", "year", "custom"]
MetricType = Literal["time", "overdue", "late"]
SortColumn = Literal["date", "title", "project", "time", "status"]
Tab = Literal["dashboard", "details"]

PRESETS: tuple[str, ...] = get_args(Preset)
METRIC_TYPES: tuple[str, ...] = get_args(MetricType)
SORT_COLUMNS: tuple[str, ...] = get_args(SortColumn)
TABS: tuple[str, ...] = get_args(Tab)

MAX_BUCKETS = 12
