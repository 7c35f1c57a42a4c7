import dataclasses
from datetime import date, datetime

from .types import MetricType, Preset, SortColumn, Tab


@dataclasses.dataclass(frozen=True)
class Task:
    id: str
    title: str
    is_done: bool = False
    parent_id: str | None = None
    project_id: str | None = None
    done_on: datetime | None = None
    due_day: date | None = None
    planned_at: datetime | None = None
    time_spent_on_day: dict[date, int] = dataclasses.field(default_factory=dict, hash=False)


@dataclasses.dataclass(frozen=True)
class Project:
    id: str
    title: str


@dataclasses.dataclass(frozen=True)
class RangeSelector:
    preset: Preset = "week"
    start: date | None = None
    end: date | None = None

    @property
    def shows_custom_inputs(self) -> bool:
        return self.preset == "custom"


@dataclasses.dataclass(frozen=True)
class ResolvedRange:
    start: date
    end: date
    preset: Preset = "custom"

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    @property
    def day_count(self) -> int:
        return (self.end - self.start).days + 1


@dataclasses.dataclass(frozen=True)
class ClassifiedTask:
    task: Task
    in_scope: bool
    is_overdue: bool
    is_late: bool
    time_in_range: int
    per_day_time: dict[date, int] = dataclasses.field(default_factory=dict, hash=False)
    due_date: date | None = None

    @property
    def missed_due(self) -> bool:
        """Overdue now, or completed after the due date."""
        return self.is_overdue or self.is_late


@dataclasses.dataclass(frozen=True)
class Metrics:
    total_time: int = 0
    completed: int = 0
    total: int = 0
    progress: float = 0.0
    overdue: int = 0
    late: int = 0


@dataclasses.dataclass(frozen=True)
class Bar:
    label: str
    start: date
    end: date
    value: int


@dataclasses.dataclass(frozen=True)
class Slice:
    label: str
    value: int
    share: float
    color: str
    legend: str


@dataclasses.dataclass(frozen=True)
class Row:
    task_id: str
    date: date | None
    title: str
    project: str | None
    time_spent: int
    badges: tuple[str, ...] = ()
    is_done: bool = False


@dataclasses.dataclass(frozen=True)
class SortState:
    column: SortColumn = "date"
    descending: bool = False

    def toggle(self, column: SortColumn) -> "SortState":
        if column == self.column:
            return SortState(column=column, descending=not self.descending)
        return SortState(column=column, descending=False)


@dataclasses.dataclass(frozen=True)
class ReportView:
    range: ResolvedRange
    selector: RangeSelector
    metrics: Metrics
    bars: list[Bar]
    slices: list[Slice]
    rows: list[Row]
    sort: SortState
    bar_metric: MetricType
    pie_metric: MetricType
    tab: Tab = "dashboard"
