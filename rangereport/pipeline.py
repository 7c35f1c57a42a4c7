import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from . import config
from .charts import bucket, slices
from .classify import classify_all
from .core.errors import UnknownChoiceError
from .core.models import (
    ClassifiedTask,
    Project,
    RangeSelector,
    ReportView,
    ResolvedRange,
    Row,
    SortState,
    Task,
)
from .core.types import METRIC_TYPES, SORT_COLUMNS, TABS, MetricType, Tab
from .lib import clock
from .lib.converters import row_to_project, row_to_task
from .metrics import aggregate
from .ranges import resolve_range
from .table import project_rows, sort_rows, sort_rows_by_state

__all__ = [
    "ReportController",
    "coerce_projects",
    "coerce_tasks",
    "dedupe_tasks",
    "process_data",
]

logger = logging.getLogger(__name__)

TaskLike = Task | Mapping[str, Any]
ProjectLike = Project | Mapping[str, Any]


def coerce_tasks(tasks: Iterable[TaskLike]) -> list[Task]:
    return [t if isinstance(t, Task) else row_to_task(t) for t in tasks]


def coerce_projects(projects: Iterable[ProjectLike]) -> list[Project]:
    return [p if isinstance(p, Project) else row_to_project(p) for p in projects]


def dedupe_tasks(*sources: Iterable[TaskLike]) -> list[Task]:
    """Merge task lists keyed by id. Last write wins; first-seen position is kept."""
    merged: dict[str, Task] = {}
    for source in sources:
        for task in coerce_tasks(source):
            if task.id in merged:
                logger.debug("task %s appears more than once, keeping the later copy", task.id)
            merged[task.id] = task
    return list(merged.values())


def _check_metric(metric: str) -> MetricType:
    if metric not in METRIC_TYPES:
        raise UnknownChoiceError("metric", metric, METRIC_TYPES)
    return metric  # type: ignore[return-value]


def _check_tab(tab: str) -> Tab:
    if tab not in TABS:
        raise UnknownChoiceError("tab", tab, TABS)
    return tab  # type: ignore[return-value]


def process_data(
    tasks: Iterable[TaskLike],
    projects: Iterable[ProjectLike] = (),
    *,
    selector: RangeSelector | None = None,
    sort: SortState | None = None,
    bar_metric: MetricType = "time",
    pie_metric: MetricType = "time",
    tab: Tab = "dashboard",
    now: datetime | None = None,
) -> ReportView:
    """Run the whole pipeline once. Pure: same inputs, same view."""
    if now is None:
        now = clock.now()
    selector = selector or RangeSelector()
    sort = sort or SortState()
    task_list = coerce_tasks(tasks)
    project_list = coerce_projects(projects)

    rng = resolve_range(selector, today=now.date())
    classified = classify_all(task_list, rng, now=now)
    return _build_view(
        classified, project_list, rng, selector, sort, bar_metric, pie_metric, _check_tab(tab)
    )


def _build_view(
    classified: Sequence[ClassifiedTask],
    projects: Sequence[Project],
    rng: ResolvedRange,
    selector: RangeSelector,
    sort: SortState,
    bar_metric: MetricType,
    pie_metric: MetricType,
    tab: Tab,
) -> ReportView:
    return ReportView(
        range=rng,
        selector=selector,
        metrics=aggregate(classified, rng),
        bars=bucket(classified, rng, _check_metric(bar_metric)),
        slices=slices(classified, projects, _check_metric(pie_metric)),
        rows=sort_rows_by_state(project_rows(classified, projects), sort),
        sort=sort,
        bar_metric=bar_metric,
        pie_metric=pie_metric,
        tab=tab,
    )


class ReportController:
    """Holds the view state (range, sort, chart metrics, tab) and the last snapshot.

    Every accessor returns the new view. Changing the range recomputes
    immediately from the last snapshot; metric and sort changes reuse the last
    classification.
    """

    def __init__(
        self,
        selector: RangeSelector | None = None,
        sort: SortState | None = None,
        clock_fn=clock.now,
    ):
        self.selector = selector or config.get_default_selector()
        self.sort = sort or SortState(column=config.get_default_sort())
        self.bar_metric: MetricType = "time"
        self.pie_metric: MetricType = "time"
        self.tab: Tab = "dashboard"
        self._clock = clock_fn
        self._tasks: list[Task] = []
        self._projects: list[Project] = []
        self._view: ReportView | None = None
        self._classified: list[ClassifiedTask] = []

    @property
    def view(self) -> ReportView:
        if self._view is None:
            return self._recompute()
        return self._view

    def process_data(
        self, tasks: Iterable[TaskLike], projects: Iterable[ProjectLike] = ()
    ) -> ReportView:
        self._tasks = coerce_tasks(tasks)
        self._projects = coerce_projects(projects)
        return self._recompute()

    def set_range(self, selector: RangeSelector) -> ReportView:
        self.selector = selector
        return self._recompute()

    def sort_by(self, column: str) -> ReportView:
        if column not in SORT_COLUMNS:
            raise UnknownChoiceError("column", column, SORT_COLUMNS)
        view = self.view
        previous = self.sort
        self.sort = previous.toggle(column)  # type: ignore[arg-type]
        if self.sort.column == previous.column:
            rows: list[Row] = list(reversed(view.rows))
        else:
            rows = sort_rows(view.rows, self.sort.column)
        return self._replace(rows=rows, sort=self.sort)

    def select_bar_metric(self, metric: str) -> ReportView:
        self.bar_metric = _check_metric(metric)
        rng = self.view.range
        return self._replace(
            bars=bucket(self._classified, rng, self.bar_metric), bar_metric=self.bar_metric
        )

    def select_pie_metric(self, metric: str) -> ReportView:
        self.pie_metric = _check_metric(metric)
        if self._view is None:
            return self._recompute()
        return self._replace(
            slices=slices(self._classified, self._projects, self.pie_metric),
            pie_metric=self.pie_metric,
        )

    def switch_tab(self, tab: str) -> ReportView:
        self.tab = _check_tab(tab)
        if self._view is None:
            return self._recompute()
        return self._replace(tab=self.tab)

    def _replace(self, **changes: Any) -> ReportView:
        self._view = dataclasses.replace(self.view, **changes)
        return self._view

    def _recompute(self) -> ReportView:
        now = self._clock()
        rng = resolve_range(self.selector, today=now.date())
        self._classified = classify_all(self._tasks, rng, now=now)
        self._view = _build_view(
            self._classified,
            self._projects,
            rng,
            self.selector,
            self.sort,
            self.bar_metric,
            self.pie_metric,
            self.tab,
        )
        return self._view
