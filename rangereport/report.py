import json as _json
from pathlib import Path

from fncli import UsageError, cli

from . import config as _config
from .core.errors import UnknownChoiceError, ValidationError
from .core.models import RangeSelector, ReportView, SortState
from .core.types import SORT_COLUMNS
from .lib.dates import parse_day
from .lib.render import render_dashboard, render_details, view_to_dict
from .pipeline import ReportController
from .ranges import selector_from
from .snapshot import load_snapshot


def _parse_bound(label: str, value: str | None):
    if value is None:
        return None
    parsed = parse_day(value)
    if parsed is None:
        raise ValidationError(
            f"invalid {label} date: {value!r}; use today, yesterday, a weekday, or yyyy-mm-dd"
        )
    return parsed


def _selector(preset: str | None, start: str | None, end: str | None) -> RangeSelector:
    if preset is None:
        preset = "custom" if (start or end) else _config.get_default_preset()
    return selector_from(preset, _parse_bound("start", start), _parse_bound("end", end))


def _snapshot_path(file: str | None) -> Path:
    if file:
        return Path(file).expanduser()
    path = _config.get_snapshot_path()
    if path is None:
        raise UsageError("no snapshot given; pass --file or run `rangereport config --snapshot PATH`")
    return path


def _build(
    file: str | None,
    preset: str | None,
    start: str | None,
    end: str | None,
    sort: SortState | None = None,
) -> ReportController:
    controller = ReportController(selector=_selector(preset, start, end), sort=sort)
    tasks, projects = load_snapshot(_snapshot_path(file))
    controller.process_data(tasks, projects)
    return controller


def _emit(view: ReportView, json: bool, text: str) -> None:
    if json:
        print(_json.dumps(view_to_dict(view), indent=2))
        return
    print(text)


@cli("rangereport")
def report(
    file: str | None = None,
    preset: str | None = None,
    start: str | None = None,
    end: str | None = None,
    bar: str = "time",
    pie: str = "time",
    json: bool = False,
) -> None:
    """Dashboard: stats, bar chart and pie legend (--preset today|week|month|year, --start/--end, --bar/--pie time|overdue|late)"""
    controller = _build(file, preset, start, end)
    controller.select_bar_metric(bar)
    view = controller.select_pie_metric(pie)
    _emit(view, json, render_dashboard(view))


@cli("rangereport")
def details(
    file: str | None = None,
    preset: str | None = None,
    start: str | None = None,
    end: str | None = None,
    sort: str | None = None,
    desc: bool = False,
    json: bool = False,
) -> None:
    """Detailed task list (--sort date|title|project|time|status, --desc)"""
    column = sort or _config.get_default_sort()
    controller = _build(file, preset, start, end, sort=SortState(column=column, descending=desc))  # type: ignore[arg-type]
    view = controller.switch_tab("details")
    _emit(view, json, render_details(view))


@cli("rangereport", name="config")
def configure(
    preset: str | None = None,
    snapshot: str | None = None,
    sort: str | None = None,
) -> None:
    """Show or update defaults (--preset, --snapshot PATH, --sort)"""
    if preset is not None:
        if selector_from(preset).preset == "custom":
            raise ValidationError("default preset cannot be 'custom'")
        _config.set_default_preset(preset.strip().lower())
    if sort is not None:
        if sort not in SORT_COLUMNS:
            raise UnknownChoiceError("column", sort, SORT_COLUMNS)
        _config.set_default_sort(sort)
    if snapshot is not None:
        _config.set_snapshot_path(snapshot)

    path = _config.get_snapshot_path()
    print(f"preset:   {_config.get_default_preset()}")
    print(f"sort:     {_config.get_default_sort()}")
    print(f"snapshot: {path if path else 'not set'}")
