from collections.abc import Sequence
from typing import Any

from rangereport.core.models import Bar, Metrics, ReportView, Row, Slice
from rangereport.table import BADGE_LATE, BADGE_OVERDUE

from . import ansi
from .ansi import bold, coral, cyan, gold, green, muted, red, white
from .format import format_date_short, format_pct, format_time

__all__ = [
    "render_bars",
    "render_dashboard",
    "render_details",
    "render_pie",
    "render_stats",
    "view_to_dict",
]

_BAR_WIDTH = 30
_PRESET_LABELS = {
    "today": "Today",
    "week": "Last 7 days",
    "month": "Last 30 days",
    "year": "Last 365 days",
    "custom": "Custom range",
}


def _bar_value(value: int, metric: str) -> str:
    return format_time(value) if metric == "time" else str(value)


def _render_header(view: ReportView) -> list[str]:
    rng = view.range
    span = format_date_short(rng.start)
    if rng.end != rng.start:
        span = f"{span} → {format_date_short(rng.end)}"
    label = _PRESET_LABELS.get(rng.preset, rng.preset)
    return [f"\n{bold(white(label))} {muted('·')} {span}"]


def render_stats(metrics: Metrics) -> list[str]:
    return [
        f"{muted('time:')} {cyan(format_time(metrics.total_time))}",
        f"{muted('done:')} {green(str(metrics.completed))}{muted(f' / {metrics.total} total')}",
        f"{muted('progress:')} {format_pct(metrics.progress)}",
        f"{muted('overdue:')} {red(str(metrics.overdue)) if metrics.overdue else '0'}",
        f"{muted('late:')} {gold(str(metrics.late)) if metrics.late else '0'}",
    ]


def render_bars(bars: Sequence[Bar], metric: str) -> list[str]:
    lines = [bold(f"{metric.upper()} OVER TIME")]
    if not bars:
        return [*lines, muted("  no data")]
    peak = max(b.value for b in bars)
    label_width = max(len(b.label) for b in bars)
    for b in bars:
        filled = round(b.value / peak * _BAR_WIDTH) if peak else 0
        bar = "█" * filled
        lines.append(
            f"  {b.label:<{label_width}}  {coral(bar) if bar else ''}{' ' if bar else ''}"
            f"{muted(_bar_value(b.value, metric))}"
        )
    return lines


def render_pie(slices: Sequence[Slice], metric: str) -> list[str]:
    lines = [bold(f"{metric.upper()} SHARE")]
    shown = [s for s in slices if s.value > 0]
    if not shown:
        return [*lines, muted("  no data")]
    lines.extend(f"  {ansi.pool(s.color, '●')} {s.legend}" for s in shown)
    return lines


def _fmt_badges(badges: Sequence[str]) -> str:
    parts = []
    for badge in badges:
        if badge == BADGE_OVERDUE:
            parts.append(red(badge))
        elif badge == BADGE_LATE:
            parts.append(gold(badge))
        else:
            parts.append(badge)
    return " ".join(parts)


def _render_row(row: Row) -> str:
    check = green("✓") if row.is_done else "□"
    day = format_date_short(row.date) if row.date else "—"
    project = f" {muted(f'[{row.project}]')}" if row.project else ""
    badges = f" {_fmt_badges(row.badges)}" if row.badges else ""
    return f"  {check} {day:<13} {format_time(row.time_spent):>8}  {row.title}{project}{badges}"


def render_details(view: ReportView) -> str:
    arrow = "↓" if view.sort.descending else "↑"
    lines = _render_header(view)
    lines.append(muted(f"sorted by {view.sort.column} {arrow}"))
    if not view.rows:
        lines.append("no tasks in range")
    else:
        lines.extend(_render_row(r) for r in view.rows)
    return "\n".join(lines)


def render_dashboard(view: ReportView) -> str:
    lines = _render_header(view)
    lines.extend(render_stats(view.metrics))
    lines.append("")
    lines.extend(render_bars(view.bars, view.bar_metric))
    lines.append("")
    lines.extend(render_pie(view.slices, view.pie_metric))
    return "\n".join(lines)


def view_to_dict(view: ReportView) -> dict[str, Any]:
    m = view.metrics
    return {
        "range": {
            "preset": view.range.preset,
            "start": view.range.start.isoformat(),
            "end": view.range.end.isoformat(),
        },
        "stats": {
            "time": format_time(m.total_time),
            "time_ms": m.total_time,
            "completed": m.completed,
            "total": m.total,
            "progress": round(m.progress, 1),
            "overdue": m.overdue,
            "late": m.late,
        },
        "bars": {
            "metric": view.bar_metric,
            "columns": [
                {"label": b.label, "start": b.start.isoformat(), "end": b.end.isoformat(), "value": b.value}
                for b in view.bars
            ],
        },
        "pie": {
            "metric": view.pie_metric,
            "slices": [
                {"label": s.label, "value": s.value, "share": round(s.share, 4), "legend": s.legend}
                for s in view.slices
            ],
        },
        "rows": [
            {
                "id": r.task_id,
                "date": r.date.isoformat() if r.date else None,
                "title": r.title,
                "project": r.project,
                "time": format_time(r.time_spent),
                "time_ms": r.time_spent,
                "badges": list(r.badges),
                "done": r.is_done,
            }
            for r in view.rows
        ],
        "sort": {"column": view.sort.column, "descending": view.sort.descending},
        "tab": view.tab,
    }
