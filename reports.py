# reports.py
"""
Aggregations over the event list, plus the table and text report built from them.

Everything here is recomputed from scratch on each call. Sums keep full
precision; rounding happens only in the *_breakdown rows and the rendered text.
"""
from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from data_store import Event, Status
from hours_calc import Phase

PHASE_COLORS: Dict[str, str] = {
    Phase.PLANNING.value: "#3b82f6",
    Phase.SETUP.value: "#10b981",
    Phase.RUN.value: "#f59e0b",
    Phase.RESET.value: "#8b5cf6",
    Phase.TEARDOWN.value: "#ef4444",
}
UNKNOWN_PHASE_COLOR = "#6b7280"

STATUS_BADGES: Dict[str, str] = {
    Status.COMPLETE.value: "background-color: #bbf7d0; color: #166534",
    Status.IN_PROGRESS.value: "background-color: #fef08a; color: #854d0e",
}
DEFAULT_BADGE = "background-color: #e5e7eb; color: #1f2937"

TABLE_COLS = [
    "Date", "Scenario", "Staff", "Phase", "Type", "Status", "Hours",
    "Program", "Semester", "Room", "# of Learners", "Technology",
]


def phase_color(phase: Union[Phase, str, None]) -> str:
    key = phase.value if isinstance(phase, Phase) else str(phase or "")
    return PHASE_COLORS.get(key, UNKNOWN_PHASE_COLOR)


# -----------------------------
# Reductions
# -----------------------------
def total_hours(events: Iterable[Event]) -> float:
    return sum((e.hours for e in events), 0.0)


def average_hours(events: Iterable[Event]) -> float:
    evs = list(events)
    if not evs:
        return 0.0
    return total_hours(evs) / len(evs)


def hours_by_scenario(events: Iterable[Event]) -> Dict[str, float]:
    out: Dict[str, float] = {}
    for e in events:
        out[e.scenario] = out.get(e.scenario, 0.0) + e.hours
    return out


def hours_by_phase(events: Iterable[Event]) -> Dict[Phase, float]:
    out: Dict[Phase, float] = {}
    for e in events:
        out[e.phase] = out.get(e.phase, 0.0) + e.hours
    return out


def hours_by_month(events: Iterable[Event]) -> Dict[str, float]:
    """Hours per YYYY-MM, keys in ascending order."""
    out: Dict[str, float] = {}
    for e in events:
        month = e.date[:7]
        out[month] = out.get(month, 0.0) + e.hours
    return dict(sorted(out.items()))


def monthly_breakdown(events: Iterable[Event]) -> List[Dict[str, Any]]:
    return [{"month": m, "hours": round(h, 2)} for m, h in hours_by_month(events).items()]


def phase_breakdown(events: Iterable[Event]) -> List[Dict[str, Any]]:
    return [
        {"name": p.value, "value": round(h, 2), "color": phase_color(p)}
        for p, h in hours_by_phase(events).items()
    ]


# -----------------------------
# Table view
# -----------------------------
def events_frame(events: Iterable[Event]) -> pd.DataFrame:
    rows = []
    for e in events:
        rows.append({
            "id": e.id,
            "Date": e.date,
            "Scenario": e.scenario,
            "Staff": e.staff,
            "Phase": e.phase.value,
            "Type": e.type.value if e.type else "",
            "Status": e.status.value,
            "Hours": e.hours,
            "Program": e.program,
            "Semester": e.semester,
            "Room": e.room,
            "# of Learners": e.num_learners,
            "Technology": e.technology,
        })
    return pd.DataFrame(rows, columns=["id"] + TABLE_COLS)


def status_badge(value: Any) -> str:
    return STATUS_BADGES.get(str(value), DEFAULT_BADGE)


def styled_events(df: pd.DataFrame):
    """Styler for the table view: status badges, hours to one decimal."""
    return (
        df.style
        .map(status_badge, subset=["Status"])
        .format({"Hours": "{:.1f}"})
    )


# -----------------------------
# Text report
# -----------------------------
def build_report(events: Iterable[Event], generated: Optional[date] = None) -> str:
    """Markdown summary shown on the Report tab."""
    evs = list(events)
    generated = generated or date.today()
    lines = [
        "## Simulation Lab Hours Report",
        f"Generated: {generated.isoformat()}",
        "",
        "| Total Hours | Total Events | Avg per Event |",
        "|---:|---:|---:|",
        f"| {total_hours(evs):.1f} | {len(evs)} | {average_hours(evs):.1f} |",
    ]

    scen = hours_by_scenario(evs)
    if scen:
        lines += ["", "### Scenario Summary"]
        for name, hrs in scen.items():
            lines.append(f"- **{name}**: {hrs:.1f} hours")

    phases = phase_breakdown(evs)
    if phases:
        lines += ["", "### Hours by Phase"]
        for row in phases:
            lines.append(f"- {row['name']}: {row['value']:.1f} hrs")

    return "\n".join(lines) + "\n"
