# hours_calc.py
from __future__ import annotations
import math
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class Phase(str, Enum):
    PLANNING = "PLANNING"
    SETUP = "SETUP"
    RUN = "RUN"
    RESET = "RESET"
    TEARDOWN = "TEARDOWN"


class EventType(str, Enum):
    # PLANNING
    NEW = "NEW"
    EXISTING = "EXISTING"
    # SETUP
    FIRST = "FIRST"
    PROCEEDING = "PROCEEDING"


# Which types each phase accepts (phases missing here take no type)
PHASE_TYPES: Dict[Phase, Tuple[EventType, ...]] = {
    Phase.PLANNING: (EventType.NEW, EventType.EXISTING),
    Phase.SETUP: (EventType.FIRST, EventType.PROCEEDING),
}

TYPE_LABELS: Dict[EventType, str] = {
    EventType.NEW: "NEW Scenario",
    EventType.EXISTING: "EXISTING Scenario",
    EventType.FIRST: "FIRST Run",
    EventType.PROCEEDING: "PROCEEDING Run",
}

# -----------------------------
# Fixed hours
# -----------------------------
RESET_HOURS = 0.5
TEARDOWN_HOURS = 2.0

CONFIG_HOURS: Dict[Tuple[Phase, EventType], float] = {
    (Phase.PLANNING, EventType.NEW): 4.5,
    (Phase.PLANNING, EventType.EXISTING): 3.0,
    (Phase.SETUP, EventType.FIRST): 2.0,
    (Phase.SETUP, EventType.PROCEEDING): 0.0,
}

PhaseLike = Union[Phase, str, None]
TypeLike = Union[EventType, str, None]


def _coerce(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or "").strip().upper())
    except ValueError:
        return None


def phase_requires_type(phase: PhaseLike) -> bool:
    return _coerce(Phase, phase) in PHASE_TYPES


def parse_duration(duration: Any) -> float:
    """
    Parse a free-text duration to hours. Anything unparsable, negative or
    non-finite counts as 0.
    """
    if duration is None or isinstance(duration, bool):
        return 0.0
    try:
        v = float(str(duration).strip())
    except ValueError:
        return 0.0
    if not math.isfinite(v) or v < 0:
        return 0.0
    return v


def calculate_hours(phase: PhaseLike, type_: TypeLike = None, duration: Any = None) -> float:
    """
    Hours credited to one event.

    RUN counts its own duration, RESET and TEARDOWN are flat (duration is
    ignored), PLANNING/SETUP come from CONFIG_HOURS by type. Unknown
    combinations are worth 0 hours.
    """
    p: Optional[Phase] = _coerce(Phase, phase)
    if p is Phase.RUN:
        return parse_duration(duration)
    if p is Phase.RESET:
        return RESET_HOURS
    if p is Phase.TEARDOWN:
        return TEARDOWN_HOURS
    t: Optional[EventType] = _coerce(EventType, type_)
    if p is None or t is None:
        return 0.0
    return CONFIG_HOURS.get((p, t), 0.0)
