# data_store.py
from __future__ import annotations
import logging
import re
import time
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional

from hours_calc import (
    PHASE_TYPES,
    EventType,
    Phase,
    calculate_hours,
    parse_duration,
)

logger = logging.getLogger(__name__)


class Status(str, Enum):
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"


STATUS_ORDER = [s.value for s in Status]


class ValidationError(ValueError):
    """Raised when a submitted event is missing or has invalid fields."""


# -----------------------------
# Records
# -----------------------------
@dataclass
class EventForm:
    """Raw form values, exactly as typed or selected by the user."""

    date: str = ""
    program: str = ""
    semester: str = ""
    scenario: str = ""
    staff: str = ""
    phase: str = ""
    type: str = ""
    room: str = ""
    num_learners: str = ""
    technology: str = ""
    status: str = Status.PLANNED.value
    duration: str = ""

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "EventForm":
        """Build a form from a dict, ignoring unknown keys and coercing to text."""
        out = cls()
        for f in fields(cls):
            if f.name not in values:
                continue
            v = values[f.name]
            if isinstance(v, (date, datetime)):
                v = v.isoformat()[:10]
            elif isinstance(v, Enum):
                v = v.value
            setattr(out, f.name, "" if v is None else str(v))
        return out


@dataclass(frozen=True)
class Event:
    id: str
    date: str
    scenario: str
    phase: Phase
    type: Optional[EventType] = None
    duration: float = 0.0
    status: Status = Status.PLANNED
    hours: float = 0.0
    program: str = ""
    semester: str = ""
    staff: str = ""
    room: str = ""
    num_learners: str = ""
    technology: str = ""


# -----------------------------
# Validation
# -----------------------------
def _clean(s: Any) -> str:
    return str(s or "").strip()


def _norm_date(s: str) -> str:
    # Accept full ISO timestamps, keep YYYY-MM-DD
    s = _clean(s)
    return s.split("T")[0] if "T" in s else s


_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _parse_date(s: str) -> date:
    # Exactly YYYY-MM-DD; fromisoformat alone also takes compact and week dates
    s = _norm_date(s)
    if not _DATE_RE.fullmatch(s):
        raise ValueError(f"not a YYYY-MM-DD date: {s}")
    return datetime.strptime(s, "%Y-%m-%d").date()


def validate_form(form: EventForm) -> None:
    """Raise ValidationError unless the form describes a storable event."""
    if not _clean(form.scenario) or not _clean(form.phase) or not _clean(form.date):
        raise ValidationError("Please fill in Scenario, Phase, and Date")

    try:
        phase = Phase(_clean(form.phase).upper())
    except ValueError:
        raise ValidationError(f"Unknown phase: {form.phase}") from None

    if phase in PHASE_TYPES:
        if not _clean(form.type):
            raise ValidationError(f"Please select Type for {phase.value} phase")
        allowed = [t.value for t in PHASE_TYPES[phase]]
        if _clean(form.type).upper() not in allowed:
            raise ValidationError(
                f"Type {form.type} is not valid for {phase.value} phase (expected one of {', '.join(allowed)})"
            )

    if phase is Phase.RUN and not _clean(form.duration):
        raise ValidationError("Please enter Duration for RUN phase")

    try:
        _parse_date(form.date)
    except ValueError:
        raise ValidationError(f"Date must be YYYY-MM-DD, got: {form.date}") from None

    status = _clean(form.status) or Status.PLANNED.value
    if status not in STATUS_ORDER:
        raise ValidationError(f"Unknown status: {form.status}")


def build_event(form: EventForm, event_id: str) -> Event:
    """Turn a validated form into an Event, computing its hours once."""
    phase = Phase(_clean(form.phase).upper())
    etype = EventType(_clean(form.type).upper()) if phase in PHASE_TYPES else None
    return Event(
        id=event_id,
        date=_parse_date(form.date).isoformat(),
        scenario=_clean(form.scenario),
        phase=phase,
        type=etype,
        duration=parse_duration(form.duration) if phase is Phase.RUN else 0.0,
        status=Status(_clean(form.status) or Status.PLANNED.value),
        hours=calculate_hours(phase, etype, form.duration),
        program=_clean(form.program),
        semester=_clean(form.semester),
        staff=_clean(form.staff),
        room=_clean(form.room),
        num_learners=_clean(form.num_learners),
        technology=_clean(form.technology),
    )


# -----------------------------
# Store
# -----------------------------
class EventStore:
    """In-memory event list, newest first. Events are only added or removed."""

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def next_id(self) -> str:
        # Clock based, but never repeats or goes backwards within a store
        self._last_id = max(time.time_ns(), self._last_id + 1)
        return str(self._last_id)

    def add(self, event: Event) -> None:
        if any(e.id == event.id for e in self._events):
            raise ValueError(f"Event id {event.id} already exists")
        self._events.insert(0, event)
        logger.info("added event %s (%s %s, %.2fh)", event.id, event.scenario, event.phase.value, event.hours)

    def remove(self, event_id: str) -> None:
        kept = [e for e in self._events if e.id != event_id]
        if len(kept) != len(self._events):
            logger.info("removed event %s", event_id)
        self._events = kept

    def get(self, event_id: str) -> Optional[Event]:
        for e in self._events:
            if e.id == event_id:
                return e
        return None

    def list(self) -> List[Event]:
        return list(self._events)


# -----------------------------
# Session state
# -----------------------------
@dataclass
class TrackerState:
    """Everything one browser session owns."""

    store: EventStore = field(default_factory=EventStore)
    pending_delete: Optional[str] = None
    flash: Optional[str] = None
    error: Optional[str] = None

    def submit(self, form: EventForm) -> Event:
        validate_form(form)
        event = build_event(form, self.store.next_id())
        self.store.add(event)
        return event

    def request_delete(self, event_id: str) -> None:
        self.pending_delete = event_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> None:
        if self.pending_delete is None:
            return
        self.store.remove(self.pending_delete)
        self.pending_delete = None
