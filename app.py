import logging
from dataclasses import fields
from typing import Any, Dict

import streamlit as st
import streamlit.components.v1 as components

from charts import dashboard_height, render_dashboard_html
from data_store import STATUS_ORDER, EventForm, TrackerState, ValidationError
from hours_calc import PHASE_TYPES, TYPE_LABELS, EventType, Phase, phase_requires_type
from reports import average_hours, build_report, events_frame, styled_events, total_hours


def _setting(key: str, default: Any) -> Any:
    # st.secrets raises when no secrets.toml exists at all
    try:
        return st.secrets.get(key, default)
    except Exception:
        return default


# =============================================================
# App config
# =============================================================
PAGE_TITLE = _setting("SIMLAB_PAGE_TITLE", "Simulation Lab Hours Calculator")
SUBTITLE = _setting("SIMLAB_SUBTITLE", "Shared tracker for simulation lab staff")
CHART_HEIGHT = int(_setting("SIMLAB_CHART_HEIGHT", 250))

st.set_page_config(layout="wide", page_title=PAGE_TITLE)

logging.basicConfig(
    level=str(_setting("SIMLAB_LOG_LEVEL", "INFO")).upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("simlab")

EMPTY_MSG = "No events yet. Add some on the Input Data tab."

# =============================================================
# Session state
# =============================================================
# form field -> widget key
FORM_KEYS: Dict[str, str] = {f.name: f"form_{f.name}" for f in fields(EventForm)}


def _tracker() -> TrackerState:
    if "tracker" not in st.session_state:
        st.session_state.tracker = TrackerState()
        logger.debug("new tracker session")
    return st.session_state.tracker


def _form_defaults() -> Dict[str, Any]:
    d: Dict[str, Any] = dict(vars(EventForm()))
    d["date"] = None  # empty date picker
    return d


def _init_form() -> None:
    for name, value in _form_defaults().items():
        if FORM_KEYS[name] not in st.session_state:
            st.session_state[FORM_KEYS[name]] = value


def _reset_form() -> None:
    for name, value in _form_defaults().items():
        st.session_state[FORM_KEYS[name]] = value


def _read_form() -> EventForm:
    return EventForm.from_mapping({name: st.session_state.get(key) for name, key in FORM_KEYS.items()})


# =============================================================
# Callbacks
# =============================================================
def _on_add() -> None:
    tracker = _tracker()
    try:
        event = tracker.submit(_read_form())
    except ValidationError as e:
        tracker.error = str(e)
        return
    tracker.error = None
    tracker.flash = f"Added {event.scenario} ({event.phase.value}, {event.hours:.1f} h)."
    _reset_form()


def _on_phase_change() -> None:
    st.session_state[FORM_KEYS["type"]] = ""


tracker = _tracker()
_init_form()

# =============================================================
# UI: tabs Input | Table | Dashboard | Report
# =============================================================
st.title(PAGE_TITLE)
st.caption(SUBTITLE)

TAB_INPUT, TAB_TABLE, TAB_DASH, TAB_REPORT = st.tabs(
    ["📝 Input Data", "📋 Table View", "📊 Dashboard", "📄 Report"]
)

events = tracker.store.list()

with TAB_INPUT:
    st.subheader("Add New Event")

    if tracker.error:
        st.error(tracker.error)
        tracker.error = None
    if tracker.flash:
        st.success(tracker.flash)
        tracker.flash = None

    c1, c2 = st.columns(2)
    with c1:
        st.date_input("Date", key=FORM_KEYS["date"])
        st.text_input("Program", key=FORM_KEYS["program"], placeholder="e.g., Nursing")
        st.text_input("Staff Member", key=FORM_KEYS["staff"])
        phase = st.selectbox(
            "Phase",
            [""] + [p.value for p in Phase],
            key=FORM_KEYS["phase"],
            format_func=lambda v: v or "Select Phase",
            on_change=_on_phase_change,
        )
        if phase_requires_type(phase):
            st.selectbox(
                "Type",
                [""] + [t.value for t in PHASE_TYPES[Phase(phase)]],
                key=FORM_KEYS["type"],
                format_func=lambda v: TYPE_LABELS[EventType(v)] if v else "Select Type",
            )
        if phase == Phase.RUN.value:
            st.text_input("Duration (hours)", key=FORM_KEYS["duration"], placeholder="e.g., 1.5")
    with c2:
        st.text_input("Scenario", key=FORM_KEYS["scenario"], placeholder="e.g., Cookie")
        st.text_input("Semester", key=FORM_KEYS["semester"])
        st.text_input("Room", key=FORM_KEYS["room"])
        st.text_input("# of Learners", key=FORM_KEYS["num_learners"])
        st.text_input("Technology", key=FORM_KEYS["technology"])
        st.selectbox("Status", STATUS_ORDER, key=FORM_KEYS["status"])

    st.button("➕ Add Event", key="add_event", on_click=_on_add)

    if events:
        st.success(f"✓ {len(events)} events ready")

with TAB_TABLE:
    if not events:
        st.info(EMPTY_MSG)
    else:
        df = events_frame(events)
        st.dataframe(styled_events(df.drop(columns=["id"])), use_container_width=True, hide_index=True)
        st.markdown(f"**TOTAL: {total_hours(events):.1f} hours**")

        st.markdown("---")
        st.subheader("Delete Event")
        labels = {e.id: f"{e.date} — {e.scenario} ({e.phase.value}, {e.hours:.1f} h)" for e in events}
        pick = st.selectbox("Select event", list(labels), format_func=lambda i: labels.get(i, i))

        pending = tracker.store.get(tracker.pending_delete) if tracker.pending_delete else None
        if pending is not None:
            st.warning(f"Delete this event? {labels[pending.id]}")
            colA, colB = st.columns(2)
            with colA:
                st.button("Yes, delete", key="confirm_delete", on_click=tracker.confirm_delete, use_container_width=True)
            with colB:
                st.button("Cancel", key="cancel_delete", on_click=tracker.cancel_delete, use_container_width=True)
        else:
            st.button(
                "🗑️ Delete",
                key="request_delete",
                on_click=tracker.request_delete,
                args=(pick,),
                type="secondary",
            )

with TAB_DASH:
    if not events:
        st.info(EMPTY_MSG)
    else:
        m1, m2, m3 = st.columns(3)
        m1.metric("Total Hours", f"{total_hours(events):.1f}")
        m2.metric("Total Events", len(events))
        m3.metric("Avg per Event", f"{average_hours(events):.1f}")
        components.html(
            render_dashboard_html(events, CHART_HEIGHT),
            height=dashboard_height(events, CHART_HEIGHT),
            scrolling=False,
        )

with TAB_REPORT:
    if not events:
        st.info(EMPTY_MSG)
    else:
        st.markdown(build_report(events))
