"""Streamlit dashboard for recruiters.

Replaceable UI layer: all display logic lives here. Rows come from the API;
filtering, metrics and pagination run locally over the cached row set.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Optional

import pandas as pd
import streamlit as st

from app.clients.dashboard_client import AuthSession, DashboardAPIError, DashboardClient
from app.config import get_dashboard_settings
from app.services.dashboard_state import DashboardState, DateRange
from app.services.filter_service import (
    build_filter_options,
    filter_rows,
    paginate_rows,
    toggle_filter_value,
)
from app.services.metrics_service import MetricsService
from app.services.preference_service import resolve_visible_columns

FILTER_KEYS: list[str] = [
    "City",
    "Source",
    "Phone Status",
    "F2F Status",
    "Docs Status",
    "Job Status",
    "Level",
    "Dealer",
]

# ── Page config (must be first Streamlit call) ─────────────────────────────
st.set_page_config(
    page_title="Applicant Dashboard",
    page_icon="🗂️",
    layout="wide",
    initial_sidebar_state="expanded",
)

SETTINGS = get_dashboard_settings()


@st.cache_resource(show_spinner=False)
def _load_client() -> DashboardClient:
    return DashboardClient(SETTINGS.api_url)


@st.cache_resource(show_spinner=False)
def _load_metrics_service() -> MetricsService:
    return MetricsService(interview_status=SETTINGS.interview_status)


# ── Session state defaults ─────────────────────────────────────────────────
_STATE_DEFAULTS: dict[str, Any] = {
    "auth": None,
    "applications": None,
    "interviews": None,
    "filters": {},
    "visible_columns": None,
    "prefs_loaded": False,
    "page": 1,
}

for _key, _val in _STATE_DEFAULTS.items():
    if _key not in st.session_state:
        st.session_state[_key] = _val

if st.session_state.applications is None:
    st.session_state.applications = DashboardState()
if st.session_state.interviews is None:
    st.session_state.interviews = DashboardState()


# ── Helpers ────────────────────────────────────────────────────────────────
def _load_rows(state: DashboardState, date_range: DateRange, *, force: bool = False) -> None:
    """Fetch ``date_range`` into ``state`` unless it was already attempted."""
    if not force and not state.needs_fetch(date_range):
        return
    ticket = state.begin_fetch(date_range)
    try:
        rows = _load_client().fetch_jobs(date_range.start_date, date_range.end_date)
    except DashboardAPIError as exc:
        state.fail_fetch(ticket, exc.message)
        return
    if state.complete_fetch(ticket, rows) and state is st.session_state.applications:
        st.session_state.page = 1


def _persist_columns() -> None:
    auth: Optional[AuthSession] = st.session_state.auth
    selected = list(st.session_state.get("columns_select", []))
    st.session_state.visible_columns = selected
    if auth is None:
        return
    try:
        _load_client().save_visible_columns(auth, selected)
    except DashboardAPIError as exc:
        st.toast(f"Could not save columns: {exc.message}")


def _toggle_chip(field_name: str, value: str) -> None:
    st.session_state.filters = toggle_filter_value(st.session_state.filters, field_name, value)
    st.session_state.page = 1


def _format_cell(value: Any) -> str:
    return "-" if value is None else str(value)


def _format_percent(value: float) -> str:
    return f"{value:.1f}%"


# ── Sidebar ────────────────────────────────────────────────────────────────
with st.sidebar:
    st.title("Applicant Dashboard")
    st.caption("Job application tracking")
    st.divider()

    auth: Optional[AuthSession] = st.session_state.auth
    if auth is None:
        login_tab, signup_tab = st.tabs(["Sign in", "Sign up"])
        with login_tab:
            with st.form("login"):
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                if st.form_submit_button("Sign in", type="primary", use_container_width=True):
                    try:
                        st.session_state.auth = _load_client().login(email=email, password=password)
                        st.session_state.prefs_loaded = False
                        st.rerun()
                    except DashboardAPIError as exc:
                        st.error(exc.message)
        with signup_tab:
            with st.form("signup"):
                name = st.text_input("Name")
                new_email = st.text_input("Email", key="signup_email")
                new_password = st.text_input("Password", type="password", key="signup_password")
                if st.form_submit_button("Create account", use_container_width=True):
                    try:
                        _load_client().signup(email=new_email, password=new_password, name=name)
                        st.success("Account created, you can sign in now.")
                    except DashboardAPIError as exc:
                        st.error(exc.message)
        st.stop()

    st.write(auth.name or auth.email)
    if st.button("Sign out", use_container_width=True):
        for _key, _val in _STATE_DEFAULTS.items():
            st.session_state[_key] = _val
        st.rerun()

    st.divider()
    today = date.today()
    picked = st.date_input(
        "Date range",
        value=(today - timedelta(days=SETTINGS.default_range_days), today),
        format="YYYY-MM-DD",
    )
    page_size = st.number_input("Rows per page", min_value=5, max_value=500, value=SETTINGS.page_size, step=5)

if isinstance(picked, (tuple, list)) and len(picked) == 2:
    selected_range = DateRange(picked[0].isoformat(), picked[1].isoformat())
else:
    # Still choosing the end date; keep showing the last adopted range.
    selected_range = st.session_state.applications.date_range or DateRange(today.isoformat(), today.isoformat())

applications: DashboardState = st.session_state.applications
with st.spinner("Loading applications…"):
    _load_rows(applications, selected_range)

all_columns = applications.columns
if all_columns and not st.session_state.prefs_loaded:
    saved: list[str] = []
    try:
        saved = _load_client().get_visible_columns(auth)
    except DashboardAPIError as exc:
        st.toast(f"Could not load saved columns: {exc.message}")
    st.session_state.visible_columns = resolve_visible_columns(saved, all_columns)
    st.session_state.prefs_loaded = True


# ── Renderers ──────────────────────────────────────────────────────────────
def _render_kpis(rows: list[dict[str, Any]]) -> None:
    service = _load_metrics_service()
    kpis = service.compute_application_kpis(rows)
    metrics = service.compute_metrics(rows, top_n=SETTINGS.breakdown_top_n)

    cols = st.columns(3)
    cols[0].metric("Total applications", f"{kpis.total_applications:,}")
    cols[1].metric(
        "Interview scheduled",
        f"{kpis.interview_scheduled_count:,}",
        delta=_format_percent(kpis.interview_scheduled_percent),
        delta_color="off",
    )
    if metrics.breakdown_field:
        with cols[2]:
            st.caption(f"Top {metrics.breakdown_field}")
            for entry in metrics.breakdown:
                st.markdown(f"**{entry.value}**: {entry.count} ({_format_percent(entry.percent)})")


def _render_filters(rows: list[dict[str, Any]]) -> None:
    options = build_filter_options(rows, [key for key in FILTER_KEYS if key in all_columns])
    active: dict[str, set[str]] = st.session_state.filters
    if not options:
        return
    with st.expander("Search and filter", expanded=False):
        query = st.text_input("Filter fields", placeholder="Search filter titles").strip().lower()
        for field_name, values in options.items():
            if query and query not in field_name.lower():
                continue
            st.markdown(f"**{field_name}**")
            chip_cols = st.columns(4)
            for idx, option in enumerate(values):
                chip_cols[idx % 4].checkbox(
                    f"{option.value} ({option.count})",
                    value=option.value in active.get(field_name, set()),
                    key=f"chip::{field_name}::{option.value}",
                    on_change=_toggle_chip,
                    args=(field_name, option.value),
                )


def _render_table(rows: list[dict[str, Any]], columns: list[str]) -> None:
    if not rows:
        st.info("No data for the selected range.")
        return
    page = paginate_rows(rows, st.session_state.page, int(page_size))
    st.session_state.page = page.page

    frame = pd.DataFrame([{col: _format_cell(row.get(col)) for col in columns} for row in page.items])
    st.dataframe(frame, use_container_width=True, hide_index=True)

    nav = st.columns([1, 2, 1])
    if nav[0].button("Previous", disabled=not page.has_previous):
        st.session_state.page = page.page - 1
        st.rerun()
    nav[1].caption(f"Page {page.page} of {page.total_pages} · {page.total_rows:,} rows")
    if nav[2].button("Next", disabled=not page.has_next):
        st.session_state.page = page.page + 1
        st.rerun()


def _render_applications() -> None:
    if applications.error:
        st.error(applications.error)
        if st.button("Retry", key="retry_applications") and applications.requested_range is not None:
            _load_rows(applications, applications.requested_range, force=True)
            st.rerun()

    filtered = list(filter_rows(applications.rows, st.session_state.filters))
    _render_kpis(filtered)
    st.divider()

    left, right = st.columns([2, 1])
    with left:
        _render_filters(applications.rows)
    with right:
        st.multiselect(
            "Columns",
            options=all_columns,
            default=st.session_state.visible_columns or [],
            key="columns_select",
            on_change=_persist_columns,
        )

    visible = set(st.session_state.visible_columns or [])
    _render_table(filtered, [col for col in all_columns if col in visible])


def _render_interviews() -> None:
    interviews: DashboardState = st.session_state.interviews
    year = date.today().year
    with st.spinner("Loading interviews…"):
        _load_rows(interviews, DateRange(f"{year}-01-01", f"{year}-12-31"))
    if interviews.error:
        st.error(interviews.error)
        if st.button("Retry", key="retry_interviews") and interviews.requested_range is not None:
            _load_rows(interviews, interviews.requested_range, force=True)
            st.rerun()

    service = _load_metrics_service()
    summary = service.compute_interview_summary(interviews.rows)

    cols = st.columns(4)
    with cols[0]:
        st.caption("Today's interviews")
        if summary.today_rows:
            for row in summary.today_rows:
                st.markdown(f"{row.get('Name') or 'Unknown'} · {row.get('City') or 'No City'}")
        else:
            st.markdown("_No interviews today_")
    cols[1].metric("This week", summary.week_count)
    cols[2].metric(
        "This month",
        summary.month_count,
        delta=_format_percent(service.compute_period_share(interviews.rows, "month")),
        delta_color="off",
    )
    cols[3].metric(
        "This year",
        summary.year_count,
        delta=_format_percent(service.compute_period_share(interviews.rows, "year")),
        delta_color="off",
    )

    scheduled = [row for row in interviews.rows if service.is_interview_scheduled(row)]
    columns = interviews.columns
    visible = set(st.session_state.visible_columns or columns)
    frame = pd.DataFrame(
        [{col: _format_cell(row.get(col)) for col in columns if col in visible} for row in scheduled]
    )
    if frame.empty:
        st.info("No scheduled interviews this year.")
    else:
        st.dataframe(frame, use_container_width=True, hide_index=True)


# ── Main content area ──────────────────────────────────────────────────────
tab_applications, tab_interviews = st.tabs(["Applications", "Interviews"])

with tab_applications:
    _render_applications()

with tab_interviews:
    _render_interviews()
