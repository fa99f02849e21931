"""Admin dashboard UI: statistics, filter/sort controls and registrations table."""
import html
import logging
import traceback
from typing import Dict, Iterable, List

import streamlit as st

from src.models.dashboard_state import FILTER_OPTIONS, SORT_OPTIONS, DashboardState
from src.models.registration import Registration
from src.services.dashboard_service import load_dashboard
from src.ui.html_utils import html_block
from src.utils.date_utils import format_registration_date
from src.utils.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

DASHBOARD_STATE_KEY = "admin_dashboard_state"
SORT_WIDGET_KEY = "admin_dashboard_sort"

STAT_CARD_STYLES = {
    "Total Registrations": "linear-gradient(135deg, #6366F1 0%, #8B5CF6 100%)",
    "Students": "linear-gradient(135deg, #10B981 0%, #059669 100%)",
    "Professionals": "linear-gradient(135deg, #F59E0B 0%, #D97706 100%)",
}

TABLE_COLUMNS = ("Name", "Email", "Type", "Company", "Phone", "Registration Date")


def _get_dashboard_state() -> DashboardState:
    if DASHBOARD_STATE_KEY not in st.session_state:
        st.session_state[DASHBOARD_STATE_KEY] = DashboardState()
    return st.session_state[DASHBOARD_STATE_KEY]


def _on_filter(value: str) -> None:
    st.session_state[DASHBOARD_STATE_KEY] = _get_dashboard_state().with_filter(value)


def _on_sort_change() -> None:
    value = st.session_state.get(SORT_WIDGET_KEY, "date-desc")
    st.session_state[DASHBOARD_STATE_KEY] = _get_dashboard_state().with_sort_key(value)


def _on_refresh() -> None:
    logger.debug("Manual dashboard refresh")


def _render_stat_card(label: str, value: int) -> str:
    """Render HTML for one statistics card."""
    background = STAT_CARD_STYLES.get(label, STAT_CARD_STYLES["Total Registrations"])
    return html_block(f"""
        <div style="background: {background}; border-radius: 16px; padding: 24px;
                    color: white; box-shadow: 0 10px 30px rgba(0,0,0,0.25);">
            <div style="font-size: 0.9rem; text-transform: uppercase; letter-spacing: 0.05em; opacity: 0.85;">
                {html.escape(label)}
            </div>
            <div style="font-size: 2.5rem; font-weight: 700;">{value}</div>
        </div>
    """)


def _registration_rows(registrations: Iterable[Registration]) -> List[Dict[str, str]]:
    """Build table rows; absent optional values display as '-'."""
    return [
        {
            "Name": registration.name,
            "Email": registration.email,
            "Type": registration.registration_type.value,
            "Company": registration.company or "-",
            "Phone": registration.phone or "-",
            "Registration Date": format_registration_date(registration.created_at),
        }
        for registration in registrations
    ]


def _render_controls(state: DashboardState) -> None:
    filter_cols = st.columns(len(FILTER_OPTIONS) + 2, gap="small")
    for col, (value, label) in zip(filter_cols, FILTER_OPTIONS.items()):
        with col:
            st.button(
                label,
                key=f"admin_filter_{value}",
                use_container_width=True,
                type="primary" if state.filter == value else "secondary",
                on_click=_on_filter,
                args=(value,),
            )

    with filter_cols[-2]:
        sort_keys = list(SORT_OPTIONS)
        st.selectbox(
            "Sort by",
            options=sort_keys,
            index=sort_keys.index(state.sort_key),
            format_func=lambda key: SORT_OPTIONS[key],
            key=SORT_WIDGET_KEY,
            label_visibility="collapsed",
            on_change=_on_sort_change,
        )

    with filter_cols[-1]:
        st.button("🔄 Refresh", key="admin_refresh", use_container_width=True, on_click=_on_refresh)


def render_admin_dashboard() -> None:
    """Render statistics and the filtered, sorted registrations table."""
    st.markdown("## 📊 Registration Dashboard")
    st.caption("Manage and view all conference registrations")

    state = _get_dashboard_state()

    try:
        data = load_dashboard(state)
    except StoreUnavailableError as error:
        logger.exception("Dashboard load failed")
        st.error("❌ Failed to fetch data. Please try again.")
        with st.expander("🔍 Error details"):
            st.code("".join(traceback.format_exception(type(error), error, error.__traceback__)))
        st.button("🔄 Refresh", key="admin_refresh_error", on_click=_on_refresh)
        return

    stat_cols = st.columns(3, gap="medium")
    stats = (
        ("Total Registrations", data.total),
        ("Students", data.students),
        ("Professionals", data.professionals),
    )
    for col, (label, value) in zip(stat_cols, stats):
        with col:
            st.markdown(_render_stat_card(label, value), unsafe_allow_html=True)

    st.markdown("### All Registrations")
    _render_controls(state)

    if not data.registrations:
        st.info("📭 No Registrations Found. There are no registrations matching your filters.")
        return

    st.dataframe(
        _registration_rows(data.registrations),
        column_order=TABLE_COLUMNS,
        use_container_width=True,
        hide_index=True,
    )
