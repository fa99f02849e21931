"""Admin dashboard data loading."""
import logging
from typing import Optional

from src.models.dashboard_state import DashboardData, DashboardState
from src.services.registration_service import get_statistics, list_registrations
from src.services.storage_service import RegistrationStore

logger = logging.getLogger(__name__)


def load_dashboard(state: DashboardState, store: Optional[RegistrationStore] = None) -> DashboardData:
    """
    Fetch the listing and the statistics for the current selection.

    Both calls are issued every time; there is no caching, so a filter or
    sort change and a manual refresh behave the same.
    """
    registrations = list_registrations(state.filter, state.sort_key, store=store)
    stats = get_statistics(store=store)
    logger.debug(
        "Loaded dashboard filter=%s sort=%s rows=%d",
        state.filter, state.sort_key, len(registrations)
    )
    return DashboardData(
        registrations=registrations,
        total=stats.total,
        students=stats.students,
        professionals=stats.professionals,
    )
