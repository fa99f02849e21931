"""Tests for admin dashboard state."""
import pytest

from src.models.dashboard_state import FILTER_OPTIONS, SORT_OPTIONS, DashboardState


class TestDashboardState:
    """Test filter/sort state transitions."""

    def test_defaults(self):
        state = DashboardState()
        assert state.filter == "all"
        assert state.sort_key == "date-desc"

    def test_with_filter_returns_new_state(self):
        state = DashboardState()
        updated = state.with_filter("student")

        assert updated.filter == "student"
        assert updated.sort_key == "date-desc"
        assert state.filter == "all"

    def test_with_sort_key(self):
        assert DashboardState().with_sort_key("name-asc").sort_key == "name-asc"

    def test_invalid_filter_raises_error(self):
        with pytest.raises(ValueError, match="Filter must be one of"):
            DashboardState().with_filter("speaker")

    def test_invalid_sort_key_raises_error(self):
        with pytest.raises(ValueError, match="Sort key must be one of"):
            DashboardState(sort_key="email-asc")

    def test_options(self):
        assert list(FILTER_OPTIONS) == ["all", "student", "professional"]
        assert set(SORT_OPTIONS) == {"date-asc", "date-desc", "name-asc", "name-desc"}
