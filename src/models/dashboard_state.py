"""Admin dashboard filter/sort state."""
from dataclasses import dataclass, replace
from typing import List

from src.models.registration import Registration

FILTER_OPTIONS = {
    "all": "All",
    "student": "Students",
    "professional": "Professionals",
}

SORT_OPTIONS = {
    "date-desc": "Date (Newest First)",
    "date-asc": "Date (Oldest First)",
    "name-asc": "Name (A-Z)",
    "name-desc": "Name (Z-A)",
}


@dataclass(frozen=True)
class DashboardState:
    """Current filter and sort selection."""

    filter: str = "all"
    sort_key: str = "date-desc"

    def __post_init__(self):
        if self.filter not in FILTER_OPTIONS:
            raise ValueError(f"Filter must be one of {list(FILTER_OPTIONS)}, got: {self.filter}")
        if self.sort_key not in SORT_OPTIONS:
            raise ValueError(f"Sort key must be one of {list(SORT_OPTIONS)}, got: {self.sort_key}")

    def with_filter(self, value: str) -> "DashboardState":
        return replace(self, filter=value)

    def with_sort_key(self, value: str) -> "DashboardState":
        return replace(self, sort_key=value)


@dataclass(frozen=True)
class DashboardData:
    """What one dashboard load returns."""

    registrations: List[Registration]
    total: int
    students: int
    professionals: int
