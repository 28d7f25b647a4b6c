"""Application state for one dashboard session.

The state is immutable: every user action returns a new ``AppState``. Uploads
are not serialized against each other; a second upload that finishes after a
first one simply replaces the loaded employees (last writer wins).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Tuple

from hr_dashboard.employee import Employee
from hr_dashboard.filters import DashboardFilters, with_selection

TABS: Dict[str, str] = {
    "overview": "نمای کلی",
    "birthdays": "تولدها",
    "salary": "حقوق",
    "map": "نقشه",
    "profile": "پروفایل",
    "overtime": "اضافه کار",
}
DEFAULT_TAB = "overview"


@dataclass(frozen=True)
class AppState:
    employees: Optional[Tuple[Employee, ...]] = None
    filters: DashboardFilters = field(default_factory=DashboardFilters)
    active_tab: str = DEFAULT_TAB


def is_dashboard(state: AppState) -> bool:
    return state.employees is not None


def load_data(state: AppState, employees: Iterable[Employee]) -> AppState:
    """Swap in a freshly loaded dataset; filters and tab start over."""
    return AppState(employees=tuple(employees))


def logout(state: AppState) -> AppState:
    return AppState()


def set_filter(state: AppState, key: str, values: Iterable[str] | str | None) -> AppState:
    return replace(state, filters=with_selection(state.filters, key, values))


def set_tab(state: AppState, tab: str) -> AppState:
    if tab not in TABS:
        raise ValueError(f"unknown tab: {tab!r}")
    return replace(state, active_tab=tab)
