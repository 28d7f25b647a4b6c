from __future__ import annotations

from typing import List

import numpy as np
import pytest

from hr_dashboard.data import load_dashboard_data, prepare_context
from hr_dashboard.employee import Employee
from hr_dashboard.filters import DashboardFilters
from hr_dashboard.sample_data import generate_sample_data


def make_employee(i: int, **overrides) -> Employee:
    base = dict(
        id=f"emp-{i}",
        personnel_code=str(10000 + i),
        name=f"نام{i}",
        last_name=f"خانوادگی{i}",
        full_name=f"نام{i} خانوادگی{i}",
        birth_date="1370/01/15",
        birth_month="فروردین",
        department="مالی",
        position="کارشناس",
        education="کارشناسی",
        marital_status="متاهل",
        location="ستاد",
        region=1,
        salary=100_000_000,
        overtime_hours=10,
        age_group="۳۰-۴۰",
        tenure=5,
        employment_date="1395/06/01",
    )
    base.update(overrides)
    return Employee(**base)


@pytest.fixture
def ten_employees() -> List[Employee]:
    # six in finance, four in technical
    out = [make_employee(i + 1) for i in range(6)]
    out += [
        make_employee(i + 7, department="فنی و اجرایی", gender="زن", region=5, salary=200_000_000, birth_date="1360/07/01", birth_month="مهر")
        for i in range(4)
    ]
    return out


@pytest.fixture
def sample_employees() -> List[Employee]:
    return generate_sample_data(40, rng=np.random.default_rng(7))


@pytest.fixture
def context_for():
    def build(employees, filters: DashboardFilters | None = None):
        f = filters or DashboardFilters()
        return f, prepare_context(f, load_dashboard_data(employees))

    return build
