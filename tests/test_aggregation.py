import pandas as pd

from hr_dashboard.aggregation import (
    count_by_fixed,
    count_by_open,
    distinct_count,
    mean_age,
    mean_by,
    mean_salary,
    mean_tenure,
    select_where,
    with_percent,
)
from hr_dashboard.employee import EMPLOYEE_FIELDS, employees_to_frame
from hr_dashboard.jalali import PERSIAN_MONTHS
from tests.conftest import make_employee


def test_months_cover_every_record(sample_employees):
    df = employees_to_frame(sample_employees)
    months = count_by_fixed(df, "birth_month", PERSIAN_MONTHS)
    assert months["name"].tolist() == list(PERSIAN_MONTHS)
    assert months["value"].sum() == len(sample_employees)


def test_fixed_enumeration_zero_fills_and_ignores_unknowns(ten_employees):
    df = employees_to_frame(ten_employees + [make_employee(99, age_group="(Blank)"), make_employee(100, age_group="20-30")])
    out = count_by_fixed(df, "age_group", ["۲۰-۳۰", "۳۰-۴۰", "۴۰-۵۰", "۵۰+"], aliases={"20-30": "۲۰-۳۰"})
    assert out.set_index("name")["value"].to_dict() == {"۲۰-۳۰": 1, "۳۰-۴۰": 10, "۴۰-۵۰": 0, "۵۰+": 0}


def test_open_vocabulary_first_seen_order(ten_employees):
    df = employees_to_frame(list(reversed(ten_employees)))
    out = count_by_open(df, "department")
    assert out.to_dict(orient="records") == [
        {"name": "فنی و اجرایی", "value": 4},
        {"name": "مالی", "value": 6},
    ]


def test_mean_by_rounds_half_up():
    df = pd.DataFrame({"department": ["a", "a", "b"], "salary": [1, 2, 7]})
    out = mean_by(df, "department", "salary")
    assert out.to_dict(orient="records") == [
        {"name": "a", "mean": 2, "count": 2, "total": 3},
        {"name": "b", "mean": 7, "count": 1, "total": 7},
    ]


def test_percent_with_zero_total():
    df = pd.DataFrame({"name": ["x", "y"], "value": [0, 0]})
    assert with_percent(df)["percent"].tolist() == [0, 0]
    df = pd.DataFrame({"name": ["x", "y"], "value": [1, 2]})
    assert with_percent(df)["percent"].tolist() == [33, 67]


def test_empty_inputs_fall_back_to_zero():
    empty = pd.DataFrame(columns=EMPLOYEE_FIELDS)
    assert mean_salary(empty) == 0
    assert mean_tenure(empty) == 0
    assert mean_tenure(empty, from_dates=True) == 0
    assert mean_age(empty) == 0
    assert distinct_count(empty, "department") == 0
    assert count_by_fixed(empty, "birth_month", PERSIAN_MONTHS)["value"].sum() == 0
    assert mean_by(empty, "department", "salary").empty


def test_scalar_means(ten_employees):
    df = employees_to_frame(ten_employees)
    assert mean_salary(df) == 140_000_000
    assert mean_tenure(df) == 5
    assert mean_tenure(df, from_dates=True, reference_year=1403) == 8
    # six aged 33 and four aged 43
    assert mean_age(df, reference_year=1403) == 37.0


def test_mean_age_skips_invalid_dates():
    df = employees_to_frame([make_employee(1, birth_date="1370/01/15"), make_employee(2, birth_date="نامعتبر")])
    assert mean_age(df, reference_year=1403) == 33


def test_select_where_sorts_stably(ten_employees):
    df = employees_to_frame(list(reversed(ten_employees)))
    out = select_where(df, "region", sort_by="region")
    assert out["region"].tolist() == [1] * 6 + [5] * 4
    assert out["id"].tolist()[:6] == [f"emp-{i}" for i in range(6, 0, -1)]
    assert len(select_where(df, "region", 5)) == 4
