import pytest

from hr_dashboard.employee import employees_to_frame
from hr_dashboard.filters import (
    DashboardFilters,
    apply_filters,
    filter_options,
    normalize_filters,
    with_selection,
)


def test_empty_filters_are_identity(ten_employees):
    df = employees_to_frame(ten_employees)
    assert apply_filters(df, DashboardFilters()).equals(df)


def test_department_filter(ten_employees):
    df = employees_to_frame(ten_employees)
    out = apply_filters(df, normalize_filters({"department": ["مالی"]}))
    assert len(out) == 6
    assert set(out["department"]) == {"مالی"}


def test_keys_combine_with_and(ten_employees):
    df = employees_to_frame(ten_employees)
    f = normalize_filters({"department": ["فنی و اجرایی", "مالی"], "gender": ["زن"]})
    assert len(apply_filters(df, f)) == 4


def test_values_within_a_key_combine_with_or(ten_employees):
    df = employees_to_frame(ten_employees)
    f = normalize_filters({"department": ["فنی و اجرایی", "مالی"]})
    assert len(apply_filters(df, f)) == 10


def test_normalize_drops_sentinels_and_duplicates():
    f = normalize_filters({"gender": ["همه", "زن", "زن", " "], "position": "مدیر"})
    assert f.gender == ("زن",)
    assert f.position == ("مدیر",)
    assert normalize_filters(None).is_empty()


def test_with_selection_replaces_one_key():
    f = with_selection(DashboardFilters(gender=("زن",)), "department", ["مالی"])
    assert f.gender == ("زن",)
    assert f.department == ("مالی",)
    with pytest.raises(KeyError):
        with_selection(f, "salary", ["1"])


def test_filter_options_first_seen(ten_employees):
    options = filter_options(employees_to_frame(ten_employees))
    assert options["department"] == ["مالی", "فنی و اجرایی"]
    assert options["gender"] == ["مرد", "زن"]
    assert set(options) == {"gender", "education", "department", "location", "position"}
