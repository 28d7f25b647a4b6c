import pytest

from hr_dashboard.filters import normalize_filters
from hr_dashboard.jalali import PERSIAN_MONTHS
from hr_dashboard.metrics_birthdays import compute_birthdays
from hr_dashboard.metrics_map import compute_map
from hr_dashboard.metrics_overtime import compute_overtime
from hr_dashboard.metrics_overview import compute_overview
from hr_dashboard.metrics_profile import compute_profile
from hr_dashboard.metrics_salary import compute_salary


def test_overview_kpis(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_overview(f, ctx, reference_year=1403)
    assert out["kpis"]["departments"] == 2
    assert out["kpis"]["headcount"] == 10
    assert out["kpis"]["avg_salary"] == 140_000_000
    assert out["kpis"]["avg_tenure"] == 5
    assert out["kpis"]["avg_age"] == 37.0
    assert out["kpi_labels"]["headcount"] == "۱۰"
    assert out["kpi_labels"]["avg_age"] == "۳۷٫۰۰"
    gender = {g["name"]: g for g in out["groups"]["gender"]}
    assert gender["مرد"]["value"] == 6 and gender["مرد"]["percent"] == 60
    assert gender["زن"]["value"] == 4 and gender["زن"]["percent"] == 40
    assert [d["name"] for d in out["groups"]["department"]] == ["مالی", "فنی و اجرایی"]
    assert "gender" in out["charts"]


def test_overview_on_empty_selection(ten_employees, context_for):
    f, ctx = context_for(ten_employees, normalize_filters({"department": ["حقوقی"]}))
    out = compute_overview(f, ctx)
    assert out["kpis"]["headcount"] == 0
    assert out["kpis"]["avg_salary"] == 0
    assert out["kpi_labels"]["avg_salary"] == "۰"
    assert out["groups"]["department"] == []
    assert [a["value"] for a in out["groups"]["age_groups"]] == [0, 0, 0, 0]
    assert out["charts"] == {}
    assert out["filters"]["department"] == ("حقوقی",)


def test_birthdays_months_and_drill_down(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_birthdays(f, ctx)
    assert len(out["month_counts"]) == 12
    assert sum(m["value"] for m in out["month_counts"]) == 10
    assert out["list_title"] == "لیست پرسنل"
    assert len(out["employees"]) == 10

    out = compute_birthdays(f, ctx, selected_month="مهر")
    assert out["list_title"] == "لیست پرسنل متولد مهر"
    assert {e["birth_date"] for e in out["employees"]} == {"1360/07/01"}
    assert set(out["employees"][0]) == {"id", "name", "last_name", "birth_date"}


def test_birthdays_unknown_month(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    with pytest.raises(ValueError):
        compute_birthdays(f, ctx, selected_month="January")
    assert PERSIAN_MONTHS[0] == "فروردین"


def test_salary_means(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_salary(f, ctx)
    assert out["by_department"] == [
        {"name": "مالی", "mean": 100_000_000, "count": 6},
        {"name": "فنی و اجرایی", "mean": 200_000_000, "count": 4},
    ]
    assert {g["name"]: g["mean"] for g in out["by_gender"]} == {"مرد": 100_000_000, "زن": 200_000_000}


def test_map_regions_are_zero_filled_and_scaled(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_map(f, ctx)
    regions = {r["name"]: r for r in out["regions"]}
    assert len(regions) == 22
    assert regions[1]["value"] == 6 and regions[1]["size"] == pytest.approx(8.0)
    assert regions[1]["opacity"] == pytest.approx(1.0)
    assert regions[5]["size"] == pytest.approx(3 + 4 / 6 * 5)
    assert regions[2]["value"] == 0 and regions[2]["size"] == pytest.approx(3.0)
    assert regions[2]["opacity"] == pytest.approx(0.4)
    assert [e["region"] for e in out["employees"]] == [1] * 6 + [5] * 4


def test_map_selected_region(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    assert len(compute_map(f, ctx, selected_region=5)["employees"]) == 4
    with pytest.raises(ValueError):
        compute_map(f, ctx, selected_region=23)


def test_map_empty_floors_max_at_one(context_for):
    f, ctx = context_for([])
    out = compute_map(f, ctx)
    assert all(r["size"] == 3 and r["opacity"] == pytest.approx(0.4) for r in out["regions"])


def test_profile_defaults_to_first(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_profile(f, ctx)
    assert out["employee"]["id"] == "emp-1"
    assert len(out["options"]) == 10
    assert [r["name"] for r in out["raters"]] == [
        "ارزیابی مدیرعامل",
        "ارزیابی مدیر مستقیم",
        "ارزیابی فردی",
        "ارزیابی معاونت مربوطه",
    ]
    assert len(out["criteria"]) == 4


def test_profile_selected_and_unknown(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_profile(f, ctx, employee_id="emp-8")
    assert out["employee"]["department"] == "فنی و اجرایی"
    with pytest.raises(KeyError):
        compute_profile(f, ctx, employee_id="emp-404")


def test_profile_gauge(context_for):
    from tests.conftest import make_employee

    f, ctx = context_for([make_employee(1, evaluation_score=50)])
    gauge = compute_profile(f, ctx)["gauge"]
    assert gauge["percent"] == pytest.approx(50)
    assert gauge["angle"] == pytest.approx(90)


def test_profile_empty(context_for):
    f, ctx = context_for([])
    out = compute_profile(f, ctx)
    assert out["employee"] is None
    assert out["options"] == []


def test_overtime_by_department(ten_employees, context_for):
    f, ctx = context_for(ten_employees)
    out = compute_overtime(f, ctx)
    finance = out["departments"][0]
    assert finance["name"] == "مالی"
    assert finance["count"] == 6
    assert finance["avg_salary"] == 100_000_000
    assert finance["contract_salary"] == 80_000_000
    assert finance["total_overtime"] == 60
    assert finance["avg_overtime"] == 10
    assert out["kpis"]["total_overtime"] == 100


def test_overtime_empty(context_for):
    f, ctx = context_for([])
    out = compute_overtime(f, ctx)
    assert out["departments"] == []
    assert out["kpis"] == {"total_overtime": 0, "avg_overtime": 0}
