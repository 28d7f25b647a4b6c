from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import altair as alt
import pandas as pd

from hr_dashboard.aggregation import (
    count_by_fixed,
    count_by_open,
    distinct_count,
    headcount,
    mean_age,
    mean_salary,
    mean_tenure,
    with_percent,
)
from hr_dashboard.charts import PALETTE, donut_chart, horizontal_bar_chart, to_vega_spec
from hr_dashboard.employee import GENDERS
from hr_dashboard.filters import DashboardFilters
from hr_dashboard.jalali import REFERENCE_YEAR, format_number_fa

AGE_GROUP_ORDER = ["۲۰-۳۰", "۳۰-۴۰", "۴۰-۵۰", "۵۰+"]
AGE_GROUP_ALIASES = {"20-30": "۲۰-۳۰", "30-40": "۳۰-۴۰", "40-50": "۴۰-۵۰", "50+": "۵۰+"}
MARITAL_STATUSES = ["متاهل", "مجرد"]
WORK_LOCATIONS = ["ستاد", "پروژه"]


def _records(df: pd.DataFrame) -> list:
    return df.to_dict(orient="records")


def compute_overview(filters: DashboardFilters, ctx: Dict[str, Any], *, reference_year: int = REFERENCE_YEAR) -> Dict[str, Any]:
    df: pd.DataFrame = ctx.get("filtered_employees", pd.DataFrame()).copy()

    avg_age = mean_age(df, reference_year=reference_year)
    avg_tenure_dates = mean_tenure(df, from_dates=True, reference_year=reference_year)
    kpis = {
        "departments": distinct_count(df, "department"),
        "headcount": headcount(df),
        "avg_salary": mean_salary(df),
        "avg_tenure": mean_tenure(df),
        "avg_age": avg_age,
        "avg_tenure_from_dates": avg_tenure_dates,
    }
    kpi_labels = {
        "departments": format_number_fa(kpis["departments"]),
        "headcount": format_number_fa(kpis["headcount"]),
        "avg_salary": format_number_fa(kpis["avg_salary"]),
        "avg_tenure": format_number_fa(kpis["avg_tenure"]),
        "avg_age": format_number_fa(avg_age, decimals=2),
        "avg_tenure_from_dates": format_number_fa(avg_tenure_dates, decimals=2),
    }

    age = count_by_fixed(df, "age_group", AGE_GROUP_ORDER, aliases=AGE_GROUP_ALIASES)
    gender = with_percent(count_by_fixed(df, "gender", GENDERS))
    marital = with_percent(count_by_fixed(df, "marital_status", MARITAL_STATUSES))
    location = with_percent(count_by_fixed(df, "location", WORK_LOCATIONS))
    education = with_percent(count_by_open(df, "education"))
    department = count_by_open(df, "department")
    position = count_by_open(df, "position")

    charts: Dict[str, Any] = {}
    if not df.empty:
        age_chart = (
            alt.Chart(age)
            .mark_area(line={"color": PALETTE["cyan"]}, color=PALETTE["cyan"], opacity=0.5)
            .encode(
                x=alt.X("name:N", title=None, sort=AGE_GROUP_ORDER),
                y=alt.Y("value:Q", title=None),
                tooltip=[alt.Tooltip("name:N", title="رده سنی"), alt.Tooltip("value:Q", title="تعداد")],
            )
        )
        charts = {
            "age_groups": to_vega_spec(age_chart),
            "gender": to_vega_spec(donut_chart(gender)),
            "marital_status": to_vega_spec(donut_chart(marital)),
            "location": to_vega_spec(donut_chart(location)),
            "education": to_vega_spec(donut_chart(education)),
            "department": to_vega_spec(horizontal_bar_chart(department, x="value", color=PALETTE["purple"])),
            "position": to_vega_spec(horizontal_bar_chart(position, x="value", color=PALETTE["pink"])),
        }

    return {
        "filters": asdict(filters),
        "kpis": kpis,
        "kpi_labels": kpi_labels,
        "groups": {
            "age_groups": _records(age),
            "gender": _records(gender),
            "marital_status": _records(marital),
            "location": _records(location),
            "education": _records(education),
            "department": _records(department),
            "position": _records(position),
        },
        "charts": charts,
    }
