from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

import altair as alt
import pandas as pd

from hr_dashboard.charts import PALETTE, to_vega_spec
from hr_dashboard.filters import DashboardFilters
from hr_dashboard.jalali import format_number_fa

GAUGE_MAX = 100

INFO_FIELDS = [
    ("full_name", "نام و نام خانوادگی"),
    ("birth_date", "تاریخ تولد"),
    ("marital_status", "وضعیت تاهل"),
    ("children_count", "تعداد فرزندان"),
    ("education", "مدرک تحصیلی"),
    ("education_field", "رشته تحصیلی"),
    ("department", "معاونت"),
    ("position", "جایگاه شغلی"),
    ("employment_type", "نوع استخدام"),
    ("employment_date", "تاریخ استخدام"),
    ("contract_salary", "حقوق قراردادی"),
]

# The "direct manager" bar reads the peer evaluation field.
RATER_FIELDS = [
    ("manager_evaluation", "ارزیابی مدیرعامل", "pink"),
    ("peer_evaluation", "ارزیابی مدیر مستقیم", "purple"),
    ("self_evaluation", "ارزیابی فردی", "cyan"),
    ("deputy_evaluation", "ارزیابی معاونت مربوطه", "orange"),
]

CRITERIA_FIELDS = [
    ("performance_score", "عملکرد", "pink"),
    ("knowledge_score", "دانش و تخصص", "purple"),
    ("behavior_score", "تعامل و رفتار", "cyan"),
    ("responsibility_score", "مسئولیت و وفاداری", "orange"),
]


def gauge(value: float, maximum: float = GAUGE_MAX) -> Dict[str, float]:
    percent = float(value) / maximum * 100 if maximum else 0.0
    return {"value": value, "max": maximum, "percent": percent, "angle": percent / 100 * 180}


def _breakdown(record: Dict[str, Any], fields) -> List[Dict[str, Any]]:
    return [
        {"name": label, "value": record.get(key, 0), "color": PALETTE[color]}
        for key, label, color in fields
    ]


def _bar(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    chart = (
        alt.Chart(pd.DataFrame(rows))
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("name:N", title=None, sort=None),
            y=alt.Y("value:Q", title=None),
            color=alt.Color("color:N", scale=None),
            tooltip=["name:N", "value:Q"],
        )
    )
    return to_vega_spec(chart)


def compute_profile(filters: DashboardFilters, ctx: Dict[str, Any], *, employee_id: Optional[str] = None) -> Dict[str, Any]:
    """Single-employee card; defaults to the first filtered employee."""
    df: pd.DataFrame = ctx.get("filtered_employees", pd.DataFrame()).copy()
    options = [] if df.empty else df[["id", "full_name"]].to_dict(orient="records")
    payload: Dict[str, Any] = {"filters": asdict(filters), "options": options, "employee": None, "charts": {}}

    if df.empty:
        if employee_id is not None:
            raise KeyError(employee_id)
        return payload

    if employee_id is None:
        row = df.iloc[0]
    else:
        matches = df[df["id"] == employee_id]
        if matches.empty:
            raise KeyError(employee_id)
        row = matches.iloc[0]
    record = {k: None if pd.isna(v) else v for k, v in row.to_dict().items()}

    info = [{"field": key, "label": label, "value": record.get(key)} for key, label in INFO_FIELDS]
    for item in info:
        if item["field"] == "contract_salary":
            item["display"] = format_number_fa(item["value"])

    raters = _breakdown(record, RATER_FIELDS)
    criteria = _breakdown(record, CRITERIA_FIELDS)

    payload.update(
        {
            "employee": record,
            "info": info,
            "gauge": gauge(record.get("evaluation_score") or 0),
            "raters": raters,
            "criteria": criteria,
            "overtime_hours": record.get("overtime_hours") or 0,
            "charts": {"raters": _bar(raters), "criteria": _bar(criteria)},
        }
    )
    return payload
