from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import altair as alt
import pandas as pd

from hr_dashboard.aggregation import mean_by
from hr_dashboard.charts import PALETTE, donut_chart, horizontal_bar_chart, to_vega_spec
from hr_dashboard.employee import GENDER_MALE
from hr_dashboard.filters import DashboardFilters


def compute_salary(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    df: pd.DataFrame = ctx.get("filtered_employees", pd.DataFrame()).copy()

    by_department = mean_by(df, "department", "salary")
    by_position = mean_by(df, "position", "salary")
    by_gender = mean_by(df, "gender", "salary")
    by_education = mean_by(df, "education", "salary")

    charts: Dict[str, Any] = {}
    if not df.empty:
        base = alt.Chart(by_department).encode(x=alt.X("name:N", title=None, sort=None, axis=alt.Axis(labelAngle=-30)))
        bars = base.mark_bar(color=PALETTE["pink"], cornerRadiusTopLeft=4, cornerRadiusTopRight=4).encode(
            y=alt.Y("mean:Q", title="میانگین حقوق", axis=alt.Axis(format="~s")),
            tooltip=[alt.Tooltip("name:N", title="معاونت"), alt.Tooltip("mean:Q", title="میانگین حقوق", format=",")],
        )
        line = base.mark_line(point=True, color=PALETTE["purple"]).encode(
            y=alt.Y("count:Q", title="تعداد", axis=alt.Axis(orient="right")),
            tooltip=[alt.Tooltip("name:N", title="معاونت"), alt.Tooltip("count:Q", title="تعداد")],
        )
        gender_colors = by_gender.assign(
            color=lambda d: d["name"].map(lambda g: PALETTE["cyan"] if g == GENDER_MALE else PALETTE["pink"])
        )
        gender_chart = donut_chart(gender_colors, theta="mean").encode(color=alt.Color("color:N", scale=None, legend=None))
        position_chart = (
            alt.Chart(by_position)
            .mark_bar(color=PALETTE["green"], cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
            .encode(
                x=alt.X("name:N", title=None, sort=None),
                y=alt.Y("mean:Q", title=None, axis=alt.Axis(format="~s")),
                tooltip=[alt.Tooltip("name:N", title="جایگاه"), alt.Tooltip("mean:Q", title="میانگین حقوق", format=",")],
            )
        )
        charts = {
            "department": to_vega_spec(alt.layer(bars, line).resolve_scale(y="independent")),
            "position": to_vega_spec(position_chart),
            "gender": to_vega_spec(gender_chart),
            "education": to_vega_spec(horizontal_bar_chart(by_education, x="mean", color=PALETTE["orange"])),
        }

    return {
        "filters": asdict(filters),
        "by_department": by_department[["name", "mean", "count"]].to_dict(orient="records"),
        "by_position": by_position[["name", "mean"]].to_dict(orient="records"),
        "by_gender": by_gender[["name", "mean"]].to_dict(orient="records"),
        "by_education": by_education[["name", "mean"]].to_dict(orient="records"),
        "charts": charts,
    }
