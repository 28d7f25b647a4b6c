from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import altair as alt
import pandas as pd

from hr_dashboard.aggregation import mean_by, safe_mean
from hr_dashboard.charts import PALETTE, to_vega_spec
from hr_dashboard.data import round_half_up
from hr_dashboard.filters import DashboardFilters
from hr_dashboard.sample_data import CONTRACT_SALARY_RATIO

COLUMNS = ["name", "count", "avg_salary", "contract_salary", "total_overtime", "avg_overtime"]


def department_overtime(df: pd.DataFrame) -> pd.DataFrame:
    """Per-department salary and overtime figures, departments in first-seen order.

    ``contract_salary`` is the mean paid salary scaled by the contract ratio,
    not the mean of the recorded contract salaries.
    """
    if df.empty:
        return pd.DataFrame(columns=COLUMNS)
    salary = mean_by(df, "department", "salary")
    overtime = mean_by(df, "department", "overtime_hours")
    out = pd.DataFrame(
        {
            "name": salary["name"],
            "count": salary["count"].astype(int),
            "avg_salary": salary["mean"],
            "contract_salary": [
                int(round_half_up(total * CONTRACT_SALARY_RATIO / count) or 0)
                for total, count in zip(salary["total"], salary["count"])
            ],
            "total_overtime": overtime["total"].astype(float),
            "avg_overtime": [
                round_half_up(total / count, 1) or 0 for total, count in zip(overtime["total"], overtime["count"])
            ],
        }
    )
    return out[COLUMNS]


def compute_overtime(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    df: pd.DataFrame = ctx.get("filtered_employees", pd.DataFrame()).copy()
    table = department_overtime(df)
    kpis = {
        "total_overtime": float(df["overtime_hours"].sum()) if not df.empty else 0,
        "avg_overtime": safe_mean(df["overtime_hours"], ndigits=1) if not df.empty else 0,
    }

    charts: Dict[str, Any] = {}
    if not df.empty:
        melted = table.melt(id_vars="name", value_vars=["avg_salary", "contract_salary"], var_name="kind")
        melted["kind"] = melted["kind"].map({"avg_salary": "میانگین حقوق پرداختی", "contract_salary": "حقوق قراردادی"})
        salary_chart = (
            alt.Chart(melted)
            .mark_bar()
            .encode(
                x=alt.X("name:N", title=None, sort=None),
                xOffset="kind:N",
                y=alt.Y("value:Q", title=None, axis=alt.Axis(format="~s")),
                color=alt.Color(
                    "kind:N",
                    title=None,
                    scale=alt.Scale(range=[PALETTE["cyan"], PALETTE["pink"]]),
                ),
                tooltip=[alt.Tooltip("name:N", title="معاونت"), alt.Tooltip("value:Q", format=",")],
            )
        )
        hours_chart = (
            alt.Chart(table)
            .mark_bar(color=PALETTE["orange"], cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
            .encode(
                x=alt.X("name:N", title=None, sort=None),
                y=alt.Y("total_overtime:Q", title="ساعت"),
                tooltip=[
                    alt.Tooltip("name:N", title="معاونت"),
                    alt.Tooltip("total_overtime:Q", title="مجموع"),
                    alt.Tooltip("avg_overtime:Q", title="میانگین"),
                ],
            )
        )
        charts = {"salary": to_vega_spec(salary_chart), "hours": to_vega_spec(hours_chart)}

    return {
        "filters": asdict(filters),
        "kpis": kpis,
        "departments": table.to_dict(orient="records"),
        "charts": charts,
    }
