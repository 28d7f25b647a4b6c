from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

import altair as alt
import pandas as pd

from hr_dashboard.aggregation import count_by_fixed, select_where
from hr_dashboard.charts import PALETTE, to_vega_spec
from hr_dashboard.filters import DashboardFilters
from hr_dashboard.jalali import PERSIAN_MONTHS

LIST_COLUMNS = ["id", "name", "last_name", "birth_date"]
MONTH_COLORS = [PALETTE[c] for c in ("pink", "orange", "yellow", "purple", "cyan", "green")] * 2


def compute_birthdays(filters: DashboardFilters, ctx: Dict[str, Any], *, selected_month: Optional[str] = None) -> Dict[str, Any]:
    if selected_month is not None and selected_month not in PERSIAN_MONTHS:
        raise ValueError(f"unknown month: {selected_month!r}")
    df: pd.DataFrame = ctx.get("filtered_employees", pd.DataFrame()).copy()

    months = count_by_fixed(df, "birth_month", PERSIAN_MONTHS)
    months["color"] = MONTH_COLORS

    listing = select_where(df, "birth_month", selected_month)
    listing = listing[[c for c in LIST_COLUMNS if c in listing.columns]]
    title = f"لیست پرسنل متولد {selected_month}" if selected_month else "لیست پرسنل"

    charts: Dict[str, Any] = {}
    if not df.empty:
        bar = (
            alt.Chart(months)
            .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
            .encode(
                x=alt.X("name:N", title=None, sort=list(PERSIAN_MONTHS), axis=alt.Axis(labelAngle=-45)),
                y=alt.Y("value:Q", title=None),
                color=alt.Color("color:N", scale=None),
                tooltip=[alt.Tooltip("name:N", title="ماه"), alt.Tooltip("value:Q", title="تعداد")],
            )
        )
        charts["month_counts"] = to_vega_spec(bar)

    return {
        "filters": asdict(filters),
        "selected_month": selected_month,
        "months": list(PERSIAN_MONTHS),
        "month_counts": months[["name", "value"]].to_dict(orient="records"),
        "list_title": title,
        "employees": listing.to_dict(orient="records"),
        "charts": charts,
    }
