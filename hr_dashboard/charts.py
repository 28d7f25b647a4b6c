from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

PALETTE = {
    "cyan": "#2dd4bf",
    "pink": "#f472b6",
    "purple": "#a78bfa",
    "orange": "#fb923c",
    "yellow": "#facc15",
    "green": "#22c55e",
    "blue": "#3b82f6",
}


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def donut_chart(df: pd.DataFrame, *, theta: str = "value", color: str = "name") -> alt.Chart:
    return (
        alt.Chart(df)
        .mark_arc(innerRadius=50, outerRadius=70)
        .encode(
            theta=alt.Theta(f"{theta}:Q"),
            color=alt.Color(f"{color}:N", title=None, sort=None),
            tooltip=[alt.Tooltip(f"{color}:N", title="عنوان"), alt.Tooltip(f"{theta}:Q", title="تعداد", format=",")],
        )
    )


def horizontal_bar_chart(df: pd.DataFrame, *, x: str, y: str = "name", color: str = PALETTE["purple"]) -> alt.Chart:
    return (
        alt.Chart(df)
        .mark_bar(color=color, cornerRadiusEnd=4)
        .encode(
            x=alt.X(f"{x}:Q", title=None),
            y=alt.Y(f"{y}:N", title=None, sort=None),
            tooltip=[alt.Tooltip(f"{y}:N", title="عنوان"), alt.Tooltip(f"{x}:Q", format=",")],
        )
    )
