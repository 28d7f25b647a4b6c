from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional, Tuple

import altair as alt
import pandas as pd

from hr_dashboard.aggregation import count_by_fixed, select_where
from hr_dashboard.charts import PALETTE, to_vega_spec
from hr_dashboard.filters import DashboardFilters

# Marker anchors on a 100x100 schematic of Tehran's 22 municipal regions.
REGION_POSITIONS: Dict[int, Tuple[int, int]] = {
    1: (75, 15), 2: (65, 25), 3: (55, 20), 4: (60, 35),
    5: (45, 22), 6: (50, 35), 7: (55, 45), 8: (68, 40),
    9: (35, 45), 10: (40, 55), 11: (50, 50), 12: (55, 55),
    13: (65, 50), 14: (60, 60), 15: (50, 65), 16: (45, 70),
    17: (40, 75), 18: (35, 70), 19: (45, 80), 20: (55, 80),
    21: (35, 35), 22: (25, 35),
}
REGIONS = list(REGION_POSITIONS)
LIST_COLUMNS = ["id", "region", "full_name"]


def region_markers(counts: pd.DataFrame) -> pd.DataFrame:
    """Attach position, radius and opacity to per-region counts.

    Radius grows from 3 to 8 and opacity from 0.4 to 1.0 relative to the
    busiest region; the divisor never drops below 1.
    """
    out = counts.copy()
    max_count = max(int(out["value"].max()) if not out.empty else 0, 1)
    out["x"] = out["name"].map(lambda r: REGION_POSITIONS[r][0])
    out["y"] = out["name"].map(lambda r: REGION_POSITIONS[r][1])
    out["size"] = 3 + out["value"] / max_count * 5
    out["opacity"] = 0.4 + out["value"] / max_count * 0.6
    return out


def compute_map(filters: DashboardFilters, ctx: Dict[str, Any], *, selected_region: Optional[int] = None) -> Dict[str, Any]:
    if selected_region is not None and selected_region not in REGION_POSITIONS:
        raise ValueError(f"unknown region: {selected_region!r}")
    df: pd.DataFrame = ctx.get("filtered_employees", pd.DataFrame()).copy()

    markers = region_markers(count_by_fixed(df, "region", REGIONS))

    listing = select_where(df, "region", selected_region, sort_by="region")
    listing = listing[[c for c in LIST_COLUMNS if c in listing.columns]]

    charts: Dict[str, Any] = {}
    if not df.empty:
        points = (
            alt.Chart(markers)
            .mark_circle(color=PALETTE["cyan"])
            .encode(
                x=alt.X("x:Q", scale=alt.Scale(domain=[0, 100]), axis=None),
                y=alt.Y("y:Q", scale=alt.Scale(domain=[100, 0]), axis=None),
                size=alt.Size("size:Q", scale=alt.Scale(range=[30, 250]), legend=None),
                opacity=alt.Opacity("opacity:Q", scale=None, legend=None),
                tooltip=[alt.Tooltip("name:O", title="منطقه"), alt.Tooltip("value:Q", title="تعداد")],
            )
        )
        labels = alt.Chart(markers).mark_text(dy=-12, fontSize=9, color="#94a3b8").encode(
            x=alt.X("x:Q", scale=alt.Scale(domain=[0, 100]), axis=None),
            y=alt.Y("y:Q", scale=alt.Scale(domain=[100, 0]), axis=None),
            text="name:O",
        )
        charts["regions"] = to_vega_spec(alt.layer(points, labels).properties(width=400, height=400))

    return {
        "filters": asdict(filters),
        "selected_region": selected_region,
        "regions": markers[["name", "value", "x", "y", "size", "opacity"]].to_dict(orient="records"),
        "employees": listing.to_dict(orient="records"),
        "charts": charts,
    }
