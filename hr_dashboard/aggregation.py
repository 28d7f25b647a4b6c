"""Grouping and scalar aggregates shared by every dashboard view.

Two grouping helpers exist on purpose: ``count_by_open`` for open vocabularies
(department, position, education) where only observed values appear, and
``count_by_fixed`` for closed enumerations (months, age buckets, regions) where
every category appears, zero-filled, in the given order.
"""
from __future__ import annotations

from typing import Hashable, Mapping, Optional, Sequence

import pandas as pd

from hr_dashboard.data import round_half_up
from hr_dashboard.jalali import REFERENCE_YEAR, age_from_birth_date, tenure_from_employment_date


def count_by_open(df: pd.DataFrame, field: str) -> pd.DataFrame:
    if df.empty or field not in df.columns:
        return pd.DataFrame(columns=["name", "value"])
    counts = df.groupby(field, sort=False).size()
    return counts.rename("value").rename_axis("name").reset_index()


def count_by_fixed(
    df: pd.DataFrame,
    field: str,
    categories: Sequence[Hashable],
    *,
    aliases: Optional[Mapping[Hashable, Hashable]] = None,
) -> pd.DataFrame:
    values = df[field] if (not df.empty and field in df.columns) else pd.Series(dtype=object)
    if aliases:
        values = values.map(lambda v: aliases.get(v, v))
    counts = values[values.isin(list(categories))].value_counts()
    out = pd.DataFrame({"name": list(categories)})
    out["value"] = out["name"].map(counts).fillna(0).astype(int)
    return out


def with_percent(df: pd.DataFrame, value_col: str = "value") -> pd.DataFrame:
    """Add ``percent`` = round(part / total * 100); a zero total yields 0 everywhere."""
    out = df.copy()
    total = float(out[value_col].sum()) if not out.empty else 0.0
    if total:
        out["percent"] = out[value_col].apply(lambda v: int(round_half_up(float(v) / total * 100) or 0))
    else:
        out["percent"] = 0
    return out


def mean_by(df: pd.DataFrame, group: str, value: str) -> pd.DataFrame:
    """Per-group mean of ``value`` rounded to an integer, groups in first-seen order."""
    cols = ["name", "mean", "count", "total"]
    if df.empty or group not in df.columns or value not in df.columns:
        return pd.DataFrame(columns=cols)
    grouped = (
        df.groupby(group, sort=False)[value]
        .agg(total="sum", count="size")
        .reset_index()
        .rename(columns={group: "name"})
    )
    grouped["mean"] = grouped.apply(
        lambda r: int(round_half_up(r["total"] / r["count"]) or 0) if r["count"] else 0, axis=1
    )
    return grouped[cols]


def safe_mean(values: pd.Series, ndigits: int = 0) -> float:
    numeric = pd.to_numeric(values, errors="coerce").dropna()
    if numeric.empty:
        return 0
    out = round_half_up(float(numeric.mean()), ndigits) or 0
    return int(out) if ndigits == 0 else out


def headcount(df: pd.DataFrame) -> int:
    return int(len(df))


def distinct_count(df: pd.DataFrame, field: str) -> int:
    if df.empty or field not in df.columns:
        return 0
    return int(df[field].nunique(dropna=False))


def mean_salary(df: pd.DataFrame) -> float:
    if df.empty:
        return 0
    return safe_mean(df["salary"])


def mean_tenure(df: pd.DataFrame, *, from_dates: bool = False, reference_year: int = REFERENCE_YEAR) -> float:
    """Stored ``tenure`` mean (integer), or hire-year based mean with two decimals."""
    if df.empty:
        return 0
    if not from_dates:
        return safe_mean(df["tenure"])
    tenures = df["employment_date"].map(lambda d: tenure_from_employment_date(d, reference_year))
    return safe_mean(tenures, ndigits=2)


def mean_age(df: pd.DataFrame, *, reference_year: int = REFERENCE_YEAR) -> float:
    """Mean age from Jalali birth dates, skipping unparseable or implausible ones."""
    if df.empty:
        return 0
    ages = df["birth_date"].map(lambda d: age_from_birth_date(d, reference_year))
    return safe_mean(ages, ndigits=2)


def select_where(
    df: pd.DataFrame,
    field: str,
    value: object = None,
    *,
    sort_by: Optional[str] = None,
) -> pd.DataFrame:
    out = df if value is None or df.empty else df[df[field] == value]
    if sort_by and not out.empty:
        out = out.sort_values(sort_by, kind="mergesort")
    return out
