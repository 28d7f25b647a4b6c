from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import pandas as pd

FILTER_KEYS: Tuple[str, ...] = ("gender", "education", "department", "location", "position")

# Selections the UI uses to mean "no restriction".
ALL_SENTINELS = {"All", "همه"}


@dataclass(frozen=True)
class DashboardFilters:
    gender: Tuple[str, ...] = ()
    education: Tuple[str, ...] = ()
    department: Tuple[str, ...] = ()
    location: Tuple[str, ...] = ()
    position: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not any(getattr(self, k) for k in FILTER_KEYS)


def _as_selection(values: object) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    out: List[str] = []
    for v in values:  # type: ignore[union-attr]
        if v is None:
            continue
        s = str(v).strip()
        if not s or s in ALL_SENTINELS or s in out:
            continue
        out.append(s)
    return tuple(out)


def normalize_filters(raw: Mapping[str, Any] | None) -> DashboardFilters:
    raw = raw or {}
    return DashboardFilters(**{key: _as_selection(raw.get(key)) for key in FILTER_KEYS})


def with_selection(filters: DashboardFilters, key: str, values: Iterable[str] | str | None) -> DashboardFilters:
    if key not in FILTER_KEYS:
        raise KeyError(f"unknown filter key: {key!r}")
    return replace(filters, **{key: _as_selection(values)})


def apply_filters(df: pd.DataFrame, filters: DashboardFilters) -> pd.DataFrame:
    """Keep rows matching every active key; an empty selection leaves the key unrestricted."""
    if df.empty or filters.is_empty():
        return df
    mask = pd.Series(True, index=df.index)
    for key in FILTER_KEYS:
        selected = getattr(filters, key)
        if selected and key in df.columns:
            mask &= df[key].astype(str).isin(selected)
    return df[mask]


def filter_options(df: pd.DataFrame) -> Dict[str, List[str]]:
    """Distinct non-blank values per filter key, in first-seen order."""
    options: Dict[str, List[str]] = {}
    for key in FILTER_KEYS:
        if df.empty or key not in df.columns:
            options[key] = []
            continue
        values = df[key].dropna().astype(str).str.strip()
        options[key] = [v for v in values.drop_duplicates().tolist() if v]
    return options
