"""Core (UI-agnostic) HR dashboard logic.

This package contains:
- the employee schema and spreadsheet row normalization
- synthetic sample data for demos
- Jalali (Persian calendar) date helpers
- filter normalization
- grouping/aggregation helpers and per-view compute functions (JSON-serializable payloads)
- workbook reading and template writing
- chart helpers (Altair -> Vega-Lite spec dict)
"""
