from __future__ import annotations

import math
import numbers
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from hr_dashboard.employee import GENDER_MALE, Employee, employees_to_frame
from hr_dashboard.filters import DashboardFilters, apply_filters, filter_options, normalize_filters
from hr_dashboard.jalali import month_name, to_ascii_digits

# field -> accepted column labels, in lookup order (Persian label first, then aliases)
EMPLOYEE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "personnel_code": ("کد پرسنلی", "personnelCode"),
    "name": ("نام", "name"),
    "last_name": ("نام خانوادگی", "lastName"),
    "gender": ("جنسیت", "gender"),
    "birth_date": ("تاریخ تولد", "birthDate"),
    "birth_month": ("ماه تولد", "birthMonth"),
    "education": ("مدرک تحصیلی", "education"),
    "education_field": ("رشته تحصیلی", "educationField"),
    "marital_status": ("وضعیت تاهل", "maritalStatus"),
    "children_count": ("تعداد فرزندان", "childrenCount"),
    "department": ("معاونت", "department"),
    "position": ("جایگاه شغلی", "position"),
    "employment_type": ("نوع استخدام", "employmentType"),
    "employment_date": ("تاریخ استخدام", "employmentDate"),
    "location": ("محل فعالیت", "location"),
    "region": ("منطقه", "region"),
    "salary": ("حقوق پرداختی", "حقوق", "salary"),
    "contract_salary": ("حقوق قراردادی", "contractSalary"),
    "overtime_hours": ("اضافه کار", "اضافه کاری (ساعت)", "overtimeHours"),
    "evaluation_score": ("امتیاز ارزشیابی", "نمره ارزیابی", "evaluationScore"),
    "manager_evaluation": ("ارزیابی مدیرعامل", "managerEvaluation"),
    "self_evaluation": ("ارزیابی فردی", "selfEvaluation"),
    "deputy_evaluation": ("ارزیابی معاونت", "deputyEvaluation"),
    "peer_evaluation": ("ارزیابی مدیر مستقیم", "ارزیابی همکاران", "peerEvaluation"),
    "performance_score": ("عملکرد", "نمره عملکرد", "performanceScore"),
    "knowledge_score": ("دانش و تخصص", "نمره دانش و تخصص", "knowledgeScore"),
    "behavior_score": ("تعامل و رفتار", "نمره تعامل و رفتار", "behaviorScore"),
    "responsibility_score": ("مسئولیت و وفاداری", "نمره مسئولیت", "responsibilityScore"),
    "age_group": ("رده سنی", "ageGroup"),
    "tenure": ("سابقه", "tenure"),
}

INT_FIELDS = {"children_count", "region", "tenure"}
FLOAT_FIELDS = {
    "salary",
    "contract_salary",
    "overtime_hours",
    "evaluation_score",
    "manager_evaluation",
    "self_evaluation",
    "deputy_evaluation",
    "peer_evaluation",
    "performance_score",
    "knowledge_score",
    "behavior_score",
    "responsibility_score",
}
OPTIONAL_TEXT_FIELDS = {"name", "last_name"}

FIELD_DEFAULTS: Dict[str, Any] = {"gender": GENDER_MALE, "region": 1}

PERSONNEL_CODE_BASE = 10001

_FLOAT_PREFIX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)")
_INT_PREFIX = re.compile(r"^[+-]?\d+")
_THOUSANDS = str.maketrans({",": None, "٬": None, "،": None, "٫": "."})


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_zero_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value == 0


def lookup(row: Mapping[str, Any], labels: Sequence[str]) -> Any:
    """First non-blank value among ``labels``; ``None`` when every label is absent or blank.

    A numeric zero cell counts as blank, so the next label (and finally the
    field default) is used instead.
    """
    for label in labels:
        value = row.get(label)
        if not is_blank(value) and not _is_zero_number(value):
            return value
    return None


def parse_number(value: object, *, integer: bool = False, default: float = 0) -> float:
    """Best-effort numeric coercion; anything unparseable becomes ``default``.

    Strings are read like ``parseFloat``/``parseInt``: Persian digits and thousands
    separators are accepted and trailing text after the leading number is ignored.
    """
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, str) and hasattr(value, "__float__"):
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return default
        if math.isnan(number) or math.isinf(number):
            return default
        return int(math.trunc(number)) if integer else number
    text = to_ascii_digits(value).strip().translate(_THOUSANDS)
    match = (_INT_PREFIX if integer else _FLOAT_PREFIX).match(text)
    if not match:
        return default
    return int(match.group(0)) if integer else float(match.group(0))


def coerce_text(value: object) -> str:
    if is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def normalize_row(row: Mapping[str, Any], index: int) -> Employee:
    values: Dict[str, Any] = {}
    for field, labels in EMPLOYEE_COLUMNS.items():
        raw = lookup(row, labels)
        if field in INT_FIELDS:
            default = FIELD_DEFAULTS.get(field, 0)
            values[field] = default if raw is None else parse_number(raw, integer=True, default=default)
        elif field in FLOAT_FIELDS:
            values[field] = 0.0 if raw is None else float(parse_number(raw))
        elif field in OPTIONAL_TEXT_FIELDS:
            values[field] = coerce_text(raw) or None
        else:
            values[field] = coerce_text(raw) or FIELD_DEFAULTS.get(field, "")

    if not values["personnel_code"]:
        values["personnel_code"] = str(PERSONNEL_CODE_BASE + index)
    if not values["birth_month"]:
        values["birth_month"] = month_name(values["birth_date"]) or ""

    name, last_name = values["name"], values["last_name"]
    full_name = f"{name} {last_name}" if name and last_name else None
    return Employee(id=f"emp-{index + 1}", full_name=full_name, **values)


def parse_employee_rows(rows: Iterable[Mapping[str, Any]]) -> List[Employee]:
    """Normalize loosely-typed spreadsheet rows into ``Employee`` records.

    Total over its input: missing or malformed cells degrade to field defaults,
    ids are assigned sequentially (``emp-1`` ... ``emp-N``) in input order.
    """
    return [normalize_row(row, idx) for idx, row in enumerate(rows)]


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def numericize(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
    return df


# ---------------- Public API (Streamlit parity + FastAPI use) ----------------
def load_dashboard_data(employees: Sequence[Employee]) -> Dict[str, object]:
    frame = employees_to_frame(employees)
    frame = numericize(frame, sorted(INT_FIELDS | FLOAT_FIELDS))
    return {
        "employees": frame,
        "total": int(len(frame)),
        "options": filter_options(frame),
    }


def prepare_context(filters: Mapping[str, Any] | DashboardFilters, data_ctx: Dict[str, object]) -> Dict[str, object]:
    employees: pd.DataFrame = data_ctx.get("employees", pd.DataFrame())  # type: ignore[assignment]
    filt = filters if isinstance(filters, DashboardFilters) else normalize_filters(filters)
    filtered = apply_filters(employees, filt)
    return {
        "filters": filt,
        "employees": employees,
        "filtered_employees": filtered,
        "shown": int(len(filtered)),
        "total": int(len(employees)),
        "options": data_ctx.get("options") or filter_options(employees),
    }
