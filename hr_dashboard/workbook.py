from __future__ import annotations

import io
import logging
from pathlib import PurePath
from typing import Any, Dict, List

import pandas as pd
from openpyxl.utils import get_column_letter

from hr_dashboard.data import is_blank, parse_employee_rows
from hr_dashboard.employee import Employee
from hr_dashboard.errors import UnsupportedFileTypeError, WorkbookParseError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xls")

TEMPLATE_FILENAME = "نمونه_اطلاعات_کارمندان.xlsx"
TEMPLATE_SHEET_NAME = "کارمندان"
TEMPLATE_COLUMN_WIDTH = 20

# One example row under the Persian headers the normalizer reads, plus a row number.
TEMPLATE_ROW: Dict[str, Any] = {
    "ردیف": 1,
    "کد پرسنلی": "10001",
    "نام": "(اختیاری)",
    "نام خانوادگی": "(اختیاری)",
    "جنسیت": "مرد یا زن",
    "تاریخ تولد": "1370/01/15",
    "ماه تولد": "فروردین",
    "مدرک تحصیلی": "لیسانس",
    "رشته تحصیلی": "مهندسی کامپیوتر",
    "وضعیت تاهل": "متاهل یا مجرد",
    "تعداد فرزندان": 0,
    "معاونت": "معاونت فناوری",
    "جایگاه شغلی": "کارشناس",
    "نوع استخدام": "قراردادی",
    "تاریخ استخدام": "1395/06/01",
    "محل فعالیت": "ستاد",
    "منطقه": 1,
    "حقوق": 50000000,
    "حقوق قراردادی": 45000000,
    "اضافه کاری (ساعت)": 20,
    "نمره ارزیابی": 85,
    "ارزیابی مدیرعامل": 80,
    "ارزیابی فردی": 90,
    "ارزیابی معاونت": 85,
    "ارزیابی همکاران": 82,
    "نمره عملکرد": 88,
    "نمره دانش و تخصص": 85,
    "نمره تعامل و رفتار": 90,
    "نمره مسئولیت": 87,
    "رده سنی": "۳۰-۴۰",
    "سابقه": 8,
}


def check_file_type(filename: str) -> None:
    if PurePath(filename or "").suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(filename=filename)


def read_workbook_rows(content: bytes) -> List[Dict[str, Any]]:
    """Rows of the first sheet keyed by the header row; empty cells are left out."""
    df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=0, dtype=object)
    df.columns = [str(c).strip() for c in df.columns]
    rows: List[Dict[str, Any]] = []
    for rec in df.to_dict(orient="records"):
        row = {k: v for k, v in rec.items() if not is_blank(v)}
        if row:
            rows.append(row)
    return rows


def load_employee_workbook(filename: str, content: bytes) -> List[Employee]:
    """Type-check, parse and normalize an uploaded workbook.

    All-or-nothing: any failure while reading the workbook raises
    ``WorkbookParseError`` and no employees are returned.
    """
    try:
        check_file_type(filename)
    except UnsupportedFileTypeError:
        logger.warning("rejected upload %r: unsupported extension", filename)
        raise
    try:
        rows = read_workbook_rows(content)
    except Exception as exc:
        logger.warning("could not parse workbook %r: %s", filename, exc)
        raise WorkbookParseError(filename=filename, reason=str(exc)) from exc
    employees = parse_employee_rows(rows)
    logger.info("loaded %d employee records from %r", len(employees), filename)
    return employees


def build_template_workbook() -> bytes:
    df = pd.DataFrame([TEMPLATE_ROW])
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=TEMPLATE_SHEET_NAME, index=False)
        sheet = writer.sheets[TEMPLATE_SHEET_NAME]
        for idx in range(1, len(df.columns) + 1):
            sheet.column_dimensions[get_column_letter(idx)].width = TEMPLATE_COLUMN_WIDTH
    return buffer.getvalue()
