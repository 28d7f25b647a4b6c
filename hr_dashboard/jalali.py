"""Jalali (Solar Hijri) date helpers and Persian numeral formatting.

Dates arrive from spreadsheets as raw ``"YYYY/MM/DD"`` strings, sometimes typed
with Persian or Arabic-Indic digits. Only year arithmetic is needed for ages
and tenures, so no Gregorian conversion happens here.
"""
from __future__ import annotations

import math
import re
from typing import Optional, Tuple

PERSIAN_MONTHS = (
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
)

REFERENCE_YEAR = 1403

BIRTH_YEAR_RANGE = (1300, 1410)
HIRE_YEAR_MIN = 1350
MAX_AGE = 100
MAX_TENURE = 60

_TO_ASCII_DIGITS = str.maketrans("٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹", "01234567890123456789")
_TO_PERSIAN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")
_DATE_SEPARATORS = re.compile(r"[/\-.]")


def to_ascii_digits(text: object) -> str:
    if text is None:
        return ""
    return str(text).translate(_TO_ASCII_DIGITS)


def to_persian_digits(text: object) -> str:
    """Replace Latin digits with Persian ones for display."""
    if text is None:
        return ""
    return str(text).translate(_TO_PERSIAN_DIGITS)


def format_number_fa(value: object, decimals: int = 0) -> str:
    """Format a number the way ``Intl.NumberFormat('fa-IR')`` renders it.

    >>> format_number_fa(1234567)
    '۱٬۲۳۴٬۵۶۷'
    >>> format_number_fa(33.5, decimals=2)
    '۳۳٫۵۰'
    """
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        number = 0.0
    if math.isnan(number) or math.isinf(number):
        number = 0.0
    text = f"{number:,.{decimals}f}"
    text = text.replace(",", "٬").replace(".", "٫")
    return to_persian_digits(text)


def _date_parts(text: object) -> list[str]:
    if text is None:
        return []
    if isinstance(text, float) and math.isnan(text):
        return []
    raw = to_ascii_digits(text).strip()
    if not raw:
        return []
    return [p.strip() for p in _DATE_SEPARATORS.split(raw)]


def parse_jalali_date(text: object) -> Optional[Tuple[int, int, int]]:
    """Parse ``"1370/01/15"`` into ``(1370, 1, 15)``; anything malformed yields ``None``."""
    parts = _date_parts(text)
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None
    year, month, day = (int(p) for p in parts)
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return year, month, day


def jalali_year(text: object) -> Optional[int]:
    parts = _date_parts(text)
    if not parts or not parts[0].isdigit():
        return None
    return int(parts[0])


def month_name(text: object) -> Optional[str]:
    parsed = parse_jalali_date(text)
    if parsed is None:
        return None
    return PERSIAN_MONTHS[parsed[1] - 1]


def age_from_birth_date(text: object, reference_year: int = REFERENCE_YEAR) -> Optional[int]:
    year = jalali_year(text)
    if year is None or not (BIRTH_YEAR_RANGE[0] <= year <= BIRTH_YEAR_RANGE[1]):
        return None
    age = reference_year - year
    if not (0 < age < MAX_AGE):
        return None
    return age


def tenure_from_employment_date(text: object, reference_year: int = REFERENCE_YEAR) -> Optional[int]:
    year = jalali_year(text)
    if year is None or not (HIRE_YEAR_MIN <= year <= reference_year):
        return None
    tenure = reference_year - year
    if not (0 <= tenure < MAX_TENURE):
        return None
    return tenure
