import pytest

from hr_dashboard.jalali import (
    PERSIAN_MONTHS,
    age_from_birth_date,
    format_number_fa,
    month_name,
    parse_jalali_date,
    tenure_from_employment_date,
    to_ascii_digits,
    to_persian_digits,
)


def test_age_from_birth_date_against_reference_year():
    assert age_from_birth_date("1370/01/15", 1403) == 33


@pytest.mark.parametrize("text", ["", None, "abc", "1250/01/01", "1420/01/01", "1403/01/01"])
def test_age_rejects_unparseable_or_implausible_dates(text):
    assert age_from_birth_date(text, 1403) is None


def test_persian_digits_are_accepted():
    assert age_from_birth_date("۱۳۷۰/۰۱/۱۵", 1403) == 33
    assert to_ascii_digits("۱۴۰۳") == "1403"
    assert to_persian_digits(1403) == "۱۴۰۳"


def test_tenure_bounds():
    assert tenure_from_employment_date("1395/06/01", 1403) == 8
    assert tenure_from_employment_date("1403/01/01", 1403) == 0
    assert tenure_from_employment_date("1404/01/01", 1403) is None
    assert tenure_from_employment_date("1340/01/01", 1403) is None


def test_parse_jalali_date_separators_and_ranges():
    assert parse_jalali_date("1370-7-2") == (1370, 7, 2)
    assert parse_jalali_date("1370.12.29") == (1370, 12, 29)
    assert parse_jalali_date("1370/13/01") is None
    assert parse_jalali_date("1370/01") is None


def test_month_name():
    assert month_name("1370/07/02") == PERSIAN_MONTHS[6] == "مهر"
    assert month_name("garbage") is None


def test_format_number_fa():
    assert format_number_fa(1234567) == "۱٬۲۳۴٬۵۶۷"
    assert format_number_fa(33.5, decimals=2) == "۳۳٫۵۰"
    assert format_number_fa(float("nan")) == "۰"
    assert format_number_fa("x") == "۰"
