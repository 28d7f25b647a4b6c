from __future__ import annotations

from typing import List, Optional

import numpy as np

from hr_dashboard.employee import GENDER_FEMALE, GENDER_MALE, Employee
from hr_dashboard.jalali import PERSIAN_MONTHS

DEFAULT_SAMPLE_SIZE = 78
CONTRACT_SALARY_RATIO = 0.8

DEPARTMENTS = ["مالی", "فنی و اجرایی", "برنامه ریزی و توسعه", "بازرگانی", "حقوقی", "دفتر مدیرعامل"]
POSITIONS = ["کارشناس", "مدیر", "معاون", "مشاور", "خدمات"]
EDUCATIONS = ["دیپلم و زیردیپلم", "کاردانی", "کارشناسی", "ارشد", "دکترا"]
LOCATIONS = ["پروژه", "ستاد"]
REGIONS = list(range(1, 23))
AGE_GROUPS = ["۲۰-۳۰", "۳۰-۴۰", "۴۰-۵۰", "۵۰+", "(Blank)"]

FIRST_NAMES = [
    "امیر", "محمد", "علی", "حسین", "رضا", "مهدی", "احمد", "جواد",
    "مسعود", "داود", "محمود", "جلال", "بهنام", "نوید", "سیدآرمین", "علی اکبر",
]
FEMALE_NAMES = ["زهرا", "فاطمه", "مریم", "سارا", "الهه", "ریحانه", "سیده فاطمه"]
LAST_NAMES = [
    "پایدار", "صفاری", "مختاری", "شهیدی", "پدرامی", "مهدوی", "عامری", "فرهانی", "صبوری", "صفری",
    "حامدی", "شادی", "مریدی", "کاظمی", "تاهدی", "مقدمی", "میثایی", "باقی", "لامعی", "نمینی",
    "سعیدی", "فدایی", "وارسته", "نوری", "احسنی", "واعظی", "پورمند", "کتایی",
]


def _pick(rng: np.random.Generator, values: List):
    return values[int(rng.integers(len(values)))]


def _random_date(rng: np.random.Generator, first_year: int, span: int) -> str:
    year = first_year + int(rng.integers(span))
    month = int(rng.integers(1, 13))
    day = int(rng.integers(1, 29))
    return f"{year}/{month}/{day}"


def _between(rng: np.random.Generator, low: int, span: int) -> int:
    return low + int(rng.integers(span))


def generate_sample_data(count: int = DEFAULT_SAMPLE_SIZE, *, rng: Optional[np.random.Generator] = None) -> List[Employee]:
    """Synthetic employees for demo mode.

    Unseeded unless a generator is passed in. Each record is internally
    consistent: ``birth_month`` comes from ``birth_date`` and ``contract_salary``
    is 80% of ``salary``, rounded to a whole amount.
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 1:
        raise ValueError(f"count must be a positive integer, got {count!r}")
    rng = rng if rng is not None else np.random.default_rng()

    employees: List[Employee] = []
    for i in range(int(count)):
        is_female = rng.random() > 0.8
        first_name = _pick(rng, FEMALE_NAMES if is_female else FIRST_NAMES)
        last_name = _pick(rng, LAST_NAMES)
        birth_date = _random_date(rng, 1350, 30)
        month_index = int(birth_date.split("/")[1]) - 1
        salary = round(100_000_000 + rng.random() * 200_000_000)

        employees.append(
            Employee(
                id=f"emp-{i + 1}",
                personnel_code=str(10001 + i),
                name=first_name,
                last_name=last_name,
                full_name=f"{first_name} {last_name}",
                gender=GENDER_FEMALE if is_female else GENDER_MALE,
                birth_date=birth_date,
                birth_month=PERSIAN_MONTHS[month_index],
                education=_pick(rng, EDUCATIONS),
                education_field="(Blank)",
                marital_status="متاهل" if rng.random() > 0.3 else "مجرد",
                children_count=int(rng.integers(4)),
                department=_pick(rng, DEPARTMENTS),
                position=_pick(rng, POSITIONS),
                employment_type="قراردادی" if rng.random() > 0.5 else "رسمی",
                employment_date=_random_date(rng, 1395, 8),
                location=_pick(rng, LOCATIONS),
                region=_pick(rng, REGIONS),
                salary=float(salary),
                contract_salary=float(round(salary * CONTRACT_SALARY_RATIO)),
                overtime_hours=float(rng.integers(100)),
                evaluation_score=float(_between(rng, 60, 40)),
                manager_evaluation=float(_between(rng, 15, 10)),
                self_evaluation=float(_between(rng, 15, 10)),
                deputy_evaluation=float(_between(rng, 12, 8)),
                peer_evaluation=float(_between(rng, 10, 10)),
                performance_score=float(_between(rng, 15, 10)),
                knowledge_score=float(_between(rng, 12, 8)),
                behavior_score=float(_between(rng, 10, 10)),
                responsibility_score=float(_between(rng, 10, 8)),
                age_group=_pick(rng, AGE_GROUPS),
                tenure=_between(rng, 1, 10),
            )
        )
    return employees
