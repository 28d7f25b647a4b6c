from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

GENDER_MALE = "مرد"
GENDER_FEMALE = "زن"
GENDERS = (GENDER_MALE, GENDER_FEMALE)


@dataclass(frozen=True)
class Employee:
    id: str
    personnel_code: str
    gender: str = GENDER_MALE
    name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    birth_date: str = ""
    birth_month: str = ""
    education: str = ""
    education_field: str = ""
    marital_status: str = ""
    children_count: int = 0
    department: str = ""
    position: str = ""
    employment_type: str = ""
    employment_date: str = ""
    location: str = ""
    region: int = 1
    salary: float = 0
    contract_salary: float = 0
    overtime_hours: float = 0
    evaluation_score: float = 0
    manager_evaluation: float = 0
    self_evaluation: float = 0
    deputy_evaluation: float = 0
    peer_evaluation: float = 0
    performance_score: float = 0
    knowledge_score: float = 0
    behavior_score: float = 0
    responsibility_score: float = 0
    age_group: str = ""
    tenure: int = 0

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


EMPLOYEE_FIELDS: List[str] = [f.name for f in fields(Employee)]


def employees_to_frame(employees: Iterable[Employee]) -> pd.DataFrame:
    """One row per employee; the column set is fixed even for an empty list."""
    records = [e.to_record() for e in employees]
    return pd.DataFrame.from_records(records, columns=EMPLOYEE_FIELDS)

