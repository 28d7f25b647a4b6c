from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from hr_dashboard.employee import GENDER_MALE, Employee


class DashboardFiltersModel(BaseModel):
    gender: List[str] = Field(default_factory=list)
    education: List[str] = Field(default_factory=list)
    department: List[str] = Field(default_factory=list)
    location: List[str] = Field(default_factory=list)
    position: List[str] = Field(default_factory=list)


class EmployeeModel(BaseModel):
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

    def to_employee(self) -> Employee:
        return Employee(**self.model_dump())


class EmployeesRequest(BaseModel):
    employees: List[EmployeeModel] = Field(default_factory=list)


class ViewRequest(BaseModel):
    employees: List[EmployeeModel] = Field(default_factory=list)
    filters: DashboardFiltersModel = Field(default_factory=DashboardFiltersModel)
    options: Dict[str, Any] = Field(default_factory=dict)


class EmployeesResponse(BaseModel):
    employees: List[EmployeeModel]
    count: int
