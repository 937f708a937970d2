"""Core HR Pydantic v2 schemas — employee directory, department and position payloads."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field

from hr_client.common.constants import EmployeeStatus, UserRole
from hr_client.common.envelope import WireModel
from hr_client.common.filters import FilterRequest


# ═════════════════════════════════════════════════════════════════════
# Employee: Response
# ═════════════════════════════════════════════════════════════════════


class EmployeeListItem(WireModel):
    """Row returned by the employee list endpoints."""

    id: str
    full_name: str
    email: str
    phone: str = ""
    department_name: str = ""
    position_title: str = ""
    status: EmployeeStatus = EmployeeStatus.active


class EmployeeDetail(EmployeeListItem):
    """Full employee profile."""

    hire_date: Optional[date] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    manager_full_name: Optional[str] = None
    role: UserRole = UserRole.employee
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ═════════════════════════════════════════════════════════════════════
# Employee: Create / Update
# ═════════════════════════════════════════════════════════════════════


class EmployeeCreate(WireModel):
    """Payload for ``POST /auth/register`` (new employee account)."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = ""
    hire_date: date
    birth_date: Optional[date] = None
    address: str = ""
    role: UserRole = UserRole.employee
    status: EmployeeStatus = EmployeeStatus.active
    department_id: str
    position_id: str
    manager_id: Optional[str] = None


class EmployeeUpdate(WireModel):
    """Payload for ``PUT /employees/{id}`` (full replacement of editable fields)."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str = ""
    address: Optional[str] = None
    department_id: str
    position_id: str
    manager_id: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.active


# ═════════════════════════════════════════════════════════════════════
# Filters
# ═════════════════════════════════════════════════════════════════════


class EmployeeFilter(FilterRequest):
    """Filters accepted by ``GET /employees``."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    department_id: Optional[str] = None
    position_id: Optional[str] = None
    status: Optional[EmployeeStatus] = None
    role: Optional[UserRole] = None
    hire_date_after: Optional[date] = None
    hire_date_before: Optional[date] = None


# ═════════════════════════════════════════════════════════════════════
# Department / Position
# ═════════════════════════════════════════════════════════════════════


class DepartmentListItem(WireModel):
    id: str
    name: str


class DepartmentDetail(DepartmentListItem):
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DepartmentWrite(WireModel):
    """Payload for ``POST /departments`` and ``PUT /departments/{id}``."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class DepartmentFilter(FilterRequest):
    name: Optional[str] = None
    description: Optional[str] = None


class PositionListItem(WireModel):
    id: str
    title: str


class PositionDetail(PositionListItem):
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PositionWrite(WireModel):
    """Payload for ``POST /positions`` and ``PUT /positions/{id}``."""

    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class PositionFilter(FilterRequest):
    title: Optional[str] = None
    description: Optional[str] = None
