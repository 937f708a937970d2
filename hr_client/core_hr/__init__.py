"""Core HR module — employee directory, department and position schemas and services."""

from hr_client.core_hr.schemas import (
    DepartmentDetail,
    DepartmentFilter,
    DepartmentListItem,
    DepartmentWrite,
    EmployeeCreate,
    EmployeeDetail,
    EmployeeFilter,
    EmployeeListItem,
    EmployeeUpdate,
    PositionDetail,
    PositionFilter,
    PositionListItem,
    PositionWrite,
)
from hr_client.core_hr.service import DepartmentService, EmployeeService, PositionService

__all__ = [
    # Employees
    "EmployeeCreate",
    "EmployeeDetail",
    "EmployeeFilter",
    "EmployeeListItem",
    "EmployeeService",
    "EmployeeUpdate",
    # Departments
    "DepartmentDetail",
    "DepartmentFilter",
    "DepartmentListItem",
    "DepartmentService",
    "DepartmentWrite",
    # Positions
    "PositionDetail",
    "PositionFilter",
    "PositionListItem",
    "PositionService",
    "PositionWrite",
]
