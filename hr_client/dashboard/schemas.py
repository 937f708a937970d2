"""Dashboard Pydantic v2 schemas — summary cards for the two dashboard views."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from hr_client.common.constants import UserRole
from hr_client.leave.schemas import EmployeeLeaveBalance


class ReviewerSummary(BaseModel):
    """KPI cards shown to managers and HR."""

    total_employees: int = Field(0, description="Employees visible in the directory")
    pending_leaves: int = Field(0, description="Leave requests with status=PENDING")


class DashboardSummary(BaseModel):
    """Dashboard payload; exactly one of the two views is filled."""

    role: UserRole
    reviewer: Optional[ReviewerSummary] = None
    leave_balance: Optional[EmployeeLeaveBalance] = None
