"""Leave Pydantic v2 schemas — backend payloads and client-side results.

Naming conventions:
  - *Create / *Edit    → request bodies (write)
  - *Detail / *Item    → response bodies (read)
  - *Filter            → list filters, sent as ``filterRequest.<field>``
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import Field, model_validator

from hr_client.common.constants import LeaveStatus, LeaveType
from hr_client.common.envelope import WireModel
from hr_client.common.filters import FilterRequest
from hr_client.config import settings


def inclusive_day_count(start_date: date, end_date: date) -> int:
    """Number of calendar days in ``[start_date, end_date]``, both ends included.

    Returns 0 when the range is inverted.
    """
    if end_date < start_date:
        return 0
    return (end_date - start_date).days + 1


# ═════════════════════════════════════════════════════════════════════
# Leave Request: Response
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestListItem(WireModel):
    """Row returned by the list endpoints."""

    id: str
    employee_id: str
    employee_full_name: str = ""
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: int = 0
    status: LeaveStatus

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.pending

    def overlaps(self, start_date: date, end_date: date) -> bool:
        """Closed-interval intersection with ``[start_date, end_date]``."""
        return start_date <= self.end_date and end_date >= self.start_date


class LeaveRequestDetail(LeaveRequestListItem):
    """Full leave request as returned by ``GET /leaves/{id}`` and write endpoints."""

    email: str = ""
    department_name: str = ""
    position_name: str = ""
    reason: Optional[str] = None
    approver_name: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class EmployeeLeaveBalance(WireModel):
    """Remaining balances, computed by the backend."""

    employee_id: str
    vacation_balance: float = 0
    maternity_balance: float = 0


# ═════════════════════════════════════════════════════════════════════
# Leave Request: Create / Edit
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestCreate(WireModel):
    """Payload for ``POST /leaves``."""

    leave_type: LeaveType
    start_date: date = Field(..., description="Leave start date (inclusive)")
    end_date: date = Field(..., description="Leave end date (inclusive)")
    reason: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_dates(self) -> "LeaveRequestCreate":
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date.")
        if inclusive_day_count(self.start_date, self.end_date) > settings.MAX_LEAVE_DAYS:
            raise ValueError(f"Leave request cannot span more than {settings.MAX_LEAVE_DAYS} days.")
        return self

    @property
    def total_days(self) -> int:
        return inclusive_day_count(self.start_date, self.end_date)


class LeaveRequestEdit(WireModel):
    """Partial update for ``PATCH /leaves/{id}``; unset fields are not sent."""

    leave_type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_dates(self) -> "LeaveRequestEdit":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date.")
        return self


# ═════════════════════════════════════════════════════════════════════
# Filters / client-side results
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestFilter(FilterRequest):
    """Filters accepted by ``GET /leaves`` and ``GET /leaves/my-requests``."""

    leave_type: Optional[LeaveType] = None
    status: Optional[LeaveStatus] = None
    start_date_after: Optional[date] = None
    start_date_before: Optional[date] = None
    end_date_after: Optional[date] = None
    end_date_before: Optional[date] = None


class ConflictCheckResult(WireModel):
    """Approved requests overlapping a proposed range, in input order."""

    has_conflict: bool = False
    conflicting_leaves: list[LeaveRequestListItem] = Field(default_factory=list)
