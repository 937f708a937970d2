"""Leave module — leave request schemas, service facade, conflict detection and form workflow."""

from hr_client.leave.conflicts import find_conflicts
from hr_client.leave.schemas import (
    ConflictCheckResult,
    EmployeeLeaveBalance,
    LeaveRequestCreate,
    LeaveRequestDetail,
    LeaveRequestEdit,
    LeaveRequestFilter,
    LeaveRequestListItem,
    inclusive_day_count,
)
from hr_client.leave.service import LeaveService

__all__ = [
    "ConflictCheckResult",
    "EmployeeLeaveBalance",
    "LeaveRequestCreate",
    "LeaveRequestDetail",
    "LeaveRequestEdit",
    "LeaveRequestFilter",
    "LeaveRequestListItem",
    "LeaveService",
    "find_conflicts",
    "inclusive_day_count",
]
