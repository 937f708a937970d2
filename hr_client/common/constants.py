"""Enums and constants for the HR client — matching the backend's wire values."""

from __future__ import annotations

import enum


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    employee = "EMPLOYEE"
    manager = "MANAGER"
    hr = "HR"


# ── Employee ────────────────────────────────────────────────────────

class EmployeeStatus(str, enum.Enum):
    active = "ACTIVE"
    inactive = "INACTIVE"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveType(str, enum.Enum):
    vacation = "VACATION"
    sick = "SICK"
    unpaid = "UNPAID"
    maternity = "MATERNITY"


class LeaveStatus(str, enum.Enum):
    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"
    cancelled = "CANCELLED"


# ── Listing ─────────────────────────────────────────────────────────

class SortDirection(str, enum.Enum):
    asc = "asc"
    desc = "desc"


MAX_PAGE_SIZE = 100

# Roles allowed to act on other employees' leave requests
REVIEWER_ROLES: frozenset[UserRole] = frozenset({UserRole.manager, UserRole.hr})


# ── Display mappings ────────────────────────────────────────────────
# Every enum member must have an entry; tests iterate over each enum.

_LEAVE_TYPE_LABELS: dict[LeaveType, str] = {
    LeaveType.vacation: "Annual Leave",
    LeaveType.sick: "Sick Leave",
    LeaveType.unpaid: "Unpaid Leave",
    LeaveType.maternity: "Maternity Leave",
}

_LEAVE_STATUS_LABELS: dict[LeaveStatus, str] = {
    LeaveStatus.pending: "Pending",
    LeaveStatus.approved: "Approved",
    LeaveStatus.rejected: "Rejected",
    LeaveStatus.cancelled: "Cancelled",
}

_LEAVE_STATUS_BADGES: dict[LeaveStatus, str] = {
    LeaveStatus.pending: "bg-yellow-100 text-yellow-800",
    LeaveStatus.approved: "bg-green-100 text-green-800",
    LeaveStatus.rejected: "bg-red-100 text-red-800",
    LeaveStatus.cancelled: "bg-gray-100 text-gray-800",
}

_USER_ROLE_LABELS: dict[UserRole, str] = {
    UserRole.employee: "Employee",
    UserRole.manager: "Manager",
    UserRole.hr: "Human Resources",
}


def leave_type_label(leave_type: LeaveType) -> str:
    return _LEAVE_TYPE_LABELS[LeaveType(leave_type)]


def leave_status_label(status: LeaveStatus) -> str:
    return _LEAVE_STATUS_LABELS[LeaveStatus(status)]


def leave_status_badge(status: LeaveStatus) -> str:
    """CSS classes for the status pill shown next to a leave request."""
    return _LEAVE_STATUS_BADGES[LeaveStatus(status)]


def user_role_label(role: UserRole) -> str:
    return _USER_ROLE_LABELS[UserRole(role)]
