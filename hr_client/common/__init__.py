"""Common module — shared utilities for the HR client."""

from hr_client.common.constants import (
    MAX_PAGE_SIZE,
    REVIEWER_ROLES,
    EmployeeStatus,
    LeaveStatus,
    LeaveType,
    SortDirection,
    UserRole,
    leave_status_badge,
    leave_status_label,
    leave_type_label,
    user_role_label,
)
from hr_client.common.debounce import Debouncer
from hr_client.common.envelope import (
    ApiResponse,
    WireModel,
    failure_response,
    success_response,
)
from hr_client.common.exceptions import (
    ApiError,
    AppException,
    ForbiddenException,
    NotFoundException,
    ResponseFormatError,
    TransportError,
    ValidationException,
    as_envelope,
    envelope_errors,
)
from hr_client.common.filters import FILTER_PREFIX, FilterRequest, encode_filters
from hr_client.common.pagination import (
    ListQuery,
    PaginatedResponse,
    build_query_params,
)

__all__ = [
    # Constants / Enums
    "EmployeeStatus",
    "LeaveStatus",
    "LeaveType",
    "SortDirection",
    "UserRole",
    "MAX_PAGE_SIZE",
    "REVIEWER_ROLES",
    "leave_status_badge",
    "leave_status_label",
    "leave_type_label",
    "user_role_label",
    # Debounce
    "Debouncer",
    # Envelope
    "ApiResponse",
    "WireModel",
    "failure_response",
    "success_response",
    # Exceptions
    "ApiError",
    "AppException",
    "ForbiddenException",
    "NotFoundException",
    "ResponseFormatError",
    "TransportError",
    "ValidationException",
    "as_envelope",
    "envelope_errors",
    # Filters
    "FILTER_PREFIX",
    "FilterRequest",
    "encode_filters",
    # Pagination
    "ListQuery",
    "PaginatedResponse",
    "build_query_params",
]
