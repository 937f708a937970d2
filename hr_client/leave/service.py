"""Leave service layer — facade over the backend's ``/leaves`` endpoints.

Client-side responsibilities:
  - List query serialisation for "all" (reviewer) and "my" requests
  - Lifecycle guards: owner-only edit/cancel, reviewer-only approve/reject,
    pending-only transitions, all checked before any request is sent
  - Advisory date-conflict check against the caller's approved leave

Every operation returns an ``ApiResponse``; failures never raise.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from hr_client.api import ApiClient
from hr_client.auth.session import SessionContext, require_owner, require_reviewer
from hr_client.common.constants import SortDirection, leave_status_label
from hr_client.common.envelope import ApiResponse, failure_response, success_response
from hr_client.common.exceptions import ValidationException, envelope_errors
from hr_client.common.pagination import ListQuery, PaginatedResponse
from hr_client.config import settings
from hr_client.leave.conflicts import find_conflicts
from hr_client.leave.schemas import (
    ConflictCheckResult,
    EmployeeLeaveBalance,
    LeaveRequestCreate,
    LeaveRequestDetail,
    LeaveRequestEdit,
    LeaveRequestFilter,
    LeaveRequestListItem,
)

logger = logging.getLogger(__name__)

LEAVES_PATH = "/leaves"

CONFLICT_CHECK_FAILED_MESSAGE = "Could not check the selected dates against your approved leave."


def _ensure_pending(leave: LeaveRequestListItem, action: str) -> None:
    if not leave.is_pending:
        raise ValidationException(
            {"status": [f"Only pending leave requests can be {action}."]},
            detail=(
                f"Only pending leave requests can be {action}; "
                f"this request is {leave_status_label(leave.status).lower()}."
            ),
        )


def conflict_check_query() -> ListQuery:
    """Query used to load the caller's own leave history for conflict checks."""
    return ListQuery(
        page=0,
        size=settings.CONFLICT_CHECK_PAGE_SIZE,
        sort_by="startDate",
        sort_direction=SortDirection.asc,
        filter_request=LeaveRequestFilter(search_term=""),
    )


# ═════════════════════════════════════════════════════════════════════
# LeaveService
# ═════════════════════════════════════════════════════════════════════


class LeaveService:
    """Async leave operations: listing, lifecycle transitions, balances, conflicts."""

    # ─────────────────────────────────────────────────────────────────
    # Listing / reads
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    @envelope_errors
    async def list_leave_requests(
        client: ApiClient,
        session: SessionContext,
        query: Optional[ListQuery] = None,
    ) -> ApiResponse[PaginatedResponse[LeaveRequestListItem]]:
        """All employees' requests. Reviewer scope."""
        require_reviewer(session, "view all leave requests")
        query = query or ListQuery()
        body = await client.get(LEAVES_PATH, session, params=query.to_params())
        return ApiResponse[PaginatedResponse[LeaveRequestListItem]].model_validate(body)

    @staticmethod
    @envelope_errors
    async def list_my_leave_requests(
        client: ApiClient,
        session: SessionContext,
        query: Optional[ListQuery] = None,
    ) -> ApiResponse[PaginatedResponse[LeaveRequestListItem]]:
        """The session owner's requests, same query shape as ``list_leave_requests``."""
        query = query or ListQuery()
        body = await client.get(f"{LEAVES_PATH}/my-requests", session, params=query.to_params())
        return ApiResponse[PaginatedResponse[LeaveRequestListItem]].model_validate(body)

    @staticmethod
    @envelope_errors
    async def get_leave_request(
        client: ApiClient,
        session: SessionContext,
        leave_id: str,
    ) -> ApiResponse[LeaveRequestDetail]:
        body = await client.get(f"{LEAVES_PATH}/{leave_id}", session)
        return ApiResponse[LeaveRequestDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def get_my_leave_balance(
        client: ApiClient,
        session: SessionContext,
    ) -> ApiResponse[EmployeeLeaveBalance]:
        body = await client.get(f"{LEAVES_PATH}/my-balance", session)
        return ApiResponse[EmployeeLeaveBalance].model_validate(body)

    @staticmethod
    @envelope_errors
    async def get_employee_leave_balance(
        client: ApiClient,
        session: SessionContext,
        employee_id: str,
    ) -> ApiResponse[EmployeeLeaveBalance]:
        """Balance of a named employee. Reviewers, or the employee themself."""
        if not session.owns(employee_id):
            require_reviewer(session, "view another employee's leave balance")
        body = await client.get(f"{LEAVES_PATH}/{employee_id}/balance", session)
        return ApiResponse[EmployeeLeaveBalance].model_validate(body)

    # ─────────────────────────────────────────────────────────────────
    # Owner operations
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    @envelope_errors
    async def create_leave_request(
        client: ApiClient,
        session: SessionContext,
        data: LeaveRequestCreate,
    ) -> ApiResponse[LeaveRequestDetail]:
        body = await client.post(LEAVES_PATH, session, json=data.to_wire())
        logger.info(
            "Leave request created for employee %s (%s → %s)",
            session.employee_id, data.start_date, data.end_date,
        )
        return ApiResponse[LeaveRequestDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def edit_leave_request(
        client: ApiClient,
        session: SessionContext,
        leave: LeaveRequestListItem,
        data: LeaveRequestEdit,
    ) -> ApiResponse[LeaveRequestDetail]:
        """Partially update *leave*. Owner only, while still pending."""
        require_owner(session, leave.employee_id, "edit")
        _ensure_pending(leave, "edited")
        body = await client.patch(
            f"{LEAVES_PATH}/{leave.id}", session, json=data.to_wire(exclude_none=True),
        )
        return ApiResponse[LeaveRequestDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def cancel_leave_request(
        client: ApiClient,
        session: SessionContext,
        leave: LeaveRequestListItem,
    ) -> ApiResponse:
        """Cancel *leave* (terminal). Owner only, while still pending."""
        require_owner(session, leave.employee_id, "cancel")
        _ensure_pending(leave, "cancelled")
        body = await client.delete(f"{LEAVES_PATH}/{leave.id}", session)
        logger.info("Leave request %s cancelled", leave.id)
        return ApiResponse.model_validate(body)

    # ─────────────────────────────────────────────────────────────────
    # Reviewer operations
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    @envelope_errors
    async def approve_leave_request(
        client: ApiClient,
        session: SessionContext,
        leave: LeaveRequestListItem,
    ) -> ApiResponse[LeaveRequestDetail]:
        require_reviewer(session, "approve leave requests")
        _ensure_pending(leave, "approved")
        body = await client.patch(f"{LEAVES_PATH}/{leave.id}/approve", session)
        logger.info("Leave request %s approved by %s", leave.id, session.employee_id)
        return ApiResponse[LeaveRequestDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def reject_leave_request(
        client: ApiClient,
        session: SessionContext,
        leave: LeaveRequestListItem,
    ) -> ApiResponse[LeaveRequestDetail]:
        require_reviewer(session, "reject leave requests")
        _ensure_pending(leave, "rejected")
        body = await client.patch(f"{LEAVES_PATH}/{leave.id}/reject", session)
        logger.info("Leave request %s rejected by %s", leave.id, session.employee_id)
        return ApiResponse[LeaveRequestDetail].model_validate(body)

    # ─────────────────────────────────────────────────────────────────
    # Conflict check
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def check_date_conflict(
        client: ApiClient,
        session: SessionContext,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> ApiResponse[ConflictCheckResult]:
        """Check ``[start_date, end_date]`` against the caller's approved leave.

        Fails open: if the history cannot be loaded the result is
        ``success=False`` with ``has_conflict=False``. The backend re-checks
        on submission, so a failed check is reported but never treated as a conflict.
        """
        if end_date < start_date:
            return failure_response(
                "End date must be on or after start date.",
                data=ConflictCheckResult(),
            )

        history = await LeaveService.list_my_leave_requests(
            client, session, conflict_check_query(),
        )
        if not history.success or history.data is None:
            logger.warning(
                "Conflict check for employee %s failed open: %s",
                session.employee_id, history.message,
            )
            return failure_response(CONFLICT_CHECK_FAILED_MESSAGE, data=ConflictCheckResult())

        result = find_conflicts(start_date, end_date, history.data.data, exclude_id)
        return success_response(result, message="Date conflict check completed.")
