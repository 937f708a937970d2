"""Dashboard service — read-only summaries assembled from list endpoints.

Reviewers see directory and pending-leave totals; employees see their balance.
Counts come from ``total`` on a one-row page, so no rows are transferred.
"""

from __future__ import annotations

import asyncio
import logging

from hr_client.api import ApiClient
from hr_client.auth.session import SessionContext
from hr_client.common.constants import LeaveStatus
from hr_client.common.envelope import ApiResponse, failure_response, success_response
from hr_client.common.pagination import ListQuery
from hr_client.core_hr.service import EmployeeService
from hr_client.dashboard.schemas import DashboardSummary, ReviewerSummary
from hr_client.leave.schemas import LeaveRequestFilter
from hr_client.leave.service import LeaveService

logger = logging.getLogger(__name__)


def _total_or_zero(result: ApiResponse, label: str) -> int:
    if result.success and result.data is not None:
        return result.data.total
    logger.warning("Dashboard %s count unavailable: %s", label, result.message)
    return 0


class DashboardService:
    """Async dashboard aggregation."""

    @staticmethod
    async def get_summary(
        client: ApiClient,
        session: SessionContext,
    ) -> ApiResponse[DashboardSummary]:
        """Return the summary for the session's role."""
        if not session.is_reviewer:
            balance = await LeaveService.get_my_leave_balance(client, session)
            if not balance.success:
                return failure_response(balance.message)
            return success_response(
                DashboardSummary(role=session.role, leave_balance=balance.data),
            )

        employees, pending = await asyncio.gather(
            EmployeeService.list_employees(client, session, ListQuery(page=0, size=1)),
            LeaveService.list_leave_requests(
                client,
                session,
                ListQuery(
                    page=0,
                    size=1,
                    filter_request=LeaveRequestFilter(status=LeaveStatus.pending),
                ),
            ),
        )
        summary = ReviewerSummary(
            total_employees=_total_or_zero(employees, "employee"),
            pending_leaves=_total_or_zero(pending, "pending leave"),
        )
        return success_response(DashboardSummary(role=session.role, reviewer=summary))
