"""Leave date-range conflict detection against an employee's approved leave."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from hr_client.common.constants import LeaveStatus
from hr_client.leave.schemas import ConflictCheckResult, LeaveRequestListItem


def find_conflicts(
    start_date: date,
    end_date: date,
    leaves: Iterable[LeaveRequestListItem],
    exclude_id: Optional[str] = None,
) -> ConflictCheckResult:
    """Return the approved requests in *leaves* that overlap ``[start_date, end_date]``.

    Both ranges are closed, so a request ending on ``start_date`` counts.
    Only ``APPROVED`` requests participate; *exclude_id* drops the request
    being edited. Matches keep their input order.
    """
    if end_date < start_date:
        raise ValueError("end_date must be on or after start_date.")

    conflicting = [
        leave
        for leave in leaves
        if leave.status == LeaveStatus.approved
        and (exclude_id is None or leave.id != exclude_id)
        and leave.overlaps(start_date, end_date)
    ]
    return ConflictCheckResult(
        has_conflict=bool(conflicting),
        conflicting_leaves=conflicting,
    )
