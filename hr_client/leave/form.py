"""Leave request form workflow — create or edit with two-stage conflict checking.

1. Every date change schedules an advisory conflict check after a quiet
   interval; a newer change cancels the outstanding one. A failed advisory
   check is logged and otherwise ignored.
2. ``submit()`` validates, then runs one more conflict check. A detected
   conflict blocks the create/edit call. A check that could not run is
   logged and the call goes ahead; the backend re-checks on submission.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from hr_client.api import ApiClient
from hr_client.auth.session import SessionContext
from hr_client.common.constants import LeaveType
from hr_client.common.debounce import Debouncer
from hr_client.common.envelope import ApiResponse, failure_response
from hr_client.common.exceptions import ValidationException, as_envelope
from hr_client.config import settings
from hr_client.leave.schemas import (
    LeaveRequestCreate,
    LeaveRequestDetail,
    LeaveRequestEdit,
    inclusive_day_count,
)
from hr_client.leave.service import LeaveService

logger = logging.getLogger(__name__)

CONFLICT_WARNING = (
    "You already have approved leave in the selected date range. "
    "You cannot request leave for these dates."
)
CONFLICT_BLOCKED_MESSAGE = (
    "You already have approved leave in the selected date range. "
    "Please choose different dates."
)
EDIT_NOT_ALLOWED_MESSAGE = "You are not allowed to edit this leave request."


class LeaveFormController:
    """State and behaviour of a single leave request form instance."""

    def __init__(
        self,
        client: ApiClient,
        session: SessionContext,
        leave_id: Optional[str] = None,
        *,
        debounce_seconds: Optional[float] = None,
    ) -> None:
        self.client = client
        self.session = session
        self.leave_id = leave_id

        self.leave_type: LeaveType = LeaveType.vacation
        self.start_date: Optional[date] = None
        self.end_date: Optional[date] = None
        self.reason: str = ""

        self.original: Optional[LeaveRequestDetail] = None
        self.conflict_warning: Optional[str] = None
        self.errors: dict[str, str] = {}

        if debounce_seconds is None:
            debounce_seconds = settings.CONFLICT_CHECK_DEBOUNCE_SECONDS
        self._debouncer = Debouncer(debounce_seconds)

    @property
    def is_edit(self) -> bool:
        return self.leave_id is not None

    @property
    def total_days(self) -> int:
        if self.start_date is None or self.end_date is None:
            return 0
        return inclusive_day_count(self.start_date, self.end_date)

    @property
    def conflict_check_pending(self) -> bool:
        return self._debouncer.pending

    # ── Loading (edit mode) ─────────────────────────────────────────

    async def load(self) -> ApiResponse[LeaveRequestDetail]:
        """Fetch the request being edited and copy its fields into the form."""
        if self.leave_id is None:
            return failure_response("There is no leave request to load.")

        result = await self._fetch_editable()
        if not result.success:
            return result

        leave = result.data
        self.leave_type = leave.leave_type
        self.start_date = leave.start_date
        self.end_date = leave.end_date
        self.reason = leave.reason or ""
        return result

    async def _fetch_editable(self) -> ApiResponse[LeaveRequestDetail]:
        """Fetch ``leave_id`` and keep it as ``original`` if the session may edit it."""
        result = await LeaveService.get_leave_request(self.client, self.session, self.leave_id)
        if not result.success:
            return result
        leave = result.data
        if not self.session.owns(leave.employee_id) or not leave.is_pending:
            return failure_response(EDIT_NOT_ALLOWED_MESSAGE)
        self.original = leave
        return result

    # ── Field changes ───────────────────────────────────────────────

    def set_dates(self, start_date: Optional[date], end_date: Optional[date]) -> None:
        """Change the date range and reschedule the advisory conflict check."""
        self.start_date = start_date
        self.end_date = end_date
        for field in ("start_date", "end_date", "date_conflict"):
            self.errors.pop(field, None)
        self._debouncer.schedule(self.run_advisory_check)

    def set_leave_type(self, leave_type: LeaveType) -> None:
        self.leave_type = LeaveType(leave_type)
        self.errors.pop("leave_type", None)

    def set_reason(self, reason: str) -> None:
        self.reason = reason
        self.errors.pop("reason", None)

    async def wait_for_conflict_check(self) -> None:
        await self._debouncer.wait()

    def close(self) -> None:
        """Drop any scheduled check; call when the form is discarded."""
        self._debouncer.cancel()

    # ── Conflict checks ─────────────────────────────────────────────

    async def run_advisory_check(self) -> None:
        """Early warning only; failures leave ``conflict_warning`` unset."""
        self.conflict_warning = None
        if self.start_date is None or self.end_date is None or self.end_date < self.start_date:
            return

        result = await LeaveService.check_date_conflict(
            self.client, self.session, self.start_date, self.end_date, exclude_id=self.leave_id,
        )
        if not result.success:
            logger.warning("Advisory conflict check skipped: %s", result.message)
            return
        if result.data.has_conflict:
            self.conflict_warning = CONFLICT_WARNING

    # ── Validation / submission ─────────────────────────────────────

    def validate(self, today: Optional[date] = None) -> bool:
        """Populate ``errors`` and return True when the form can be submitted."""
        today = today or date.today()
        errors: dict[str, str] = {}

        if self.leave_type is None:
            errors["leave_type"] = "Select a leave type."
        if self.start_date is None:
            errors["start_date"] = "Select a start date."
        if self.end_date is None:
            errors["end_date"] = "Select an end date."

        if self.start_date is not None and self.end_date is not None:
            if self.start_date < today and not self.is_edit:
                errors["start_date"] = "Start date cannot be in the past."
            if self.end_date < self.start_date:
                errors["end_date"] = "End date cannot be before the start date."
            elif self.total_days > settings.MAX_LEAVE_DAYS:
                errors["end_date"] = f"Leave cannot be longer than {settings.MAX_LEAVE_DAYS} days."

        if self.conflict_warning:
            errors["date_conflict"] = self.conflict_warning

        self.errors = errors
        return not errors

    async def submit(self, today: Optional[date] = None) -> ApiResponse[LeaveRequestDetail]:
        """Validate, run the final conflict check, then create or edit."""
        if not self.validate(today):
            return as_envelope(ValidationException({k: [v] for k, v in self.errors.items()}))

        # the final check supersedes any advisory check still scheduled
        self._debouncer.cancel()
        check = await LeaveService.check_date_conflict(
            self.client, self.session, self.start_date, self.end_date, exclude_id=self.leave_id,
        )
        if not check.success:
            logger.warning("Final conflict check unavailable, submitting anyway: %s", check.message)
        elif check.data.has_conflict:
            self.conflict_warning = CONFLICT_WARNING
            return failure_response(CONFLICT_BLOCKED_MESSAGE, data=check.data)

        # "" clears a stored reason on edit; None would leave it untouched
        reason = self.reason.strip()
        if self.is_edit:
            if self.original is None:
                fetched = await self._fetch_editable()
                if not fetched.success:
                    return fetched
            return await LeaveService.edit_leave_request(
                self.client,
                self.session,
                self.original,
                LeaveRequestEdit(
                    leave_type=self.leave_type,
                    start_date=self.start_date,
                    end_date=self.end_date,
                    reason=reason,
                ),
            )

        return await LeaveService.create_leave_request(
            self.client,
            self.session,
            LeaveRequestCreate(
                leave_type=self.leave_type,
                start_date=self.start_date,
                end_date=self.end_date,
                reason=reason or None,
            ),
        )
