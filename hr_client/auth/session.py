"""Session context — the authenticated caller passed explicitly to every operation.

Login and token issuance happen elsewhere; the client only carries the result.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hr_client.common.constants import REVIEWER_ROLES, UserRole
from hr_client.common.exceptions import ForbiddenException


class SessionContext(BaseModel):
    """Identity and role of the current user plus the bearer token."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., min_length=1, repr=False)
    employee_id: str
    email: str = ""
    role: UserRole = UserRole.employee

    @property
    def is_reviewer(self) -> bool:
        """Managers and HR may approve/reject and see everyone's requests."""
        return self.role in REVIEWER_ROLES

    def owns(self, employee_id: str) -> bool:
        return str(employee_id) == str(self.employee_id)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


# ── Guards ──────────────────────────────────────────────────────────

def require_reviewer(session: SessionContext, action: str = "perform this action") -> None:
    """Raise ``ForbiddenException`` unless the session has a reviewer role."""
    if not session.is_reviewer:
        allowed = sorted(r.value for r in REVIEWER_ROLES)
        raise ForbiddenException(
            detail=f"Role '{session.role.value}' may not {action}. Required: {allowed}.",
        )


def require_owner(session: SessionContext, employee_id: str, action: str) -> None:
    """Raise ``ForbiddenException`` unless *employee_id* is the session's own."""
    if not session.owns(employee_id):
        raise ForbiddenException(detail=f"You can only {action} your own leave requests.")
