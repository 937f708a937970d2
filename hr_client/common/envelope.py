"""Response envelope shared by every backend endpoint and client operation.

Wire shape: ``{"success": bool, "message": str, "data": T, "timestamp": str}``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    """Base for payloads exchanged with the backend (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_wire(self, **kwargs: Any) -> dict[str, Any]:
        """JSON-ready dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


class ApiResponse(WireModel, Generic[T]):
    """Uniform success/failure result returned by every client operation."""

    success: bool
    message: str = ""
    data: Optional[T] = None
    timestamp: str = ""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data: Any = None, message: str = "") -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data, timestamp=_now())


def failure_response(message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(success=False, message=message, data=data, timestamp=_now())
