"""Client exception hierarchy and the envelope conversion used at service boundaries."""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from pydantic import ValidationError

from hr_client.common.envelope import ApiResponse, failure_response

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the HR server. Please check your connection and try again."

F = TypeVar("F", bound=Callable[..., Awaitable[ApiResponse]])


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all client exceptions → failure envelope."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class TransportError(AppException):
    """Network / timeout failure — the request may not have reached the server."""

    def __init__(self, detail: str = NETWORK_ERROR_MESSAGE) -> None:
        super().__init__(
            status_code=0,
            error_type="transport",
            title="Network Error",
            detail=detail,
        )


class ApiError(AppException):
    """Backend reported a failure (``success: false`` or a non-2xx status)."""

    def __init__(
        self,
        detail: str,
        status_code: int = 400,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            status_code=status_code,
            error_type="api-error",
            title="Request Failed",
            detail=detail,
            errors=errors,
        )


class NotFoundException(ApiError):
    """404 from the backend; the message is still the backend's own."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=404)
        self.error_type = "not-found"
        self.title = "Not Found"


class ForbiddenException(AppException):
    """403 — the session is not allowed to perform this action."""

    def __init__(
        self,
        detail: str = "You do not have permission to perform this action.",
    ) -> None:
        super().__init__(
            status_code=403,
            error_type="forbidden",
            title="Forbidden",
            detail=detail,
        )


class ValidationException(AppException):
    """422 — client-side validation failures, keyed by field."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        detail: str = "One or more fields failed validation.",
    ) -> None:
        super().__init__(
            status_code=422,
            error_type="validation-error",
            title="Validation Error",
            detail=detail,
            errors=errors,
        )


class ResponseFormatError(AppException):
    """The backend answered with a payload the client cannot parse."""

    def __init__(self, detail: str = "Unexpected response from the HR server.") -> None:
        super().__init__(
            status_code=502,
            error_type="bad-response",
            title="Bad Response",
            detail=detail,
        )


# ── Envelope conversion ─────────────────────────────────────────────

def as_envelope(exc: AppException, data: Any = None) -> ApiResponse:
    """Turn an ``AppException`` into a failure ``ApiResponse``."""
    return failure_response(exc.detail, data=data)


def envelope_errors(func: F) -> F:
    """Decorate an async service operation so it never raises ``AppException``.

    Failures come back as ``ApiResponse(success=False, message=...)``; the
    backend's message is passed through verbatim.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ApiResponse:
        try:
            return await func(*args, **kwargs)
        except ValidationError as exc:
            logger.warning("%s: malformed response: %s", func.__name__, exc)
            return as_envelope(ResponseFormatError())
        except AppException as exc:
            logger.warning("%s failed [%s]: %s", func.__name__, exc.error_type, exc.detail)
            return as_envelope(exc)

    return wrapper  # type: ignore[return-value]
