"""Async HTTP transport to the HR backend.

``ApiClient`` owns one ``httpx.AsyncClient`` and turns every failure mode
into a ``hr_client.common.exceptions`` type. Services above it convert
those into failure envelopes.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from hr_client.auth.session import SessionContext
from hr_client.common.exceptions import (
    ApiError,
    NotFoundException,
    ResponseFormatError,
    TransportError,
)
from hr_client.config import settings

logger = logging.getLogger(__name__)

QueryParams = list[tuple[str, str]]


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` speaking the backend's envelope.

    Usage::

        async with ApiClient() as client:
            result = await LeaveService.list_my_leave_requests(client, session)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url or settings.api_root
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    # ── Lifecycle ───────────────────────────────────────────────────

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ── HTTP ────────────────────────────────────────────────────────

    async def request(
        self,
        method: str,
        path: str,
        session: Optional[SessionContext] = None,
        *,
        params: Optional[QueryParams] = None,
        json: Any = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded envelope dict.

        Raises ``TransportError`` when the server cannot be reached and
        ``ApiError`` for non-2xx statuses or ``success: false`` bodies.
        """
        headers = session.auth_headers() if session is not None else None
        try:
            resp = await self._http.request(
                method, path, params=params, json=json, headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError() from exc

        logger.debug("%s %s -> %d", method, resp.request.url, resp.status_code)

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code >= 400:
            raise _error_from_response(resp.status_code, body)
        if not isinstance(body, dict):
            raise ResponseFormatError()
        if body.get("success") is False:
            raise ApiError(
                body.get("message") or "The request was not successful.",
                status_code=resp.status_code,
            )
        return body

    async def get(self, path: str, session: Optional[SessionContext] = None, **kwargs: Any) -> dict[str, Any]:
        return await self.request("GET", path, session, **kwargs)

    async def post(self, path: str, session: Optional[SessionContext] = None, **kwargs: Any) -> dict[str, Any]:
        return await self.request("POST", path, session, **kwargs)

    async def put(self, path: str, session: Optional[SessionContext] = None, **kwargs: Any) -> dict[str, Any]:
        return await self.request("PUT", path, session, **kwargs)

    async def patch(self, path: str, session: Optional[SessionContext] = None, **kwargs: Any) -> dict[str, Any]:
        return await self.request("PATCH", path, session, **kwargs)

    async def delete(self, path: str, session: Optional[SessionContext] = None, **kwargs: Any) -> dict[str, Any]:
        return await self.request("DELETE", path, session, **kwargs)


def _error_from_response(status_code: int, body: Any) -> ApiError:
    """Pick the most useful message from an error body.

    Order: envelope ``message``, RFC 7807 ``detail``, then a generic fallback.
    """
    message: Optional[str] = None
    errors: Optional[dict[str, Any]] = None
    if isinstance(body, dict):
        if isinstance(body.get("message"), str) and body["message"]:
            message = body["message"]
        elif isinstance(body.get("detail"), str) and body["detail"]:
            message = body["detail"]
        if isinstance(body.get("errors"), dict):
            errors = body["errors"]
    message = message or f"Request failed with status {status_code}."
    if status_code == 404:
        return NotFoundException(message)
    return ApiError(
        message,
        status_code=status_code,
        errors=errors,
    )
