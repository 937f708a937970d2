"""List query contract (page / size / sort / filter) and the paginated response model."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from hr_client.common.constants import MAX_PAGE_SIZE, SortDirection
from hr_client.common.envelope import WireModel
from hr_client.common.filters import FilterRequest, encode_filters
from hr_client.config import settings

T = TypeVar("T")


# ── Request side ────────────────────────────────────────────────────

class ListQuery(BaseModel):
    """Paging, sorting and filtering for any list endpoint.

    ``page`` is zero-based. "All requests" and "my requests" share this shape;
    they only differ in the endpoint (and so the authorization scope) used.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0, description="Page index (0-indexed)")
    size: int = Field(
        default_factory=lambda: settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description=f"Items per page (max {MAX_PAGE_SIZE})",
    )
    sort_by: str = "createdAt"
    sort_direction: SortDirection = SortDirection.desc
    filter_request: Optional[FilterRequest] = None

    def to_params(self) -> list[tuple[str, str]]:
        return build_query_params(self)


def build_query_params(query: ListQuery) -> list[tuple[str, str]]:
    """Serialise *query* into the ordered key/value pairs the backend expects.

    Pure and deterministic: the same query always yields the same pairs.
    """
    params = [
        ("page", str(query.page)),
        ("size", str(query.size)),
        ("sortBy", query.sort_by),
        ("sortDirection", SortDirection(query.sort_direction).value),
    ]
    params.extend(encode_filters(query.filter_request))
    return params


# ── Response side ───────────────────────────────────────────────────

class PaginatedResponse(WireModel, Generic[T]):
    """Backend page: ``{"data": [...], "total": n, "page": p, ...}``."""

    data: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False
