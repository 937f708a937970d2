"""Filter request base model and its query-string encoding.

The backend binds list filters from ``filterRequest.<field>`` query keys and
rejects requests where ``filterRequest.searchTerm`` is missing, so the search
term is always sent, as an empty string when unset.
"""

from __future__ import annotations

from typing import Optional

from hr_client.common.envelope import WireModel

FILTER_PREFIX = "filterRequest"


class FilterRequest(WireModel):
    """Free-text search shared by every filterable list endpoint."""

    search_term: Optional[str] = None


def encode_filters(filter_request: Optional[FilterRequest]) -> list[tuple[str, str]]:
    """
    Encode *filter_request* as ``filterRequest.<field>`` query pairs.

    * ``searchTerm`` comes first and is always present.
    * Remaining fields follow in declaration order.
    * ``None`` and empty-string values are skipped.
    * Dates are sent as ``YYYY-MM-DD``, enums as their wire value.
    """
    wire = filter_request.to_wire() if filter_request is not None else {}
    search_term = wire.pop("searchTerm", None) or ""

    params = [(f"{FILTER_PREFIX}.searchTerm", str(search_term))]
    for key, value in wire.items():
        if value is None or value == "":
            continue
        params.append((f"{FILTER_PREFIX}.{key}", str(value)))
    return params
