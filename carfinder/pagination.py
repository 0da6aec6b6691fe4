# carfinder/pagination.py
"""
Decides whether a request continues the previous query or starts a new one.

  new-query      any filter field or free text
  continuation   nothing but (optionally) a limit, page absent or 1  -> last page + 1
  explicit-jump  page > 1 and nothing else but a limit               -> that page

Continuation and jump reuse the last executed filter. Without one they
resolve against an unfiltered listing (page 1 for "next", page N for a jump).
"""
from __future__ import annotations
from typing import Optional

from carfinder.logger import get_logger
from carfinder.schemas import FilterCriteria, InventoryRequest

logger = get_logger("pagination")

NEW_QUERY = "new-query"
CONTINUATION = "continuation"
EXPLICIT_JUMP = "explicit-jump"


def classify(request: InventoryRequest) -> str:
    if request.supplied_filters() or (request.search or "").strip():
        return NEW_QUERY
    if request.page is None or request.page <= 1:
        return CONTINUATION
    return EXPLICIT_JUMP


def resolve(kind: str, request: InventoryRequest,
            last_filter: Optional[FilterCriteria]) -> FilterCriteria:
    """
    Effective filter for a continuation or a jump. New queries are built by
    the caller from the request itself.
    """
    if kind == NEW_QUERY:
        raise ValueError("new queries are not resolved from the previous filter")

    if last_filter is None:
        base = FilterCriteria()
        page = 1 if kind == CONTINUATION else request.page
        logger.debug("%s without a previous query, unfiltered page %s", kind, page)
    else:
        base = last_filter
        page = last_filter.page + 1 if kind == CONTINUATION else request.page

    changes = {"page": page}
    if request.limit is not None:
        changes["limit"] = request.limit
    return base.replace(**changes)
