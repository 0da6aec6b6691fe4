# carfinder/tools.py
"""
Conversational query resolver: the `car_inventory` tool.

One call = one user turn. Free text is turned into filters, follow-ups are
resolved against the conversation's context, the catalog is queried and a
single text block comes back. Errors never cross this boundary; they are
reported as text.
"""
from __future__ import annotations
import re
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from carfinder import texts
from carfinder.compare import compare_models
from carfinder.context import SESSIONS, ConversationContext
from carfinder.logger import get_logger
from carfinder.nlp.intent import (
    Extraction,
    canonical_color,
    canonical_fuel,
    canonical_transmission,
    extract_params,
    parse_paging,
    residual_search,
)
from carfinder.nlp.normalize import canonical_brand, norm_txt
from carfinder.pagination import EXPLICIT_JUMP, NEW_QUERY, classify, resolve
from carfinder.reco.client import CatalogError, build_catalog
from carfinder.reco.stats import calculate_price_stats
from carfinder.router import compose_results
from carfinder.schemas import FilterCriteria, InventoryRequest

logger = get_logger("tools")

GREET_RE = re.compile(r"^\s*(hi|hello|hey|hola|namaste|good (morning|afternoon|evening)|menu|help|start)\b[\s!.?]*$")

# ------------------------------------------------------------
# Catalog (built on first use; tests monkeypatch get_catalog)
# ------------------------------------------------------------
_CATALOG = None


def get_catalog():
    global _CATALOG
    if _CATALOG is None:
        _CATALOG = build_catalog()
    return _CATALOG


# ------------------------------------------------------------
# Request merging
# ------------------------------------------------------------
def _canonical_filters(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Brand aliases resolved; colors/fuels/transmissions outside the vocabulary dropped."""
    out = dict(fields)
    for key in ("brand", "exclude_brand"):
        if out.get(key):
            out[key] = canonical_brand(out[key])
    for key, fn in (("color", canonical_color),
                    ("fuel_type", canonical_fuel),
                    ("transmission", canonical_transmission)):
        if out.get(key):
            value = fn(out[key])
            if value is None:
                logger.info("dropping unknown %s %r", key, out[key])
                out.pop(key)
            else:
                out[key] = value
    return out


def _apply_context(fields: Dict[str, Any], ext: Extraction,
                   explicit: Dict[str, Any], ctx: ConversationContext) -> None:
    """Relational references ("same price range", "other brand", bare "cheapest")."""
    if ext.references_last_price_range and "min_price" not in explicit and "max_price" not in explicit:
        rng = ctx.reference_price_range()
        if rng is not None:
            fields["min_price"], fields["max_price"] = rng
        else:
            logger.debug("no previous price range to reuse")

    if ext.references_other_brand and ctx.last_brand and not fields.get("exclude_brand"):
        fields["exclude_brand"] = ctx.last_brand
        if fields.get("brand") and canonical_brand(fields["brand"]) == ctx.last_brand:
            fields.pop("brand")

    if ext.bare_superlative and not fields.get("brand") and ctx.last_brand:
        fields["brand"] = ctx.last_brand


def _merge(request: InventoryRequest, ctx: ConversationContext):
    """
    Folds the free text into the request. Returns (merged request, paging
    phrase or None). Structured fields always win over extracted ones.
    """
    text = (request.search or "").strip()
    paging = parse_paging(text) if text else None

    if paging is not None:
        update: Dict[str, Any] = {"search": None}
        if paging.page is not None:
            update["page"] = paging.page
        if paging.limit is not None and request.limit is None:
            update["limit"] = paging.limit
        return request.model_copy(update=update), paging

    if not text:
        return request, None

    ext = extract_params(text)
    explicit = request.supplied_filters()
    fields: Dict[str, Any] = {**ext.fields(), **explicit}
    _apply_context(fields, ext, explicit, ctx)

    update = {k: fields.get(k) for k in ("brand", "model", "min_price", "max_price", "color",
                                         "fuel_type", "transmission", "exclude_brand", "sort_by")}
    update["search"] = None if ext.matched else residual_search(text)
    if request.limit is None and ext.limit is not None:
        update["limit"] = ext.limit
    if ext.compare_models and not request.compare_models:
        update["compare_models"] = ext.compare_models
    return request.model_copy(update=update), None


def _new_query(request: InventoryRequest) -> FilterCriteria:
    fields = _canonical_filters(request.supplied_filters())
    data: Dict[str, Any] = dict(fields)
    if request.limit is not None:
        data["limit"] = request.limit
    if request.page is not None:
        data["page"] = request.page
    data["search"] = (request.search or "").strip() or None
    return FilterCriteria(**data)


# ------------------------------------------------------------
# Tool entry point
# ------------------------------------------------------------
async def _resolve(request: InventoryRequest, ctx: ConversationContext) -> str:
    catalog = get_catalog()

    if request.compare_models:
        ctx.reset_filter()
        return await compare_models(catalog, request.compare_models)

    merged, paging = _merge(request, ctx)
    if merged.compare_models:
        ctx.reset_filter()
        return await compare_models(catalog, merged.compare_models)

    kind = classify(merged)
    if paging is None and (request.search or "").strip():
        # free text that only held filler words still starts over
        kind = NEW_QUERY
    elif paging is not None and paging.kind in ("page", "all") and kind != NEW_QUERY:
        kind = EXPLICIT_JUMP
    logger.debug("request classified as %s", kind)

    if kind == NEW_QUERY:
        criteria = _new_query(merged)
    else:
        criteria = resolve(kind, merged, ctx.last_filter)

    result = await catalog.query(criteria)
    ctx.update(criteria, calculate_price_stats(result.results))
    return compose_results(result, criteria)


async def car_inventory(request: Union[InventoryRequest, Dict[str, Any]],
                        conversation_id: Optional[str] = None) -> str:
    """Resolves one turn for a conversation and returns the reply text."""
    try:
        if not isinstance(request, InventoryRequest):
            request = InventoryRequest.model_validate(request or {})
    except ValidationError as e:
        logger.warning("invalid car_inventory request: %s", e.errors())
        return texts.INVALID_REQUEST

    ctx = SESSIONS.get(conversation_id or request.conversation_id)
    try:
        return await _resolve(request, ctx)
    except CatalogError as e:
        logger.error("catalog error: %s", e)
        return texts.ERROR_FETCHING.format(error=e)
    except Exception as e:
        logger.exception("car_inventory failed")
        return texts.ERROR_FETCHING.format(error=e)


# ------------------------------------------------------------
# Chat entry point (used by /chat and /whatsapp)
# ------------------------------------------------------------
async def route_message(channel: str, text: str, user_id: Optional[str] = None) -> str:
    t = norm_txt(text)
    if not t or GREET_RE.match(t):
        return texts.WELCOME_MSG
    return await car_inventory(InventoryRequest(search=text), conversation_id=user_id or channel)
