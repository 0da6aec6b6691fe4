# carfinder/reco/client.py
from __future__ import annotations
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from carfinder import config
from carfinder.logger import get_logger
from carfinder.schemas import FilterCriteria, ResultPage

logger = get_logger("catalog")


class CatalogError(RuntimeError):
    """The catalog could not answer (unreachable, bad status, bad payload, bad file)."""


# FilterCriteria field -> query parameter of the inventory service
_WIRE = {
    "brand": "brand",
    "model": "model",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "color": "color",
    "fuel_type": "fuelType",
    "transmission": "transmission",
    "exclude_brand": "excludeBrand",
    "sort_by": "sortBy",
}


def wire_params(criteria: FilterCriteria) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for field, name in _WIRE.items():
        value = getattr(criteria, field)
        if value is None:
            continue
        if field in ("min_price", "max_price"):
            value = int(value) if float(value).is_integer() else value
        elif field == "sort_by":
            value = value.value
        params[name] = value
    params["page"] = criteria.page
    params["limit"] = criteria.limit
    return params


class HttpCatalog:
    """
    Client for the inventory service:
      GET {base}/search?q=...     free text
      GET {base}/filter?...       any structured filter
      GET {base}                  plain listing
    All three answer {total, page, limit, results}.
    """

    def __init__(self, base_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _route(self, criteria: FilterCriteria):
        params = wire_params(criteria)
        if criteria.search:
            params["q"] = criteria.search
            return "/search", params
        if criteria.filters():
            return "/filter", params
        return "", params

    async def query(self, criteria: FilterCriteria) -> ResultPage:
        path, params = self._route(criteria)
        url = f"{self.base_url}{path}"
        logger.debug("GET %s %s", url, params)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("catalog request failed: %s", e)
            raise CatalogError(f"catalog unreachable ({e.__class__.__name__})") from e

        if resp.status_code >= 400:
            logger.error("catalog answered %s for %s", resp.status_code, url)
            raise CatalogError(f"catalog returned HTTP {resp.status_code}")

        try:
            return ResultPage.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            logger.error("catalog payload not understood: %s", e)
            raise CatalogError("catalog returned an invalid payload") from e


def build_catalog():
    """HttpCatalog when CATALOG_URL is configured, the bundled flat file otherwise."""
    if config.CATALOG_URL:
        logger.info("using inventory service at %s", config.CATALOG_URL)
        return HttpCatalog(config.CATALOG_URL, timeout=config.CATALOG_TIMEOUT)
    from carfinder.reco.catalog import LocalCatalog
    logger.info("using local catalog %s", config.CATALOG_PATH)
    return LocalCatalog(config.CATALOG_PATH)
