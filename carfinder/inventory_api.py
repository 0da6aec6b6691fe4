# carfinder/inventory_api.py
"""
Flat-file inventory service: the HTTP side of the catalog that HttpCatalog
talks to. Every listing answers {total, page, limit, results}.
"""
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from carfinder import config
from carfinder.logger import get_logger
from carfinder.reco.catalog import LocalCatalog
from carfinder.reco.client import CatalogError
from carfinder.schemas import FilterCriteria, ResultPage, parse_sort_key

logger = get_logger("inventory_api")

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

DEFAULT_PAGE_SIZE = 100


@lru_cache(maxsize=1)
def _load_local_catalog() -> LocalCatalog:
    return LocalCatalog(config.CATALOG_PATH)


def get_local_catalog() -> LocalCatalog:
    try:
        return _load_local_catalog()
    except CatalogError as e:
        logger.error("inventory unavailable: %s", e)
        raise HTTPException(status_code=500, detail="Failed to load inventory data")


def _dump(result: ResultPage) -> dict:
    return result.model_dump(by_alias=True)


@router.get("")
def list_inventory(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    page: int = Query(1, ge=1),
    sortBy: Optional[str] = None,
    catalog: LocalCatalog = Depends(get_local_catalog),
):
    criteria = FilterCriteria(page=page, sort_by=parse_sort_key(sortBy))
    return _dump(catalog.page(criteria, limit=limit))


@router.get("/filter")
def filter_inventory(
    brand: Optional[str] = None,
    model: Optional[str] = None,
    minPrice: Optional[str] = None,
    maxPrice: Optional[str] = None,
    color: Optional[str] = None,
    fuelType: Optional[str] = None,
    transmission: Optional[str] = None,
    excludeBrand: Optional[str] = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    page: int = Query(1, ge=1),
    sortBy: Optional[str] = None,
    catalog: LocalCatalog = Depends(get_local_catalog),
):
    criteria = FilterCriteria(
        brand=brand, model=model, min_price=minPrice, max_price=maxPrice,
        color=color, fuel_type=fuelType, transmission=transmission,
        exclude_brand=excludeBrand, page=page, sort_by=parse_sort_key(sortBy),
    )
    return _dump(catalog.page(criteria, limit=limit))


@router.get("/search")
def search_inventory(
    q: Optional[str] = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    page: int = Query(1, ge=1),
    sortBy: Optional[str] = None,
    catalog: LocalCatalog = Depends(get_local_catalog),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail='Search query parameter "q" is required')
    criteria = FilterCriteria(search=q, page=page, sort_by=parse_sort_key(sortBy))
    out = _dump(catalog.page(criteria, limit=limit))
    out["searchTerm"] = q
    return out


@router.get("/brand/{brand_name}")
def inventory_by_brand(
    brand_name: str,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    page: int = Query(1, ge=1),
    sortBy: Optional[str] = None,
    catalog: LocalCatalog = Depends(get_local_catalog),
):
    result = catalog.by_brand(brand_name, sort_by=parse_sort_key(sortBy), page=page, limit=limit)
    if result.total == 0:
        raise HTTPException(status_code=404, detail=f"No items found for brand: {brand_name}")
    return _dump(result)


@router.get("/{item_id}")
def inventory_item(item_id: int, catalog: LocalCatalog = Depends(get_local_catalog)):
    car = catalog.get(item_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return car.model_dump(by_alias=True)
