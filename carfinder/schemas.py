from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carfinder.nlp.normalize import normalize_price
from carfinder.settings import DEFAULT_LIMIT, MAX_LIMIT


class SortKey(str, Enum):
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    YEAR_ASC = "year-asc"
    YEAR_DESC = "year-desc"


def parse_sort_key(value: Any) -> Optional[SortKey]:
    """'price-asc', 'PRICE_ASC', SortKey.PRICE_ASC -> SortKey; anything else -> None."""
    if value is None or isinstance(value, SortKey):
        return value
    try:
        return SortKey(str(value).strip().lower().replace("_", "-"))
    except ValueError:
        return None


# Fields that make a request a new query (limit/page/search are not filters)
FILTER_FIELDS = (
    "brand", "model", "min_price", "max_price", "color",
    "fuel_type", "transmission", "exclude_brand", "sort_by",
)


class FilterCriteria(BaseModel):
    """
    Effective query sent to the catalog. Every entry point builds one of
    these, so defaults and clamps live only here:
      - limit: default 5, clamped to [1, 10]
      - page: default 1, never below 1
      - min_price / max_price: normalized, malformed -> None
    """
    brand: Optional[str] = None
    model: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    color: Optional[str] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    exclude_brand: Optional[str] = None
    sort_by: Optional[SortKey] = None
    limit: int = DEFAULT_LIMIT
    page: int = 1
    search: Optional[str] = None

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _price(cls, v):
        return normalize_price(v)

    @field_validator("limit", mode="before")
    @classmethod
    def _limit(cls, v):
        try:
            n = int(v)
        except (TypeError, ValueError):
            return DEFAULT_LIMIT
        return min(max(n, 1), MAX_LIMIT)

    @field_validator("page", mode="before")
    @classmethod
    def _page(cls, v):
        try:
            n = int(v)
        except (TypeError, ValueError):
            return 1
        return max(n, 1)

    def replace(self, **changes: Any) -> "FilterCriteria":
        """Copy with changes, re-running validation (model_copy would skip it)."""
        data = self.model_dump()
        data.update(changes)
        return FilterCriteria(**data)

    def filters(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in FILTER_FIELDS if getattr(self, k) is not None}

    @property
    def has_price_bounds(self) -> bool:
        return self.min_price is not None or self.max_price is not None


class InventoryRequest(BaseModel):
    """
    Tool input: FilterCriteria-shaped, every field optional. camelCase names
    (minPrice, fuelType, sortBy, compareModels...) are accepted too.
    """
    model_config = ConfigDict(populate_by_name=True)

    brand: Optional[str] = None
    model: Optional[str] = None
    min_price: Optional[Union[float, str]] = Field(None, alias="minPrice")
    max_price: Optional[Union[float, str]] = Field(None, alias="maxPrice")
    color: Optional[str] = None
    fuel_type: Optional[str] = Field(None, alias="fuelType")
    transmission: Optional[str] = None
    exclude_brand: Optional[str] = Field(None, alias="excludeBrand")
    sort_by: Optional[SortKey] = Field(None, alias="sortBy")
    limit: Optional[int] = None
    page: Optional[int] = None
    search: Optional[str] = Field(None, description="Free text, e.g. 'red Honda under 10 lakh'")
    compare_models: Optional[List[str]] = Field(None, alias="compareModels")
    conversation_id: Optional[str] = Field(None, alias="conversationId")

    # Unusable values count as not given
    @field_validator("sort_by", mode="before")
    @classmethod
    def _sort_by(cls, v):
        return parse_sort_key(v)

    @field_validator("limit", "page", mode="before")
    @classmethod
    def _whole_number(cls, v):
        if v is None or isinstance(v, bool):
            return None
        try:
            return int(float(v))
        except (TypeError, ValueError, OverflowError):
            return None

    def supplied_filters(self) -> Dict[str, Any]:
        """Filter fields the caller actually set (raw, before canonicalization)."""
        out = {}
        for k in FILTER_FIELDS:
            v = getattr(self, k)
            if v is None or (isinstance(v, str) and not v.strip()):
                continue
            out[k] = v
        return out


class ChatRequest(BaseModel):
    text: str = Field(..., description="User message text")
    conversation_id: Optional[str] = None


class Car(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brand: str
    model: str
    year: int
    price: int
    color: str = ""
    fuel_type: str = Field("", alias="fuelType")
    transmission: str = ""
    seats: Optional[int] = None


class ResultPage(BaseModel):
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_LIMIT
    results: List[Car] = Field(default_factory=list)


class PriceStats(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None
    avg: Optional[int] = None

    @property
    def available(self) -> bool:
        return self.avg is not None
