# carfinder/reco/catalog.py
from __future__ import annotations
import os
from typing import Optional

import pandas as pd

from carfinder.logger import get_logger
from carfinder.nlp.aliases import COLOR_ALIAS, COLOR_SPELLINGS
from carfinder.reco.client import CatalogError
from carfinder.schemas import Car, FilterCriteria, ResultPage, SortKey

logger = get_logger("catalog")

# ------------------------------------------------------------------------------------
# Schema
# ------------------------------------------------------------------------------------
# brand,model,year,price,color,fuel_type,transmission,seats
REQUIRED = ["brand", "model", "year", "price"]
TEXT_COLS = ["brand", "model", "color", "fuel_type", "transmission"]

SYNONYMS = {
    "brand":        ["brand", "make", "manufacturer"],
    "model":        ["model", "name"],
    "year":         ["year", "model_year"],
    "price":        ["price", "amount", "cost", "ex_showroom"],
    "color":        ["color", "colour"],
    "fuel_type":    ["fuel_type", "fueltype", "fuel"],
    "transmission": ["transmission", "gearbox"],
    "seats":        ["seats", "seatcount", "seat_count", "seating"],
}

SORTS = {
    SortKey.PRICE_ASC:  ("price", True),
    SortKey.PRICE_DESC: ("price", False),
    SortKey.YEAR_ASC:   ("year", True),
    SortKey.YEAR_DESC:  ("year", False),
}


# ------------------------------------------------------------------------------------
# Load and normalize
# ------------------------------------------------------------------------------------
def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Maps column synonyms to the canonical schema and fixes dtypes."""
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]

    rename = {}
    for target, alts in SYNONYMS.items():
        if target in df.columns:
            continue
        for col in df.columns:
            if col in alts:
                rename[col] = target
                break
    if rename:
        df = df.rename(columns=rename)

    missing = [c for c in REQUIRED if c not in df.columns]
    if missing:
        raise CatalogError(f"catalog is missing columns: {missing}")

    for col in TEXT_COLS:
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].fillna("").astype(str).str.strip()
    if "seats" not in df.columns:
        df["seats"] = pd.NA

    df["year"] = pd.to_numeric(df["year"], errors="coerce").fillna(0).astype(int)
    df["price"] = pd.to_numeric(df["price"], errors="coerce")
    df["seats"] = pd.to_numeric(df["seats"], errors="coerce").round().astype("Int64")

    # rows without a usable price cannot be ranked or filtered
    df = df[df["price"].notna() & (df["brand"] != "") & (df["model"] != "")].copy()
    df["price"] = df["price"].round().astype(int)
    return df.reset_index(drop=True)


def load_catalog(path: str) -> pd.DataFrame:
    """
    Reads the inventory file once. CSV (comma, falling back to ';') or a
    JSON array of car objects, picked by extension.
    """
    if not os.path.exists(path):
        raise CatalogError(f"catalog file not found: {path}")
    try:
        if path.lower().endswith(".json"):
            df = pd.read_json(path, orient="records")
        else:
            df = pd.read_csv(path)
            if len(df.columns) == 1:
                df = pd.read_csv(path, sep=";")
    except (ValueError, OSError) as e:
        raise CatalogError(f"catalog file could not be read: {e}") from e
    df = normalize_columns(df)
    logger.info("loaded %d cars from %s", len(df), path)
    return df


# ------------------------------------------------------------------------------------
# Filters
# ------------------------------------------------------------------------------------
def _contains(series: pd.Series, value: str) -> pd.Series:
    return series.str.lower().str.contains(value.strip().lower(), regex=False)


def _color_mask(series: pd.Series, value: str) -> pd.Series:
    """'grey' also matches 'Gray', 'gold' also matches 'Golden'."""
    key = value.strip().lower()
    mask = pd.Series(False, index=series.index)
    for spelling in COLOR_SPELLINGS.get(COLOR_ALIAS.get(key, key), (key,)):
        mask |= _contains(series, spelling)
    return mask


def apply_filters(df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    sub = df
    for col in TEXT_COLS:
        value = getattr(criteria, col)
        if value:
            mask = _color_mask(sub[col], value) if col == "color" else _contains(sub[col], value)
            sub = sub[mask]

    if criteria.exclude_brand:
        sub = sub[sub["brand"].str.lower() != criteria.exclude_brand.strip().lower()]

    if criteria.min_price is not None:
        sub = sub[sub["price"] >= float(criteria.min_price)]
    if criteria.max_price is not None:
        sub = sub[sub["price"] <= float(criteria.max_price)]

    if criteria.search:
        sub = sub[search_mask(sub, criteria.search)]
    return sub


def search_mask(df: pd.DataFrame, q: str) -> pd.Series:
    """True where any field, rendered as text, contains q."""
    term = q.strip().lower()
    mask = pd.Series(False, index=df.index)
    for col in df.columns:
        mask |= df[col].astype(str).str.lower().str.contains(term, regex=False)
    return mask


def sort_frame(df: pd.DataFrame, sort_by: Optional[SortKey]) -> pd.DataFrame:
    if sort_by is None:
        return df
    col, ascending = SORTS[sort_by]
    # mergesort keeps catalog order among equal keys
    return df.sort_values(by=col, ascending=ascending, kind="mergesort")


def _row_to_car(row) -> Car:
    seats = row["seats"]
    return Car(
        brand=str(row["brand"]),
        model=str(row["model"]),
        year=int(row["year"]),
        price=int(row["price"]),
        color=str(row["color"]),
        fuel_type=str(row["fuel_type"]),
        transmission=str(row["transmission"]),
        seats=None if pd.isna(seats) else int(seats),
    )


def paginate(df: pd.DataFrame, page: int, limit: int) -> ResultPage:
    start = (page - 1) * limit
    rows = df.iloc[start:start + limit]
    return ResultPage(
        total=len(df),
        page=page,
        limit=limit,
        results=[_row_to_car(r) for _, r in rows.iterrows()],
    )


# ------------------------------------------------------------------------------------
# High-level API
# ------------------------------------------------------------------------------------
class LocalCatalog:
    """
    In-process catalog over a pandas DataFrame. Loads the file once and
    answers the same {total, page, limit, results} shape as the HTTP service.
    """
    def __init__(self, path: Optional[str] = None, df: Optional[pd.DataFrame] = None):
        if df is None and path is None:
            raise CatalogError("LocalCatalog needs a path or a DataFrame")
        self.path = path
        self.df = normalize_columns(df) if df is not None else load_catalog(path)

    def __len__(self) -> int:
        return len(self.df)

    def page(self, criteria: FilterCriteria, limit: Optional[int] = None) -> ResultPage:
        """limit overrides the (clamped) criteria limit, for the inventory API."""
        sub = sort_frame(apply_filters(self.df, criteria), criteria.sort_by)
        return paginate(sub, criteria.page, limit or criteria.limit)

    async def query(self, criteria: FilterCriteria) -> ResultPage:
        return self.page(criteria)

    def by_brand(self, brand: str, sort_by: Optional[SortKey] = None,
                 page: int = 1, limit: int = 100) -> ResultPage:
        """Exact (case-insensitive) brand listing."""
        sub = self.df[self.df["brand"].str.lower() == brand.strip().lower()]
        return paginate(sort_frame(sub, sort_by), page, limit)

    def get(self, index: int) -> Optional[Car]:
        if index < 0 or index >= len(self.df):
            return None
        return _row_to_car(self.df.iloc[index])
