# carfinder/nlp/intent.py
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from carfinder.nlp.aliases import (
    BRAND_ALIAS, MODEL_ALIAS, AMBIGUOUS_MODELS, COLOR_ALIAS, FUEL_ALIAS, TRANSMISSION_ALIAS,
    CHEAP_TERMS, EXPENSIVE_TERMS, CHEAP_SUPERLATIVES, EXPENSIVE_SUPERLATIVES,
    STOPWORDS,
)
from carfinder.nlp.normalize import MONEY_TOKEN, norm_txt, normalize_price, vocab_pattern, fuzzy_brand
from carfinder.schemas import SortKey
from carfinder.settings import DEFAULT_LIMIT


@dataclass
class Extraction:
    """What the free text asked for, before context and explicit fields are applied."""
    brand: Optional[str] = None
    model: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    color: Optional[str] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    sort_by: Optional[SortKey] = None
    limit: Optional[int] = None
    references_last_price_range: bool = False
    references_other_brand: bool = False
    bare_superlative: bool = False
    compare_models: List[str] = field(default_factory=list)

    def fields(self) -> Dict[str, Any]:
        keys = ("brand", "model", "min_price", "max_price", "color",
                "fuel_type", "transmission", "sort_by")
        return {k: getattr(self, k) for k in keys if getattr(self, k) is not None}

    @property
    def matched(self) -> bool:
        return bool(
            self.fields() or self.limit is not None
            or self.references_last_price_range or self.references_other_brand
            or self.compare_models
        )


# ---------------- Regexes ----------------
BRAND_RE = vocab_pattern(BRAND_ALIAS)
MODEL_RE = vocab_pattern(MODEL_ALIAS)
COLOR_RE = vocab_pattern(COLOR_ALIAS)
FUEL_RE = vocab_pattern(FUEL_ALIAS)
TRANSMISSION_RE = vocab_pattern(TRANSMISSION_ALIAS)
CHEAP_RE = vocab_pattern(CHEAP_TERMS)
EXPENSIVE_RE = vocab_pattern(EXPENSIVE_TERMS)

# Whole message is only a superlative: "cheapest", "the most expensive one"
_TAIL = r"(?:\s+(?:car|one|option))?\s*[?.!]*\s*$"
BARE_CHEAP_RE = re.compile(
    r"^\s*(?:show\s+(?:me\s+)?)?(?:the\s+)?(?:" + "|".join(CHEAP_SUPERLATIVES) + r")" + _TAIL)
BARE_EXPENSIVE_RE = re.compile(
    r"^\s*(?:show\s+(?:me\s+)?)?(?:the\s+)?(?:most\s+)?(?:" + "|".join(EXPENSIVE_SUPERLATIVES) + r")" + _TAIL)

# Price bounds
BETWEEN_RE = re.compile(rf"\bbetween\s+({MONEY_TOKEN})\s+(?:and|to|-)\s+({MONEY_TOKEN})")
UNDER_RE = re.compile(rf"\b(?:under|below|less than|within|up to|upto)\s+(?:rs\.?\s*|inr\s*)?({MONEY_TOKEN})")
ABOVE_RE = re.compile(rf"\b(?:above|over|more than|at least)\s+(?:rs\.?\s*|inr\s*)?({MONEY_TOKEN})")
UNIT_RE = re.compile(r"(lakhs?|lacs?|crores?|cr|thousand|k)\b")

# Brand written right before a model: "honda city", "vw polo"
BRAND_BEFORE_RE = re.compile(BRAND_RE.pattern + r"\s+$")

# "show 5 red honda cars", "top 3", "first 10"
COUNT_RE = re.compile(
    r"\b(?:show|list|find|get|give|display|top|first)\s+(?:me\s+)?(?:the\s+)?(?:top\s+)?(\d{1,2})\b"
    r"(?!\s*(?:lakhs?|lacs?|crores?|cr|k)\b)"
)

# Relational references
SAME_PRICE_RE = re.compile(r"\b(?:same|this|that|similar)\s+(?:price|range|budget)\b")
OTHER_BRAND_RE = re.compile(r"\b(?:other|another|different)\s+(?:brand|make|manufacturer|car)s?\b")

COMPARE_RE = re.compile(r"\b(?:compare|comparison|vs\.?|versus)\b")

# Paging phrases (whole message)
NEXT_RE = re.compile(
    r"^\s*(?:show\s+(?:me\s+)?)?(?:the\s+)?(?:next|more)(?:\s+(\d{1,2}))?"
    r"(?:\s+(?:page|cars|results|ones|options))?\s*(?:please)?\s*[?.!]*\s*$"
)
PAGE_RE = re.compile(r"^\s*(?:go\s+to\s+|show\s+(?:me\s+)?)?page\s+(\d{1,3})\s*[?.!]*\s*$")
SHOW_ALL_RE = re.compile(r"^\s*show\s+(?:me\s+)?all\s+(\d{1,2})\s*(?:cars|results)?\s*[?.!]*\s*$")


# ---------------- Rules ----------------
# Each rule fills its own slot; the first match in the text wins.
def _brand(t: str, out: Extraction) -> None:
    m = BRAND_RE.search(t)
    if m:
        out.brand = BRAND_ALIAS[m.group(1)]
        return
    # typo pass on words that are not part of any other vocabulary
    known = set(MODEL_ALIAS) | set(COLOR_ALIAS) | set(FUEL_ALIAS) | set(TRANSMISSION_ALIAS) \
        | CHEAP_TERMS | EXPENSIVE_TERMS | STOPWORDS
    tokens = [tok for tok in re.split(r"[^a-z0-9-]+", t) if tok and tok not in known]
    out.brand = fuzzy_brand(tokens)


def _shared_unit(lo: str, hi: str) -> str:
    """'between 5 and 10 lakh': a bare first amount takes the second one's unit."""
    unit = UNIT_RE.search(hi)
    if unit is None or UNIT_RE.search(lo) or "₹" in lo or "," in lo:
        return lo
    scaled = f"{lo} {unit.group(1)}"
    lo_val, hi_val = normalize_price(scaled), normalize_price(hi)
    if lo_val is None or hi_val is None or lo_val > hi_val:
        return lo
    return scaled


def _price_bounds(t: str, out: Extraction) -> None:
    m = BETWEEN_RE.search(t)
    if m:
        lo_txt = _shared_unit(m.group(1), m.group(2))
        lo, hi = normalize_price(lo_txt), normalize_price(m.group(2))
        if lo is not None and hi is not None:
            out.min_price, out.max_price = min(lo, hi), max(lo, hi)
            return
    m = UNDER_RE.search(t)
    if m:
        out.max_price = normalize_price(m.group(1))
    m = ABOVE_RE.search(t)
    if m:
        out.min_price = normalize_price(m.group(1))


def _price_terms(t: str, out: Extraction) -> None:
    # "same budget" points at the previous range, it does not ask for a sort
    scan = SAME_PRICE_RE.sub(" ", t)
    if CHEAP_RE.search(scan):
        out.sort_by = SortKey.PRICE_ASC
        bare = BARE_CHEAP_RE.match(t)
    elif EXPENSIVE_RE.search(scan):
        out.sort_by = SortKey.PRICE_DESC
        bare = BARE_EXPENSIVE_RE.match(t)
    else:
        return
    out.bare_superlative = bool(bare)
    if out.limit is None:
        out.limit = 1 if bare else DEFAULT_LIMIT


def _count(t: str, out: Extraction) -> None:
    m = COUNT_RE.search(t)
    if m:
        out.limit = int(m.group(1))


def _models(t: str, loose: bool = False) -> List[str]:
    """Model names in text order. Everyday-word models need a brand in front unless loose."""
    found: List[str] = []
    for m in MODEL_RE.finditer(t):
        word = m.group(1)
        if not loose and word in AMBIGUOUS_MODELS and not BRAND_BEFORE_RE.search(t[:m.start()]):
            continue
        name = MODEL_ALIAS[word]
        if name not in found:
            found.append(name)
    return found


def _model(t: str, out: Extraction) -> None:
    models = _models(t)
    if models:
        out.model = models[0]


def _color(t: str, out: Extraction) -> None:
    m = COLOR_RE.search(t)
    if m:
        out.color = COLOR_ALIAS[m.group(1)]


def _fuel(t: str, out: Extraction) -> None:
    m = FUEL_RE.search(t)
    if m:
        out.fuel_type = FUEL_ALIAS[m.group(1)]


def _transmission(t: str, out: Extraction) -> None:
    m = TRANSMISSION_RE.search(t)
    if m:
        out.transmission = TRANSMISSION_ALIAS[m.group(1)]


def _references(t: str, out: Extraction) -> None:
    out.references_last_price_range = bool(SAME_PRICE_RE.search(t))
    out.references_other_brand = bool(OTHER_BRAND_RE.search(t))


def _compare(t: str, out: Extraction) -> None:
    if not COMPARE_RE.search(t):
        return
    models = _models(t, loose=True)
    if len(models) >= 2:
        out.compare_models = models


# (slot, rule). Order is precedence.
RULES: List[Tuple[str, Callable[[str, Extraction], None]]] = [
    ("brand", _brand),
    ("price_bounds", _price_bounds),
    ("limit", _count),
    ("sort_by", _price_terms),
    ("model", _model),
    ("color", _color),
    ("fuel_type", _fuel),
    ("transmission", _transmission),
    ("references", _references),
    ("compare_models", _compare),
]


def extract_params(text: str) -> Extraction:
    """
    Scans free text for brand, price bounds, qualitative price terms, model,
    color, fuel type, transmission, result count, relational references and
    comparison targets. First matching pattern wins for each slot.
    """
    out = Extraction()
    t = norm_txt(text)
    if not t:
        return out
    for _slot, rule in RULES:
        rule(t, out)
    return out


def residual_search(text: str) -> Optional[str]:
    """Free text minus filler words, used as a catalog search term."""
    tokens = [tok for tok in re.split(r"[^\w-]+", norm_txt(text)) if tok and tok not in STOPWORDS]
    return " ".join(tokens) or None


# ---------------- Paging phrases ----------------
@dataclass
class PagingPhrase:
    kind: str                 # "next" | "page" | "all"
    page: Optional[int] = None
    limit: Optional[int] = None


def parse_paging(text: Optional[str]) -> Optional[PagingPhrase]:
    """
    Recognizes messages that only move through the previous results:
    "next", "more", "next 10 cars", "page 3", "show all 8 cars".
    """
    t = norm_txt(text)
    if not t:
        return None
    m = NEXT_RE.match(t)
    if m:
        return PagingPhrase("next", limit=int(m.group(1)) if m.group(1) else None)
    m = PAGE_RE.match(t)
    if m:
        return PagingPhrase("page", page=int(m.group(1)))
    m = SHOW_ALL_RE.match(t)
    if m:
        return PagingPhrase("all", page=1, limit=int(m.group(1)))
    return None


# ---------------- Canonical attributes ----------------
def canonical_color(value: Optional[str]) -> Optional[str]:
    m = COLOR_RE.search(norm_txt(value))
    return COLOR_ALIAS[m.group(1)] if m else None


def canonical_fuel(value: Optional[str]) -> Optional[str]:
    m = FUEL_RE.search(norm_txt(value))
    return FUEL_ALIAS[m.group(1)] if m else None


def canonical_transmission(value: Optional[str]) -> Optional[str]:
    m = TRANSMISSION_RE.search(norm_txt(value))
    return TRANSMISSION_ALIAS[m.group(1)] if m else None
