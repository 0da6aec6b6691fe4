# carfinder/nlp/normalize.py
from __future__ import annotations
import math
import re
from typing import Iterable, List, Optional, Union
from unidecode import unidecode
from rapidfuzz import process, distance

from carfinder.nlp.aliases import BRAND_ALIAS


# -----------------------------------------------------------------------------
# Basic normalization
# -----------------------------------------------------------------------------
def norm_txt(s: Optional[str]) -> str:
    """
    Strips accents, lower-cases and collapses whitespace.
    The rupee sign is kept so price phrases survive.
    """
    s = (s or "").replace("₹", " ₹")
    s = "".join(ch if ch == "₹" else unidecode(ch) for ch in s)
    s = s.strip().lower()
    s = re.sub(r"\s+", " ", s)
    return s.replace("₹ ", "₹")


def vocab_pattern(words: Iterable[str]) -> re.Pattern:
    """
    Whole-word alternation over a vocabulary. Longer entries go first so
    "maruti suzuki" wins over "maruti" at the same position.
    """
    alts = sorted({re.escape(w) for w in words}, key=len, reverse=True)
    return re.compile(r"(?<![\w-])(" + "|".join(alts) + r")(?![\w-])")


# -----------------------------------------------------------------------------
# Prices
# -----------------------------------------------------------------------------
_MULTIPLIERS = {
    "k": 1_000, "thousand": 1_000,
    "lakh": 100_000, "lakhs": 100_000, "lac": 100_000, "lacs": 100_000,
    "crore": 10_000_000, "crores": 10_000_000, "cr": 10_000_000,
}
_MULT_RE = re.compile(r"\d\s*(" + "|".join(sorted(_MULTIPLIERS, key=len, reverse=True)) + r")\b")

# Amount as written in a sentence: ₹10,00,000 | 10 lakh | 6.5 lakhs | 800k
MONEY_TOKEN = r"₹?\s*\d[\d,]*(?:\.\d+)?(?:\s*(?:lakhs?|lacs?|crores?|cr|thousand|k)\b)?"


def normalize_price(value: Union[int, float, str, None]) -> Optional[Union[int, float]]:
    """
    Converts "₹6,70,000", "670000", "10 lakh", 650000.0 ... into a number.
    Anything without parseable digits comes back as None (no constraint).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return None
        return value
    if not isinstance(value, str):
        return None

    t = value.strip().lower()
    m = _MULT_RE.search(t)
    multiplier = _MULTIPLIERS[m.group(1)] if m else 1

    clean = re.sub(r"[^0-9.]", "", t).strip(".")
    if not clean:
        return None
    try:
        val = float(clean) * multiplier
    except ValueError:
        return None
    return int(val) if val.is_integer() else val


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def fmt_inr(x: Union[int, float]) -> str:
    """Rupees with Indian digit grouping: 1000000 -> ₹10,00,000."""
    n = round_half_up(float(x))
    s = str(abs(n))
    if len(s) > 3:
        head, tail = s[:-3], s[-3:]
        groups: List[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        s = ",".join(groups + [tail])
    return f"₹{'-' if n < 0 else ''}{s}"


# -----------------------------------------------------------------------------
# Brand canonicalization (alias + fuzzy)
# -----------------------------------------------------------------------------
def canonical_brand(value: Optional[str]) -> Optional[str]:
    """Alias table lookup; unknown brands are returned as given (stripped)."""
    if not value:
        return None
    key = norm_txt(value)
    return BRAND_ALIAS.get(key, value.strip())


def fuzzy_brand(tokens: List[str], score_cutoff: float = 0.82) -> Optional[str]:
    """
    Last resort for typos ("toyata", "hundai", "maruthi"): first token whose
    normalized Levenshtein similarity to a known brand spelling passes the cutoff.
    """
    spellings = list(BRAND_ALIAS)
    for tok in tokens:
        if len(tok) < 4:
            continue
        best = process.extractOne(
            tok, spellings,
            scorer=distance.Levenshtein.normalized_similarity,
            score_cutoff=score_cutoff,
        )
        if best:
            return BRAND_ALIAS[best[0]]
    return None
