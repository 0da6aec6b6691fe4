# carfinder/context.py
from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from carfinder.logger import get_logger
from carfinder.nlp.normalize import round_half_up
from carfinder.schemas import FilterCriteria, PriceStats
from carfinder.settings import DERIVED_RANGE_PADDING, MAX_CONVERSATIONS, PRICE_REFERENCE_BAND

logger = get_logger("context")

DEFAULT_CONVERSATION = "default"


@dataclass(frozen=True)
class PriceRange:
    min: Optional[float]
    max: Optional[float]
    derived: bool = False  # True when inferred from results, not asked for


@dataclass
class ConversationContext:
    """Memory of one conversation, used to resolve follow-up turns."""
    last_filter: Optional[FilterCriteria] = None
    last_price_range: Optional[PriceRange] = None
    last_brand: Optional[str] = None
    last_result_stats: Optional[PriceStats] = None

    def read(self) -> "ConversationContext":
        return replace(self)

    def update(self, criteria: FilterCriteria, stats: Optional[PriceStats] = None) -> None:
        self.last_filter = criteria

        if criteria.has_price_bounds:
            self.last_price_range = PriceRange(criteria.min_price, criteria.max_price)
        elif stats is not None and stats.available:
            # Unconstrained search: anchor later "same price range" on what was shown
            self.last_price_range = PriceRange(
                stats.min * (1 - DERIVED_RANGE_PADDING),
                stats.max * (1 + DERIVED_RANGE_PADDING),
                derived=True,
            )

        if criteria.brand:
            self.last_brand = criteria.brand

        if stats is not None and stats.available:
            self.last_result_stats = stats

    def reset_filter(self) -> None:
        self.last_filter = None

    def reference_price_range(self) -> Optional[Tuple[Optional[float], Optional[float]]]:
        """
        Range for "same price range" / "this price range":
          1) last explicit bounds
          2) last average price ±30%
          3) derived range of the last unconstrained search
        """
        rng = self.last_price_range
        if rng is not None and not rng.derived:
            return rng.min, rng.max

        stats = self.last_result_stats
        if stats is not None and stats.available:
            return (
                round_half_up(stats.avg * (1 - PRICE_REFERENCE_BAND)),
                round_half_up(stats.avg * (1 + PRICE_REFERENCE_BAND)),
            )

        if rng is not None:
            return rng.min, rng.max
        return None


class ConversationStore:
    """
    conversation id -> ConversationContext, least recently used first.
    Past max_size the oldest conversation is forgotten.
    """

    def __init__(self, max_size: int = MAX_CONVERSATIONS):
        self.max_size = max(max_size, 1)
        self._contexts: "OrderedDict[str, ConversationContext]" = OrderedDict()

    def get(self, conversation_id: Optional[str] = None) -> ConversationContext:
        key = conversation_id or DEFAULT_CONVERSATION
        ctx = self._contexts.get(key)
        if ctx is not None:
            self._contexts.move_to_end(key)
            return ctx

        logger.debug("new conversation context: %s", key)
        ctx = self._contexts[key] = ConversationContext()
        while len(self._contexts) > self.max_size:
            old, _ = self._contexts.popitem(last=False)
            logger.debug("dropping conversation context: %s", old)
        return ctx

    def __contains__(self, conversation_id: str) -> bool:
        return conversation_id in self._contexts

    def clear(self) -> None:
        self._contexts.clear()

    def __len__(self) -> int:
        return len(self._contexts)


# Process-wide registry, keyed by conversation
SESSIONS = ConversationStore()
