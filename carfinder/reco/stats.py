# carfinder/reco/stats.py
from __future__ import annotations
from typing import Iterable

from carfinder.nlp.normalize import round_half_up
from carfinder.schemas import Car, PriceStats


def calculate_price_stats(cars: Iterable[Car]) -> PriceStats:
    """min / max / avg price of a result set (avg rounded half up). Empty -> all None."""
    prices = [c.price for c in cars]
    if not prices:
        return PriceStats()
    return PriceStats(
        min=min(prices),
        max=max(prices),
        avg=round_half_up(sum(prices) / len(prices)),
    )
