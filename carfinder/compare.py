# carfinder/compare.py
from __future__ import annotations
import asyncio
from typing import List, Optional, Sequence

from carfinder.logger import get_logger
from carfinder.nlp.normalize import fmt_inr
from carfinder.schemas import Car, FilterCriteria
from carfinder.texts import COMPARE_NOT_ENOUGH, COMPARE_TITLE

logger = get_logger("compare")


async def _first_match(catalog, model: str) -> Optional[Car]:
    page = await catalog.query(FilterCriteria(model=model, limit=1))
    return page.results[0] if page.results else None


async def fetch_for_comparison(catalog, models: Sequence[str]) -> List[Car]:
    """
    One single-result lookup per model, run concurrently. Models that fail or
    match nothing are dropped; the rest keep the order they were asked in.
    """
    outcomes = await asyncio.gather(
        *(_first_match(catalog, m) for m in models),
        return_exceptions=True,
    )
    cars: List[Car] = []
    for model, outcome in zip(models, outcomes):
        if isinstance(outcome, Exception):
            logger.warning("comparison lookup failed for %s: %s", model, outcome)
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            logger.warning("no car found for %s, left out of the comparison", model)
            continue
        cars.append(outcome)
    return cars


def render_comparison(cars: Sequence[Car]) -> str:
    """Markdown table, one column per car."""
    if len(cars) < 2:
        return COMPARE_NOT_ENOUGH

    def row(label: str, values) -> str:
        return f"| {label} | " + " | ".join(values) + " |"

    lines = [
        row("Feature", [f"{c.year} {c.brand} {c.model}" for c in cars]),
        "|" + "-" * 10 + "|" + "|".join("-" * 20 for _ in cars) + "|",
        row("Price", [fmt_inr(c.price) for c in cars]),
        row("Color", [c.color or "-" for c in cars]),
        row("Fuel Type", [c.fuel_type or "-" for c in cars]),
        row("Transmission", [c.transmission or "-" for c in cars]),
        row("Seats", [str(c.seats) if c.seats is not None else "-" for c in cars]),
    ]
    return f"{COMPARE_TITLE}\n\n" + "\n".join(lines)


async def compare_models(catalog, models: Sequence[str]) -> str:
    models = [m for m in (str(x).strip() for x in models or []) if m]
    if len(models) < 2:
        return COMPARE_NOT_ENOUGH
    cars = await fetch_for_comparison(catalog, models)
    return render_comparison(cars)
