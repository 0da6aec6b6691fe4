# carfinder/router.py
import math
from typing import List

from carfinder.nlp.aliases import BUDGET_BRANDS, PREMIUM_BRANDS
from carfinder.nlp.normalize import fmt_inr
from carfinder.schemas import Car, FilterCriteria, ResultPage
from carfinder.settings import PREMIUM_BUDGET_HINT
from carfinder import texts


def _fmt_price(x) -> str:
    return fmt_inr(x)


def _or_dash(v) -> str:
    return str(v) if v not in (None, "") else "-"


def format_car(c: Car) -> str:
    return (
        f"{c.year} {c.brand} {c.model}\n"
        f"  • Color: {_or_dash(c.color)}\n"
        f"  • Price: {_fmt_price(c.price)}\n"
        f"  • Fuel Type: {_or_dash(c.fuel_type)}\n"
        f"  • Transmission: {_or_dash(c.transmission)}\n"
        f"  • Seats: {_or_dash(c.seats)}"
    )


# ---------- summary of the filters that produced a page ----------
def describe_filters(f: FilterCriteria) -> str:
    """'Found red colored Honda cars with price below ₹10,00,000' and the like."""
    if f.search:
        return f'Found cars matching "{f.search}"'

    chips: List[str] = ["Found"]
    if f.color:        chips.append(f"{f.color} colored")
    if f.brand:        chips.append(f.brand)
    if f.model:        chips.append(f.model)
    if f.fuel_type:    chips.append(f.fuel_type)
    if f.transmission: chips.append(f.transmission)

    if f.min_price is not None and f.max_price is not None:
        chips.append(f"cars priced between {_fmt_price(f.min_price)} and {_fmt_price(f.max_price)}")
    elif f.min_price is not None:
        chips.append(f"cars with price above {_fmt_price(f.min_price)}")
    elif f.max_price is not None:
        chips.append(f"cars with price below {_fmt_price(f.max_price)}")
    else:
        chips.append("cars")

    if f.exclude_brand:
        chips.append(f"(excluding {f.exclude_brand})")
    return " ".join(chips)


# ---------- empty results ----------
def compose_empty(f: FilterCriteria) -> str:
    alternatives = ", ".join(BUDGET_BRANDS[:-1]) + f", or {BUDGET_BRANDS[-1]}"
    if f.brand and f.max_price is not None:
        price = _fmt_price(f.max_price)
        if f.brand.lower() in PREMIUM_BRANDS:
            return texts.EMPTY_PREMIUM.format(
                brand=f.brand, price=price,
                hint=_fmt_price(PREMIUM_BUDGET_HINT), alternatives=alternatives,
            )
        return texts.EMPTY_BRAND_PRICE.format(brand=f.brand, price=price, alternatives=alternatives)
    if f.brand:
        return texts.EMPTY_BRAND.format(brand=f.brand)
    if f.max_price is not None:
        return texts.EMPTY_PRICE.format(price=_fmt_price(f.max_price))
    return texts.EMPTY_GENERIC


# ---------- pagination footer ----------
def pagination_footer(total: int, page: int, limit: int) -> str:
    pages = math.ceil(total / limit) if limit else 1
    if total > page * limit:
        footer = texts.FOOTER_MORE.format(page=page, pages=pages, next=page + 1)
        if page == 1 and limit < total <= 10:
            footer += texts.FOOTER_SHOW_ALL.format(total=total)
        return footer
    if page > 1:
        return texts.FOOTER_END.format(total=total)
    return ""


def compose_results(result: ResultPage, f: FilterCriteria) -> str:
    """
    Builds the reply for one catalog page:
    - total == 0      -> tailored suggestion
    - page past end   -> end-of-results text
    - otherwise       -> summary + counts, one block per car, pagination footer
    """
    if result.total == 0:
        return compose_empty(f)

    cars = result.results
    if not cars:
        return texts.PAST_LAST_PAGE.format(total=result.total)

    page = result.page or f.page
    limit = f.limit
    shown = len(cars)
    pages = math.ceil(result.total / limit)

    header = describe_filters(f)
    if result.total > shown:
        header += f" ({result.total} total, page {page} of {pages}, showing {shown}):"
    else:
        header += f" ({result.total} result{'s' if result.total != 1 else ''}):"

    body = "\n\n".join(format_car(c) for c in cars)
    return f"{header}\n\n{body}" + pagination_footer(result.total, page, limit)
