# tests/test_pagination.py
from carfinder.pagination import (
    CONTINUATION,
    EXPLICIT_JUMP,
    NEW_QUERY,
    classify,
    resolve,
)
from carfinder.schemas import FilterCriteria, InventoryRequest


def _req(**kw):
    return InventoryRequest(**kw)


def test_classify():
    assert classify(_req()) == CONTINUATION
    assert classify(_req(page=1)) == CONTINUATION
    assert classify(_req(limit=10)) == CONTINUATION
    assert classify(_req(page=3)) == EXPLICIT_JUMP
    assert classify(_req(page=3, limit=2)) == EXPLICIT_JUMP
    assert classify(_req(brand="Honda")) == NEW_QUERY
    assert classify(_req(brand="Honda", page=2)) == NEW_QUERY
    assert classify(_req(sortBy="price-asc")) == NEW_QUERY
    assert classify(_req(search="family")) == NEW_QUERY
    # blank strings are not filters
    assert classify(_req(brand="  ")) == CONTINUATION


def test_jump_without_previous_query_is_unfiltered_page_n():
    effective = resolve(EXPLICIT_JUMP, _req(page=4), None)
    assert effective.page == 4
    assert effective.filters() == {}
    assert effective.limit == 5


def test_continuation_without_previous_query_is_first_page():
    effective = resolve(CONTINUATION, _req(), None)
    assert effective.page == 1
    assert effective.filters() == {}


def test_continuation_advances_and_keeps_filters():
    last = FilterCriteria(brand="Honda", color="red", max_price=1000000, limit=3, page=2)
    effective = resolve(CONTINUATION, _req(), last)
    assert effective.page == 3
    assert effective.limit == 3
    assert effective.filters() == last.filters()


def test_limit_override_on_continuation_and_jump():
    last = FilterCriteria(brand="Honda", page=1)
    assert resolve(CONTINUATION, _req(limit=10), last).limit == 10
    jumped = resolve(EXPLICIT_JUMP, _req(page=5, limit=50), last)
    assert (jumped.page, jumped.limit) == (5, 10)  # clamped
    assert jumped.brand == "Honda"
