# tests/test_context.py
from carfinder.context import ConversationContext, ConversationStore
from carfinder.reco.stats import calculate_price_stats
from carfinder.schemas import Car, FilterCriteria, PriceStats


def _cars(*prices):
    return [Car(brand="Honda", model="City", year=2020, price=p) for p in prices]


def test_stats_round_trip():
    assert calculate_price_stats([]) == PriceStats(min=None, max=None, avg=None)
    assert calculate_price_stats(_cars(100, 200, 300)) == PriceStats(min=100, max=300, avg=200)


def test_stats_average_rounds_half_up():
    assert calculate_price_stats(_cars(1, 2)).avg == 2


def test_explicit_bounds_are_the_reference_range():
    ctx = ConversationContext()
    ctx.update(FilterCriteria(min_price=500000, max_price=800000),
               calculate_price_stats(_cars(600000, 700000)))
    assert ctx.reference_price_range() == (500000, 800000)


def test_unconstrained_search_uses_average_band():
    ctx = ConversationContext()
    ctx.update(FilterCriteria(brand="Toyota"), PriceStats(min=800000, max=1000000, avg=900000))
    assert ctx.last_brand == "Toyota"
    assert ctx.last_price_range.derived
    assert ctx.last_price_range.min == 720000
    assert ctx.reference_price_range() == (630000, 1170000)


def test_derived_range_when_no_average_survives():
    ctx = ConversationContext()
    ctx.update(FilterCriteria(), PriceStats(min=100, max=300, avg=200))
    ctx.last_result_stats = None
    low, high = ctx.reference_price_range()
    assert round(low) == 90 and round(high) == 330


def test_empty_results_keep_previous_stats():
    ctx = ConversationContext()
    ctx.update(FilterCriteria(brand="Honda"), PriceStats(min=1, max=3, avg=2))
    ctx.update(FilterCriteria(brand="BMW", max_price=100), PriceStats())
    assert ctx.last_result_stats.avg == 2
    assert ctx.last_brand == "BMW"


def test_nothing_to_reference():
    assert ConversationContext().reference_price_range() is None


def test_read_is_a_snapshot():
    ctx = ConversationContext()
    snap = ctx.read()
    ctx.update(FilterCriteria(brand="Kia"))
    assert snap.last_brand is None
    assert ctx.last_brand == "Kia"


def test_store_isolates_conversations():
    store = ConversationStore()
    store.get("a").update(FilterCriteria(brand="Tata"))
    assert store.get("b").last_brand is None
    assert store.get("a").last_brand == "Tata"
    assert store.get() is store.get(None)
    assert len(store) == 3
    store.clear()
    assert len(store) == 0


def test_store_forgets_least_recently_used():
    store = ConversationStore(max_size=2)
    first = store.get("a")
    first.update(FilterCriteria(brand="Tata"))
    store.get("b")
    assert store.get("a") is first  # "a" is now the most recent
    store.get("c")
    assert len(store) == 2
    assert "b" not in store
    assert "a" in store and "c" in store
    assert store.get("a").last_brand == "Tata"
