# Page size served when the request does not ask for one
DEFAULT_LIMIT = 5
# Hard cap of cars per page
MAX_LIMIT = 10

# "same price range" without a stored explicit range: average ±30%
PRICE_REFERENCE_BAND = 0.30
# Derived range for unconstrained searches: observed min -10% / max +10%
DERIVED_RANGE_PADDING = 0.10

# Entry budget suggested when a premium brand has nothing under the user's max
PREMIUM_BUDGET_HINT = 2_000_000

# Conversations kept in memory; the least recently used is dropped past this
MAX_CONVERSATIONS = 1000
