# carfinder/texts.py
WELCOME_MSG = (
    "Hi! I'm the car inventory assistant 🤖🚗\n\n"
    "Tell me what you are looking for and I'll search the inventory:\n"
    "• Search cars (e.g. *show 5 red Honda cars*)\n"
    "• Filter by price (e.g. *between 6 lakh and 10 lakh*)\n"
    "• Cheapest or priciest (e.g. *cheapest Toyota*)\n"
    "• See more results (e.g. *next page*, *page 3*)\n"
    "• Same budget, other brand (e.g. *any other brand in this price range*)\n"
    "• Compare models (e.g. *compare Camry and Civic*)\n\n"
    "Type *menu* or *help* to see these options again."
)

ERROR_FETCHING = "Error fetching car inventory: {error}"
INVALID_REQUEST = (
    "Sorry, I could not understand that request. Try something like *show 5 red Honda cars*."
)

# ---------- Comparison ----------
COMPARE_TITLE = "# Car Comparison"
COMPARE_NOT_ENOUGH = (
    "Could not find enough cars to compare. Please check the model names and try again."
)

# ---------- Empty results ----------
EMPTY_PREMIUM = (
    "We don't have any {brand} vehicles under {price}. Luxury brands like {brand} "
    "typically start at higher price points.\n\n"
    "Consider:\n"
    "- Increasing your budget to {hint}+ for {brand}\n"
    "- Looking at pre-owned {brand} vehicles\n"
    "- Exploring more affordable brands like {alternatives} in this price range"
)
EMPTY_BRAND_PRICE = (
    "We don't have any {brand} vehicles under {price}. Try a higher price range "
    "or consider other brands like {alternatives} in this price range."
)
EMPTY_BRAND = (
    "No {brand} vehicles found with your criteria. Try removing some filters or try another brand."
)
EMPTY_PRICE = (
    "We don't have vehicles under {price} matching your criteria. "
    "Try increasing your budget or modifying your search."
)
EMPTY_GENERIC = (
    "No cars found matching your criteria. Try adjusting your filters or providing "
    "less specific requirements."
)
PAST_LAST_PAGE = (
    "No more results: all {total} cars matching your criteria were already shown. "
    "Try a new search or ask for \"page 1\"."
)

# ---------- Pagination footer ----------
FOOTER_MORE = (
    "\n\n---\nShowing page {page} of {pages}. "
    "For more results with the same filters, ask for \"next page\" or \"page {next}\"."
)
FOOTER_SHOW_ALL = "\nTo see all {total} results at once, ask for \"show all {total} cars\"."
FOOTER_END = "\n\n---\nEnd of results. You've viewed all {total} cars matching your criteria."
