# carfinder/nlp/aliases.py
# Vocabularies for the free-text extractor. Keys are lower-case surface forms,
# values the canonical form sent to the catalog.

BRAND_ALIAS = {
    "toyota": "Toyota",
    "honda": "Honda",
    "bmw": "BMW",
    "mercedes": "Mercedes-Benz",
    "mercedes benz": "Mercedes-Benz",
    "mercedes-benz": "Mercedes-Benz",
    "benz": "Mercedes-Benz",
    "audi": "Audi",
    "maruti suzuki": "Maruti Suzuki",
    "maruti": "Maruti Suzuki",
    "suzuki": "Maruti Suzuki",
    "hyundai": "Hyundai",
    "tata": "Tata",
    "mahindra": "Mahindra",
    "kia": "Kia",
    "renault": "Renault",
    "volkswagen": "Volkswagen",
    "vw": "Volkswagen",
    "ford": "Ford",
    "nissan": "Nissan",
    "skoda": "Skoda",
    "mg": "MG",
    # common typos
    "toyoya": "Toyota",
    "hunday": "Hyundai",
    "hyundia": "Hyundai",
    "bmv": "BMW",
    "mercedez": "Mercedes-Benz",
    "vokswagen": "Volkswagen",
}

# Brands whose empty results get the "raise your budget" guidance
PREMIUM_BRANDS = {"bmw", "mercedes-benz", "mercedes", "audi"}

# Suggested when a budget rules out the requested brand
BUDGET_BRANDS = ["Maruti Suzuki", "Tata", "Hyundai"]

MODEL_ALIAS = {
    # Toyota
    "camry": "Camry",
    "corolla": "Corolla",
    "corola": "Corolla",
    "fortuner": "Fortuner",
    "innova crysta": "Innova Crysta",
    "innova": "Innova",
    "glanza": "Glanza",
    # Honda
    "civic": "Civic",
    "city": "City",
    "amaze": "Amaze",
    "elevate": "Elevate",
    # Maruti Suzuki
    "swift": "Swift",
    "baleno": "Baleno",
    "dzire": "Dzire",
    "brezza": "Brezza",
    "ertiga": "Ertiga",
    "alto": "Alto",
    "wagon r": "Wagon R",
    "wagonr": "Wagon R",
    # Hyundai
    "i10": "i10",
    "i20": "i20",
    "creta": "Creta",
    "venue": "Venue",
    "verna": "Verna",
    "tucson": "Tucson",
    # Tata
    "nexon": "Nexon",
    "punch": "Punch",
    "harrier": "Harrier",
    "safari": "Safari",
    "tiago": "Tiago",
    "altroz": "Altroz",
    # Mahindra
    "thar": "Thar",
    "xuv700": "XUV700",
    "xuv300": "XUV300",
    "scorpio": "Scorpio",
    "bolero": "Bolero",
    # Kia
    "seltos": "Seltos",
    "sonet": "Sonet",
    "carens": "Carens",
    # Renault
    "kwid": "Kwid",
    "kiger": "Kiger",
    "triber": "Triber",
    # Volkswagen / Skoda
    "polo": "Polo",
    "virtus": "Virtus",
    "taigun": "Taigun",
    "slavia": "Slavia",
    "kushaq": "Kushaq",
    "octavia": "Octavia",
    # Ford / Nissan / MG
    "ecosport": "EcoSport",
    "endeavour": "Endeavour",
    "magnite": "Magnite",
    "kicks": "Kicks",
    "hector": "Hector",
    "astor": "Astor",
    # Premium
    "3 series": "3 Series",
    "5 series": "5 Series",
    "x1": "X1",
    "x5": "X5",
    "c-class": "C-Class",
    "c class": "C-Class",
    "e-class": "E-Class",
    "e class": "E-Class",
    "a4": "A4",
    "q3": "Q3",
    "q7": "Q7",
}

# Model names that are also everyday words ("my city", "a safari trip").
# Only read as a model right after a brand or inside a comparison.
AMBIGUOUS_MODELS = {
    "city", "amaze", "elevate", "swift", "alto", "venue", "punch",
    "safari", "polo", "kicks",
}

COLOR_ALIAS = {
    "red": "red",
    "blue": "blue",
    "black": "black",
    "white": "white",
    "silver": "silver",
    "grey": "grey",
    "gray": "grey",
    "green": "green",
    "yellow": "yellow",
    "orange": "orange",
    "purple": "purple",
    "brown": "brown",
    "gold": "gold",
    "golden": "gold",
    "maroon": "maroon",
    "beige": "beige",
}

# Spellings a catalog may store for one canonical color
COLOR_SPELLINGS = {
    "grey": ("grey", "gray"),
    "gold": ("gold", "golden"),
}

FUEL_ALIAS = {
    "petrol": "Petrol",
    "gasoline": "Petrol",
    "diesel": "Diesel",
    "electric": "Electric",
    "ev": "Electric",
    "hybrid": "Hybrid",
    "cng": "CNG",
}

TRANSMISSION_ALIAS = {
    "automatic": "Automatic",
    "auto": "Automatic",
    "manual": "Manual",
}

# Qualitative price terms (typos included)
CHEAP_TERMS = {
    "cheap", "cheapest", "cheepest", "chipest", "cheep", "cheapst",
    "affordable", "inexpensive", "budget", "low cost", "low-cost",
    "low price", "low-price", "lowest price", "cost-effective", "economical",
}
EXPENSIVE_TERMS = {
    "expensive", "priciest", "pricey", "premium", "luxury", "high end",
    "high-end", "top end", "top-end", "costly",
}
# Terms that, alone, ask for the single best match
CHEAP_SUPERLATIVES = {"cheapest", "cheepest", "chipest", "cheep", "cheapst"}
EXPENSIVE_SUPERLATIVES = {"expensive", "priciest", "pricey", "premium", "luxury"}

# Filler dropped from free text before it is used as a catalog search term
STOPWORDS = {
    "show", "me", "all", "the", "a", "an", "any", "some", "cars", "car",
    "vehicles", "vehicle", "models", "model", "list", "find", "get", "give",
    "display", "search", "for", "please", "i", "want", "need", "looking",
    "options", "available", "with", "in", "of",
}
