"""
Catalog Configuration
Categories every storefront starts with. Used by the categories endpoints and
the seed_categories script; seeding is keyed on slug so it can be rerun.
"""

DEFAULT_CATEGORIES = [
    {"name": "Apparel", "slug": "apparel"},
    {"name": "Technology", "slug": "technology"},
    {"name": "Drinkware", "slug": "drinkware"},
    {"name": "Bags", "slug": "bags"},
    {"name": "Office", "slug": "office"},
]
