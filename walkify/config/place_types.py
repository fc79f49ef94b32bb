"""
Place Types Configuration for walk route generation
One lookup table per concern: surface lemmas, provider queries, map markers, labels.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple


class Category(str, Enum):
    PARK = "park"
    CAFE = "cafe"
    SHOP = "shop"
    RESTAURANT = "restaurant"
    MUSEUM = "museum"
    LIBRARY = "library"
    PLACE_OF_WORSHIP = "place_of_worship"
    BEACH = "beach"
    LAKE = "lake"
    RIVER = "river"
    CUSTOM = "custom"


# Ukrainian lemma -> category. Order matters: the first matching lemma wins.
PLACE_TYPE_LEMMAS: Tuple[Tuple[str, Category], ...] = (
    ("парк", Category.PARK),
    ("кав'ярня", Category.CAFE),
    ("кав'ярні", Category.CAFE),
    ("кафе", Category.CAFE),
    ("ресторан", Category.RESTAURANT),
    ("магазин", Category.SHOP),
    ("музей", Category.MUSEUM),
    ("бібліотека", Category.LIBRARY),
    ("церква", Category.PLACE_OF_WORSHIP),
    ("храм", Category.PLACE_OF_WORSHIP),
    ("пляж", Category.BEACH),
    ("озеро", Category.LAKE),
    ("річка", Category.RIVER),
)

# Free-text query sent to Nominatim for a category
NOMINATIM_QUERIES: Dict[Category, str] = {
    Category.PARK: "park",
    Category.CAFE: "cafe",
    Category.RESTAURANT: "restaurant",
    Category.SHOP: "shop",
    Category.MUSEUM: "museum",
    Category.LIBRARY: "library",
    Category.PLACE_OF_WORSHIP: "church",
    Category.BEACH: "beach",
    Category.LAKE: "lake",
    Category.RIVER: "river",
}

# Search term + feature category filter for the Mapbox geocoder
MAPBOX_QUERIES: Dict[Category, str] = {
    Category.PARK: "park",
    Category.CAFE: "cafe",
    Category.RESTAURANT: "restaurant",
    Category.SHOP: "shop",
    Category.MUSEUM: "museum",
    Category.LIBRARY: "library",
    Category.PLACE_OF_WORSHIP: "place_of_worship",
    Category.BEACH: "beach",
    Category.LAKE: "lake",
    Category.RIVER: "river",
}

# Marker codes understood by the map UI
WAYPOINT_MARKERS: Dict[Category, str] = {
    Category.PARK: "park",
    Category.CAFE: "cafe",
    Category.SHOP: "shop",
}

# Labels used in user-facing messages
CATEGORY_LABELS: Dict[Category, str] = {
    Category.PARK: "парк",
    Category.CAFE: "кав'ярню",
    Category.SHOP: "магазин",
    Category.RESTAURANT: "ресторан",
    Category.MUSEUM: "музей",
    Category.LIBRARY: "бібліотеку",
    Category.PLACE_OF_WORSHIP: "храм",
    Category.BEACH: "пляж",
    Category.LAKE: "озеро",
    Category.RIVER: "річку",
    Category.CUSTOM: "місце",
}

# Categories visited when the user gives no explicit stop types
DEFAULT_EXPLORATION_CATEGORIES: List[Category] = [
    Category.PARK,
    Category.CAFE,
    Category.MUSEUM,
    Category.LIBRARY,
    Category.PLACE_OF_WORSHIP,
]


def get_nominatim_query(category: Category) -> Optional[str]:
    """Get the Nominatim search term for a category, None if it has none."""
    return NOMINATIM_QUERIES.get(category)


def get_mapbox_query(category: Category) -> str:
    return MAPBOX_QUERIES.get(category, category.value)


def get_marker_for_category(category: Category) -> str:
    """Get the map marker code; everything without a dedicated icon is 'custom'."""
    return WAYPOINT_MARKERS.get(category, "custom")


def get_category_label(category: Category) -> str:
    return CATEGORY_LABELS.get(category, category.value)


def iter_lemmas() -> Tuple[Tuple[str, Category], ...]:
    return PLACE_TYPE_LEMMAS
