# categorizer/place_types.py
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from bcc_core.models import RewardCategory as RC

# Place-type tags sent to the places lookup to focus on reward-relevant merchants.
PRIORITY_SEARCH_TYPES: List[str] = [
    "restaurant",
    "cafe",
    "bakery",
    "bar",
    "supermarket",
    "convenience_store",
    "gas_station",
    "electric_vehicle_charging_station",
    "lodging",
    "pharmacy",
    "movie_theater",
    "amusement_park",
]

_BY_CATEGORY: Dict[RC, List[str]] = {
    RC.DINING: [
        "restaurant", "food", "meal_takeaway", "meal_delivery", "cafe",
        "bakery", "bar", "night_club", "fast_food_restaurant", "coffee_shop",
        "sandwich_shop", "pizza_restaurant", "sushi_restaurant", "steak_house",
        "seafood_restaurant", "mexican_restaurant", "chinese_restaurant",
        "thai_restaurant", "indian_restaurant", "italian_restaurant",
        "american_restaurant", "ramen_restaurant", "ice_cream_shop",
        "juice_shop", "wine_bar", "cocktail_bar", "sports_bar",
        "brunch_restaurant",
    ],
    RC.GROCERIES: [
        "supermarket", "grocery_or_supermarket", "health_food_store", "market",
        "convenience_store", "fruit_and_vegetable_store", "butcher_shop",
        "seafood_market",
    ],
    RC.GAS: ["gas_station", "electric_vehicle_charging_station"],
    RC.TRAVEL: [
        "airport", "travel_agency", "car_rental", "campground",
        "tourist_attraction", "lodging", "hotel", "motel",
        "extended_stay_hotel", "bed_and_breakfast", "resort_hotel", "hostel",
        "cottage",
    ],
    RC.TRANSIT: [
        "taxi_stand", "bus_station", "train_station", "subway_station",
        "transit_station", "light_rail_station", "ferry_terminal", "parking",
    ],
    RC.WHOLESALE: ["warehouse_store"],
    RC.DRUG_STORES: ["pharmacy", "drugstore"],
    RC.ENTERTAINMENT: [
        "movie_theater", "amusement_park", "bowling_alley", "stadium",
        "performing_arts_theater", "comedy_club", "casino", "golf_course",
        "gym", "fitness_center", "spa",
    ],
}

PLACE_TYPE_TABLE: Dict[str, RC] = {
    tag: cat for cat, tags in _BY_CATEGORY.items() for tag in tags
}


def first_place_type_match(
    types: Iterable[str], table: Optional[Mapping[str, RC]] = None
) -> Optional[RC]:
    table = PLACE_TYPE_TABLE if table is None else table
    for tag in types or []:
        cat = table.get(tag)
        if cat is not None:
            return cat
    return None


def classify_by_place_type(types: Iterable[str]) -> RC:
    """Category of the FIRST tag with a table entry; caller order is priority."""
    return first_place_type_match(types) or RC.OTHER
