# categorizer/mcc.py
"""
Merchant-code classification and the well-known merchant directory.

- classify_by_code(): direct table lookup plus the airline/hotel block
  [3000, 3999) -> Travel. None means "no rule"; callers default to
  Everything Else.
- search_merchants(): typeahead over MERCHANTS (linear scan, cheap enough
  to run on every keystroke).
- classify_merchant_name(): free-text merchant -> category via the
  directory, using normalized merchant keys.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Set

from bcc_core.models import MerchantEntry, RewardCategory as RC
from bcc_utils.normalizers import merchant_tokens, normalize_merchant_key

TRAVEL_CODE_BLOCK = range(3000, 3999)

CODE_TABLE: Dict[int, RC] = {
    # Dining: caterers, restaurants, bars, fast food
    5811: RC.DINING,
    5812: RC.DINING,
    5813: RC.DINING,
    5814: RC.DINING,
    # Groceries: supermarkets, meat lockers, candy, dairy, bakeries, misc food
    5411: RC.GROCERIES,
    5422: RC.GROCERIES,
    5441: RC.GROCERIES,
    5451: RC.GROCERIES,
    5462: RC.GROCERIES,
    5499: RC.GROCERIES,
    # Gas & EV: service stations, automated fuel dispensers, fuel dealers
    5541: RC.GAS,
    5542: RC.GAS,
    5983: RC.GAS,
    # Travel: airlines, agencies, lodging, timeshares, campgrounds, rentals
    4511: RC.TRAVEL,
    4722: RC.TRAVEL,
    7011: RC.TRAVEL,
    7012: RC.TRAVEL,
    7033: RC.TRAVEL,
    7512: RC.TRAVEL,
    7513: RC.TRAVEL,
    # Streaming / pay TV
    4899: RC.STREAMING,
    # Online shopping: book stores (Amazon), clothing, department stores
    5942: RC.ONLINE_SHOPPING,
    5691: RC.ONLINE_SHOPPING,
    5311: RC.ONLINE_SHOPPING,
    5300: RC.WHOLESALE,
    5912: RC.DRUG_STORES,
    # Entertainment: theaters, promoters, sports, attractions, arcades, parks
    7832: RC.ENTERTAINMENT,
    7922: RC.ENTERTAINMENT,
    7929: RC.ENTERTAINMENT,
    7941: RC.ENTERTAINMENT,
    7991: RC.ENTERTAINMENT,
    7993: RC.ENTERTAINMENT,
    7994: RC.ENTERTAINMENT,
    7996: RC.ENTERTAINMENT,
    7998: RC.ENTERTAINMENT,
    7999: RC.ENTERTAINMENT,
    # Transit: rail, commuter, passenger rail, taxis, bus, tolls, misc
    4011: RC.TRANSIT,
    4111: RC.TRANSIT,
    4112: RC.TRANSIT,
    4121: RC.TRANSIT,
    4131: RC.TRANSIT,
    4784: RC.TRANSIT,
    4789: RC.TRANSIT,
    # General merchandise
    5399: RC.OTHER,
}


def classify_by_code(code: int) -> Optional[RC]:
    if code in TRAVEL_CODE_BLOCK:
        return RC.TRAVEL
    return CODE_TABLE.get(code)


_DIRECTORY = [
    # Dining
    ("Chipotle", 5812, RC.DINING),
    ("McDonald's", 5814, RC.DINING),
    ("Starbucks", 5812, RC.DINING),
    ("Chick-fil-A", 5814, RC.DINING),
    ("Subway", 5812, RC.DINING),
    ("Panera Bread", 5812, RC.DINING),
    ("Taco Bell", 5814, RC.DINING),
    ("Wendy's", 5814, RC.DINING),
    ("Burger King", 5814, RC.DINING),
    ("Domino's", 5812, RC.DINING),
    ("Pizza Hut", 5812, RC.DINING),
    ("Panda Express", 5814, RC.DINING),
    ("Olive Garden", 5812, RC.DINING),
    ("Applebee's", 5812, RC.DINING),
    ("Chili's", 5812, RC.DINING),
    ("Texas Roadhouse", 5812, RC.DINING),
    ("Outback Steakhouse", 5812, RC.DINING),
    ("The Cheesecake Factory", 5812, RC.DINING),
    ("Buffalo Wild Wings", 5812, RC.DINING),
    ("Cracker Barrel", 5812, RC.DINING),
    ("Popeyes", 5814, RC.DINING),
    ("Five Guys", 5812, RC.DINING),
    ("In-N-Out Burger", 5814, RC.DINING),
    ("Whataburger", 5814, RC.DINING),
    ("Dunkin'", 5812, RC.DINING),
    ("DoorDash", 5812, RC.DINING),
    ("Uber Eats", 5812, RC.DINING),
    ("Grubhub", 5812, RC.DINING),
    # Groceries
    ("Walmart Grocery", 5411, RC.GROCERIES),
    ("Kroger", 5411, RC.GROCERIES),
    ("Whole Foods", 5411, RC.GROCERIES),
    ("Trader Joe's", 5411, RC.GROCERIES),
    ("Publix", 5411, RC.GROCERIES),
    ("Safeway", 5411, RC.GROCERIES),
    ("Albertsons", 5411, RC.GROCERIES),
    ("H-E-B", 5411, RC.GROCERIES),
    ("Aldi", 5411, RC.GROCERIES),
    ("Lidl", 5411, RC.GROCERIES),
    ("Sprouts Farmers Market", 5411, RC.GROCERIES),
    ("Meijer", 5411, RC.GROCERIES),
    ("Food Lion", 5411, RC.GROCERIES),
    ("WinCo Foods", 5411, RC.GROCERIES),
    ("Instacart", 5411, RC.GROCERIES),
    ("Target Grocery", 5411, RC.GROCERIES),
    # Gas & EV charging
    ("Shell", 5541, RC.GAS),
    ("Chevron", 5541, RC.GAS),
    ("ExxonMobil", 5541, RC.GAS),
    ("BP", 5541, RC.GAS),
    ("Costco Gas", 5541, RC.GAS),
    ("Sam's Club Gas", 5541, RC.GAS),
    ("Marathon", 5541, RC.GAS),
    ("Speedway", 5541, RC.GAS),
    ("Sunoco", 5541, RC.GAS),
    ("7-Eleven Gas", 5541, RC.GAS),
    ("Tesla Supercharger", 5541, RC.GAS),
    ("ChargePoint", 5541, RC.GAS),
    # Travel
    ("Delta Airlines", 3058, RC.TRAVEL),
    ("United Airlines", 3000, RC.TRAVEL),
    ("American Airlines", 3001, RC.TRAVEL),
    ("Southwest Airlines", 3024, RC.TRAVEL),
    ("JetBlue", 3096, RC.TRAVEL),
    ("Spirit Airlines", 3256, RC.TRAVEL),
    ("Frontier Airlines", 3261, RC.TRAVEL),
    ("Marriott", 3501, RC.TRAVEL),
    ("Hilton", 3504, RC.TRAVEL),
    ("Hyatt", 3515, RC.TRAVEL),
    ("IHG (Holiday Inn)", 3502, RC.TRAVEL),
    ("Airbnb", 7011, RC.TRAVEL),
    ("VRBO", 7011, RC.TRAVEL),
    ("Enterprise Rent-A-Car", 7512, RC.TRAVEL),
    ("Hertz", 7512, RC.TRAVEL),
    ("Expedia", 4722, RC.TRAVEL),
    ("Booking.com", 4722, RC.TRAVEL),
    # Streaming
    ("Netflix", 4899, RC.STREAMING),
    ("Hulu", 4899, RC.STREAMING),
    ("Disney+", 4899, RC.STREAMING),
    ("HBO Max", 4899, RC.STREAMING),
    ("Spotify", 4899, RC.STREAMING),
    ("Apple TV+", 4899, RC.STREAMING),
    ("YouTube Premium", 4899, RC.STREAMING),
    ("Peacock", 4899, RC.STREAMING),
    ("Paramount+", 4899, RC.STREAMING),
    ("Amazon Prime Video", 4899, RC.STREAMING),
    ("Apple Music", 4899, RC.STREAMING),
    ("SiriusXM", 4899, RC.STREAMING),
    # Online shopping
    ("Amazon.com", 5942, RC.ONLINE_SHOPPING),
    ("Walmart.com", 5311, RC.ONLINE_SHOPPING),
    ("Target.com", 5311, RC.ONLINE_SHOPPING),
    ("Best Buy (online)", 5311, RC.ONLINE_SHOPPING),
    ("Apple Store (online)", 5691, RC.ONLINE_SHOPPING),
    ("eBay", 5942, RC.ONLINE_SHOPPING),
    ("Etsy", 5942, RC.ONLINE_SHOPPING),
    # Wholesale clubs
    ("Costco", 5300, RC.WHOLESALE),
    ("Sam's Club", 5300, RC.WHOLESALE),
    ("BJ's Wholesale", 5300, RC.WHOLESALE),
    # Drug stores
    ("CVS Pharmacy", 5912, RC.DRUG_STORES),
    ("Walgreens", 5912, RC.DRUG_STORES),
    ("Rite Aid", 5912, RC.DRUG_STORES),
    # Entertainment
    ("AMC Theatres", 7832, RC.ENTERTAINMENT),
    ("Regal Cinemas", 7832, RC.ENTERTAINMENT),
    ("Cinemark", 7832, RC.ENTERTAINMENT),
    ("Dave & Buster's", 7993, RC.ENTERTAINMENT),
    ("Topgolf", 7941, RC.ENTERTAINMENT),
    ("Six Flags", 7996, RC.ENTERTAINMENT),
    ("Disney Parks", 7996, RC.ENTERTAINMENT),
    ("Universal Studios", 7996, RC.ENTERTAINMENT),
    ("Live Nation / Ticketmaster", 7922, RC.ENTERTAINMENT),
    # Transit
    ("Uber (rides)", 4121, RC.TRANSIT),
    ("Lyft", 4121, RC.TRANSIT),
    ("NYC MTA / Subway", 4111, RC.TRANSIT),
    ("Chicago CTA", 4111, RC.TRANSIT),
    ("BART", 4111, RC.TRANSIT),
    ("Amtrak", 4112, RC.TRANSIT),
    ("E-ZPass / Tolls", 4784, RC.TRANSIT),
]

MERCHANTS: List[MerchantEntry] = [MerchantEntry(n, c, cat) for n, c, cat in _DIRECTORY]


def _runs(tokens: List[str]) -> Set[str]:
    # every contiguous run of tokens, joined
    return {"".join(tokens[i:j]) for i in range(len(tokens)) for j in range(i + 1, len(tokens) + 1)}


_KEYED = [(normalize_merchant_key(m.name), _runs(merchant_tokens(m.name)), m) for m in MERCHANTS]

MIN_QUERY_LEN = 2
MIN_FUZZY_KEY_LEN = 3


def search_merchants(query: str) -> List[MerchantEntry]:
    """Substring match on name; prefix matches first, then alphabetical."""
    q = (query or "").strip().lower()
    if len(q) < MIN_QUERY_LEN:
        return []
    hits = [m for m in MERCHANTS if q in m.name.lower()]
    hits.sort(key=lambda m: (not m.name.lower().startswith(q), m.name.lower(), m.name))
    return hits


def lookup_merchant(name: str) -> Optional[MerchantEntry]:
    """
    Best directory entry for a free-text merchant name, or None.
    Matching is on whole words: "Bartell Drugs" does not hit "BART".
    """
    tokens = merchant_tokens(name)
    key = "".join(tokens)
    if not key:
        return None

    for k, _, m in _KEYED:
        if k == key:
            return m

    # longest directory name that appears as a word run in the query
    query_runs = _runs(tokens)
    best: Optional[MerchantEntry] = None
    best_len = 0
    for k, _, m in _KEYED:
        if len(k) >= MIN_FUZZY_KEY_LEN and k in query_runs and len(k) > best_len:
            best, best_len = m, len(k)
    if best is not None:
        return best

    # query is a word run of a directory name ("cheesecake")
    if len(key) >= MIN_FUZZY_KEY_LEN:
        for _, runs, m in _KEYED:
            if key in runs:
                return m
    return None


def classify_merchant_name(name: str) -> RC:
    entry = lookup_merchant(name)
    return entry.category if entry else RC.OTHER
