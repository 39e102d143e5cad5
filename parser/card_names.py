# parser/card_names.py
"""
Keyword scoring of recognized text against known card products.

Each entry scores one point per keyword found as a substring of the
uppercased, space-joined text. The highest score wins; on ties the entry
declared first wins, so table order is part of the contract (e.g. text
with only "SAPPHIRE" resolves to Chase Sapphire Reserve).
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

NAME_TABLE: List[Tuple[str, Tuple[str, ...]]] = [
    ("Chase Sapphire Reserve", ("SAPPHIRE", "RESERVE")),
    ("Chase Sapphire Preferred", ("SAPPHIRE", "PREFERRED")),
    ("Chase Freedom Unlimited", ("FREEDOM", "UNLIMITED")),
    ("Chase Freedom Flex", ("FREEDOM", "FLEX")),
    ("Chase Ink Business Preferred", ("INK", "PREFERRED", "BUSINESS")),
    ("Chase Ink Business Unlimited", ("INK", "UNLIMITED", "BUSINESS")),
    ("Chase Ink Business Cash", ("INK", "CASH", "BUSINESS")),
    ("Chase Amazon Prime Visa", ("AMAZON", "PRIME")),
    ("Amex Platinum", ("PLATINUM", "PLAT")),
    ("Amex Gold", ("AMEX GOLD", "AMERICAN EXPRESS GOLD")),
    ("Amex Green", ("AMEX GREEN", "AMERICAN EXPRESS GREEN")),
    ("Amex Blue Cash Preferred", ("BLUE CASH", "PREFERRED")),
    ("Amex Blue Cash Everyday", ("BLUE CASH", "EVERYDAY")),
    ("Amex Delta SkyMiles Platinum", ("DELTA", "SKYMILES", "PLATINUM")),
    ("Amex Delta SkyMiles Gold", ("DELTA", "SKYMILES", "GOLD")),
    ("Amex Hilton Honors Aspire", ("HILTON", "ASPIRE")),
    ("Amex Hilton Honors Surpass", ("HILTON", "SURPASS")),
    ("Amex Hilton Honors", ("HILTON", "HONORS")),
    ("Amex Marriott Bonvoy Brilliant", ("MARRIOTT", "BRILLIANT")),
    ("Amex Marriott Bonvoy", ("MARRIOTT", "BONVOY")),
    ("Citi Double Cash", ("DOUBLE CASH",)),
    ("Citi Custom Cash", ("CUSTOM CASH",)),
    ("Citi Premier", ("CITI PREMIER",)),
    ("Citi Strata Premier", ("STRATA", "PREMIER")),
    ("Citi Rewards+", ("REWARDS+",)),
    ("Capital One Venture X", ("VENTURE X",)),
    ("Capital One Venture", ("VENTURE",)),
    ("Capital One Quicksilver", ("QUICKSILVER",)),
    ("Capital One Savor", ("SAVOR",)),
    ("Capital One SavorOne", ("SAVORONE",)),
    ("Discover it Cash Back", ("DISCOVER", "CASH BACK")),
    ("Discover it Miles", ("DISCOVER", "MILES")),
    ("Discover it Chrome", ("DISCOVER", "CHROME")),
    ("Wells Fargo Active Cash", ("ACTIVE CASH", "WELLS FARGO")),
    ("Wells Fargo Autograph", ("AUTOGRAPH", "WELLS FARGO")),
    ("Bank of America Customized Cash", ("CUSTOMIZED CASH", "BANK OF AMERICA")),
    ("Bank of America Premium Rewards", ("PREMIUM REWARDS", "BANK OF AMERICA")),
    ("US Bank Cash+", ("CASH+", "U.S. BANK", "US BANK")),
    ("US Bank Altitude Connect", ("ALTITUDE CONNECT",)),
    ("US Bank Altitude Reserve", ("ALTITUDE RESERVE",)),
    ("Apple Card", ("APPLE CARD",)),
    ("Bilt Mastercard", ("BILT",)),
    ("PayPal Cashback Mastercard", ("PAYPAL",)),
]

# statement boilerplate that never names a card
BLACKLIST = ("TRANSACTION", "STATEMENT", "BALANCE", "AVAILABLE")


def best_keyword_match(lines: Iterable[str]) -> Optional[str]:
    """Highest-scoring table entry, or None when nothing scores."""
    text = " ".join(line.upper() for line in lines)
    best_name: Optional[str] = None
    best_score = 0
    for name, keywords in NAME_TABLE:
        score = sum(1 for kw in keywords if kw in text)
        # strictly greater: first-declared entry keeps a tie
        if score > best_score:
            best_name, best_score = name, score
    return best_name


def looks_like_name(line: str) -> bool:
    if not 5 <= len(line) <= 60:
        return False
    letters = sum(1 for ch in line if ch.isalpha())
    digits = sum(1 for ch in line if ch.isdigit())
    if letters < 3 or digits * 2 >= len(line):
        return False
    if line.startswith("$"):
        return False
    upper = line.upper()
    return not any(word in upper for word in BLACKLIST)


def extract_name(lines: List[str]) -> str:
    match = best_keyword_match(lines)
    if match:
        return match
    for line in lines:
        if looks_like_name(line):
            return line
    return ""
