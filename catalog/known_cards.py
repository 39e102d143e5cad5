# catalog/known_cards.py
"""
Reference database of real-world card products and their reward structures.

Read-only at runtime. Used to pre-populate a new card once its name is
known, either typed by the user (search) or recovered from a screenshot
(exact_match).
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from bcc_core.models import (
    CardColor,
    KnownCardRewards,
    RewardCategory as RC,
    VendorBonus,
)

MIN_QUERY_LEN = 2


def _card(
    name: str,
    base: float,
    rewards: Dict[RC, float],
    color: CardColor,
    notes: str,
    vendors: Sequence[Tuple[str, float]] = (),
) -> KnownCardRewards:
    return KnownCardRewards(
        card_name=name,
        base_reward=base,
        category_rewards=rewards,
        suggested_color=color,
        notes=notes,
        vendor_bonuses=tuple(VendorBonus(v, r) for v, r in vendors),
    )


ENTRIES: List[KnownCardRewards] = [
    # Chase
    _card("Chase Sapphire Reserve", 1.0,
          {RC.DINING: 3.0, RC.TRAVEL: 5.0, RC.STREAMING: 10.0}, CardColor.MIDNIGHT,
          "Earns Ultimate Reward points. 5x on travel booked via Chase portal."),
    _card("Chase Sapphire Preferred", 1.0,
          {RC.DINING: 3.0, RC.TRAVEL: 5.0, RC.ONLINE_SHOPPING: 3.0, RC.STREAMING: 3.0},
          CardColor.MIDNIGHT,
          "Earns Ultimate Reward points. 5x on travel via Chase portal."),
    _card("Chase Freedom Unlimited", 1.5,
          {RC.DINING: 3.0, RC.DRUG_STORES: 3.0, RC.TRAVEL: 5.0}, CardColor.OCEAN,
          "1.5% flat rate plus bonus categories. 5x travel via Chase portal."),
    _card("Chase Freedom Flex", 1.0,
          {RC.DINING: 3.0, RC.DRUG_STORES: 3.0, RC.TRAVEL: 5.0}, CardColor.OCEAN,
          "Also earns 5% on rotating quarterly categories; enter current ones manually."),
    _card("Chase Ink Business Preferred", 1.0,
          {RC.TRAVEL: 3.0, RC.ONLINE_SHOPPING: 3.0, RC.STREAMING: 3.0}, CardColor.MIDNIGHT,
          "3x on first $150K in combined purchases per year."),
    _card("Chase Ink Business Unlimited", 1.5, {}, CardColor.SLATE,
          "1.5% flat rate on all purchases."),
    _card("Chase Ink Business Cash", 1.0, {RC.GAS: 2.0}, CardColor.SLATE,
          "5% on office supplies, internet, cable, phone (not modeled). 2% gas/dining."),
    _card("Chase Amazon Prime Visa", 1.0,
          {RC.ONLINE_SHOPPING: 5.0, RC.DINING: 2.0, RC.GAS: 2.0, RC.DRUG_STORES: 2.0},
          CardColor.MIDNIGHT,
          "5% at Amazon.com and Whole Foods with Prime membership.",
          [("Amazon", 5.0), ("Whole Foods", 5.0)]),
    # American Express
    _card("Amex Platinum", 1.0, {RC.TRAVEL: 5.0, RC.DINING: 1.0}, CardColor.SLATE,
          "5x on flights booked directly or via Amex Travel. Points (MR)."),
    _card("Amex Gold", 1.0,
          {RC.DINING: 4.0, RC.GROCERIES: 4.0, RC.TRAVEL: 3.0}, CardColor.GOLD,
          "4x dining worldwide. 4x US supermarkets (up to $25K/yr). 3x flights."),
    _card("Amex Green", 1.0,
          {RC.TRAVEL: 3.0, RC.TRANSIT: 3.0, RC.DINING: 3.0}, CardColor.FOREST,
          "3x on travel, transit, and restaurants. Points (MR)."),
    _card("Amex Blue Cash Preferred", 1.0,
          {RC.GROCERIES: 6.0, RC.STREAMING: 6.0, RC.TRANSIT: 3.0, RC.GAS: 3.0},
          CardColor.OCEAN, "6% groceries up to $6K/yr, then 1%. Cash back."),
    _card("Amex Blue Cash Everyday", 1.0,
          {RC.GROCERIES: 3.0, RC.GAS: 3.0, RC.ONLINE_SHOPPING: 3.0}, CardColor.OCEAN,
          "3% groceries up to $6K/yr. Cash back."),
    _card("Amex Delta SkyMiles Platinum", 1.0,
          {RC.TRAVEL: 3.0, RC.DINING: 2.0, RC.GROCERIES: 2.0}, CardColor.MIDNIGHT,
          "3x Delta purchases. Earns SkyMiles.", [("Delta", 3.0)]),
    _card("Amex Delta SkyMiles Gold", 1.0,
          {RC.TRAVEL: 2.0, RC.DINING: 2.0, RC.GROCERIES: 2.0}, CardColor.GOLD,
          "2x Delta, restaurants, and US supermarkets. Earns SkyMiles.", [("Delta", 2.0)]),
    _card("Amex Hilton Honors Aspire", 3.0,
          {RC.TRAVEL: 14.0, RC.DINING: 7.0}, CardColor.MIDNIGHT,
          "14x at Hilton. 7x dining, flights, car rentals. Earns Hilton points.",
          [("Hilton", 14.0)]),
    _card("Amex Hilton Honors Surpass", 3.0,
          {RC.TRAVEL: 12.0, RC.DINING: 6.0, RC.GROCERIES: 6.0, RC.GAS: 6.0}, CardColor.GOLD,
          "12x at Hilton. 6x restaurants, supermarkets, gas. Hilton points.",
          [("Hilton", 12.0)]),
    _card("Amex Hilton Honors", 3.0,
          {RC.TRAVEL: 7.0, RC.DINING: 5.0, RC.GROCERIES: 5.0, RC.GAS: 5.0}, CardColor.SLATE,
          "7x at Hilton. 5x restaurants, supermarkets, gas. Hilton points.",
          [("Hilton", 7.0)]),
    _card("Amex Marriott Bonvoy Brilliant", 2.0,
          {RC.TRAVEL: 6.0, RC.DINING: 3.0, RC.GROCERIES: 3.0}, CardColor.MIDNIGHT,
          "6x at Marriott. 3x dining, groceries, flights. Marriott points.",
          [("Marriott", 6.0)]),
    _card("Amex Marriott Bonvoy", 2.0,
          {RC.TRAVEL: 4.0, RC.DINING: 2.0, RC.GROCERIES: 2.0}, CardColor.SLATE,
          "4x at Marriott. 2x other travel, dining, groceries. Marriott points.",
          [("Marriott", 4.0)]),
    # Citi
    _card("Citi Double Cash", 2.0, {}, CardColor.OCEAN,
          "2% flat (1% on purchase + 1% on payment). Cash back."),
    _card("Citi Custom Cash", 1.0, {}, CardColor.OCEAN,
          "5% on your top eligible spend category each cycle (up to $500). Auto-detected."),
    _card("Citi Premier", 1.0,
          {RC.DINING: 3.0, RC.GROCERIES: 3.0, RC.GAS: 3.0, RC.TRAVEL: 3.0},
          CardColor.MIDNIGHT, "3x on multiple categories. Earns ThankYou Points."),
    _card("Citi Strata Premier", 1.0,
          {RC.DINING: 3.0, RC.GROCERIES: 3.0, RC.GAS: 3.0, RC.TRAVEL: 3.0, RC.STREAMING: 3.0},
          CardColor.MIDNIGHT, "3x dining, groceries, gas, travel, streaming. ThankYou Points."),
    _card("Citi Rewards+", 1.0, {RC.GROCERIES: 2.0, RC.GAS: 2.0}, CardColor.OCEAN,
          "2x groceries and gas. Points rounded up to nearest 10. ThankYou Points."),
    # Capital One
    _card("Capital One Venture X", 2.0, {RC.TRAVEL: 10.0}, CardColor.MIDNIGHT,
          "10x on hotel/car via Capital One Travel portal. 2x everything else."),
    _card("Capital One Venture", 2.0, {RC.TRAVEL: 5.0}, CardColor.MIDNIGHT,
          "5x on hotels/cars via Capital One Travel. 2x everything else. Miles."),
    _card("Capital One Quicksilver", 1.5, {}, CardColor.SLATE,
          "1.5% flat rate on all purchases. Cash back."),
    _card("Capital One Savor", 1.0,
          {RC.DINING: 4.0, RC.ENTERTAINMENT: 4.0, RC.STREAMING: 4.0, RC.GROCERIES: 3.0},
          CardColor.CRIMSON, "4% dining, entertainment, streaming. 3% groceries. Cash back."),
    _card("Capital One SavorOne", 1.0,
          {RC.DINING: 3.0, RC.ENTERTAINMENT: 3.0, RC.STREAMING: 3.0, RC.GROCERIES: 3.0},
          CardColor.CRIMSON, "3% dining, entertainment, streaming, groceries. Cash back."),
    # Discover
    _card("Discover it Cash Back", 1.0, {}, CardColor.SLATE,
          "5% rotating quarterly categories (up to $1,500). Check current quarter and enter manually."),
    _card("Discover it Miles", 1.5, {}, CardColor.SLATE,
          "1.5x flat rate on all purchases. Miles."),
    _card("Discover it Chrome", 1.0, {RC.DINING: 2.0, RC.GAS: 2.0}, CardColor.SLATE,
          "2% dining and gas (up to $1,000/quarter combined). Cash back."),
    # Wells Fargo
    _card("Wells Fargo Active Cash", 2.0, {}, CardColor.CRIMSON,
          "2% flat rate on all purchases. Cash back."),
    _card("Wells Fargo Autograph", 1.0,
          {RC.DINING: 3.0, RC.TRAVEL: 3.0, RC.GAS: 3.0, RC.TRANSIT: 3.0,
           RC.STREAMING: 3.0, RC.ENTERTAINMENT: 3.0},
          CardColor.CRIMSON, "3x on six popular categories. Points."),
    # Bank of America
    _card("Bank of America Customized Cash", 1.0, {RC.ONLINE_SHOPPING: 2.0}, CardColor.CRIMSON,
          "3% on a chosen category (set in app), 2% groceries/wholesale. "
          "Enter your chosen category manually."),
    _card("Bank of America Premium Rewards", 1.5,
          {RC.DINING: 2.0, RC.TRAVEL: 2.0}, CardColor.MIDNIGHT,
          "2% travel and dining. 1.5% everything else. Points."),
    # US Bank
    _card("US Bank Cash+", 1.0, {}, CardColor.OCEAN,
          "5% on two chosen categories (up to $2K/quarter). 2% on one category. Enter manually."),
    _card("US Bank Altitude Connect", 1.0,
          {RC.TRAVEL: 4.0, RC.DINING: 2.0, RC.GAS: 2.0, RC.STREAMING: 2.0, RC.GROCERIES: 2.0},
          CardColor.MIDNIGHT, "4x travel. 2x dining, gas, streaming, groceries."),
    _card("US Bank Altitude Reserve", 1.0,
          {RC.TRAVEL: 3.0, RC.DINING: 3.0}, CardColor.MIDNIGHT,
          "3x travel and mobile wallet purchases (dining often codes here). Points."),
    # Other issuers
    _card("Apple Card", 1.0,
          {RC.ONLINE_SHOPPING: 3.0, RC.DINING: 2.0, RC.TRANSIT: 2.0,
           RC.ENTERTAINMENT: 2.0, RC.GAS: 2.0, RC.GROCERIES: 2.0},
          CardColor.SLATE,
          "3% at Apple and select merchants (Uber, T-Mobile, Nike, etc). 2% via Apple Pay.",
          [("Apple", 3.0), ("Uber", 3.0), ("T-Mobile", 3.0), ("Nike", 3.0)]),
    _card("Bilt Mastercard", 1.0,
          {RC.DINING: 3.0, RC.TRAVEL: 2.0, RC.TRANSIT: 2.0}, CardColor.ONYX,
          "Also earns 1x on rent (up to $100K/yr) with no fees. Points."),
    _card("PayPal Cashback Mastercard", 2.0, {}, CardColor.OCEAN,
          "2% flat on all purchases. 3% at PayPal checkout.", [("PayPal", 3.0)]),
]


def search(query: str) -> List[KnownCardRewards]:
    """Substring match on card name; prefix matches first, then alphabetical."""
    q = (query or "").strip().lower()
    if len(q) < MIN_QUERY_LEN:
        return []
    hits = [e for e in ENTRIES if q in e.card_name.lower()]
    hits.sort(
        key=lambda e: (not e.card_name.lower().startswith(q), e.card_name.lower(), e.card_name)
    )
    return hits


def exact_match(name: str) -> Optional[KnownCardRewards]:
    lower = (name or "").strip().lower()
    if not lower:
        return None
    for entry in ENTRIES:
        if entry.card_name.lower() == lower:
            return entry
    return None
