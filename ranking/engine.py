# ranking/engine.py
"""
Rank cards by effective reward rate.

Both rankings sort descending by rate with Python's stable sort, so cards
with equal rates keep their collection order. That tie policy is part of
the contract.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from bcc_core.models import CreditCard, RankedCard, RewardCategory, RewardSource


def _category_source(card: CreditCard, category: RewardCategory) -> RewardSource:
    if card.has_category_bonus(category):
        return RewardSource.category_bonus()
    return RewardSource.base_rate()


def rank_by_category(cards: Iterable[CreditCard], category: RewardCategory) -> List[RankedCard]:
    ranked = [
        RankedCard(card=c, rate=c.reward(category), source=_category_source(c, category))
        for c in cards
    ]
    ranked.sort(key=lambda r: r.rate, reverse=True)
    return ranked


def rank_for_merchant(
    cards: Iterable[CreditCard], category: RewardCategory, merchant_name: str
) -> List[RankedCard]:
    """Vendor bonus first, then the category override, then the base rate."""
    ranked: List[RankedCard] = []
    for card in cards:
        bonus = card.vendor_reward(merchant_name)
        if bonus is not None:
            ranked.append(
                RankedCard(
                    card=card,
                    rate=bonus.reward_rate,
                    source=RewardSource.vendor_bonus(bonus.vendor_name),
                )
            )
        else:
            ranked.append(
                RankedCard(
                    card=card,
                    rate=card.reward(category),
                    source=_category_source(card, category),
                )
            )
    ranked.sort(key=lambda r: r.rate, reverse=True)
    return ranked


def best_card(
    cards: Iterable[CreditCard], category: RewardCategory, merchant_name: str = ""
) -> Optional[RankedCard]:
    """Top of the merchant ranking when a name is given, else of the category ranking."""
    ranked = (
        rank_for_merchant(cards, category, merchant_name)
        if merchant_name
        else rank_by_category(cards, category)
    )
    return ranked[0] if ranked else None
