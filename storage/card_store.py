# storage/card_store.py
"""
The user's card collection.

An ordered list persisted as one blob under one key. Every mutation
rewrites the whole collection synchronously; there is no incremental
persistence. A blob that fails to decode is treated as "no data".
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Protocol

from bcc_core.models import CreditCard, RankedCard, RewardCategory, sanitize_vendor_bonuses
from ranking.engine import rank_by_category, rank_for_merchant
from storage.codec import decode_cards, encode_cards

LOGGER = logging.getLogger("storage")

DEFAULT_KEY = "saved_cards_v1"


class KeyValueStore(Protocol):
    def get_value(self, key: str) -> Optional[str]: ...

    def set_value(self, key: str, value: str) -> None: ...


class CardStore:
    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_KEY):
        self.kv = kv
        self.key = key
        self.cards: List[CreditCard] = self._load()

    def _load(self) -> List[CreditCard]:
        blob = self.kv.get_value(self.key)
        if blob is None:
            return []
        try:
            cards = decode_cards(blob)
        except ValueError as e:
            # availability over surfacing the loss; the blob is left untouched
            LOGGER.warning("stored cards under %r are unreadable, starting empty: %s", self.key, e)
            return []
        LOGGER.info("loaded %d card(s)", len(cards))
        return cards

    def _save(self) -> None:
        self.kv.set_value(self.key, encode_cards(self.cards))
        LOGGER.debug("persisted %d card(s) under %r", len(self.cards), self.key)

    @staticmethod
    def _sanitized(card: CreditCard) -> CreditCard:
        return replace(card, vendor_bonuses=sanitize_vendor_bonuses(card.vendor_bonuses))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def get(self, card_id: str) -> Optional[CreditCard]:
        for c in self.cards:
            if c.id == card_id:
                return c
        return None

    def add(self, card: CreditCard) -> CreditCard:
        card = self._sanitized(card)
        self.cards.append(card)
        self._save()
        return card

    def update(self, card: CreditCard) -> bool:
        """Replace the first card with the same id. Persists even on a miss."""
        card = self._sanitized(card)
        replaced = False
        for i, existing in enumerate(self.cards):
            if existing.id == card.id:
                self.cards[i] = card
                replaced = True
                break
        self._save()
        return replaced

    def delete(self, indices: Iterable[int]) -> None:
        # highest index first so earlier removals don't shift later ones
        for i in sorted(set(indices), reverse=True):
            if 0 <= i < len(self.cards):
                del self.cards[i]
        self._save()

    def rank(self, category: RewardCategory) -> List[RankedCard]:
        return rank_by_category(self.cards, category)

    def rank_for_merchant(self, category: RewardCategory, merchant_name: str) -> List[RankedCard]:
        return rank_for_merchant(self.cards, category, merchant_name)
