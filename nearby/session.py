# nearby/session.py
"""
Nearby-merchant state for an interactive surface.

A newer lookup supersedes any lookup still in flight: each lookup takes a
token, and its result (or failure) is applied only while that token is
the latest one issued.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from bcc_core.errors import NearbyLookupError
from bcc_core.models import Coordinate, NearbyMerchant, RankedCard
from bcc_utils.sequencing import LatestOnly
from ranking.engine import best_card

logger = logging.getLogger("nearby")


class NearbySession:
    def __init__(self, provider, radius_m: Optional[float] = None):
        self.provider = provider
        self.radius_m = radius_m
        self.merchants: List[NearbyMerchant] = []
        self.error: Optional[str] = None
        self._gate = LatestOnly()

    def begin(self) -> int:
        return self._gate.issue()

    def complete(self, token: int, merchants: List[NearbyMerchant]) -> bool:
        if not self._gate.is_current(token):
            logger.debug("discarding stale nearby result (token %d)", token)
            return False
        self.merchants = merchants
        self.error = None
        return True

    def fail(self, token: int, exc: NearbyLookupError) -> bool:
        if not self._gate.is_current(token):
            return False
        self.error = str(exc)
        return True

    def refresh(self, at: Coordinate) -> List[NearbyMerchant]:
        """Look up merchants around `at`; raises NearbyLookupError if current."""
        token = self.begin()
        try:
            merchants = self.provider.search(at, self.radius_m)
        except NearbyLookupError as exc:
            if self.fail(token, exc):
                raise
            return self.merchants
        self.complete(token, merchants)
        return self.merchants

    def best_cards(self, cards) -> List[Tuple[NearbyMerchant, Optional[RankedCard]]]:
        return [(m, best_card(cards, m.category, m.name)) for m in self.merchants]
