# storage/codec.py
"""
JSON encoding of the card collection.

Record fields: id, name, lastFour, colorTag, rewards (keyed by category
display name), baseReward, vendorBonuses [{id, vendorName, rewardRate}].
Older blobs may lack vendorBonuses or use cardColor for the color field.
A missing or malformed vendorBonuses list decodes as [].
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from bcc_core.models import CardColor, CreditCard, RewardCategory, VendorBonus

LOGGER = logging.getLogger("storage")


def card_to_record(card: CreditCard) -> Dict[str, Any]:
    return {
        "id": card.id,
        "name": card.name,
        "lastFour": card.last_four,
        "colorTag": card.color.value,
        "rewards": {cat.value: rate for cat, rate in card.rewards.items()},
        "baseReward": card.base_reward,
        "vendorBonuses": [
            {"id": b.id, "vendorName": b.vendor_name, "rewardRate": b.reward_rate}
            for b in card.vendor_bonuses
        ],
    }


def _decode_color(raw: Any) -> CardColor:
    try:
        return CardColor.parse(str(raw))
    except ValueError:
        LOGGER.warning("unknown card color %r, using %s", raw, CardColor.OCEAN.value)
        return CardColor.OCEAN


def _decode_rewards(raw: Dict[str, Any]) -> Dict[RewardCategory, float]:
    rewards: Dict[RewardCategory, float] = {}
    for key, rate in raw.items():
        try:
            cat = RewardCategory.parse(key)
        except ValueError:
            LOGGER.warning("dropping reward for unknown category %r", key)
            continue
        rewards[cat] = float(rate)
    return rewards


def _decode_bonuses(raw: Any) -> List[VendorBonus]:
    # a bad bonus list costs the bonuses, not the card
    try:
        return [
            VendorBonus(
                vendor_name=str(b["vendorName"]),
                reward_rate=float(b["rewardRate"]),
                id=str(b["id"]),
            )
            for b in raw or []
        ]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        LOGGER.warning("ignoring malformed vendorBonuses %r: %r", raw, e)
        return []


def record_to_card(rec: Dict[str, Any]) -> CreditCard:
    """Raises KeyError/TypeError/ValueError on a malformed record."""
    return CreditCard(
        id=str(rec["id"]),
        name=str(rec["name"]),
        last_four=str(rec.get("lastFour", "")),
        color=_decode_color(rec.get("colorTag", rec.get("cardColor", CardColor.OCEAN.value))),
        rewards=_decode_rewards(rec.get("rewards") or {}),
        base_reward=float(rec["baseReward"]),
        vendor_bonuses=_decode_bonuses(rec.get("vendorBonuses")),
    )


def encode_cards(cards: List[CreditCard]) -> str:
    return json.dumps([card_to_record(c) for c in cards], ensure_ascii=False)


def decode_cards(blob: str) -> List[CreditCard]:
    """
    Decode a stored collection. A malformed record (missing id, name or
    baseReward, wrong types) invalidates the whole blob with ValueError.
    """
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise ValueError(f"card blob is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError("card blob is not a JSON array")
    try:
        return [record_to_card(rec) for rec in data]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"malformed card record: {e!r}") from e
