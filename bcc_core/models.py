from __future__ import annotations

import math
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


def new_id() -> str:
    return str(uuid.uuid4())


class RewardCategory(str, Enum):
    """Spending categories a card can carry a bonus rate for.

    The enum value is the display name, which is also the key used when a
    card's reward table is persisted.
    """

    DINING = "Dining"
    GROCERIES = "Groceries"
    GAS = "Gas & EV Charging"
    TRAVEL = "Travel"
    STREAMING = "Streaming"
    ONLINE_SHOPPING = "Online Shopping"
    WHOLESALE = "Wholesale Clubs"
    DRUG_STORES = "Drug Stores"
    ENTERTAINMENT = "Entertainment"
    TRANSIT = "Transit"
    OTHER = "Everything Else"

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def key(self) -> str:
        """Slug form, e.g. "gas_ev_charging"."""
        return re.sub(r"[^a-z0-9]+", "_", self.value.lower()).strip("_")

    @classmethod
    def parse(cls, raw: str) -> "RewardCategory":
        """Accept a display name or slug, case-insensitively."""
        wanted = (raw or "").strip().lower()
        for cat in cls:
            if wanted in (cat.value.lower(), cat.key, cat.name.lower()):
                return cat
        raise ValueError(f"Unknown reward category: {raw!r}")

    @classmethod
    def bonus_categories(cls) -> List["RewardCategory"]:
        return [c for c in cls if c is not cls.OTHER]


_ICONS: Dict[RewardCategory, str] = {
    RewardCategory.DINING: "fork.knife",
    RewardCategory.GROCERIES: "cart.fill",
    RewardCategory.GAS: "fuelpump.fill",
    RewardCategory.TRAVEL: "airplane",
    RewardCategory.STREAMING: "play.rectangle.fill",
    RewardCategory.ONLINE_SHOPPING: "bag.fill",
    RewardCategory.WHOLESALE: "building.2.fill",
    RewardCategory.DRUG_STORES: "pills.fill",
    RewardCategory.ENTERTAINMENT: "ticket.fill",
    RewardCategory.TRANSIT: "bus.fill",
    RewardCategory.OTHER: "creditcard.fill",
}


class CardColor(str, Enum):
    OCEAN = "Ocean"
    MIDNIGHT = "Midnight"
    GOLD = "Gold"
    ONYX = "Onyx"
    ROSE = "Rose"
    FOREST = "Forest"
    SLATE = "Slate"
    CRIMSON = "Crimson"

    @classmethod
    def parse(cls, raw: str) -> "CardColor":
        wanted = (raw or "").strip().lower()
        for color in cls:
            if color.value.lower() == wanted:
                return color
        raise ValueError(f"Unknown card color: {raw!r}")


@dataclass
class VendorBonus:
    vendor_name: str
    reward_rate: float
    id: str = field(default_factory=new_id)

    @property
    def is_valid(self) -> bool:
        return bool(self.vendor_name.strip()) and self.reward_rate > 0


def sanitize_vendor_bonuses(bonuses: List[VendorBonus]) -> List[VendorBonus]:
    """Drop blank-name and zero-rate bonuses, trimming names of the rest."""
    out: List[VendorBonus] = []
    for b in bonuses:
        if not b.is_valid:
            continue
        out.append(
            VendorBonus(vendor_name=b.vendor_name.strip(), reward_rate=b.reward_rate, id=b.id)
        )
    return out


def digits_only(raw: str, limit: int = 4) -> str:
    return "".join(ch for ch in (raw or "") if ch.isdigit())[:limit]


@dataclass
class CreditCard:
    name: str
    last_four: str = ""
    color: CardColor = CardColor.OCEAN
    rewards: Dict[RewardCategory, float] = field(default_factory=dict)
    base_reward: float = 1.0
    vendor_bonuses: List[VendorBonus] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        self.last_four = digits_only(self.last_four)

    def reward(self, category: RewardCategory) -> float:
        return self.rewards.get(category, self.base_reward)

    def has_category_bonus(self, category: RewardCategory) -> bool:
        return category in self.rewards

    def vendor_reward(self, merchant_name: str) -> Optional[VendorBonus]:
        """
        First vendor bonus whose name contains the merchant name or is
        contained in it (case-insensitive). List order decides, not
        specificity: a bonus named "A" matches nearly everything.
        """
        lower = (merchant_name or "").strip().lower()
        if not lower:
            return None
        for bonus in self.vendor_bonuses:
            name = bonus.vendor_name.strip().lower()
            if not name:
                continue
            if name in lower or lower in name:
                return bonus
        return None

    def effective_reward(self, merchant_name: str, category: RewardCategory) -> float:
        bonus = self.vendor_reward(merchant_name)
        if bonus is not None:
            return bonus.reward_rate
        return self.reward(category)


@dataclass(frozen=True)
class KnownCardRewards:
    card_name: str
    base_reward: float
    category_rewards: Dict[RewardCategory, float]
    suggested_color: CardColor
    notes: str = ""
    vendor_bonuses: Tuple[VendorBonus, ...] = ()

    def to_credit_card(self, last_four: str = "", card_id: Optional[str] = None) -> CreditCard:
        card = CreditCard(
            name=self.card_name,
            last_four=last_four,
            color=self.suggested_color,
            rewards=dict(self.category_rewards),
            base_reward=self.base_reward,
            vendor_bonuses=[
                VendorBonus(vendor_name=b.vendor_name, reward_rate=b.reward_rate)
                for b in self.vendor_bonuses
            ],
        )
        if card_id:
            card.id = card_id
        return card


@dataclass(frozen=True)
class MerchantEntry:
    name: str
    code: int
    category: RewardCategory


class SourceKind(str, Enum):
    BASE_RATE = "base_rate"
    CATEGORY_BONUS = "category_bonus"
    VENDOR_BONUS = "vendor_bonus"


@dataclass(frozen=True)
class RewardSource:
    kind: SourceKind
    vendor_name: Optional[str] = None

    @classmethod
    def base_rate(cls) -> "RewardSource":
        return cls(SourceKind.BASE_RATE)

    @classmethod
    def category_bonus(cls) -> "RewardSource":
        return cls(SourceKind.CATEGORY_BONUS)

    @classmethod
    def vendor_bonus(cls, vendor_name: str) -> "RewardSource":
        return cls(SourceKind.VENDOR_BONUS, vendor_name)

    @property
    def label(self) -> str:
        if self.kind is SourceKind.VENDOR_BONUS:
            return f"{self.vendor_name} bonus"
        if self.kind is SourceKind.CATEGORY_BONUS:
            return "Category bonus"
        return "Base rate"


@dataclass
class RankedCard:
    card: CreditCard
    rate: float
    source: RewardSource


@dataclass
class ScannedCardInfo:
    name: str = ""
    last_four: str = ""
    # known-card match for the recovered name, used to pre-fill rewards
    suggested: Optional[KnownCardRewards] = None

    @property
    def is_empty(self) -> bool:
        return not self.name and not self.last_four

    def to_credit_card(self) -> CreditCard:
        if self.suggested is not None:
            card = self.suggested.to_credit_card(last_four=self.last_four)
            if self.name:
                card.name = self.name
            return card
        return CreditCard(name=self.name, last_four=self.last_four)


EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def distance_to(self, other: "Coordinate") -> float:
        """Great-circle distance in meters."""
        lat1, lat2 = math.radians(self.latitude), math.radians(other.latitude)
        dlat = lat2 - lat1
        dlon = math.radians(other.longitude - self.longitude)
        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


@dataclass
class NearbyMerchant:
    id: str
    name: str
    address: str
    coordinate: Coordinate
    distance_m: float
    category: RewardCategory
    place_types: List[str] = field(default_factory=list)

    @property
    def distance_text(self) -> str:
        feet = self.distance_m * 3.28084
        if feet < 1000:
            return f"{feet:.0f} ft"
        return f"{self.distance_m / 1609.34:.1f} mi"
