import pytest

from bcc_core.models import (
    CardColor,
    Coordinate,
    CreditCard,
    NearbyMerchant,
    RewardCategory,
    ScannedCardInfo,
    VendorBonus,
    sanitize_vendor_bonuses,
)
from catalog.known_cards import exact_match


def _card(**kw):
    base = dict(name="Test", base_reward=1.0)
    base.update(kw)
    return CreditCard(**base)


class TestRewardLookup:
    """reward() is the override when present, else exactly the base rate."""

    def test_override(self):
        card = _card(rewards={RewardCategory.DINING: 3.0})
        assert card.reward(RewardCategory.DINING) == 3.0

    def test_falls_back_to_base(self):
        card = _card(base_reward=1.5, rewards={RewardCategory.DINING: 3.0})
        for cat in RewardCategory:
            if cat is not RewardCategory.DINING:
                assert card.reward(cat) == 1.5

    def test_explicit_override_below_base_still_wins(self):
        card = _card(base_reward=2.0, rewards={RewardCategory.TRAVEL: 1.0})
        assert card.reward(RewardCategory.TRAVEL) == 1.0
        assert card.has_category_bonus(RewardCategory.TRAVEL)
        assert not card.has_category_bonus(RewardCategory.DINING)


class TestVendorReward:
    """Vendor matching is bidirectional substring, first match in list order."""

    def test_query_contains_bonus_name(self):
        card = _card(vendor_bonuses=[VendorBonus("Whole", 5.0)])
        assert card.vendor_reward("Whole Foods").vendor_name == "Whole"

    def test_bonus_name_contains_query(self):
        card = _card(vendor_bonuses=[VendorBonus("Whole Foods Market", 5.0)])
        assert card.vendor_reward("whole foods") is not None

    def test_first_match_wins_not_most_specific(self):
        card = _card(
            vendor_bonuses=[VendorBonus("Amazon", 3.0), VendorBonus("Amazon Fresh", 5.0)]
        )
        assert card.vendor_reward("Amazon Fresh").reward_rate == 3.0

    def test_no_match(self):
        card = _card(vendor_bonuses=[VendorBonus("Costco", 2.0)])
        assert card.vendor_reward("Starbucks") is None

    def test_blank_query_matches_nothing(self):
        card = _card(vendor_bonuses=[VendorBonus("Costco", 2.0)])
        assert card.vendor_reward("") is None

    def test_effective_reward(self):
        card = _card(
            rewards={RewardCategory.GROCERIES: 3.0},
            vendor_bonuses=[VendorBonus("Whole Foods", 5.0)],
        )
        assert card.effective_reward("Whole Foods", RewardCategory.GROCERIES) == 5.0
        assert card.effective_reward("Kroger", RewardCategory.GROCERIES) == 3.0
        assert card.effective_reward("Kroger", RewardCategory.TRAVEL) == 1.0


class TestCardFields:
    def test_last_four_keeps_at_most_four_digits(self):
        assert _card(last_four="12a3456").last_four == "1234"
        assert _card(last_four="").last_four == ""

    def test_sanitize_vendor_bonuses(self):
        keep = VendorBonus("  Costco ", 2.0)
        cleaned = sanitize_vendor_bonuses(
            [keep, VendorBonus("   ", 5.0), VendorBonus("Target", 0.0)]
        )
        assert [b.vendor_name for b in cleaned] == ["Costco"]
        assert cleaned[0].id == keep.id


class TestCategory:
    def test_parse_accepts_display_and_slug(self):
        assert RewardCategory.parse("gas & ev charging") is RewardCategory.GAS
        assert RewardCategory.parse("gas_ev_charging") is RewardCategory.GAS
        assert RewardCategory.parse("Dining") is RewardCategory.DINING

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            RewardCategory.parse("Pets")

    def test_bonus_categories_exclude_everything_else(self):
        cats = RewardCategory.bonus_categories()
        assert RewardCategory.OTHER not in cats
        assert len(cats) == len(RewardCategory) - 1

    def test_icons(self):
        assert RewardCategory.DINING.icon == "fork.knife"
        assert RewardCategory.OTHER.icon == "creditcard.fill"


class TestConversions:
    def test_known_card_to_credit_card_gets_fresh_bonus_ids(self):
        known = exact_match("Chase Amazon Prime Visa")
        a = known.to_credit_card(last_four="1111")
        b = known.to_credit_card()
        assert a.last_four == "1111"
        assert a.color is CardColor.MIDNIGHT
        assert a.rewards[RewardCategory.ONLINE_SHOPPING] == 5.0
        assert [v.vendor_name for v in a.vendor_bonuses] == ["Amazon", "Whole Foods"]
        assert a.vendor_bonuses[0].id != b.vendor_bonuses[0].id
        assert a.id != b.id

    def test_scanned_without_suggestion(self):
        card = ScannedCardInfo(name="My Card", last_four="9876").to_credit_card()
        assert card.name == "My Card"
        assert card.base_reward == 1.0
        assert card.rewards == {}
        assert card.color is CardColor.OCEAN

    def test_scanned_with_suggestion(self):
        info = ScannedCardInfo(
            name="Amex Gold", last_four="1005", suggested=exact_match("Amex Gold")
        )
        card = info.to_credit_card()
        assert card.rewards[RewardCategory.DINING] == 4.0
        assert card.last_four == "1005"

    def test_is_empty(self):
        assert ScannedCardInfo().is_empty
        assert not ScannedCardInfo(last_four="1234").is_empty


class TestDistance:
    def test_distance_text_feet_and_miles(self):
        here = Coordinate(0, 0)
        near = NearbyMerchant("a", "A", "", here, 100.0, RewardCategory.DINING)
        far = NearbyMerchant("b", "B", "", here, 1609.34 * 2, RewardCategory.DINING)
        assert near.distance_text == "328 ft"
        assert far.distance_text == "2.0 mi"

    def test_haversine(self):
        a = Coordinate(37.7749, -122.4194)
        b = Coordinate(37.7849, -122.4194)
        # 0.01 degree of latitude is about 1.11 km
        assert 1100 < a.distance_to(b) < 1125
        assert a.distance_to(a) == 0
