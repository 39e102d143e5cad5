import pytest

from bcc_core.models import RewardCategory as RC
from bcc_utils.normalizers import merchant_tokens, normalize_merchant_key
from categorizer.mcc import (
    MERCHANTS,
    classify_by_code,
    classify_merchant_name,
    lookup_merchant,
    search_merchants,
)
from categorizer.place_types import (
    PLACE_TYPE_TABLE,
    PRIORITY_SEARCH_TYPES,
    classify_by_place_type,
)


class TestClassifyByCode:
    def test_direct_table(self):
        assert classify_by_code(5812) is RC.DINING
        assert classify_by_code(5411) is RC.GROCERIES
        assert classify_by_code(5541) is RC.GAS
        assert classify_by_code(4899) is RC.STREAMING
        assert classify_by_code(5300) is RC.WHOLESALE
        assert classify_by_code(5912) is RC.DRUG_STORES
        assert classify_by_code(4121) is RC.TRANSIT
        assert classify_by_code(5399) is RC.OTHER

    def test_airline_hotel_block_is_half_open(self):
        assert classify_by_code(3000) is RC.TRAVEL
        assert classify_by_code(3501) is RC.TRAVEL
        assert classify_by_code(3998) is RC.TRAVEL
        assert classify_by_code(3999) is None

    def test_unknown_code_is_none(self):
        assert classify_by_code(1234) is None
        assert classify_by_code(-1) is None


class TestClassifyByPlaceType:
    def test_first_known_tag_wins(self):
        assert classify_by_place_type(["point_of_interest", "cafe", "gas_station"]) is RC.DINING
        assert classify_by_place_type(["gas_station", "cafe"]) is RC.GAS

    def test_no_match_is_everything_else(self):
        assert classify_by_place_type(["point_of_interest", "establishment"]) is RC.OTHER
        assert classify_by_place_type([]) is RC.OTHER

    def test_priority_types_are_all_classified(self):
        for tag in PRIORITY_SEARCH_TYPES:
            assert tag in PLACE_TYPE_TABLE

    def test_lodging_and_pharmacy(self):
        assert classify_by_place_type(["lodging"]) is RC.TRAVEL
        assert classify_by_place_type(["pharmacy"]) is RC.DRUG_STORES
        assert classify_by_place_type(["warehouse_store"]) is RC.WHOLESALE


class TestSearchMerchants:
    def test_short_queries_yield_nothing(self):
        assert search_merchants("") == []
        assert search_merchants("a") == []
        assert search_merchants("  ") == []

    def test_prefix_first_then_alphabetical(self):
        names = [m.name for m in search_merchants("air")]
        # "Airbnb" is the only prefix match; the rest contain "air" elsewhere
        assert names[0] == "Airbnb"
        rest = names[1:]
        assert rest == sorted(rest, key=str.lower)
        assert "Delta Airlines" in rest

    def test_case_insensitive(self):
        assert [m.name for m in search_merchants("COSTCO")] == ["Costco", "Costco Gas"]

    def test_directory_codes_agree_with_table(self):
        for m in MERCHANTS:
            assert classify_by_code(m.code) is m.category, m.name


class TestMerchantNames:
    def test_normalize_merchant_key(self):
        assert normalize_merchant_key("McDonald's #1234") == "mcdonalds"
        assert normalize_merchant_key("Target Store 567") == "target"
        assert normalize_merchant_key("Acme Inc") == "acme"
        assert normalize_merchant_key("") == ""
        assert normalize_merchant_key(None) == ""

    def test_exact_key(self):
        assert classify_merchant_name("STARBUCKS") is RC.DINING
        assert classify_merchant_name("whole foods") is RC.GROCERIES

    def test_longest_contained_key(self):
        # "costco" is the longest directory key inside the query
        assert classify_merchant_name("COSTCO WHOLESALE #482") is RC.WHOLESALE
        assert lookup_merchant("Sam's Club Gas #12").name == "Sam's Club Gas"

    def test_query_inside_directory_name(self):
        assert lookup_merchant("cheesecake").name == "The Cheesecake Factory"

    def test_unknown_is_everything_else(self):
        assert classify_merchant_name("Joe's Hardware") is RC.OTHER
        assert classify_merchant_name("") is RC.OTHER

    @pytest.mark.parametrize(
        "name", ["Bartell Drugs", "Hertzberg Jewelers", "Lyfted Coffee"]
    )
    def test_directory_names_match_whole_words(self, name):
        assert lookup_merchant(name) is None
        assert classify_merchant_name(name) is RC.OTHER

    def test_directory_name_as_separate_word(self):
        assert classify_merchant_name("BART Embarcadero") is RC.TRANSIT
        assert classify_merchant_name("Hertz Rent-A-Car SFO") is RC.TRAVEL
        assert lookup_merchant("LYFT *RIDE TUE 8PM").name == "Lyft"

    def test_merchant_tokens(self):
        assert merchant_tokens("AMAZON.COM*AB12") == ["amazon", "com", "ab12"]
        assert merchant_tokens("Dave & Buster's #7") == ["dave", "and", "busters"]
        assert merchant_tokens(None) == []
