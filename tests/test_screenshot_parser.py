import pytest

from parser.card_names import best_keyword_match, extract_name, looks_like_name
from parser.extractor import extract_last_four, parse_card, parse_cards, scanned_as_dict
from parser.normalizer import clean_lines, split_text

CARD_LINES = ["9:41", "Chase Sapphire Reserve®", "•••• 4242", "Available credit $5,000.00"]

FILLER = ["$0.00", "Current balance", "$12.34", "Rewards", "Pay"]


@pytest.mark.parametrize(
    "lines,expected",
    [
        (["•••• 4242"], "4242"),
        (["Card ···· 0005"], "0005"),
        (["****1881"], "1881"),
        (["4111 1111 1111 1234"], "1234"),
        (["4111111111111234"], "1234"),
        (["Card ending in 7777"], "7777"),
        (["Ends in 8080"], "8080"),
        (["Visa", "1234"], "1234"),
        (["Hello world"], ""),
        ([], ""),
    ],
)
def test_extract_last_four(lines, expected):
    assert extract_last_four(lines) == expected


def test_masked_group_must_be_exactly_four_digits():
    assert extract_last_four(["•••• 42421"]) == ""


def test_masked_beats_later_patterns():
    lines = ["4111 1111 1111 1234", "•••• 9999"]
    assert extract_last_four(lines) == "9999"


def test_clock_is_not_a_last_four():
    assert extract_last_four(["9:41", "Freedom"]) == ""


class TestNames:
    def test_two_keywords_beat_one(self):
        assert best_keyword_match(["SAPPHIRE PREFERRED"]) == "Chase Sapphire Preferred"
        assert best_keyword_match(["Sapphire", "Reserve"]) == "Chase Sapphire Reserve"

    def test_tie_goes_to_table_order(self):
        assert best_keyword_match(["Sapphire"]) == "Chase Sapphire Reserve"

    def test_no_keyword(self):
        assert best_keyword_match(["hello", "world"]) is None

    def test_fallback_first_plausible_line(self):
        lines = ["9:41", "$1,234.56", "Available credit", "My Store Card", "Other Line"]
        assert extract_name(lines) == "My Store Card"

    def test_looks_like_name(self):
        assert looks_like_name("My Store Card")
        assert not looks_like_name("abc")
        assert not looks_like_name("$500 Card")
        assert not looks_like_name("12345 ab")
        assert not looks_like_name("Statement Closing")
        assert not looks_like_name("x" * 61)

    def test_nothing_plausible(self):
        assert extract_name(["12", "$4.00"]) == ""


class TestParseCard:
    def test_full_screenshot(self):
        info = parse_card(CARD_LINES)
        assert info.name == "Chase Sapphire Reserve"
        assert info.last_four == "4242"
        assert info.suggested is not None
        assert info.suggested.card_name == "Chase Sapphire Reserve"

    def test_unknown_name_has_no_suggestion(self):
        info = parse_card(["My Store Card", "•••• 1234"])
        assert info.name == "My Store Card"
        assert info.suggested is None

    def test_nothing_found(self):
        info = parse_card(["9:41", "$0.00"])
        assert info.is_empty
        assert scanned_as_dict(info) == {"name": "", "last_four": "", "suggested": None}


class TestParseCards:
    def test_account_list(self):
        lines = (
            ["Accounts"]
            + ["Sapphire Reserve > (...4242)"] + FILLER
            + ["Freedom Unlimited (•••• 1111)"] + FILLER
            + ["Venture X (…9999)"] + FILLER
            + ["Sapphire Reserve (...4242)"]
        )
        found = parse_cards(lines)
        assert [c.last_four for c in found] == ["4242", "1111", "9999"]
        assert [c.name for c in found] == [
            "Chase Sapphire Reserve",
            "Chase Freedom Unlimited",
            "Capital One Venture X",
        ]
        assert all(c.suggested is not None for c in found)

    def test_row_text_is_the_fallback_name(self):
        found = parse_cards(["Club Card > (...3333)"] + FILLER)
        assert found[0].name == "Club Card"
        assert found[0].suggested is None

    def test_without_rows_falls_back_to_single_card(self):
        found = parse_cards(CARD_LINES)
        assert len(found) == 1
        assert found[0].last_four == "4242"

    def test_empty(self):
        assert parse_cards([]) == []
        assert parse_cards(["9:41"]) == []


def test_cleaning_strips_trademarks_and_blanks():
    assert clean_lines(["  Gold®  ", "", "Card™"]) == ["Gold", "Card"]
    assert split_text("a\n\n b \n") == ["a", "b"]
    assert split_text("") == []
