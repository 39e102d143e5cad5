import pytest

from bcc_core.errors import ScanError
from bcc_core.models import RewardCategory as RC
from pipeline.scan_card import candidates, load_lines, scan_card, scan_cards


def test_text_dump_skips_ocr(tmp_path):
    dump = tmp_path / "card.txt"
    dump.write_text("Amex Gold®\n\n•••• 1005\n", encoding="utf-8")
    assert load_lines(dump) == ["Amex Gold", "•••• 1005"]

    info = scan_card(dump)
    assert info.name == "Amex Gold"
    assert info.last_four == "1005"
    [card] = candidates([info])
    assert card.rewards[RC.DINING] == 4.0
    assert card.last_four == "1005"


def test_image_goes_through_reader(fake_easyocr, sample_card_image):
    info = scan_card(sample_card_image)
    assert info.name == "Chase Sapphire Reserve"
    assert info.last_four == "4242"


def test_account_list_image(fake_easyocr, sample_card_image, monkeypatch):
    monkeypatch.setattr(
        fake_easyocr,
        "lines",
        ["Freedom Flex (...1111)", "$0.00", "Quicksilver (...2222)", "$5.00"],
    )
    found = scan_cards(sample_card_image, ocr_cfg={"min_confidence": 0.1})
    assert [c.last_four for c in found] == ["1111", "2222"]


def test_explicit_reader_is_used(tmp_path):
    class StubReader:
        def read_lines(self, path):
            return ["PayPal", "4111 1111 1111 9876"]

    info = scan_card(tmp_path / "shot.png", reader=StubReader())
    assert info.name == "PayPal Cashback Mastercard"
    assert info.last_four == "9876"


def test_broken_image_raises(fake_easyocr, broken_image):
    with pytest.raises(ScanError):
        scan_card(broken_image)


def test_empty_scans_produce_no_candidates(tmp_path):
    dump = tmp_path / "blank.txt"
    dump.write_text("9:41\n", encoding="utf-8")
    assert scan_cards(dump) == []
    assert candidates([scan_card(dump)]) == []
