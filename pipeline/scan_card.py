# pipeline/scan_card.py
"""
Screenshot -> text lines -> parsed card candidate(s).

.txt inputs are taken as already-recognized lines (one span per line) and
skip OCR; anything else goes through the EasyOCR reader, which raises
ScanError for undecodable images or engine failures.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bcc_core.models import CreditCard, ScannedCardInfo
from parser.extractor import parse_card, parse_cards
from parser.normalizer import split_text

LOGGER = logging.getLogger("pipeline")

TXT_EXTS = {".txt"}


def make_reader(ocr_cfg: Optional[Dict[str, Any]] = None):
    # deferred: loading the OCR engine is slow and only scans need it
    from ocr.reader import Reader

    ocr_cfg = ocr_cfg or {}
    return Reader(
        languages=list(ocr_cfg.get("languages", ["en"])),
        gpu=bool(ocr_cfg.get("gpu", False)),
        min_confidence=float(ocr_cfg.get("min_confidence", 0.4)),
    )


def load_lines(
    inp: Union[str, Path], reader=None, ocr_cfg: Optional[Dict[str, Any]] = None
) -> List[str]:
    inp = Path(inp)
    if inp.suffix.lower() in TXT_EXTS:
        return split_text(inp.read_text(encoding="utf-8", errors="ignore"))
    reader = reader or make_reader(ocr_cfg)
    return reader.read_lines(inp)


def scan_card(
    inp: Union[str, Path], reader=None, ocr_cfg: Optional[Dict[str, Any]] = None
) -> ScannedCardInfo:
    lines = load_lines(inp, reader=reader, ocr_cfg=ocr_cfg)
    info = parse_card(lines)
    LOGGER.info(
        "scan %s: name=%r last_four=%r suggested=%s",
        Path(inp).name,
        info.name,
        info.last_four,
        info.suggested.card_name if info.suggested else None,
    )
    return info


def scan_cards(
    inp: Union[str, Path], reader=None, ocr_cfg: Optional[Dict[str, Any]] = None
) -> List[ScannedCardInfo]:
    lines = load_lines(inp, reader=reader, ocr_cfg=ocr_cfg)
    cards = parse_cards(lines)
    LOGGER.info("scan %s: %d card(s) detected", Path(inp).name, len(cards))
    return cards


def candidates(infos: List[ScannedCardInfo]) -> List[CreditCard]:
    """Candidate records ready for the card store (non-empty scans only)."""
    return [i.to_credit_card() for i in infos if not i.is_empty]
