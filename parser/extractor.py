# parser/extractor.py
"""
Field extraction from recognized screenshot text.

Input is a list of lines in top-to-bottom reading order (noise included).
Nothing here raises for "nothing recognized": absence is "" or [].

Usage (CLI):
  python -m parser.extractor --input data/interim/ocr_text/card.txt [--multi]
"""
from __future__ import annotations

import argparse
import json
import re
from pathlib import Path
from typing import Dict, List, Optional, Set

from bcc_core.models import ScannedCardInfo
from catalog.known_cards import exact_match
from parser.card_names import best_keyword_match, extract_name
from parser.normalizer import clean_lines

MASK = r"[•·.*]"

# strict priority order; first capture wins
_MASKED = re.compile(MASK + r"{3,4}\s*(\d{4})(?!\d)")
_ENDING_IN = re.compile(r"\bend(?:ing|s)?\s+in\s+(\d{4})(?!\d)", re.IGNORECASE)
_GROUPED_16 = re.compile(r"\b\d{4}[ \t]+\d{4}[ \t]+\d{4}[ \t]+(\d{4})\b")
_BARE_16 = re.compile(r"\b(\d{16})\b")
_FOUR_DIGITS = re.compile(r"[0-9]{4}")

# account-list rows, e.g. "Sapphire Reserve > (...4242)" or "Freedom (•••• 1234) $52.10"
_ACCOUNT_ROW = re.compile(r"\(\s*[•·.*…]{1,4}\s*(\d{4})\s*\)")
_CHEVRONS = re.compile(r"[\s>›»]+$")

CONTEXT_LINES = 5


def extract_last_four(lines: List[str]) -> str:
    joined = "\n".join(lines)

    m = _MASKED.search(joined) or _ENDING_IN.search(joined) or _GROUPED_16.search(joined)
    if m:
        return m.group(1)

    m = _BARE_16.search(joined)
    if m:
        return m.group(1)[-4:]

    for line in lines:
        if _FOUR_DIGITS.fullmatch(line.strip()):
            return line.strip()
    return ""


def parse_card(lines: List[str]) -> ScannedCardInfo:
    """Single best-guess card from one screenshot."""
    lines = clean_lines(lines)
    name = extract_name(lines)
    return ScannedCardInfo(
        name=name,
        last_four=extract_last_four(lines),
        suggested=exact_match(name) if name else None,
    )


def _raw_row_name(line: str, start: int) -> str:
    return _CHEVRONS.sub("", line[:start]).strip()


def parse_cards(lines: List[str]) -> List[ScannedCardInfo]:
    """
    Every card on a banking-app account list. One entry per distinct
    last-four (first occurrence wins). Falls back to parse_card() when no
    account row is present.
    """
    lines = clean_lines(lines)
    found: List[ScannedCardInfo] = []
    seen: Set[str] = set()

    for i, line in enumerate(lines):
        m = _ACCOUNT_ROW.search(line)
        if not m:
            continue
        last_four = m.group(1)
        if last_four in seen:
            continue
        seen.add(last_four)

        window = lines[i : i + 1 + CONTEXT_LINES]
        name = best_keyword_match(window) or _raw_row_name(line, m.start())
        found.append(
            ScannedCardInfo(
                name=name,
                last_four=last_four,
                suggested=exact_match(name) if name else None,
            )
        )

    if found:
        return found

    single = parse_card(lines)
    return [] if single.is_empty else [single]


def scanned_as_dict(info: ScannedCardInfo) -> Dict[str, Optional[str]]:
    return {
        "name": info.name,
        "last_four": info.last_four,
        "suggested": info.suggested.card_name if info.suggested else None,
    }


def _cli():
    p = argparse.ArgumentParser(description="Extract card fields from OCR text lines")
    p.add_argument("--input", required=True, help="Path to OCR .txt file (one line per span)")
    p.add_argument("--multi", action="store_true", help="Detect every card on an account list")
    args = p.parse_args()

    inp = Path(args.input)
    if not inp.exists():
        raise FileNotFoundError(f"Input not found: {inp}")

    lines = inp.read_text(encoding="utf-8", errors="ignore").splitlines()
    if args.multi:
        out = [scanned_as_dict(c) for c in parse_cards(lines)]
    else:
        out = scanned_as_dict(parse_card(lines))
    print(json.dumps(out, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    _cli()
