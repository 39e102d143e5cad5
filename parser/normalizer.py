# parser/normalizer.py
"""
Clean recognized text lines before any pattern matching.

Every line loses trademark glyphs (® ™) and surrounding whitespace; lines
that end up empty are dropped by clean_lines().
"""

from __future__ import annotations

import re
from typing import Iterable, List

_TRADEMARKS = re.compile(r"[®™]")


def clean_line(line: str) -> str:
    return _TRADEMARKS.sub("", line or "").strip()


def clean_lines(lines: Iterable[str]) -> List[str]:
    out: List[str] = []
    for raw in lines:
        s = clean_line(raw)
        if s:
            out.append(s)
    return out


def split_text(text: str) -> List[str]:
    """Plain OCR text dump -> cleaned lines in reading order."""
    return clean_lines((text or "").splitlines())
