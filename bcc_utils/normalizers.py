# bcc_utils/normalizers.py
from __future__ import annotations

import re
from typing import List, Optional, Tuple


# ---------------- Merchant keys ----------------

_STORE_NUMBER = re.compile(r"#\s*\d+|\bstore\s*\d+", re.IGNORECASE)
_CORP_SUFFIX = re.compile(r"\b(inc|llc|corp|ltd|co)\b\.?", re.IGNORECASE)
_APOSTROPHES = re.compile(r"['’]")


def merchant_tokens(raw: Optional[str]) -> List[str]:
    """
    Merchant name -> lowercase word tokens.
    "AMAZON.COM*AB12" -> ["amazon", "com", "ab12"]
    "McDonald's #1234" -> ["mcdonalds"]
    """
    if not raw:
        return []
    s = raw.lower()
    s = _STORE_NUMBER.sub(" ", s)
    s = _CORP_SUFFIX.sub(" ", s)
    s = s.replace("&", " and ")
    s = _APOSTROPHES.sub("", s)
    s = re.sub(r"[^\w\s]", " ", s)
    return s.split()


def normalize_merchant_key(raw: Optional[str]) -> str:
    """
    Normalize merchant name to a stable key.
    "McDonald's #1234" -> "mcdonalds"
    "WHOLE FOODS MARKET Store 10" -> "wholefoodsmarket"
    """
    return "".join(merchant_tokens(raw))


# ---------------- Reward rates ----------------

_RATE_RX = re.compile(r"^\s*(?P<num>\d+(?:\.\d+)?)\s*(?:%|x|X|pts?)?\s*$")


def parse_rate(raw: str) -> float:
    """
    "3" / "3%" / "3x" / "1.5" -> float percentage.
    Raises ValueError on anything else, including negatives.
    """
    m = _RATE_RX.match(raw or "")
    if not m:
        raise ValueError(f"Not a reward rate: {raw!r}")
    return float(m.group("num"))


def split_assignment(raw: str) -> Tuple[str, float]:
    """'Whole Foods=5%' -> ('Whole Foods', 5.0). The last '=' separates."""
    name, sep, rate = (raw or "").rpartition("=")
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME=RATE, got {raw!r}")
    return name.strip(), parse_rate(rate)


def format_rate(rate: float) -> str:
    """3.0 -> '3%', 1.5 -> '1.5%'"""
    return f"{rate:g}%"
