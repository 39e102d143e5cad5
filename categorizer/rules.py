# categorizer/rules.py
"""
Rules engine for merchant-name categorization.

Features:
- Priority ordering (higher priority rules evaluated first, config order on ties)
- Merchant substring patterns (case-insensitive)
- Merchant regular expressions
- Rule name tracking for audit
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from bcc_core.models import RewardCategory


@dataclass
class Rule:
    """A single categorization rule with conditions and an assigned category."""

    name: str
    category: RewardCategory
    priority: int = 0  # Higher = evaluated first

    merchant_patterns: List[re.Pattern] = field(default_factory=list)

    def applies(self, merchant_name: str) -> bool:
        if not self.merchant_patterns:
            return False
        merchant = (merchant_name or "").upper()
        return any(p.search(merchant) for p in self.merchant_patterns)


def parse_rule(r: Dict[str, Any]) -> Rule:
    """Parse a rule from YAML config dict."""
    patterns = []
    for s in r.get("if_merchant_matches", []):
        patterns.append(re.compile(re.escape(str(s).upper())))
    for s in r.get("if_merchant_regex", []):
        patterns.append(re.compile(str(s), re.IGNORECASE))

    assign = r.get("assign", {})
    if "category" not in assign:
        raise ValueError(f"Rule {r.get('name', 'unnamed')!r} has no assign.category")

    return Rule(
        name=r.get("name", "unnamed"),
        category=RewardCategory.parse(assign["category"]),
        priority=int(r.get("priority", 0)),
        merchant_patterns=patterns,
    )


def compile_rules(cfg: Dict[str, Any]) -> List[Rule]:
    """Compile all rules from config, sorted by priority (highest first)."""
    rules = [parse_rule(r) for r in cfg.get("rules", None) or []]
    rules.sort(key=lambda r: r.priority, reverse=True)
    return rules


def apply_rules_with_name(
    merchant_name: str, rules: List[Rule]
) -> Tuple[Optional[RewardCategory], Optional[str]]:
    """
    Return (category, rule_name) for the first matching rule, or
    (None, None) when nothing matched.
    """
    for rule in rules:
        if rule.applies(merchant_name):
            return rule.category, rule.name
    return None, None
