# categorizer/service.py
"""
Categorizer service: built-in classification tables plus optional YAML
overrides (extra place types, extra codes, merchant-name rules).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import yaml

from bcc_core.models import RewardCategory
from categorizer.mcc import classify_by_code, classify_merchant_name
from categorizer.place_types import PLACE_TYPE_TABLE, first_place_type_match
from categorizer.rules import apply_rules_with_name, compile_rules

LOGGER = logging.getLogger("categorizer")


class CategorizerService:
    """Classify codes, place types and merchant names into reward categories."""

    def __init__(self, rules_path: Optional[Union[str, Path]] = None):
        self.cfg: Dict[str, Any] = {"rules": [], "defaults": {"category": "Everything Else"}}
        if rules_path:
            p = Path(rules_path)
            if p.exists():
                with open(p, "r", encoding="utf-8") as f:
                    self.cfg = yaml.safe_load(f) or self.cfg
                LOGGER.debug("loaded categorization rules from %s", p)
            else:
                LOGGER.warning("rules file not found, using built-in tables: %s", p)

        self.rules = compile_rules(self.cfg)
        self.codes = {
            int(code): RewardCategory.parse(cat)
            for code, cat in (self.cfg.get("codes") or {}).items()
        }
        self.place_types = dict(PLACE_TYPE_TABLE)
        for tag, cat in (self.cfg.get("place_types") or {}).items():
            self.place_types[str(tag)] = RewardCategory.parse(cat)
        defaults = self.cfg.get("defaults") or {}
        self.default = RewardCategory.parse(defaults.get("category", "Everything Else"))

    def classify_code(self, code: int) -> RewardCategory:
        if code in self.codes:
            return self.codes[code]
        return classify_by_code(code) or self.default

    def classify_place_types(self, types: Iterable[str]) -> RewardCategory:
        return first_place_type_match(types, self.place_types) or self.default

    def classify_merchant_with_rule(
        self, merchant_name: str
    ) -> Tuple[RewardCategory, Optional[str]]:
        """
        Apply rules and return (category, rule_name).
        rule_name is None if no rule matched (directory lookup used).
        """
        cat, rule_name = apply_rules_with_name(merchant_name, self.rules)
        if cat is not None:
            return cat, rule_name
        cat = classify_merchant_name(merchant_name)
        if cat is RewardCategory.OTHER:
            cat = self.default
        return cat, None

    def classify_merchant(self, merchant_name: str) -> RewardCategory:
        return self.classify_merchant_with_rule(merchant_name)[0]

    def get_rule_count(self) -> int:
        """Return number of rules configured."""
        return len(self.rules)
