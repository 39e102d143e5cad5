# config/loader.py
from __future__ import annotations
import copy
import tomllib
from pathlib import Path
from typing import Any, Dict

REPO = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = REPO / "config.toml"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "paths": {
        "db": "data/bestcard.sqlite",
        "rules": "config/rules.example.yaml",
    },
    "storage": {"key": "saved_cards_v1"},
    "ocr": {"languages": ["en"], "gpu": False, "min_confidence": 0.4},
    "nearby": {
        "radius_m": 500.0,
        "max_results": 20,
        "timeout_s": 10,
        "api_key_env": "GOOGLE_PLACES_API_KEY",
    },
    "logging": {"level": "INFO"},
}


def load_config(config_path: Path | None = None) -> Dict[str, Any]:
    """
    Load config.toml from repo root by default, merged over DEFAULTS.
    A missing default file yields DEFAULTS; a missing explicit path raises.
    """
    cfg = copy.deepcopy(DEFAULTS)
    if config_path is None:
        config_path = DEFAULT_CONFIG
        if not config_path.exists():
            return cfg
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        loaded = tomllib.load(f)

    for section, values in loaded.items():
        if isinstance(values, dict):
            cfg.setdefault(section, {}).update(values)
        else:
            cfg[section] = values
    return cfg


def resolve_path(raw: str | Path) -> Path:
    """Relative paths in config are relative to the repo root."""
    p = Path(raw)
    return p if p.is_absolute() else REPO / p
