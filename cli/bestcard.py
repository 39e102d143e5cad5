# cli/bestcard.py
# Command-line surface for the best-card recommender.
# - Card collection management (cards list/add/edit/delete)
# - Recommendations by category or merchant (recommend)
# - Screenshot import (scan)
# - Lookups: merchant directory, known cards, classification, nearby places
#
# Examples:
#   bestcard cards add --from-known "Amex Gold" --last-four 1005
#   bestcard cards add --name "My Visa" --base 1.5 --reward Dining=3 --vendor "Whole Foods=5"
#   bestcard recommend --merchant "Whole Foods Market"
#   bestcard scan data/screens/accounts.png --multi --save
#   bestcard nearby --lat 37.7749 --lon -122.4194

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from bcc_core.errors import ExternalServiceError
from bcc_core.models import (
    CardColor,
    Coordinate,
    CreditCard,
    RankedCard,
    RewardCategory,
    ScannedCardInfo,
    VendorBonus,
)
from bcc_utils.logging_setup import setup_logging
from bcc_utils.normalizers import format_rate, split_assignment
from catalog.known_cards import exact_match, search as search_known
from categorizer.mcc import search_merchants
from categorizer.service import CategorizerService
from config.loader import load_config, resolve_path
from storage.card_store import CardStore
from storage.codec import card_to_record
from storage.sqlite_store import SQLiteStore

LOGGER = logging.getLogger("bestcard")

EXIT_USAGE = 2
EXIT_EXTERNAL = 3

COLOR_CHOICE = click.Choice([c.value for c in CardColor], case_sensitive=False)


# ----------------------------- Context -----------------------------
@dataclass
class AppContext:
    cfg: Dict[str, Any]
    db_path: Path
    _kv: Optional[SQLiteStore] = field(default=None, repr=False)
    _store: Optional[CardStore] = field(default=None, repr=False)
    _categorizer: Optional[CategorizerService] = field(default=None, repr=False)

    @property
    def store(self) -> CardStore:
        if self._store is None:
            self._kv = SQLiteStore(self.db_path)
            self._store = CardStore(self._kv, key=self.cfg["storage"]["key"])
        return self._store

    @property
    def categorizer(self) -> CategorizerService:
        if self._categorizer is None:
            rules = self.cfg["paths"].get("rules")
            self._categorizer = CategorizerService(resolve_path(rules) if rules else None)
        return self._categorizer

    def close(self) -> None:
        if self._kv is not None:
            self._kv.close()


# ----------------------------- Formatting -----------------------------
def _mask(card: CreditCard) -> str:
    return f" ••••{card.last_four}" if card.last_four else ""


def _card_line(i: int, card: CreditCard) -> str:
    parts = [f"{cat.value} {format_rate(rate)}" for cat, rate in card.rewards.items()]
    parts += [f"{b.vendor_name} {format_rate(b.reward_rate)}" for b in card.vendor_bonuses]
    extras = f" | {', '.join(parts)}" if parts else ""
    return (
        f"{i:>2}. {card.name}{_mask(card)} [{card.color.value}] "
        f"base {format_rate(card.base_reward)}{extras}  ({card.id[:8]})"
    )


def _ranked_line(i: int, r: RankedCard) -> str:
    return f"{i:>2}. {r.card.name}{_mask(r.card)}  {format_rate(r.rate)}  ({r.source.label})"


def _ranked_json(r: RankedCard) -> Dict[str, Any]:
    return {
        "id": r.card.id,
        "name": r.card.name,
        "lastFour": r.card.last_four,
        "rate": r.rate,
        "source": r.source.kind.value,
        "vendorName": r.source.vendor_name,
    }


def _scanned_json(info: ScannedCardInfo) -> Dict[str, Any]:
    return {
        "name": info.name,
        "lastFour": info.last_four,
        "suggested": info.suggested.card_name if info.suggested else None,
    }


# ----------------------------- Option parsing -----------------------------
def _parse_category(raw: str) -> RewardCategory:
    try:
        return RewardCategory.parse(raw)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_rewards(pairs: Tuple[str, ...]) -> Dict[RewardCategory, float]:
    rewards: Dict[RewardCategory, float] = {}
    for raw in pairs:
        try:
            name, rate = split_assignment(raw)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--reward") from e
        cat = _parse_category(name)
        if cat is RewardCategory.OTHER:
            raise click.BadParameter(
                "Everything Else is the base rate; use --base", param_hint="--reward"
            )
        rewards[cat] = rate
    return rewards


def _parse_vendors(pairs: Tuple[str, ...]) -> List[VendorBonus]:
    bonuses: List[VendorBonus] = []
    for raw in pairs:
        try:
            name, rate = split_assignment(raw)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--vendor") from e
        bonuses.append(VendorBonus(vendor_name=name, reward_rate=rate))
    return bonuses


def _find_card(store: CardStore, ref: str) -> CreditCard:
    card = store.get(ref)
    if card is not None:
        return card
    matches = [c for c in store.cards if c.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    raise click.BadParameter(f"No single card matches {ref!r}", param_hint="CARD_ID")


# ----------------------------- CLI -----------------------------
@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="config.toml path (default: repo root config.toml)",
)
@click.option("--db", "db_path", default=None, help="SQLite file holding saved cards")
@click.option("--quiet", is_flag=True, help="Suppress info logs; only warnings/errors.")
@click.option("--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def cli(ctx: click.Context, config_path, db_path, quiet: bool, verbose: bool) -> None:
    """Pick the best credit card for a purchase."""
    cfg = load_config(Path(config_path) if config_path else None)
    level = cfg["logging"].get("level", "INFO")
    if quiet:
        level = "WARNING"
    if verbose:
        level = "DEBUG"
    setup_logging(level)

    db = Path(db_path) if db_path else resolve_path(cfg["paths"]["db"])
    app = AppContext(cfg=cfg, db_path=db)
    ctx.obj = app
    ctx.call_on_close(app.close)


# ---------- cards ----------
@cli.group("cards")
def cards_grp() -> None:
    """Manage saved cards."""


@cards_grp.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output JSON array")
@click.pass_obj
def cards_list(app: AppContext, as_json: bool) -> None:
    cards = app.store.cards
    if as_json:
        click.echo(json.dumps([card_to_record(c) for c in cards], indent=2, ensure_ascii=False))
        return
    if not cards:
        click.echo("No cards saved yet.")
        return
    for i, card in enumerate(cards):
        click.echo(_card_line(i, card))


def _card_options(fn):
    fn = click.option("--vendor", "vendors", multiple=True, help="Vendor bonus NAME=RATE")(fn)
    fn = click.option("--reward", "rewards", multiple=True, help="Category bonus CATEGORY=RATE")(fn)
    fn = click.option("--base", type=float, default=None, help="Base reward rate (%)")(fn)
    fn = click.option("--color", type=COLOR_CHOICE, default=None)(fn)
    fn = click.option("--last-four", default=None, help="Last four digits")(fn)
    fn = click.option("--name", default=None, help="Card name")(fn)
    return fn


@cards_grp.command("add")
@_card_options
@click.option("--from-known", "known", default=None, help="Pre-fill from a known card name")
@click.pass_obj
def cards_add(app: AppContext, name, last_four, color, base, rewards, vendors, known) -> None:
    if known:
        entry = exact_match(known)
        if entry is None:
            hits = search_known(known)
            hint = f" Did you mean: {', '.join(h.card_name for h in hits[:3])}?" if hits else ""
            raise click.BadParameter(f"Unknown card {known!r}.{hint}", param_hint="--from-known")
        card = entry.to_credit_card()
    else:
        if not name or not name.strip():
            raise click.UsageError("Provide --name or --from-known.")
        card = CreditCard(name=name.strip())

    if name and name.strip():
        card.name = name.strip()
    if last_four is not None:
        card = replace(card, last_four=last_four)
    if color:
        card.color = CardColor.parse(color)
    if base is not None:
        card.base_reward = base
    if rewards:
        card.rewards.update(_parse_rewards(rewards))
    if vendors:
        card.vendor_bonuses.extend(_parse_vendors(vendors))

    saved = app.store.add(card)
    click.echo(f"Added {saved.name}{_mask(saved)} ({saved.id[:8]})")


@cards_grp.command("edit")
@click.argument("card_id")
@_card_options
@click.option("--clear-rewards", is_flag=True, help="Drop all category bonuses first")
@click.option("--clear-vendors", is_flag=True, help="Drop all vendor bonuses first")
@click.pass_obj
def cards_edit(
    app: AppContext, card_id, name, last_four, color, base, rewards, vendors,
    clear_rewards, clear_vendors,
) -> None:
    current = _find_card(app.store, card_id)
    card = replace(
        current,
        rewards={} if clear_rewards else dict(current.rewards),
        vendor_bonuses=[] if clear_vendors else list(current.vendor_bonuses),
    )
    if name is not None:
        if not name.strip():
            raise click.BadParameter("Name cannot be blank", param_hint="--name")
        card.name = name.strip()
    if last_four is not None:
        card = replace(card, last_four=last_four)
    if color:
        card.color = CardColor.parse(color)
    if base is not None:
        card.base_reward = base
    if rewards:
        card.rewards.update(_parse_rewards(rewards))
    if vendors:
        card.vendor_bonuses.extend(_parse_vendors(vendors))

    app.store.update(card)
    click.echo(f"Updated {card.name}{_mask(card)}")


@cards_grp.command("delete")
@click.argument("indices", nargs=-1, type=int, required=True)
@click.pass_obj
def cards_delete(app: AppContext, indices: Tuple[int, ...]) -> None:
    store = app.store
    bad = [i for i in indices if not 0 <= i < len(store)]
    if bad:
        raise click.BadParameter(f"No card at index {bad[0]}", param_hint="INDICES")
    names = [store.cards[i].name for i in sorted(set(indices))]
    store.delete(indices)
    click.echo(f"Deleted {len(names)} card(s): {', '.join(names)}")


# ---------- recommend ----------
@cli.command("recommend")
@click.option("--category", default=None, help="Spending category")
@click.option("--merchant", default=None, help="Merchant name")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_obj
def recommend_cmd(app: AppContext, category, merchant, as_json: bool) -> None:
    """Rank saved cards for a category or a merchant."""
    if not category and not merchant:
        raise click.UsageError("Provide --category and/or --merchant.")

    rule_name = None
    if category:
        cat = _parse_category(category)
    else:
        cat, rule_name = app.categorizer.classify_merchant_with_rule(merchant)
        LOGGER.debug("merchant %r classified as %s (rule=%s)", merchant, cat.value, rule_name)

    store = app.store
    ranked = store.rank_for_merchant(cat, merchant) if merchant else store.rank(cat)

    if as_json:
        payload = {
            "category": cat.value,
            "merchant": merchant,
            "rule": rule_name,
            "ranked": [_ranked_json(r) for r in ranked],
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    header = f"{merchant} -> {cat.value}" if merchant else cat.value
    click.echo(header)
    if not ranked:
        click.echo("No cards saved yet.")
        return
    for i, r in enumerate(ranked, start=1):
        click.echo(_ranked_line(i, r))


# ---------- scan ----------
@cli.command("scan")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--multi", is_flag=True, help="Detect every card on an account-list screenshot")
@click.option("--save", is_flag=True, help="Save detected cards to the collection")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_obj
def scan_cmd(app: AppContext, image: str, multi: bool, save: bool, as_json: bool) -> None:
    """Read card name and last four digits from a screenshot."""
    from pipeline.scan_card import candidates, scan_card, scan_cards

    try:
        if multi:
            infos = scan_cards(image, ocr_cfg=app.cfg["ocr"])
        else:
            info = scan_card(image, ocr_cfg=app.cfg["ocr"])
            infos = [] if info.is_empty else [info]
    except ExternalServiceError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(EXIT_EXTERNAL) from exc

    if as_json:
        click.echo(json.dumps([_scanned_json(i) for i in infos], indent=2, ensure_ascii=False))
    elif not infos:
        click.echo("Not detected")
    else:
        for i, info in enumerate(infos, start=1):
            suggestion = f"  -> rewards from {info.suggested.card_name}" if info.suggested else ""
            last = f"••••{info.last_four}" if info.last_four else "(no digits)"
            click.echo(f"{i:>2}. {info.name or '(no name)'} {last}{suggestion}")

    if save:
        new_cards = candidates(infos)
        for card in new_cards:
            app.store.add(card)
        if not as_json:
            click.echo(f"Saved {len(new_cards)} card(s).")


# ---------- lookups ----------
@cli.command("merchants")
@click.argument("query")
def merchants_cmd(query: str) -> None:
    """Search the merchant directory."""
    hits = search_merchants(query)
    if not hits:
        click.echo("No merchants found.")
        return
    for m in hits:
        click.echo(f"{m.name:<28} {m.code:>5}  {m.category.value}")


@cli.command("known")
@click.argument("query")
def known_cmd(query: str) -> None:
    """Search the known-card database."""
    hits = search_known(query)
    if not hits:
        click.echo("No known cards found.")
        return
    for k in hits:
        cats = ", ".join(f"{c.value} {format_rate(r)}" for c, r in k.category_rewards.items())
        click.echo(f"{k.card_name}: base {format_rate(k.base_reward)}" + (f" | {cats}" if cats else ""))


@cli.command("classify")
@click.option("--code", type=int, default=None, help="Merchant category code")
@click.option("--type", "types", multiple=True, help="Place type tag (repeatable, in priority order)")
@click.option("--merchant", default=None, help="Merchant name")
@click.pass_obj
def classify_cmd(app: AppContext, code, types, merchant) -> None:
    """Map a code, place types or merchant name to a reward category."""
    given = [x for x in (code is not None, bool(types), bool(merchant)) if x]
    if len(given) != 1:
        raise click.UsageError("Provide exactly one of --code, --type, --merchant.")
    svc = app.categorizer
    if code is not None:
        cat = svc.classify_code(code)
    elif types:
        cat = svc.classify_place_types(list(types))
    else:
        cat = svc.classify_merchant(merchant)
    click.echo(cat.value)


@cli.command("nearby")
@click.option("--lat", type=float, default=None)
@click.option("--lon", type=float, default=None)
@click.option("--radius", type=float, default=None, help="Search radius in meters")
@click.pass_obj
def nearby_cmd(app: AppContext, lat, lon, radius) -> None:
    """Nearby merchants with the best saved card for each."""
    from nearby.location import location_from_config
    from nearby.service import provider_from_config
    from nearby.session import NearbySession

    if lat is not None and lon is not None:
        at: Optional[Coordinate] = Coordinate(lat, lon)
    else:
        at = location_from_config(app.cfg["nearby"]).current()
    if at is None:
        click.echo("Location unavailable", err=True)
        raise SystemExit(EXIT_USAGE)

    try:
        session = NearbySession(provider_from_config(app.cfg["nearby"]), radius_m=radius)
        session.refresh(at)
    except ExternalServiceError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(EXIT_EXTERNAL) from exc

    if not session.merchants:
        click.echo("No merchants nearby.")
        return
    for merchant, top in session.best_cards(app.store):
        best = f"{top.card.name} {format_rate(top.rate)}" if top else "no cards"
        click.echo(f"{merchant.name} ({merchant.distance_text}) {merchant.category.value} -> {best}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
