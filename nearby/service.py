# nearby/service.py
"""
Nearby-merchant lookup over the Google Places (New) REST API.

One request per lookup, no retry. Places are classified through their
ordered type tags and returned nearest first.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from bcc_core.errors import NearbyLookupError
from bcc_core.models import Coordinate, NearbyMerchant
from categorizer.place_types import PRIORITY_SEARCH_TYPES, classify_by_place_type

logger = logging.getLogger("nearby")

SEARCH_URL = "https://places.googleapis.com/v1/places:searchNearby"
FIELD_MASK = "places.id,places.displayName,places.formattedAddress,places.types,places.location"
DEFAULT_RADIUS_M = 500.0  # about 0.3 mi
DEFAULT_MAX_RESULTS = 20
DEFAULT_TIMEOUT = 10


class GooglePlacesProvider:
    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        radius_m: float = DEFAULT_RADIUS_M,
        max_results: int = DEFAULT_MAX_RESULTS,
        timeout_s: float = DEFAULT_TIMEOUT,
    ):
        if not api_key:
            raise ValueError("A places API key is required")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.radius_m = float(radius_m)
        self.max_results = int(max_results)
        self.timeout_s = timeout_s

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": FIELD_MASK,
        }

    def _body(self, at: Coordinate, radius_m: float) -> Dict[str, Any]:
        return {
            "includedTypes": PRIORITY_SEARCH_TYPES,
            "maxResultCount": self.max_results,
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": at.latitude, "longitude": at.longitude},
                    "radius": radius_m,
                }
            },
        }

    def search(self, at: Coordinate, radius_m: Optional[float] = None) -> List[NearbyMerchant]:
        radius = self.radius_m if radius_m is None else float(radius_m)
        try:
            resp = self.session.post(
                SEARCH_URL,
                headers=self._headers(),
                json=self._body(at, radius),
                timeout=self.timeout_s,
            )
        except requests.RequestException as exc:
            logger.error("Error contacting Places API: %s", exc)
            raise NearbyLookupError(f"Places API unreachable: {exc}") from exc

        if resp.status_code != 200:
            logger.warning("Places API returned %s: %s", resp.status_code, resp.text)
            raise NearbyLookupError.from_response(resp.status_code, resp.text or "no body")

        try:
            data = resp.json()
        except ValueError as exc:
            raise NearbyLookupError(f"Places API returned invalid JSON: {exc}") from exc

        merchants = parse_places(data, at)
        logger.info("nearby lookup found %d place(s) within %.0f m", len(merchants), radius)
        return merchants


def parse_places(data: Dict[str, Any], origin: Coordinate) -> List[NearbyMerchant]:
    out: List[NearbyMerchant] = []
    for place in (data or {}).get("places") or []:
        place_id = place.get("id")
        name = (place.get("displayName") or {}).get("text")
        if not place_id or not name:
            continue

        types = list(place.get("types") or [])
        loc = place.get("location")
        if loc:
            coord = Coordinate(float(loc["latitude"]), float(loc["longitude"]))
            distance = origin.distance_to(coord)
        else:
            coord = Coordinate(0.0, 0.0)
            distance = 0.0

        out.append(
            NearbyMerchant(
                id=place_id,
                name=name,
                address=place.get("formattedAddress") or "",
                coordinate=coord,
                distance_m=distance,
                category=classify_by_place_type(types),
                place_types=types,
            )
        )
    out.sort(key=lambda m: m.distance_m)
    return out


def provider_from_config(nearby_cfg: Dict[str, Any]) -> GooglePlacesProvider:
    env_name = nearby_cfg.get("api_key_env", "GOOGLE_PLACES_API_KEY")
    api_key = os.getenv(env_name, "")
    if not api_key:
        raise NearbyLookupError(f"Set {env_name} to enable nearby lookups")
    return GooglePlacesProvider(
        api_key=api_key,
        radius_m=nearby_cfg.get("radius_m", DEFAULT_RADIUS_M),
        max_results=nearby_cfg.get("max_results", DEFAULT_MAX_RESULTS),
        timeout_s=nearby_cfg.get("timeout_s", DEFAULT_TIMEOUT),
    )
