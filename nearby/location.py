# nearby/location.py
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from bcc_core.models import Coordinate


class LocationProvider(Protocol):
    def current(self) -> Optional[Coordinate]:
        """Current device coordinate, or None when unavailable."""
        ...


class StaticLocationProvider:
    def __init__(self, coordinate: Optional[Coordinate] = None):
        self.coordinate = coordinate

    def current(self) -> Optional[Coordinate]:
        return self.coordinate


def location_from_config(nearby_cfg: Dict[str, Any]) -> StaticLocationProvider:
    lat = nearby_cfg.get("default_latitude")
    lon = nearby_cfg.get("default_longitude")
    if lat is None or lon is None:
        return StaticLocationProvider(None)
    return StaticLocationProvider(Coordinate(float(lat), float(lon)))
