"""
Normalisation of stored responder locations.

Responder rows carry their position as free text because different clients
have written it in different shapes over time:

* JSON object -- ``{"lat": .., "lng": ..}`` or ``{"latitude": .., "longitude": ..}``
* PostgreSQL ``point`` text -- ``"(lng,lat)"``, longitude first

``parse_location`` never raises; anything it cannot read yields ``None`` and
the candidate is treated as ineligible.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Optional

from .entities import Coordinate

_POINT_RE = re.compile(r"\(([^,]+),([^)]+)\)")
_FLOAT_PREFIX_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_location(raw: Optional[str]) -> Optional[Coordinate]:
    """Return the coordinate encoded in *raw*, or ``None``."""
    if not raw:
        return None

    coordinate = _from_json(raw)
    if coordinate is not None:
        return coordinate

    match = _POINT_RE.search(raw)
    if match:
        lng = _parse_float(match.group(1))
        lat = _parse_float(match.group(2))
        if lat is not None and lng is not None:
            return Coordinate(latitude=lat, longitude=lng)

    return None


def _from_json(raw: str) -> Optional[Coordinate]:
    try:
        parsed = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(parsed, dict):
        return None

    # Truthiness check: a component of exactly 0 is rejected here.
    if parsed.get("lat") and parsed.get("lng"):
        return _coordinate(parsed["lat"], parsed["lng"])
    if parsed.get("latitude") and parsed.get("longitude"):
        return _coordinate(parsed["latitude"], parsed["longitude"])
    return None


def _coordinate(lat: Any, lng: Any) -> Optional[Coordinate]:
    lat_f = _parse_float(lat)
    lng_f = _parse_float(lng)
    if lat_f is None or lng_f is None:
        return None
    return Coordinate(latitude=lat_f, longitude=lng_f)


def _parse_float(value: Any) -> Optional[float]:
    """Lenient float parsing: reads the leading numeric part of a string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _FLOAT_PREFIX_RE.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None
