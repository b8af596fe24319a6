"""Coarse location resolution for finding a visitor's officials.

Resolution order:
1. Explicit coordinates -> nearest reference city (degree-space distance)
2. ZIP code -> known ZIP table, then state ZIP ranges, then Washington, DC
3. State code -> that state's capital
4. IP geolocation headers -> region expanded to a state, coordinates from
   the city table, then the state capital, then Washington, DC
5. Nothing usable -> Washington, DC

Every path ends in a concrete ``Location``; nothing here raises on bad input.
"""

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from app.services.geo_tables import (
    CITY_COORDINATES,
    REFERENCE_CITIES,
    STATE_CAPITALS,
    STATE_CENTROIDS,
    STATE_CODES,
    STATE_NAMES,
    ZIP_LOCATIONS,
    ZIP_RANGES,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/New_York"

_ZIP_PATTERN = re.compile(r"^(\d{5})(?:-\d{4})?$")


@dataclass(frozen=True)
class Location:
    """A resolved place: coordinates plus city/state attribution."""

    lat: float
    lng: float
    city: str
    state: str
    state_code: str
    country: str = "US"
    timezone: str = DEFAULT_TIMEZONE
    source: str = "default"

    def to_dict(self) -> dict:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "city": self.city,
            "state": self.state,
            "stateCode": self.state_code,
            "country": self.country,
            "timezone": self.timezone,
            "source": self.source,
        }


DEFAULT_LOCATION = Location(
    lat=38.9072,
    lng=-77.0369,
    city="Washington",
    state="District of Columbia",
    state_code="DC",
    source="default",
)


def parse_coordinate(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    # Euclidean in degrees; only good enough for picking a nearby point
    return math.hypot(lat1 - lat2, lng1 - lng2)


def normalize_zip(zip_code) -> Optional[str]:
    """Return the five-digit ZIP from ``27713`` or ``27713-1234``, else None."""
    if zip_code is None:
        return None
    match = _ZIP_PATTERN.match(str(zip_code).strip())
    return match.group(1) if match else None


def state_name(code: str) -> str:
    """Full state name for a two-letter code, or the code itself if unknown."""
    return STATE_NAMES.get(code.upper(), code) if code else code


def state_code_for_name(name: str) -> Optional[str]:
    """Two-letter code for a state name or code, case-insensitive."""
    if not name:
        return None
    if name.upper() in STATE_NAMES:
        return name.upper()
    return STATE_CODES.get(name.strip().lower())


def state_for_zip(zip_code) -> str:
    """State code for a ZIP code; Washington, DC when nothing matches."""
    normalized = normalize_zip(zip_code)
    if normalized is None:
        return DEFAULT_LOCATION.state_code

    known = ZIP_LOCATIONS.get(normalized)
    if known:
        return known[0]

    number = int(normalized)
    for low, high, code in ZIP_RANGES:
        if low <= number <= high:
            return code

    return DEFAULT_LOCATION.state_code


def state_for_coordinates(lat, lng) -> str:
    """Nearest population-centre state for a coordinate pair."""
    lat_value, lng_value = parse_coordinate(lat), parse_coordinate(lng)
    if lat_value is None or lng_value is None:
        return DEFAULT_LOCATION.state_code

    return min(
        STATE_CENTROIDS,
        key=lambda code: _distance(lat_value, lng_value, *STATE_CENTROIDS[code]),
    )


class LocationResolver:
    """Resolve a visitor's location from whatever hints are available."""

    def resolve(
        self,
        lat=None,
        lng=None,
        zip_code: Optional[str] = None,
        state_code: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Location:
        lat_value, lng_value = parse_coordinate(lat), parse_coordinate(lng)
        if lat_value is not None and lng_value is not None:
            return self.from_coordinates(lat_value, lng_value)

        if zip_code:
            return self.from_zip(zip_code)

        if state_code and state_code_for_name(state_code):
            return self.from_state(state_code)

        if headers is not None and self._has_geo_headers(headers):
            return self.from_headers(headers)

        return DEFAULT_LOCATION

    def from_coordinates(self, lat: float, lng: float) -> Location:
        """Attribute coordinates to the closest reference city.

        The returned location keeps the caller's coordinates.
        """
        city, code, _, _ = min(
            REFERENCE_CITIES,
            key=lambda ref: _distance(lat, lng, ref[2], ref[3]),
        )
        return Location(
            lat=lat,
            lng=lng,
            city=city,
            state=STATE_NAMES[code],
            state_code=code,
            source="provided",
        )

    def from_zip(self, zip_code) -> Location:
        normalized = normalize_zip(zip_code)
        if normalized is None:
            logger.info("Unparseable ZIP code %r, using default location", zip_code)
            return replace(DEFAULT_LOCATION, source="zip")

        known = ZIP_LOCATIONS.get(normalized)
        if known:
            code, city, lat, lng = known
            return Location(
                lat=lat, lng=lng, city=city, state=STATE_NAMES[code],
                state_code=code, source="zip",
            )

        return replace(self._capital(state_for_zip(normalized)), source="zip")

    def from_state(self, state_code: str) -> Location:
        code = state_code_for_name(state_code) or DEFAULT_LOCATION.state_code
        return replace(self._capital(code), source="state")

    def from_headers(self, headers: Mapping[str, str]) -> Location:
        """Resolve from Cloudflare IP geolocation headers."""
        country = (headers.get("CF-IPCountry") or "US").upper()
        region = (headers.get("CF-IPStateProvince") or "").strip()
        city = (headers.get("CF-IPCity") or "").strip()
        timezone = headers.get("CF-Timezone") or DEFAULT_TIMEZONE

        if country == "US":
            code = state_code_for_name(region) or region.upper()
            state = state_name(code)
        else:
            code = region
            state = region

        lat, lng = self._coordinates_for(city, code)
        return Location(
            lat=lat,
            lng=lng,
            city=city or "Unknown",
            state=state or region,
            state_code=code,
            country=country,
            timezone=timezone,
            source="cloudflare-headers",
        )

    @staticmethod
    def _has_geo_headers(headers: Mapping[str, str]) -> bool:
        return bool(headers.get("CF-IPStateProvince") or headers.get("CF-IPCity"))

    @staticmethod
    def _capital(code: str) -> Location:
        city, lat, lng = STATE_CAPITALS.get(code, STATE_CAPITALS["DC"])
        if code not in STATE_CAPITALS:
            code = "DC"
        return Location(lat=lat, lng=lng, city=city, state=STATE_NAMES[code], state_code=code)

    @staticmethod
    def _coordinates_for(city: str, code: str) -> tuple[float, float]:
        coords = CITY_COORDINATES.get((city.lower(), code))
        if coords:
            return coords
        capital = STATE_CAPITALS.get(code)
        if capital:
            return capital[1], capital[2]
        return DEFAULT_LOCATION.lat, DEFAULT_LOCATION.lng
