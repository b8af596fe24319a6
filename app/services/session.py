"""Remembered visitor location, kept in two cookies.

``ratemyrep_zipcode`` holds a five-digit ZIP and wins when present.
``ratemyrep_location`` holds a URL-encoded JSON object with city, state and
either coordinates or a state code. A location cookie that doesn't decode
to such an object is ignored, so the visitor is asked for a location again.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)

ZIP_COOKIE = "ratemyrep_zipcode"
LOCATION_COOKIE = "ratemyrep_location"

_SAVED_ZIP = re.compile(r"^\d{5}$")


def _finite(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _clean_location(data) -> Optional[dict]:
    if not isinstance(data, dict):
        return None
    location = {
        "city": data.get("city") or "",
        "state": data.get("state") or "",
    }
    lat, lng = _finite(data.get("lat")), _finite(data.get("lng"))
    if lat is not None and lng is not None:
        location.update(lat=lat, lng=lng)
    elif data.get("stateCode"):
        location["stateCode"] = str(data["stateCode"]).upper()
    else:
        return None
    return location


@dataclass
class LocationSession:
    zip_code: Optional[str] = None
    location: Optional[dict] = None

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> "LocationSession":
        zip_code = cookies.get(ZIP_COOKIE)
        if zip_code is not None and not _SAVED_ZIP.match(zip_code):
            zip_code = None

        location = None
        raw = cookies.get(LOCATION_COOKIE)
        if raw:
            try:
                location = _clean_location(json.loads(unquote(raw)))
            except ValueError as exc:
                logger.warning("Ignoring unreadable location cookie: %s", exc)
        return cls(zip_code=zip_code, location=location)

    @property
    def show_location_entry(self) -> bool:
        return self.zip_code is None and self.location is None

    @property
    def display(self) -> str:
        if self.zip_code:
            return f"ZIP {self.zip_code}"
        if self.location:
            return f"{self.location['city']}, {self.location['state']}"
        return ""

    def saved_query(self) -> dict:
        """Officials query parameters for the remembered location."""
        if self.zip_code:
            return {"zip": self.zip_code}
        if self.location:
            if "lat" in self.location:
                return {"lat": self.location["lat"], "lng": self.location["lng"]}
            return {"state": self.location["stateCode"]}
        return {}

    def remember_zip(self, zip_code: str) -> None:
        zip_code = (zip_code or "").strip()
        if not _SAVED_ZIP.match(zip_code):
            raise ValueError("Please enter a valid 5-digit ZIP code")
        self.zip_code = zip_code
        self.location = None

    def remember_location(self, data: dict) -> None:
        location = _clean_location(data)
        if location is None:
            raise ValueError("Location needs lat and lng or a stateCode")
        self.location = location
        self.zip_code = None

    def clear(self) -> None:
        self.zip_code = None
        self.location = None

    def cookie_values(self) -> dict[str, Optional[str]]:
        """Cookie values to write; ``None`` means delete the cookie."""
        return {
            ZIP_COOKIE: self.zip_code,
            LOCATION_COOKIE: quote(json.dumps(self.location, separators=(",", ":")))
            if self.location
            else None,
        }

    def to_dict(self) -> dict:
        return {
            "showLocationEntry": self.show_location_entry,
            "display": self.display,
            "query": self.saved_query(),
        }
