"""Officials lookup and creation against the record store."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import quote_plus

from app.models.records import OfficeLevel, OfficialRecord, decode_official
from app.services.cache_config import GatewayResult
from app.services.filters import Equals, Filter, Sort
from app.services.location import state_for_coordinates, state_for_zip
from app.services.record_store import RecordStore, RecordStoreError, StoreRecord
from app.services.sample_data import SAMPLE_OFFICIALS

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
DEFAULT_KEY_ISSUES = ["Government", "Policy", "Community"]
MAX_KEY_ISSUES = 4

# Two fixed officials served when the store is unreachable
FALLBACK_OFFICIALS = [
    decode_official(StoreRecord(id="demo_1", fields=SAMPLE_OFFICIALS[0])),
    decode_official(StoreRecord(id="demo_2", fields=SAMPLE_OFFICIALS[1])),
]


def photo_url_for(bioguide_id: Optional[str]) -> Optional[str]:
    """Congressional bioguide portrait URL for an id."""
    if not bioguide_id:
        return None
    return f"https://bioguide.congress.gov/bioguide/photo/{bioguide_id[0]}/{bioguide_id}.jpg"


def _placeholder_image(color: str, label: str) -> str:
    return f"https://via.placeholder.com/400x600/{color}/FFFFFF?text={quote_plus(label)}"


def generate_bio(official: OfficialRecord) -> str:
    party = official.party.value if official.party else ""
    state = official.state or ""
    chamber = official.chamber or ""

    if official.office_level == OfficeLevel.FEDERAL:
        title = "Senator" if chamber == "Senate" else "Representative"
        return (
            f"{party} {title} representing {state}. "
            "Dedicated to serving constituents and advancing legislative priorities."
        )
    return (
        f"{party} {chamber} member representing {state}. "
        "Focused on state-level issues and community development."
    )


def present_official(official: OfficialRecord) -> dict:
    """Shape a decoded official into the card JSON the UI renders."""
    photo = official.photo_url or photo_url_for(official.bioguide_id)
    return {
        "id": official.id,
        "officialId": official.official_id,
        "bioguideId": official.bioguide_id,
        "name": official.full_name,
        "firstName": official.first_name,
        "lastName": official.last_name,
        "party": official.party.value if official.party else None,
        "state": official.state,
        "district": official.district,
        "chamber": official.chamber,
        "officeLevel": official.office_level.value if official.office_level else None,
        "bio": generate_bio(official),
        "phone": official.phone,
        "email": official.email,
        "website": official.website,
        "photoUrl": photo,
        "images": [
            photo,
            _placeholder_image("4F46E5", "Committee"),
            _placeholder_image("6366F1", "Town Hall"),
        ],
        "keyIssues": (official.key_issues or DEFAULT_KEY_ISSUES)[:MAX_KEY_ISSUES],
        "rating": official.average_rating,
        "totalRatings": official.total_ratings,
        "socialMedia": {
            "twitter": official.twitter,
            "instagram": official.instagram,
            "facebook": official.facebook,
        },
        "lastUpdated": official.last_updated,
    }


class OfficialsGateway:
    """Read and create officials in the backing store."""

    def __init__(
        self,
        store: RecordStore,
        table: str = "Officials",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.table = table
        self._now = now or (lambda: datetime.now(timezone.utc))

    def build_filter(
        self,
        bioguide_id: Optional[str] = None,
        zip_code: Optional[str] = None,
        state: Optional[str] = None,
        lat=None,
        lng=None,
    ) -> Optional[Filter]:
        """Pick one filter: bioguide id, then ZIP, then state, then coordinates."""
        if bioguide_id:
            return Equals("Bioguide_ID", bioguide_id.strip())
        if zip_code:
            return Equals("State", state_for_zip(zip_code))
        if state:
            return Equals("State", state.strip().upper())
        if lat not in (None, "") and lng not in (None, ""):
            return Equals("State", state_for_coordinates(lat, lng))
        return None

    async def list_officials(
        self,
        bioguide_id: Optional[str] = None,
        zip_code: Optional[str] = None,
        state: Optional[str] = None,
        lat=None,
        lng=None,
        limit: int = DEFAULT_LIMIT,
    ) -> GatewayResult[list[dict]]:
        """Fetch officials, most recently updated first, at most ``limit``.

        Returns:
            GatewayResult with presentation dicts. When the store fails the
            result carries the fixed sample officials and ``fallback=True``.
        """
        limit = max(1, int(limit or DEFAULT_LIMIT))
        filter = self.build_filter(bioguide_id, zip_code, state, lat, lng)

        try:
            records = await self.store.select(
                self.table,
                filter=filter,
                max_records=limit,
                sort=[Sort("Last_Updated", "desc")],
            )
            officials = [decode_official(record, self.table) for record in records]
        except RecordStoreError as exc:
            logger.error("Error fetching officials: %s", exc)
            return GatewayResult.substitute(
                self._fallback(bioguide_id, limit), data_type="officials data"
            )

        return GatewayResult.live([present_official(o) for o in officials[:limit]])

    async def create_official(self, data: dict) -> dict:
        """Store a new official and echo it back with its record id.

        Raises:
            RecordStoreError: if the store rejects the write
        """
        fields = {
            "Bioguide_ID": data.get("bioguideId"),
            "First_Name": data.get("firstName"),
            "Last_Name": data.get("lastName"),
            "Full_Name": data.get("fullName"),
            "Party": data.get("party"),
            "State": data.get("state"),
            "District": data.get("district"),
            "Chamber": data.get("chamber"),
            "Office_Level": data.get("officeLevel"),
            "Primary_Email": data.get("email"),
            "Official_Website": data.get("website"),
            "Official_Photo_URL": data.get("photoUrl"),
            "Last_Updated": self._now().date().isoformat(),
        }
        record = await self.store.create(
            self.table, {name: value for name, value in fields.items() if value is not None}
        )
        logger.info("Created official %s (%s)", record.id, data.get("bioguideId"))
        return {"id": record.id, **data}

    @staticmethod
    def _fallback(bioguide_id: Optional[str], limit: int) -> list[dict]:
        officials = FALLBACK_OFFICIALS
        if bioguide_id:
            officials = [o for o in officials if o.bioguide_id == bioguide_id.strip()]
        return [present_official(o) for o in officials[:limit]]

