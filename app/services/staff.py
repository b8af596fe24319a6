"""Staff directory lookups, grouping by role, and staff record creation."""

import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from app.models.records import StaffRecord, decode_staff
from app.services.cache_config import GatewayResult
from app.services.filters import Contains, Equals, Filter, Sort
from app.services.record_store import RecordStore, RecordStoreError, StoreRecord
from app.services.sample_data import SAMPLE_STAFF

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

# Checked in order; the first bucket whose keyword appears in the title wins
ROLE_KEYWORDS = [
    ("leadership", ("chief", "director", "deputy")),
    ("communications", ("communication", "press", "media")),
    ("policy", ("policy", "legislative", "advisor")),
    ("operations", ("admin", "scheduler", "assistant")),
]

_BASE36 = string.digits + string.ascii_lowercase


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_staff_id(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """Build an id like ``STF_lx3k9a2b_4f7q1c`` from the clock and a random suffix."""
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    rng = rng or random.Random()
    suffix = "".join(rng.choice(_BASE36) for _ in range(6))
    return f"STF_{_base36(now_ms)}_{suffix}"


def role_for_title(job_title: Optional[str]) -> str:
    title = (job_title or "").lower()
    for role, keywords in ROLE_KEYWORDS:
        if any(keyword in title for keyword in keywords):
            return role
    return "other"


def group_staff_by_role(staff: list[dict]) -> dict[str, list[dict]]:
    """Bucket staff dicts by the keywords in their job title."""
    grouped: dict[str, list[dict]] = {role: [] for role, _ in ROLE_KEYWORDS}
    grouped["other"] = []
    for member in staff:
        grouped[role_for_title(member.get("jobTitle"))].append(member)
    return grouped


def fallback_staff(official_id: Optional[str] = None, bioguide_id: Optional[str] = None) -> list[StaffRecord]:
    """The four demo staff, attached to whichever official was asked about."""
    return [
        decode_staff(
            StoreRecord(
                id=f"demo_staff_{n}",
                fields={
                    **fields,
                    "Official_Link": official_id or "demo_1",
                    "Bioguide_ID": bioguide_id or "A000370",
                },
            )
        )
        for n, fields in enumerate(SAMPLE_STAFF, start=1)
    ]


class StaffDirectory:
    """Query and create staff records."""

    def __init__(
        self,
        store: RecordStore,
        table: str = "Staff",
        now: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.table = table
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._rng = rng or random.Random()

    @staticmethod
    def build_filter(
        official_id: Optional[str] = None,
        bioguide_id: Optional[str] = None,
        office: Optional[str] = None,
    ) -> Optional[Filter]:
        if official_id:
            return Equals("Official_Link", official_id)
        if bioguide_id:
            return Equals("Bioguide_ID", bioguide_id)
        if office:
            return Contains("Office_Location", office)
        return None

    async def list_staff(
        self,
        official_id: Optional[str] = None,
        bioguide_id: Optional[str] = None,
        office: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> GatewayResult[list[dict]]:
        """Staff matching one filter, ordered by job title.

        Falls back to the demo staff when the store can't be read.
        """
        limit = max(1, int(limit or DEFAULT_LIMIT))
        try:
            records = await self.store.select(
                self.table,
                filter=self.build_filter(official_id, bioguide_id, office),
                max_records=limit,
                sort=[Sort("Job_Title", "asc")],
            )
            staff = [decode_staff(record, self.table) for record in records]
        except RecordStoreError as exc:
            logger.error("Error fetching staff: %s", exc)
            return GatewayResult.substitute(
                [s.to_dict() for s in fallback_staff(official_id, bioguide_id)],
                data_type="staff data",
            )

        return GatewayResult.live([s.to_dict() for s in staff[:limit]])

    async def create_staff(self, data: dict) -> dict:
        """Store a staff member and return it with its record and staff ids.

        Raises:
            RecordStoreError: if the store rejects the write
        """
        staff_id = data.get("staffId") or generate_staff_id(rng=self._rng)
        policy_areas = data.get("policyAreas")
        if isinstance(policy_areas, (list, tuple)):
            policy_areas = ", ".join(policy_areas)

        fields = {
            "Staff_ID": staff_id,
            "First_Name": data.get("firstName"),
            "Last_Name": data.get("lastName"),
            "Full_Name": data.get("fullName")
            or " ".join(p for p in (data.get("firstName"), data.get("lastName")) if p),
            "Job_Title": data.get("jobTitle"),
            "Phone": data.get("phone"),
            "Email": data.get("email"),
            "Office_Location": data.get("officeLocation"),
            "Policy_Areas": policy_areas or "",
            "Official_Link": data.get("officialLink"),
            "Bioguide_ID": data.get("bioguideId"),
            "Valid_From_Date": data.get("validFromDate") or self._now().date().isoformat(),
            "Data_Source": data.get("dataSource") or "Manual Entry",
            "Last_Updated": self._now().date().isoformat(),
        }
        record = await self.store.create(
            self.table, {name: value for name, value in fields.items() if value not in (None, "")}
        )
        logger.info("Created staff member %s (%s)", record.id, staff_id)
        return {**data, "id": record.id, "staffId": staff_id}
