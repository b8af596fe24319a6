"""Typed views of store records.

Store rows arrive as loose field mappings. The decoders here check the
fields the application relies on and turn each row into a frozen dataclass,
raising ``RecordDecodeError`` when a row can't be used.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from app.services.record_store import RecordStoreError, StoreRecord


class RecordDecodeError(RecordStoreError):
    """A store record is missing a required field or has a malformed value."""

    def __init__(self, table: str, record_id: str, field_name: str, reason: str):
        self.table = table
        self.record_id = record_id
        self.field_name = field_name
        super().__init__(f"{table} record {record_id or '?'}: {field_name} {reason}")


class Party(str, Enum):
    DEMOCRATIC = "Democratic"
    REPUBLICAN = "Republican"
    INDEPENDENT = "Independent"
    OTHER = "Other"


class OfficeLevel(str, Enum):
    FEDERAL = "Federal"
    STATE = "State"
    LOCAL = "Local"


class Direction(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"
    NEUTRAL = "neutral"


def _text(record: StoreRecord, name: str) -> Optional[str]:
    value = record.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        # Linked-record and multi-select fields come back as lists
        value = value[0] if value else None
        if value is None:
            return None
    text = str(value).strip()
    return text or None


def _number(table: str, record: StoreRecord, name: str, default: float = 0.0) -> float:
    value = record.get(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordDecodeError(table, record.id, name, f"is not a number: {value!r}") from None


def _optional_float(value: Any) -> Optional[float]:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _enum(table: str, record: StoreRecord, name: str, enum_type: type[Enum]):
    value = _text(record, name)
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError:
        raise RecordDecodeError(table, record.id, name, f"has unexpected value {value!r}") from None


def _split_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return [item.strip() for item in str(value).split(",") if item.strip()]


def _full_name(table: str, record: StoreRecord) -> str:
    full_name = _text(record, "Full_Name")
    if full_name:
        return full_name
    parts = [p for p in (_text(record, "First_Name"), _text(record, "Last_Name")) if p]
    if not parts:
        raise RecordDecodeError(table, record.id, "Full_Name", "is required")
    return " ".join(parts)


@dataclass(frozen=True)
class OfficialRecord:
    id: str
    full_name: str
    official_id: Optional[str] = None
    bioguide_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    party: Optional[Party] = None
    office_level: Optional[OfficeLevel] = None
    chamber: Optional[str] = None
    state: Optional[str] = None
    district: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    photo_url: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    key_issues: list[str] = field(default_factory=list)
    average_rating: float = 0.0
    total_ratings: int = 0
    last_updated: Optional[str] = None


@dataclass(frozen=True)
class RatingEvent:
    id: str
    rating: float
    official_id: Optional[str] = None
    bioguide_id: Optional[str] = None
    direction: Optional[Direction] = None
    comment: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    timestamp: Optional[str] = None
    date_created: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "rating": self.rating,
            "direction": self.direction.value if self.direction else None,
            "comment": self.comment,
            "timestamp": self.timestamp,
            "location": {"lat": self.lat, "lng": self.lng},
        }


@dataclass(frozen=True)
class StaffRecord:
    id: str
    full_name: str
    staff_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    job_title: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    office_location: Optional[str] = None
    policy_areas: list[str] = field(default_factory=list)
    website: Optional[str] = None
    official_link: Optional[str] = None
    bioguide_id: Optional[str] = None
    valid_from_date: Optional[str] = None
    valid_to_date: Optional[str] = None
    data_source: Optional[str] = None
    last_updated: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "staffId": self.staff_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fullName": self.full_name,
            "jobTitle": self.job_title,
            "phone": self.phone,
            "email": self.email,
            "officeLocation": self.office_location,
            "policyAreas": list(self.policy_areas),
            "website": self.website,
            "officialLink": self.official_link,
            "bioguideId": self.bioguide_id,
            "validFromDate": self.valid_from_date,
            "validToDate": self.valid_to_date,
            "dataSource": self.data_source,
            "lastUpdated": self.last_updated,
        }


def decode_official(record: StoreRecord, table: str = "Officials") -> OfficialRecord:
    """Decode an Officials row."""
    if not record.id:
        raise RecordDecodeError(table, record.id, "id", "is required")

    total = _number(table, record, "Total_Ratings")
    return OfficialRecord(
        id=record.id,
        full_name=_full_name(table, record),
        official_id=_text(record, "Official_ID"),
        bioguide_id=_text(record, "Bioguide_ID"),
        first_name=_text(record, "First_Name"),
        last_name=_text(record, "Last_Name"),
        party=_enum(table, record, "Party", Party),
        office_level=_enum(table, record, "Office_Level", OfficeLevel),
        chamber=_text(record, "Chamber"),
        state=(_text(record, "State") or "").upper() or None,
        district=_text(record, "District"),
        phone=_text(record, "Primary_Phone"),
        email=_text(record, "Primary_Email"),
        website=_text(record, "Official_Website"),
        photo_url=_text(record, "Official_Photo_URL"),
        twitter=_text(record, "Twitter_Handle"),
        instagram=_text(record, "Instagram_Handle"),
        facebook=_text(record, "Facebook_Handle"),
        key_issues=_split_list(record.get("Key_Issues")),
        average_rating=_number(table, record, "Average_Rating"),
        total_ratings=int(total),
        last_updated=_text(record, "Last_Updated"),
    )


def decode_rating(record: StoreRecord, table: str = "Ratings") -> RatingEvent:
    """Decode a Ratings row; the score is required and must lie in [0, 100]."""
    if record.get("Rating") is None:
        raise RecordDecodeError(table, record.id, "Rating", "is required")
    score = _number(table, record, "Rating")
    if not 0 <= score <= 100:
        raise RecordDecodeError(table, record.id, "Rating", f"is out of range: {score}")

    return RatingEvent(
        id=record.id,
        rating=score,
        official_id=_text(record, "Official_ID"),
        bioguide_id=_text(record, "Bioguide_ID"),
        direction=_enum(table, record, "Direction", Direction),
        comment=_text(record, "Comment") or "",
        lat=_optional_float(record.get("Location_Lat")),
        lng=_optional_float(record.get("Location_Lng")),
        timestamp=_text(record, "Timestamp"),
        date_created=_text(record, "Date_Created"),
    )


def decode_staff(record: StoreRecord, table: str = "Staff") -> StaffRecord:
    """Decode a Staff row."""
    return StaffRecord(
        id=record.id,
        full_name=_full_name(table, record),
        staff_id=_text(record, "Staff_ID"),
        first_name=_text(record, "First_Name"),
        last_name=_text(record, "Last_Name"),
        job_title=_text(record, "Job_Title"),
        phone=_text(record, "Phone"),
        email=_text(record, "Email"),
        office_location=_text(record, "Office_Location"),
        policy_areas=_split_list(record.get("Policy_Areas")),
        website=_text(record, "Website"),
        official_link=_text(record, "Official_Link"),
        bioguide_id=_text(record, "Bioguide_ID"),
        valid_from_date=_text(record, "Valid_From_Date"),
        valid_to_date=_text(record, "Valid_To_Date"),
        data_source=_text(record, "Data_Source"),
        last_updated=_text(record, "Last_Updated"),
    )

