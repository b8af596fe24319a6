"""Official database model for the local record store."""

import secrets
from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def new_record_id() -> str:
    """Generate an Airtable-style record identifier."""
    return "rec" + secrets.token_hex(7)


class Official(Base):
    """Elected official, stored with the same field set as the Officials table."""

    __tablename__ = "officials"

    # Airtable field names; the column attribute is the lower-cased name
    record_fields = (
        "Official_ID", "Bioguide_ID", "First_Name", "Last_Name", "Full_Name",
        "Party", "Office_Level", "Chamber", "State", "District",
        "Primary_Email", "Primary_Phone", "Official_Website", "Official_Photo_URL",
        "Twitter_Handle", "Instagram_Handle", "Facebook_Handle", "Key_Issues",
        "Average_Rating", "Total_Ratings", "Last_Rating_Date", "Is_Current",
        "Data_Source", "Last_Updated",
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    record_id: Mapped[str] = mapped_column(String(20), unique=True, index=True, default=new_record_id)
    official_id: Mapped[Optional[str]] = mapped_column(String(40), nullable=True, index=True)
    bioguide_id: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, index=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    party: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    office_level: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    chamber: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(2), nullable=True, index=True)
    district: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    primary_email: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    primary_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    official_website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    official_photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    twitter_handle: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    instagram_handle: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    facebook_handle: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    key_issues: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Running aggregate maintained by rating submissions
    average_rating: Mapped[float] = mapped_column(Float, default=0.0)
    total_ratings: Mapped[int] = mapped_column(Integer, default=0)
    # Unrounded sum of all scores; None until the first local rating
    rating_sum: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    last_rating_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    is_current: Mapped[bool] = mapped_column(Boolean, default=True)
    data_source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_updated: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
