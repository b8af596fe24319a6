"""Rating event database model."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.official import new_record_id


class Rating(Base):
    """A single approval rating submission. Rows are append-only."""

    __tablename__ = "ratings"

    record_fields = (
        "Official_ID", "Bioguide_ID", "Rating", "Direction", "Comment",
        "Location_Lat", "Location_Lng", "Client_IP", "User_Agent",
        "Timestamp", "Date_Created",
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    record_id: Mapped[str] = mapped_column(String(20), unique=True, index=True, default=new_record_id)
    official_id: Mapped[Optional[str]] = mapped_column(String(40), nullable=True, index=True)
    bioguide_id: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, index=True)
    rating: Mapped[float] = mapped_column(Float)
    direction: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Stored as text, matching the Airtable columns
    location_lat: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    location_lng: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    client_ip: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    timestamp: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    date_created: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
