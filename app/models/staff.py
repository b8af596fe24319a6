"""Staff directory database model."""

from datetime import date
from typing import Optional

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.official import new_record_id


class Staff(Base):
    """Member of an official's office staff."""

    __tablename__ = "staff"

    record_fields = (
        "Staff_ID", "First_Name", "Last_Name", "Full_Name", "Job_Title",
        "Phone", "Email", "Office_Location", "Policy_Areas", "Website",
        "Official_Link", "Bioguide_ID", "Valid_From_Date", "Valid_To_Date",
        "Data_Source", "Last_Updated",
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    record_id: Mapped[str] = mapped_column(String(20), unique=True, index=True, default=new_record_id)
    staff_id: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    job_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    office_location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    policy_areas: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    official_link: Mapped[Optional[str]] = mapped_column(String(40), nullable=True, index=True)
    bioguide_id: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, index=True)
    valid_from_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    valid_to_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    data_source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_updated: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
