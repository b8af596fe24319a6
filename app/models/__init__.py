"""Database models backing the local record store."""

from app.models.official import Official
from app.models.rating import Rating
from app.models.staff import Staff

__all__ = [
    "Official",
    "Rating",
    "Staff",
]
