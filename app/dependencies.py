"""Request-scoped dependencies for the API routers."""

from fastapi import Depends, Request

from app.config import Settings, get_settings
from app.services.officials import OfficialsGateway
from app.services.ratings import RatingGateway
from app.services.record_store import RecordStore
from app.services.staff import StaffDirectory


def get_record_store(request: Request) -> RecordStore:
    """The store built by the application lifespan."""
    return request.app.state.record_store


def get_officials_gateway(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> OfficialsGateway:
    return OfficialsGateway(store, table=settings.officials_table)


def get_rating_gateway(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> RatingGateway:
    return RatingGateway(
        store,
        ratings_table=settings.ratings_table,
        officials_table=settings.officials_table,
    )


def get_staff_directory(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> StaffDirectory:
    return StaffDirectory(store, table=settings.staff_table)


def client_ip(request: Request) -> str:
    """Caller address as reported by Cloudflare or the first proxy hop."""
    return (
        request.headers.get("CF-Connecting-IP")
        or request.headers.get("X-Forwarded-For")
        or "unknown"
    )
