"""Visitor location endpoint."""

from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from app.services.cache_config import CacheLifetime, cache_control
from app.services.location import LocationResolver

router = APIRouter(prefix="/api/location", tags=["location"])
resolver = LocationResolver()


@router.get("")
async def get_location(
    request: Request,
    lat: Optional[str] = Query(default=None, description="Latitude"),
    lng: Optional[str] = Query(default=None, description="Longitude"),
    zip: Optional[str] = Query(default=None, description="ZIP code"),
    state: Optional[str] = Query(default=None, description="State code"),
) -> JSONResponse:
    """Resolve a location from coordinates, ZIP, state, or IP headers.

    Always succeeds; Washington, DC is the last resort.
    """
    location = resolver.resolve(lat=lat, lng=lng, zip_code=zip, state_code=state, headers=request.headers)
    lifetime = (
        CacheLifetime.LOCATION_COORDINATES if location.source == "provided" else CacheLifetime.LOCATION
    )
    return JSONResponse(
        content={"success": True, **location.to_dict()},
        headers={"Cache-Control": cache_control(lifetime)},
    )
