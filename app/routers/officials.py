"""Officials listing and creation endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from app.dependencies import get_officials_gateway
from app.services.cache_config import CacheLifetime, cache_control
from app.services.location import parse_coordinate
from app.services.officials import DEFAULT_LIMIT, OfficialsGateway
from app.services.record_store import RecordStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/officials", tags=["officials"])


@router.get("")
async def list_officials(
    bioguideId: Optional[str] = Query(default=None, description="Bioguide ID"),
    zip: Optional[str] = Query(default=None, description="ZIP code"),
    state: Optional[str] = Query(default=None, description="State code"),
    lat: Optional[str] = Query(default=None, description="Latitude"),
    lng: Optional[str] = Query(default=None, description="Longitude"),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100, description="Max results"),
    gateway: OfficialsGateway = Depends(get_officials_gateway),
) -> JSONResponse:
    """List officials for a bioguide id, ZIP, state, or coordinates.

    When the store is unavailable the sample officials are returned with
    ``fallback: true`` and a 200 status.
    """
    result = await gateway.list_officials(
        bioguide_id=bioguideId, zip_code=zip, state=state, lat=lat, lng=lng, limit=limit
    )

    if result.fallback:
        return JSONResponse(
            content={
                "success": False,
                "error": result.error,
                "representatives": result.data,
                "count": len(result.data),
                "fallback": True,
            }
        )

    lat_value, lng_value = parse_coordinate(lat), parse_coordinate(lng)
    location = (
        {"lat": lat_value, "lng": lng_value}
        if lat_value is not None and lng_value is not None
        else None
    )
    return JSONResponse(
        content={
            "success": True,
            "representatives": result.data,
            "count": len(result.data),
            "location": location,
        },
        headers={"Cache-Control": cache_control(CacheLifetime.OFFICIALS)},
    )


@router.post("", status_code=201)
async def create_official(
    data: dict = Body(...),
    gateway: OfficialsGateway = Depends(get_officials_gateway),
) -> JSONResponse:
    """Add an official to the store."""
    if not (data.get("fullName") or (data.get("firstName") and data.get("lastName"))):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "fullName or firstName and lastName are required"},
        )

    try:
        official = await gateway.create_official(data)
    except RecordStoreError as exc:
        logger.error("Error creating official: %s", exc)
        return JSONResponse(
            status_code=500, content={"success": False, "error": "Failed to create official"}
        )

    return JSONResponse(status_code=201, content={"success": True, "official": official})
