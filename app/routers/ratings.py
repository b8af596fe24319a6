"""Rating submission and statistics endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.dependencies import client_ip, get_rating_gateway
from app.services.cache_config import CacheLifetime, cache_control
from app.services.ratings import DEFAULT_DAYS, RatingGateway, RatingValidationError, calculate_rating_stats
from app.services.record_store import RecordStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rate", tags=["ratings"])


@router.post("", status_code=201)
async def submit_rating(
    request: Request,
    data: dict = Body(...),
    gateway: RatingGateway = Depends(get_rating_gateway),
) -> JSONResponse:
    """Record one rating for an official."""
    try:
        rating = await gateway.submit(
            official_id=data.get("officialId"),
            bioguide_id=data.get("bioguideId"),
            rating=data.get("rating"),
            direction=data.get("direction"),
            location=data.get("location") if isinstance(data.get("location"), dict) else None,
            comment=data.get("comment"),
            client_ip=client_ip(request),
            user_agent=request.headers.get("User-Agent", ""),
        )
    except RatingValidationError as exc:
        return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})
    except RecordStoreError as exc:
        logger.error("Error submitting rating: %s", exc)
        return JSONResponse(
            status_code=500, content={"success": False, "error": "Failed to submit rating"}
        )

    return JSONResponse(status_code=201, content={"success": True, "rating": rating})


@router.get("")
async def rating_stats(
    officialId: Optional[str] = Query(default=None, description="Official ID"),
    bioguideId: Optional[str] = Query(default=None, description="Bioguide ID"),
    days: int = Query(default=DEFAULT_DAYS, ge=1, le=3650, description="Trailing window in days"),
    gateway: RatingGateway = Depends(get_rating_gateway),
) -> JSONResponse:
    """Recent ratings and summary statistics."""
    try:
        stats = await gateway.stats(official_id=officialId, bioguide_id=bioguideId, days=days)
    except RecordStoreError as exc:
        logger.error("Error fetching ratings: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Failed to fetch ratings",
                "stats": calculate_rating_stats([]),
            },
        )

    return JSONResponse(
        content={"success": True, **stats},
        headers={"Cache-Control": cache_control(CacheLifetime.RATINGS)},
    )
