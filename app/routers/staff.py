"""Staff directory endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from app.dependencies import get_staff_directory
from app.services.cache_config import CacheLifetime, cache_control
from app.services.record_store import RecordStoreError
from app.services.staff import DEFAULT_LIMIT, StaffDirectory, group_staff_by_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/staff", tags=["staff"])


@router.get("")
async def list_staff(
    officialId: Optional[str] = Query(default=None, description="Official record link"),
    bioguideId: Optional[str] = Query(default=None, description="Bioguide ID"),
    office: Optional[str] = Query(default=None, description="Office location search"),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100, description="Max results"),
    directory: StaffDirectory = Depends(get_staff_directory),
) -> JSONResponse:
    """Staff for an official or office, grouped by role."""
    result = await directory.list_staff(
        official_id=officialId, bioguide_id=bioguideId, office=office, limit=limit
    )
    body = {
        "staff": result.data,
        "grouped": group_staff_by_role(result.data),
        "count": len(result.data),
    }

    if result.fallback:
        return JSONResponse(
            content={"success": False, "error": result.error, **body, "fallback": True}
        )

    return JSONResponse(
        content={
            "success": True,
            **body,
            "filters": {"officialId": officialId, "bioguideId": bioguideId, "office": office},
        },
        headers={"Cache-Control": cache_control(CacheLifetime.STAFF)},
    )


@router.post("", status_code=201)
async def create_staff(
    data: dict = Body(...),
    directory: StaffDirectory = Depends(get_staff_directory),
) -> JSONResponse:
    """Add a staff member."""
    if not (data.get("fullName") or (data.get("firstName") and data.get("lastName"))):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "fullName or firstName and lastName are required"},
        )

    try:
        staff = await directory.create_staff(data)
    except RecordStoreError as exc:
        logger.error("Error creating staff: %s", exc)
        return JSONResponse(
            status_code=500, content={"success": False, "error": "Failed to create staff member"}
        )

    return JSONResponse(status_code=201, content={"success": True, "staff": staff})
