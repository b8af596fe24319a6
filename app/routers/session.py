"""Remembered visitor location, stored in cookies."""

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from app.services.session import LocationSession

router = APIRouter(prefix="/api/session", tags=["session"])

COOKIE_MAX_AGE = 365 * 24 * 3600


def _respond(session: LocationSession) -> JSONResponse:
    response = JSONResponse(content={"success": True, **session.to_dict()})
    for name, value in session.cookie_values().items():
        if value is None:
            response.delete_cookie(name)
        else:
            response.set_cookie(name, value, max_age=COOKIE_MAX_AGE, samesite="lax")
    return response


@router.get("")
async def get_session(request: Request) -> JSONResponse:
    """Whether to show location entry, and the query for the saved location."""
    session = LocationSession.from_cookies(request.cookies)
    return JSONResponse(content={"success": True, **session.to_dict()})


@router.put("")
async def update_session(request: Request, data: dict = Body(...)) -> JSONResponse:
    """Remember a ZIP code (``{"zip": ...}``) or a location (``{"location": {...}}``)."""
    session = LocationSession.from_cookies(request.cookies)
    try:
        if data.get("zip") is not None:
            session.remember_zip(str(data["zip"]))
        elif data.get("location") is not None:
            session.remember_location(data["location"])
        else:
            raise ValueError("zip or location is required")
    except ValueError as exc:
        return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})

    return _respond(session)


@router.delete("")
async def clear_session() -> JSONResponse:
    """Forget the saved location so the visitor picks a new one."""
    session = LocationSession()
    return _respond(session)
