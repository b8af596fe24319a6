"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.database import create_engine, create_session_factory, init_db
from app.middleware import RateLimitMiddleware
from app.models import Official, Rating, Staff
from app.routers import location, officials, ratings, session, share, staff
from app.services.airtable import AirtableClient
from app.services.local_store import LocalRecordStore
from app.services.sample_data import seed_sample_data

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("query", "body"))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around a record store chosen by ``settings``."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if settings.uses_airtable:
            store = AirtableClient(
                api_key=settings.airtable_api_key,
                base_id=settings.airtable_base_id,
                base_url=settings.airtable_api_base_url,
            )
            logger.info("Using Airtable base %s", settings.airtable_base_id)
        else:
            engine = create_engine(settings.database_url)
            await init_db(engine)
            store = LocalRecordStore(
                create_session_factory(engine),
                {
                    settings.officials_table: Official,
                    settings.ratings_table: Rating,
                    settings.staff_table: Staff,
                },
            )
            if settings.seed_sample_data:
                await seed_sample_data(store, settings)
            logger.info("Using local record store at %s", settings.database_url)

        app.state.record_store = store
        try:
            yield
        finally:
            await store.aclose()
            if engine is not None:
                await engine.dispose()

    app = FastAPI(
        title="RateMyRep",
        description="Find, rate, and share your elected officials",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400, content={"success": False, "error": _validation_message(exc)}
        )

    app.include_router(location.router)
    app.include_router(officials.router)
    app.include_router(ratings.router)
    app.include_router(staff.router)
    app.include_router(share.router)
    app.include_router(session.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "store": "airtable" if settings.uses_airtable else "local"}

    return app


configure_logging(get_settings().log_level)
app = create_app()
