"""Open Graph preview images and share cards."""

from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import Response

from app.services.cache_config import CacheLifetime, cache_control
from app.services.share_cards import render_og_image, render_share_card

router = APIRouter(prefix="/api", tags=["share"])

SVG_MEDIA_TYPE = "image/svg+xml"


@router.get("/og-image")
async def og_image(
    bioguideId: Optional[str] = Query(default=None),
    name: str = Query(default="Representative"),
    party: str = Query(default="Independent"),
    state: str = Query(default="US"),
    rating: str = Query(default="0"),
    totalRatings: str = Query(default="0"),
    template: str = Query(default="default"),
) -> Response:
    """SVG social preview for an official; a generic card if rendering fails."""
    image = render_og_image(
        name=name,
        party=party,
        state=state,
        rating=rating,
        total_ratings=totalRatings,
        template=template,
        bioguide_id=bioguideId,
    )
    lifetime = CacheLifetime.SHARE_IMAGE_FALLBACK if image.fallback else CacheLifetime.SHARE_IMAGE
    return Response(
        content=image.svg,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": cache_control(lifetime)},
    )


@router.get("/share-card")
async def share_card(
    name: str = Query(default="Representative"),
    party: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    district: Optional[str] = Query(default=None),
    platform: str = Query(default="twitter"),
) -> Response:
    """Platform-sized share card.

    The score on the card is illustrative; ``X-Score-Synthetic`` says so.
    Not cached, since each render draws a new score.
    """
    card = render_share_card(
        {"name": name, "party": party, "state": state, "district": district},
        platform=platform,
    )
    return Response(
        content=card.svg,
        media_type=SVG_MEDIA_TYPE,
        headers={
            "Cache-Control": "no-store",
            "X-Share-Score": str(card.score),
            "X-Score-Synthetic": "true" if card.synthetic else "false",
            "X-Share-Platform": card.platform,
        },
    )
