"""SVG rendering for Open Graph preview images and per-platform share cards.

Templates live in ``app/templates/cards``; every value passed to them is
escaped by Jinja2's autoescaping.
"""

import logging
import math
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, TemplateError

from app.services.officials import photo_url_for
from app.services.record_store import round_half_up

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "cards"

OG_WIDTH, OG_HEIGHT = 1200, 630

PARTY_COLORS = {
    "Democratic": {"primary": "#0084ff", "secondary": "#4fb3ff"},
    "Republican": {"primary": "#ff0000", "secondary": "#ff4d4d"},
    "Independent": {"primary": "#8b5cf6", "secondary": "#a78bfa"},
}

PLATFORM_SIZES = {
    "twitter": (1200, 675),
    "facebook": (1200, 630),
    "instagram": (1080, 1080),
}

OG_TEMPLATES = {
    "default": "og_default.svg.j2",
    "minimal": "og_minimal.svg.j2",
}

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class RenderedImage:
    svg: str
    fallback: bool = False


@dataclass(frozen=True)
class ShareCard:
    """A rendered share card.

    ``score`` is drawn at random for each render and is not derived from any
    stored data, which ``synthetic`` records.
    """

    svg: str
    score: int
    platform: str
    width: int
    height: int
    synthetic: bool = True


def party_colors(party: Optional[str]) -> dict:
    return PARTY_COLORS.get(party or "", PARTY_COLORS["Independent"])


def rating_color(rating: float) -> str:
    if rating >= 60:
        return "#10b981"
    if rating >= 40:
        return "#f59e0b"
    return "#ef4444"


def star_string(rating: float) -> str:
    """Five-star string with ``round(rating / 20)`` filled stars."""
    filled = min(5, max(0, int(round_half_up(rating / 20, 0))))
    return "★" * filled + "☆" * (5 - filled)


def _display_number(value: float) -> str:
    return f"{value:g}"


def render_fallback_image() -> str:
    return _environment.get_template("og_fallback.svg.j2").render(width=OG_WIDTH, height=OG_HEIGHT)


def render_og_image(
    name: str = "Representative",
    party: str = "Independent",
    state: str = "US",
    rating="0",
    total_ratings="0",
    template: str = "default",
    bioguide_id: Optional[str] = None,
) -> RenderedImage:
    """Render the Open Graph preview image for an official.

    Unknown templates render as ``default``. Values that can't be rendered,
    such as a non-numeric rating, produce the generic fallback image.
    """
    try:
        rating_value = float(rating)
        count = int(total_ratings)
        if not math.isfinite(rating_value):
            raise ValueError(f"rating is not finite: {rating}")

        svg = _environment.get_template(OG_TEMPLATES.get(template, OG_TEMPLATES["default"])).render(
            width=OG_WIDTH,
            height=OG_HEIGHT,
            name=name,
            party=party,
            party_badge=(party or "")[:3].upper(),
            state=state,
            colors=party_colors(party),
            photo_url=photo_url_for(bioguide_id),
            rating=_display_number(round_half_up(rating_value, 1)),
            rating_color=rating_color(rating_value),
            stars=star_string(rating_value),
            total_ratings=count,
        )
    except (TemplateError, TypeError, ValueError) as exc:
        logger.error("Error generating OG image for %r: %s", name, exc)
        return RenderedImage(svg=render_fallback_image(), fallback=True)

    return RenderedImage(svg=svg)


def illustrative_score(party: Optional[str], rng: random.Random) -> int:
    if party == "Republican":
        return rng.randint(75, 95)
    return rng.randint(25, 45)


def render_share_card(
    official: dict,
    platform: str = "twitter",
    rng: Optional[random.Random] = None,
) -> ShareCard:
    """Render a share card for ``official`` sized for ``platform``.

    Unknown platforms get the twitter size.
    """
    rng = rng or random.Random()
    if platform not in PLATFORM_SIZES:
        platform = "twitter"
    width, height = PLATFORM_SIZES[platform]

    party = official.get("party")
    score = illustrative_score(party, rng)
    slider_width = width - 120

    if score > 70:
        slider_color = "#22c55e"
    elif score > 40:
        slider_color = "#f59e0b"
    else:
        slider_color = "#ef4444"

    svg = _environment.get_template("share_card.svg.j2").render(
        width=width,
        height=height,
        name=official.get("name") or "Representative",
        party=party or "",
        state=official.get("state") or "",
        district=official.get("district") or "",
        score=score,
        slider_y=height - 200,
        slider_width=slider_width,
        slider_fill=round(score / 100 * slider_width),
        slider_color=slider_color,
    )
    return ShareCard(svg=svg, score=score, platform=platform, width=width, height=height)
