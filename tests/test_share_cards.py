"""Unit tests for share card and Open Graph image rendering."""

import random
import xml.etree.ElementTree as ET

import pytest

from app.services.share_cards import (
    PARTY_COLORS,
    party_colors,
    rating_color,
    render_og_image,
    render_share_card,
    star_string,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


def parse(svg: str) -> ET.Element:
    return ET.fromstring(svg)


class TestOgImage:
    """Tests for the Open Graph preview image."""

    def test_default_template(self):
        image = render_og_image(
            name="Alma Adams", party="Democratic", state="NC", rating="72.5", total_ratings="14",
            bioguide_id="A000370",
        )
        root = parse(image.svg)
        assert image.fallback is False
        assert root.get("width") == "1200"
        assert root.get("height") == "630"
        assert "Alma Adams" in image.svg
        assert ">DEM<" in image.svg
        assert "72.5%" in image.svg
        assert "★★★★☆ (14 ratings)" in image.svg
        assert "#10b981" in image.svg
        assert PARTY_COLORS["Democratic"]["primary"] in image.svg
        assert "https://bioguide.congress.gov/bioguide/photo/A/A000370.jpg" in image.svg

    def test_minimal_template(self):
        image = render_og_image(name="Robert Aderholt", party="Republican", state="AL", rating="40",
                                template="minimal")
        parse(image.svg)
        assert "Rate Robert Aderholt" in image.svg
        assert "#ff0000" in image.svg
        assert "#ff4d4d" in image.svg
        assert "40%" in image.svg

    def test_unknown_template_uses_default(self):
        image = render_og_image(name="Jane Doe", template="fancy")
        assert "Approval Rating" in image.svg

    def test_text_is_escaped(self):
        image = render_og_image(name='<script>alert("x")</script> & Co', state="N'C")
        root = parse(image.svg)
        assert "<script>" not in image.svg
        assert "&lt;script&gt;" in image.svg
        texts = ["".join(el.itertext()) for el in root.iter(f"{SVG_NS}text")]
        assert '<script>alert("x")</script> & Co' in texts

    @pytest.mark.parametrize("rating", ["abc", "nan", "inf"])
    def test_bad_rating_renders_fallback(self, rating):
        image = render_og_image(name="Jane Doe", rating=rating)
        assert image.fallback is True
        assert "Rate Your Elected Officials" in image.svg
        parse(image.svg)

    def test_whole_number_rating_has_no_decimal(self):
        assert "72%" in render_og_image(rating="72").svg


class TestColorsAndStars:
    def test_unknown_party_is_independent(self):
        assert party_colors("Whig") == PARTY_COLORS["Independent"]
        assert party_colors(None) == PARTY_COLORS["Independent"]

    @pytest.mark.parametrize(
        "rating,color",
        [(60, "#10b981"), (59.9, "#f59e0b"), (40, "#f59e0b"), (39.9, "#ef4444")],
    )
    def test_rating_color(self, rating, color):
        assert rating_color(rating) == color

    @pytest.mark.parametrize(
        "rating,stars",
        [(0, "☆☆☆☆☆"), (50, "★★★☆☆"), (89, "★★★★☆"), (100, "★★★★★"), (150, "★★★★★"), (-5, "☆☆☆☆☆")],
    )
    def test_star_string(self, rating, stars):
        assert star_string(rating) == stars


class TestShareCard:
    """Tests for the platform share card."""

    @pytest.mark.parametrize(
        "platform,size",
        [("twitter", (1200, 675)), ("facebook", (1200, 630)), ("instagram", (1080, 1080)), ("myspace", (1200, 675))],
    )
    def test_platform_sizes(self, platform, size):
        card = render_share_card({"name": "Alma Adams", "party": "Democratic"}, platform, random.Random(1))
        root = parse(card.svg)
        assert (card.width, card.height) == size
        assert (root.get("width"), root.get("height")) == (str(size[0]), str(size[1]))

    def test_unknown_platform_reported_as_twitter(self):
        card = render_share_card({"name": "X"}, "myspace", random.Random(1))
        assert card.platform == "twitter"

    def test_republican_score_range(self):
        scores = {
            render_share_card({"name": "R", "party": "Republican"}, rng=random.Random(seed)).score
            for seed in range(200)
        }
        assert min(scores) >= 75
        assert max(scores) <= 95

    def test_other_party_score_range(self):
        for party in ("Democratic", "Independent", None):
            for seed in range(50):
                score = render_share_card({"name": "D", "party": party}, rng=random.Random(seed)).score
                assert 25 <= score <= 45

    def test_score_is_marked_synthetic(self):
        card = render_share_card({"name": "Alma Adams", "party": "Democratic"}, rng=random.Random(3))
        assert card.synthetic is True
        assert "Illustrative score" in card.svg
        assert f"{card.score}%" in card.svg

    def test_same_seed_same_score(self):
        official = {"name": "Alma Adams", "party": "Democratic", "state": "NC", "district": "12th District"}
        first = render_share_card(official, rng=random.Random(42))
        second = render_share_card(official, rng=random.Random(42))
        assert first.score == second.score
        assert "Democratic • NC 12th District" in first.svg

    def test_name_is_escaped(self):
        card = render_share_card({"name": "A & B <C>"}, rng=random.Random(1))
        parse(card.svg)
        assert "A &amp; B &lt;C&gt;" in card.svg
