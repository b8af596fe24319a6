"""Unit tests for rating submission and statistics."""

import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from app.config import Settings
from app.database import create_engine, create_session_factory, init_db
from app.models import Official, Rating, Staff
from app.models.records import RatingEvent
from app.services.filters import Equals
from app.services.local_store import LocalRecordStore
from app.services.ratings import RatingGateway, RatingValidationError, calculate_rating_stats
from app.services.record_store import RecordStoreError, StoreRecord, round_half_up
from app.services.sample_data import seed_sample_data


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

NOW = datetime(2025, 7, 8, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def store():
    """Local store seeded with the sample officials."""
    engine = create_engine(TEST_DATABASE_URL)
    await init_db(engine)
    store = LocalRecordStore(
        create_session_factory(engine),
        {"Officials": Official, "Ratings": Rating, "Staff": Staff},
    )
    await seed_sample_data(store, Settings())
    yield store
    await engine.dispose()


@pytest.fixture
def gateway(store):
    return RatingGateway(store, now=lambda: NOW)


async def official_fields(store, bioguide_id):
    [record] = await store.select("Officials", filter=Equals("Bioguide_ID", bioguide_id))
    return record


class TestValidation:
    """Invalid submissions are rejected before anything is stored."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"rating": 50},
            {"bioguide_id": "A000370", "rating": 101},
            {"bioguide_id": "A000370", "rating": -0.5},
            {"bioguide_id": "A000370", "rating": "lots"},
            {"bioguide_id": "A000370", "rating": None},
            {"bioguide_id": "A000370", "rating": True},
            {"bioguide_id": "A000370", "rating": float("nan")},
            {"bioguide_id": "A000370", "rating": 50, "direction": "sideways"},
            {"official_id": 12345, "rating": 80},
            {"bioguide_id": ["A000370"], "rating": 80},
        ],
    )
    async def test_rejected_without_persisting(self, kwargs):
        store = AsyncMock()
        with pytest.raises(RatingValidationError):
            await RatingGateway(store).submit(**kwargs)
        store.create.assert_not_called()
        store.record_rating.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_target_message(self):
        with pytest.raises(RatingValidationError, match="Either officialId or bioguideId is required"):
            await RatingGateway(AsyncMock()).submit(rating=50)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("score", [0, 100, "55"])
    async def test_boundaries_accepted(self, gateway, score):
        result = await gateway.submit(bioguide_id="A000370", rating=score)
        assert result["rating"] == float(score)


class TestSubmit:
    """Tests for storing ratings and updating aggregates."""

    @pytest.mark.asyncio
    async def test_stores_event_fields(self, store, gateway):
        result = await gateway.submit(
            bioguide_id="A000370",
            rating=80,
            direction="like",
            location={"lat": 35.9, "lng": -78.9},
            comment="Good town hall",
            client_ip="203.0.113.9",
            user_agent="pytest",
        )
        assert result["officialId"] == "A000370"
        assert result["timestamp"] == "2025-07-08T12:00:00Z"

        [event] = await store.select("Ratings")
        assert event.id == result["id"]
        assert event.get("Rating") == 80.0
        assert event.get("Direction") == "like"
        assert event.get("Location_Lat") == "35.9"
        assert event.get("Client_IP") == "203.0.113.9"
        assert event.get("User_Agent") == "pytest"
        assert event.get("Date_Created") == "2025-07-08"

    @pytest.mark.asyncio
    async def test_updates_aggregate_by_bioguide_id(self, store, gateway):
        await gateway.submit(bioguide_id="A000370", rating=80)
        await gateway.submit(bioguide_id="A000370", rating=20)

        official = await official_fields(store, "A000370")
        assert official.get("Average_Rating") == 50.0
        assert official.get("Total_Ratings") == 2
        assert official.get("Last_Rating_Date") == "2025-07-08"

    @pytest.mark.asyncio
    async def test_updates_aggregate_by_official_id(self, store, gateway):
        await gateway.submit(official_id="OFF_0002", rating=90)
        official = await official_fields(store, "A000055")
        assert official.get("Total_Ratings") == 1
        assert official.get("Average_Rating") == 90.0

    @pytest.mark.asyncio
    async def test_average_is_rounded_exact_mean(self, store, gateway):
        for score in [1, 0, 0, 0]:
            await gateway.submit(bioguide_id="A000370", rating=score)

        official = await official_fields(store, "A000370")
        assert official.get("Total_Ratings") == 4
        assert official.get("Average_Rating") == 0.3

    @pytest.mark.asyncio
    async def test_average_matches_mean_after_every_rating(self, store, gateway):
        scores = [80, 20, 75, 33, 81, 64, 17, 22, 99, 1]
        for expected_count, score in enumerate(scores, start=1):
            await gateway.submit(bioguide_id="A000370", rating=score)
            official = await official_fields(store, "A000370")
            submitted = scores[:expected_count]
            assert official.get("Total_Ratings") == expected_count
            assert official.get("Average_Rating") == round_half_up(sum(submitted) / len(submitted), 1)

    @pytest.mark.asyncio
    async def test_unknown_official_still_stores_rating(self, store, gateway):
        result = await gateway.submit(bioguide_id="X999999", rating=50)
        assert result["id"].startswith("rec")
        assert len(await store.select("Ratings")) == 1

    @pytest.mark.asyncio
    async def test_aggregate_failure_is_logged_and_swallowed(self, caplog):
        store = AsyncMock()
        store.create.return_value = StoreRecord(id="recR1")
        store.select.return_value = [StoreRecord(id="recO1", fields={"Bioguide_ID": "A000370"})]
        store.record_rating.side_effect = RecordStoreError("conflict")

        with caplog.at_level(logging.ERROR, logger="app.services.ratings"):
            result = await RatingGateway(store, now=lambda: NOW).submit(bioguide_id="A000370", rating=70)

        assert result["id"] == "recR1"
        assert "Error updating aggregate rating" in caplog.text

    @pytest.mark.asyncio
    async def test_event_write_failure_raises(self):
        store = AsyncMock()
        store.create.side_effect = RecordStoreError("down")
        with pytest.raises(RecordStoreError):
            await RatingGateway(store).submit(bioguide_id="A000370", rating=70)
        store.record_rating.assert_not_called()


class TestStats:
    """Tests for rating statistics."""

    @pytest.mark.asyncio
    async def test_window_and_summary(self, store, gateway):
        for score in (90, 70, 10):
            await gateway.submit(bioguide_id="A000370", rating=score)
        await gateway.submit(bioguide_id="A000055", rating=50)
        await store.create(
            "Ratings", {"Bioguide_ID": "A000370", "Rating": 100, "Date_Created": "2025-05-01"}
        )

        stats = await gateway.stats(bioguide_id="A000370", days=30)
        assert stats["count"] == 3
        assert stats["period"] == "30 days"
        assert stats["stats"]["averageRating"] == 56.7
        assert stats["stats"]["totalRatings"] == 3
        assert len(stats["ratings"]) == 3

    @pytest.mark.asyncio
    async def test_by_official_id(self, store, gateway):
        await gateway.submit(official_id="OFF_0001", rating=40)
        stats = await gateway.stats(official_id="OFF_0001")
        assert stats["count"] == 1
        assert stats["ratings"][0]["rating"] == 40.0

    @pytest.mark.asyncio
    async def test_store_failure_raises(self):
        store = AsyncMock()
        store.select.side_effect = RecordStoreError("down")
        with pytest.raises(RecordStoreError):
            await RatingGateway(store).stats(bioguide_id="A000370")

    @pytest.mark.asyncio
    async def test_listed_ratings_capped_at_100(self):
        store = AsyncMock()
        store.select.return_value = [
            StoreRecord(id=f"rec{i}", fields={"Rating": 50}) for i in range(120)
        ]
        stats = await RatingGateway(store, now=lambda: NOW).stats(bioguide_id="A000370")
        assert stats["count"] == 120
        assert len(stats["ratings"]) == 100


class TestCalculateRatingStats:
    """Tests for the summary calculation."""

    def test_empty(self):
        stats = calculate_rating_stats([])
        assert stats["averageRating"] == 0
        assert stats["totalRatings"] == 0
        assert sum(stats["ratingDistribution"].values()) == 0

    def test_percentages_and_distribution(self):
        ratings = [RatingEvent(id=str(i), rating=s) for i, s in enumerate([90, 70, 50, 30, 10])]
        stats = calculate_rating_stats(ratings)
        assert stats["averageRating"] == 50.0
        assert stats["positivePercentage"] == 40
        assert stats["negativePercentage"] == 40
        assert stats["neutralPercentage"] == 20
        assert stats["ratingDistribution"] == {
            "excellent": 1,
            "good": 1,
            "neutral": 1,
            "poor": 1,
            "terrible": 1,
        }

    def test_threshold_scores(self):
        ratings = [RatingEvent(id=str(i), rating=s) for i, s in enumerate([60, 40, 80])]
        stats = calculate_rating_stats(ratings)
        assert stats["positivePercentage"] == 67
        assert stats["negativePercentage"] == 33
        assert stats["neutralPercentage"] == 0
        assert stats["ratingDistribution"]["good"] == 1
        assert stats["ratingDistribution"]["neutral"] == 1
        assert stats["ratingDistribution"]["excellent"] == 1
