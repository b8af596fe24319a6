"""Rating submission and rating statistics."""

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from app.models.records import Direction, RatingEvent, decode_rating
from app.services.filters import All, AtLeast, Equals, Sort
from app.services.record_store import RecordStore, RecordStoreError, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 30
MAX_LISTED_RATINGS = 100
POSITIVE_MIN = 60
NEGATIVE_MAX = 40


class RatingValidationError(ValueError):
    """The submitted rating can't be accepted; nothing was stored."""


def _percent(part: int, total: int) -> int:
    return int(round_half_up(part / total * 100, 0))


def calculate_rating_stats(ratings: list[RatingEvent]) -> dict:
    """Summarize a list of ratings.

    Positive means a score of 60 or more, negative 40 or less, and neutral
    anything in between. The distribution buckets are 80-100, 60-79, 40-59,
    20-39 and 0-19.
    """
    distribution = {"excellent": 0, "good": 0, "neutral": 0, "poor": 0, "terrible": 0}
    if not ratings:
        return {
            "averageRating": 0,
            "totalRatings": 0,
            "positivePercentage": 0,
            "negativePercentage": 0,
            "neutralPercentage": 0,
            "ratingDistribution": distribution,
        }

    positive = negative = neutral = 0
    for event in ratings:
        score = event.rating
        if score >= POSITIVE_MIN:
            positive += 1
        elif score <= NEGATIVE_MAX:
            negative += 1
        else:
            neutral += 1

        if score >= 80:
            distribution["excellent"] += 1
        elif score >= 60:
            distribution["good"] += 1
        elif score >= 40:
            distribution["neutral"] += 1
        elif score >= 20:
            distribution["poor"] += 1
        else:
            distribution["terrible"] += 1

    total = len(ratings)
    return {
        "averageRating": round_half_up(sum(r.rating for r in ratings) / total, 1),
        "totalRatings": total,
        "positivePercentage": _percent(positive, total),
        "negativePercentage": _percent(negative, total),
        "neutralPercentage": _percent(neutral, total),
        "ratingDistribution": distribution,
    }


def validate_rating(
    official_id: Optional[str], bioguide_id: Optional[str], rating, direction: Optional[str] = None
) -> float:
    """Check a submission and return the score as a float.

    Raises:
        RatingValidationError: missing or non-string target, missing or
            out-of-range score, or an unknown direction
    """
    if not official_id and not bioguide_id:
        raise RatingValidationError("Either officialId or bioguideId is required")
    for target in (official_id, bioguide_id):
        if target is not None and not isinstance(target, str):
            raise RatingValidationError("officialId and bioguideId must be strings")
    if rating is None or isinstance(rating, bool):
        raise RatingValidationError("Rating is required")
    try:
        score = float(rating)
    except (TypeError, ValueError):
        raise RatingValidationError("Rating must be a number") from None
    if not math.isfinite(score) or score < 0 or score > 100:
        raise RatingValidationError("Rating must be between 0 and 100")
    if direction is not None:
        try:
            Direction(direction)
        except ValueError:
            raise RatingValidationError(
                "Direction must be one of: like, dislike, neutral"
            ) from None
    return score


class RatingGateway:
    """Append rating events and maintain each official's running average."""

    def __init__(
        self,
        store: RecordStore,
        ratings_table: str = "Ratings",
        officials_table: str = "Officials",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.ratings_table = ratings_table
        self.officials_table = officials_table
        self._now = now or (lambda: datetime.now(timezone.utc))

    async def submit(
        self,
        official_id: Optional[str] = None,
        bioguide_id: Optional[str] = None,
        rating=None,
        direction: Optional[str] = None,
        location: Optional[dict] = None,
        comment: Optional[str] = None,
        client_ip: str = "unknown",
        user_agent: str = "",
    ) -> dict:
        """Store one rating, then try to fold it into the official's aggregate.

        Returns:
            Summary of the stored rating event

        Raises:
            RatingValidationError: if the submission is invalid (nothing stored)
            RecordStoreError: if the rating event itself could not be stored
        """
        score = validate_rating(official_id, bioguide_id, rating, direction)
        location = location or {}
        now = self._now()
        timestamp = now.isoformat().replace("+00:00", "Z")

        record = await self.store.create(
            self.ratings_table,
            {
                "Official_ID": official_id,
                "Bioguide_ID": bioguide_id,
                "Rating": score,
                "Direction": direction,
                "Comment": comment or "",
                "Location_Lat": str(location["lat"]) if location.get("lat") is not None else "",
                "Location_Lng": str(location["lng"]) if location.get("lng") is not None else "",
                "Client_IP": client_ip,
                "User_Agent": user_agent,
                "Timestamp": timestamp,
                "Date_Created": now.date().isoformat(),
            },
        )

        # The rating is already stored; a failed aggregate only leaves the
        # official's average stale.
        try:
            await self.update_aggregate(official_id or bioguide_id, score, now.date())
        except RecordStoreError as exc:
            logger.error("Error updating aggregate rating for %s: %s", official_id or bioguide_id, exc)

        return {
            "id": record.id,
            "officialId": official_id or bioguide_id,
            "rating": score,
            "direction": direction,
            "timestamp": timestamp,
        }

    async def update_aggregate(self, official_key: str, score: float, rated_on: date) -> None:
        """Add ``score`` to the matching official's average and count.

        Keys starting with ``OFF_`` are official ids; anything else is
        treated as a bioguide id.
        """
        field = "Official_ID" if official_key.startswith("OFF_") else "Bioguide_ID"
        matches = await self.store.select(
            self.officials_table, filter=Equals(field, official_key), max_records=1
        )
        if not matches:
            logger.info("No official found for %s; aggregate not updated", official_key)
            return

        await self.store.record_rating(self.officials_table, matches[0], score, rated_on)

    async def stats(
        self,
        official_id: Optional[str] = None,
        bioguide_id: Optional[str] = None,
        days: int = DEFAULT_DAYS,
    ) -> dict:
        """Ratings for a target over the trailing ``days`` with summary stats.

        Raises:
            RecordStoreError: if the ratings could not be read or decoded
        """
        days = days if days and days > 0 else DEFAULT_DAYS
        since = (self._now() - timedelta(days=days)).date().isoformat()
        window = AtLeast("Date_Created", since)

        if official_id:
            filter = All(Equals("Official_ID", official_id), window)
        elif bioguide_id:
            filter = All(Equals("Bioguide_ID", bioguide_id), window)
        else:
            filter = window

        records = await self.store.select(
            self.ratings_table, filter=filter, sort=[Sort("Timestamp", "desc")]
        )
        ratings = [decode_rating(record, self.ratings_table) for record in records]

        return {
            "stats": calculate_rating_stats(ratings),
            "ratings": [r.to_dict() for r in ratings[:MAX_LISTED_RATINGS]],
            "count": len(ratings),
            "period": f"{days} days",
        }
