"""Swipe-to-rate card deck state machine.

Drag flow::

    IDLE -> DRAGGING -> COMMITTING -> ANIMATING -> IDLE
    IDLE -> DRAGGING -> SNAPPING -> IDLE

A release more than ``COMMIT_DISTANCE`` pixels from the start commits a
like (80) or dislike (20). The rating is submitted while the exit animation
runs; once the animation finishes the deck advances, whether the submission
succeeded, failed or is still in flight. Vote inputs arriving while a card
is committing or animating are ignored.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from app.services.record_store import round_half_up

logger = logging.getLogger(__name__)

HINT_DISTANCE = 30
COMMIT_DISTANCE = 100
LIKE_RATING = 80
DISLIKE_RATING = 20

SubmitRating = Callable[[dict, float, str], Awaitable[Any]]


class SwipePhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    SNAPPING = "snapping"
    COMMITTING = "committing"
    ANIMATING = "animating"


@dataclass(frozen=True)
class VoteFeedback:
    """What the deck shows briefly after a vote.

    ``submitted`` is None while the rating is still being stored.
    """

    official_id: Optional[str]
    name: Optional[str]
    rating: float
    direction: str
    submitted: Optional[bool]
    at: float


def gateway_submitter(gateway, client_ip: str = "unknown", user_agent: str = "") -> SubmitRating:
    """Adapt a ``RatingGateway`` into the deck's submit callback."""

    async def submit(official: dict, rating: float, direction: str):
        # Officials without an official id are matched by bioguide id
        return await gateway.submit(
            official_id=official.get("officialId"),
            bioguide_id=official.get("bioguideId"),
            rating=rating,
            direction=direction,
            client_ip=client_ip,
            user_agent=user_agent,
        )

    return submit


class SwipeCardController:
    """Tracks the current card, drag offset, and the session's votes."""

    def __init__(
        self,
        officials: list[dict],
        submit: SubmitRating,
        animation_seconds: float = 0.3,
        feedback_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.officials = list(officials)
        self.submit = submit
        self.animation_seconds = animation_seconds
        self.feedback_seconds = feedback_seconds
        self._clock = clock

        self.phase = SwipePhase.IDLE
        self.index = 0
        self.offset = (0.0, 0.0)
        self.hint: Optional[str] = None
        self._start = (0.0, 0.0)
        self._ratings: list[float] = []
        self._feedback: Optional[VoteFeedback] = None
        self._pending: set[asyncio.Task] = set()

    @property
    def current(self) -> Optional[dict]:
        if not self.officials:
            return None
        return self.officials[self.index]

    @property
    def rated_count(self) -> int:
        return len(self._ratings)

    @property
    def approval(self) -> int:
        """Rounded mean of this session's votes, 0 before the first vote."""
        if not self._ratings:
            return 0
        return int(round_half_up(sum(self._ratings) / len(self._ratings), 0))

    @property
    def last_vote(self) -> Optional[VoteFeedback]:
        if self._feedback is None:
            return None
        if self._clock() - self._feedback.at >= self.feedback_seconds:
            return None
        return self._feedback

    def load(self, officials: list[dict]) -> None:
        """Replace the deck and start again from the first card."""
        self.officials = list(officials)
        self.index = 0
        self._reset_drag()
        self.phase = SwipePhase.IDLE

    def pointer_down(self, x: float, y: float) -> bool:
        # A new drag may interrupt a snap-back
        if self.phase not in (SwipePhase.IDLE, SwipePhase.SNAPPING) or self.current is None:
            return False
        self.phase = SwipePhase.DRAGGING
        self._start = (x, y)
        self.offset = (0.0, 0.0)
        self.hint = None
        return True

    def pointer_move(self, x: float, y: float) -> None:
        if self.phase != SwipePhase.DRAGGING:
            return
        dx, dy = x - self._start[0], y - self._start[1]
        self.offset = (dx, dy)
        if dx > HINT_DISTANCE:
            self.hint = "like"
        elif dx < -HINT_DISTANCE:
            self.hint = "nope"
        else:
            self.hint = None

    async def pointer_up(self) -> Optional[VoteFeedback]:
        """Finish a drag: commit past the threshold, otherwise snap back."""
        if self.phase != SwipePhase.DRAGGING:
            return None

        dx = self.offset[0]
        if abs(dx) > COMMIT_DISTANCE:
            if dx > 0:
                return await self._commit(LIKE_RATING, "like")
            return await self._commit(DISLIKE_RATING, "dislike")

        self.phase = SwipePhase.SNAPPING
        self._reset_drag()
        return None

    def settle(self) -> None:
        """Mark the snap-back transition as finished."""
        if self.phase == SwipePhase.SNAPPING:
            self.phase = SwipePhase.IDLE

    async def vote(self, rating: float, direction: str) -> Optional[VoteFeedback]:
        """Button vote; goes through the same commit path as a swipe."""
        if self.phase not in (SwipePhase.IDLE, SwipePhase.SNAPPING):
            return None
        return await self._commit(rating, direction)

    async def _commit(self, rating: float, direction: str) -> Optional[VoteFeedback]:
        official = self.current
        if official is None:
            self.phase = SwipePhase.IDLE
            return None

        self.phase = SwipePhase.COMMITTING
        self._ratings.append(rating)

        self.phase = SwipePhase.ANIMATING
        submission = asyncio.create_task(self._submit(official, rating, direction))
        self._pending.add(submission)
        await asyncio.sleep(self.animation_seconds)

        # Advance when the animation ends; an unfinished submission settles later
        submitted = submission.result() if submission.done() else None
        feedback = VoteFeedback(
            official_id=official.get("officialId") or official.get("bioguideId"),
            name=official.get("name"),
            rating=rating,
            direction=direction,
            submitted=submitted,
            at=self._clock(),
        )
        self._feedback = feedback
        if submitted is None:
            submission.add_done_callback(lambda task: self._settle_feedback(feedback, task))
        submission.add_done_callback(self._pending.discard)

        self.index = (self.index + 1) % len(self.officials) if self.officials else 0
        self._reset_drag()
        self.phase = SwipePhase.IDLE
        return feedback

    def _settle_feedback(self, feedback: VoteFeedback, task: asyncio.Task) -> None:
        if self._feedback is feedback and not task.cancelled():
            self._feedback = replace(feedback, submitted=task.result())

    async def drain(self) -> None:
        """Wait for submissions still running after their card moved on."""
        if self._pending:
            await asyncio.gather(*self._pending)

    async def _submit(self, official: dict, rating: float, direction: str) -> bool:
        try:
            await self.submit(official, rating, direction)
        except Exception as exc:
            logger.error("Error submitting rating for %s: %s", official.get("name"), exc)
            return False
        return True

    def _reset_drag(self) -> None:
        self.offset = (0.0, 0.0)
        self.hint = None
