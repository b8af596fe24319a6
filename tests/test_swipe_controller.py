"""Unit tests for the swipe-to-rate deck."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from app.database import create_engine, create_session_factory, init_db
from app.models import Official, Rating, Staff
from app.services.filters import Equals
from app.services.local_store import LocalRecordStore
from app.services.officials import OfficialsGateway
from app.services.ratings import RatingGateway
from app.services.swipe import SwipeCardController, SwipePhase, gateway_submitter

OFFICIALS = [
    {"id": "rec1", "officialId": "OFF_0001", "bioguideId": "A000370", "name": "Alma Adams"},
    {"id": "rec2", "officialId": "OFF_0002", "bioguideId": "A000055", "name": "Robert Aderholt"},
]


def make_controller(submit=None, **kwargs) -> SwipeCardController:
    kwargs.setdefault("animation_seconds", 0)
    return SwipeCardController(OFFICIALS, submit or AsyncMock(), **kwargs)


async def swipe(controller: SwipeCardController, dx: float):
    controller.pointer_down(100, 200)
    controller.pointer_move(100 + dx, 210)
    return await controller.pointer_up()


class TestDragging:
    """Tests for drag tracking and direction hints."""

    def test_hints(self):
        controller = make_controller()
        assert controller.pointer_down(0, 0) is True
        assert controller.phase == SwipePhase.DRAGGING

        controller.pointer_move(31, 5)
        assert controller.hint == "like"
        assert controller.offset == (31, 5)

        controller.pointer_move(-31, 0)
        assert controller.hint == "nope"

        controller.pointer_move(30, 0)
        assert controller.hint is None

    def test_move_without_drag_is_ignored(self):
        controller = make_controller()
        controller.pointer_move(200, 0)
        assert controller.offset == (0.0, 0.0)

    @pytest.mark.asyncio
    async def test_short_release_snaps_back(self):
        submit = AsyncMock()
        controller = make_controller(submit)

        result = await swipe(controller, 100)

        assert result is None
        assert controller.phase == SwipePhase.SNAPPING
        assert controller.offset == (0.0, 0.0)
        assert controller.index == 0
        submit.assert_not_called()

        controller.settle()
        assert controller.phase == SwipePhase.IDLE

    @pytest.mark.asyncio
    async def test_new_drag_interrupts_snap_back(self):
        controller = make_controller()
        await swipe(controller, 50)
        assert controller.pointer_down(0, 0) is True


class TestCommit:
    """Tests for committing votes."""

    @pytest.mark.asyncio
    async def test_swipe_right_is_like(self):
        submit = AsyncMock()
        controller = make_controller(submit)

        feedback = await swipe(controller, 101)

        submit.assert_awaited_once_with(OFFICIALS[0], 80, "like")
        assert feedback.direction == "like"
        assert feedback.submitted is True
        assert controller.index == 1
        assert controller.phase == SwipePhase.IDLE
        assert controller.hint is None

    @pytest.mark.asyncio
    async def test_swipe_left_is_dislike(self):
        submit = AsyncMock()
        controller = make_controller(submit)

        await swipe(controller, -150)

        submit.assert_awaited_once_with(OFFICIALS[0], 20, "dislike")

    @pytest.mark.asyncio
    async def test_index_wraps_around(self):
        controller = make_controller()
        await controller.vote(80, "like")
        await controller.vote(20, "dislike")
        assert controller.index == 0
        assert controller.current == OFFICIALS[0]

    @pytest.mark.asyncio
    async def test_submission_runs_during_animation(self):
        phases = []
        controller = None

        async def submit(official, rating, direction):
            phases.append(controller.phase)

        controller = make_controller(submit)
        await controller.vote(80, "like")
        assert phases == [SwipePhase.ANIMATING]

    @pytest.mark.asyncio
    async def test_inputs_ignored_while_animating(self):
        submit = AsyncMock()
        controller = make_controller(submit, animation_seconds=0.05)

        first = asyncio.create_task(controller.vote(80, "like"))
        await asyncio.sleep(0)
        assert controller.phase == SwipePhase.ANIMATING

        assert await controller.vote(20, "dislike") is None
        assert controller.pointer_down(0, 0) is False

        await first
        assert submit.await_count == 1
        assert controller.index == 1

    @pytest.mark.asyncio
    async def test_failed_submission_still_advances(self, caplog):
        submit = AsyncMock(side_effect=RuntimeError("offline"))
        controller = make_controller(submit)

        with caplog.at_level(logging.ERROR, logger="app.services.swipe"):
            feedback = await controller.vote(80, "like")

        assert feedback.submitted is False
        assert controller.index == 1
        assert controller.phase == SwipePhase.IDLE
        assert "Error submitting rating for Alma Adams" in caplog.text

    @pytest.mark.asyncio
    async def test_empty_deck(self):
        controller = SwipeCardController([], AsyncMock(), animation_seconds=0)
        assert controller.current is None
        assert controller.pointer_down(0, 0) is False
        assert await controller.vote(80, "like") is None


class TestSessionTally:
    """Tests for the per-session vote tally and feedback."""

    @pytest.mark.asyncio
    async def test_rated_count_and_approval(self):
        controller = make_controller()
        assert controller.approval == 0

        for rating, direction in [(80, "like"), (20, "dislike"), (80, "like")]:
            await controller.vote(rating, direction)

        assert controller.rated_count == 3
        assert controller.approval == 60

    @pytest.mark.asyncio
    async def test_last_vote_expires(self):
        now = [100.0]
        controller = make_controller(clock=lambda: now[0])

        await controller.vote(80, "like")
        assert controller.last_vote.name == "Alma Adams"

        now[0] = 102.9
        assert controller.last_vote is not None

        now[0] = 103.5
        assert controller.last_vote is None

    def test_load_resets_deck(self):
        controller = make_controller()
        controller.index = 1
        controller.load(list(reversed(OFFICIALS)))
        assert controller.index == 0
        assert controller.current["name"] == "Robert Aderholt"


class TestGatewaySubmitter:
    @pytest.mark.asyncio
    async def test_passes_official_ids(self):
        gateway = AsyncMock()
        submit = gateway_submitter(gateway, client_ip="203.0.113.9")

        await submit(OFFICIALS[0], 80, "like")

        gateway.submit.assert_awaited_once_with(
            official_id="OFF_0001",
            bioguide_id="A000370",
            rating=80,
            direction="like",
            client_ip="203.0.113.9",
            user_agent="",
        )

    @pytest.mark.asyncio
    async def test_card_without_official_id_sends_bioguide_only(self):
        gateway = AsyncMock()
        submit = gateway_submitter(gateway)

        await submit({"id": "recABC", "officialId": None, "bioguideId": "Z000001"}, 20, "dislike")

        kwargs = gateway.submit.await_args.kwargs
        assert kwargs["official_id"] is None
        assert kwargs["bioguide_id"] == "Z000001"


@pytest_asyncio.fixture
async def store():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield LocalRecordStore(
        create_session_factory(engine),
        {"Officials": Official, "Ratings": Rating, "Staff": Staff},
    )
    await engine.dispose()


class TestSwipeAgainstStore:
    """Swipes on officials read back from the store."""

    @pytest.mark.asyncio
    async def test_swipe_on_created_official_updates_aggregate(self, store):
        officials = OfficialsGateway(store)
        await officials.create_official({"bioguideId": "Z000001", "fullName": "Jane Doe", "state": "NC"})
        result = await officials.list_officials(bioguide_id="Z000001")
        [card] = result.data
        assert card["officialId"] is None

        controller = SwipeCardController(
            result.data, gateway_submitter(RatingGateway(store)), animation_seconds=0
        )
        feedback = await swipe(controller, 150)
        await controller.drain()

        assert feedback.official_id == "Z000001"
        assert controller.last_vote.submitted is True
        [official] = await store.select("Officials", filter=Equals("Bioguide_ID", "Z000001"))
        assert official.get("Total_Ratings") == 1
        assert official.get("Average_Rating") == 80.0
        [event] = await store.select("Ratings")
        assert event.get("Bioguide_ID") == "Z000001"
        assert event.get("Official_ID") is None


class TestSlowSubmission:
    """The deck keeps moving while a submission is outstanding."""

    @pytest.mark.asyncio
    async def test_deck_advances_before_submission_finishes(self):
        release = asyncio.Event()

        async def submit(official, rating, direction):
            await release.wait()

        controller = make_controller(submit, animation_seconds=0.01)
        feedback = await asyncio.wait_for(controller.vote(80, "like"), timeout=1)

        assert feedback.submitted is None
        assert controller.index == 1
        assert controller.phase == SwipePhase.IDLE
        assert controller.pointer_down(0, 0) is True

        release.set()
        await controller.drain()
        assert controller.last_vote.submitted is True

    @pytest.mark.asyncio
    async def test_late_failure_is_recorded(self, caplog):
        release = asyncio.Event()

        async def submit(official, rating, direction):
            await release.wait()
            raise RuntimeError("timed out")

        controller = make_controller(submit, animation_seconds=0.01)
        await controller.vote(20, "dislike")

        with caplog.at_level(logging.ERROR, logger="app.services.swipe"):
            release.set()
            await controller.drain()

        assert controller.last_vote.submitted is False
        assert "Error submitting rating for Alma Adams" in caplog.text
