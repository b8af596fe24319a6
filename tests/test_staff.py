"""Unit tests for the staff directory."""

import random
import re
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from app.config import Settings
from app.database import create_engine, create_session_factory, init_db
from app.models import Official, Rating, Staff
from app.services.filters import Contains, Equals
from app.services.local_store import LocalRecordStore
from app.services.record_store import RecordStoreError
from app.services.sample_data import seed_sample_data
from app.services.staff import (
    StaffDirectory,
    fallback_staff,
    generate_staff_id,
    group_staff_by_role,
    role_for_title,
)


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def store():
    """Local store seeded with sample officials and staff."""
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
def failing_store():
    store = AsyncMock()
    store.select.side_effect = RecordStoreError("store unreachable")
    store.create.side_effect = RecordStoreError("store unreachable")
    return store


class TestFilters:
    """officialId beats bioguideId beats office."""

    def test_precedence(self):
        build = StaffDirectory.build_filter
        assert build("OFF_0001", "A000370", "Charlotte") == Equals("Official_Link", "OFF_0001")
        assert build(None, "A000370", "Charlotte") == Equals("Bioguide_ID", "A000370")
        assert build(None, None, "Charlotte") == Contains("Office_Location", "Charlotte")
        assert build() is None


class TestListStaff:
    """Tests for staff lookups."""

    @pytest.mark.asyncio
    async def test_sorted_by_job_title(self, store):
        result = await StaffDirectory(store).list_staff(official_id="OFF_0001")
        titles = [s["jobTitle"] for s in result.data]
        assert titles == sorted(titles)
        assert len(titles) == 4
        assert result.fallback is False

    @pytest.mark.asyncio
    async def test_office_search(self, store):
        result = await StaffDirectory(store).list_staff(office="Charlotte")
        assert [s["fullName"] for s in result.data] == ["David Thompson"]

    @pytest.mark.asyncio
    async def test_limit(self, store):
        result = await StaffDirectory(store).list_staff(bioguide_id="A000370", limit=2)
        assert len(result.data) == 2

    @pytest.mark.asyncio
    async def test_store_failure_returns_demo_staff(self, failing_store):
        result = await StaffDirectory(failing_store).list_staff(official_id="OFF_0042")
        assert result.fallback is True
        assert result.error == "Failed to fetch staff data"
        assert len(result.data) == 4
        assert {s["officialLink"] for s in result.data} == {"OFF_0042"}
        assert {s["bioguideId"] for s in result.data} == {"A000370"}


class TestFallbackStaff:
    def test_defaults(self):
        staff = fallback_staff()
        assert [s.id for s in staff] == ["demo_staff_1", "demo_staff_2", "demo_staff_3", "demo_staff_4"]
        assert {s.official_link for s in staff} == {"demo_1"}

    def test_bioguide_passed_through(self):
        assert {s.bioguide_id for s in fallback_staff(bioguide_id="B000001")} == {"B000001"}


class TestGrouping:
    """Tests for grouping staff by title keywords."""

    @pytest.mark.parametrize(
        "title,role",
        [
            ("Chief of Staff", "leadership"),
            ("Deputy District Director", "leadership"),
            ("Communications Director", "leadership"),
            ("Press Secretary", "communications"),
            ("Legislative Correspondent", "policy"),
            ("Senior Policy Advisor", "policy"),
            ("Scheduler", "operations"),
            ("Staff Assistant", "operations"),
            ("Caseworker", "other"),
            (None, "other"),
        ],
    )
    def test_role_for_title(self, title, role):
        assert role_for_title(title) == role

    def test_all_groups_present(self):
        grouped = group_staff_by_role([{"jobTitle": "Press Secretary"}])
        assert set(grouped) == {"leadership", "communications", "policy", "operations", "other"}
        assert grouped["communications"] == [{"jobTitle": "Press Secretary"}]


class TestCreateStaff:
    """Tests for creating staff records."""

    def test_generated_id_format(self):
        staff_id = generate_staff_id(now_ms=1720440000000, rng=random.Random(7))
        assert re.fullmatch(r"STF_[0-9a-z]+_[0-9a-z]{6}", staff_id)
        assert staff_id.startswith("STF_ly")

    @pytest.mark.asyncio
    async def test_create_joins_policy_areas(self, store):
        directory = StaffDirectory(store, now=lambda: datetime(2025, 8, 1, tzinfo=timezone.utc))
        staff = await directory.create_staff(
            {
                "firstName": "Ana",
                "lastName": "Lopez",
                "jobTitle": "Scheduler",
                "policyAreas": ["Travel", "Events"],
                "officialLink": "OFF_0002",
            }
        )
        assert staff["staffId"].startswith("STF_")
        assert staff["id"].startswith("rec")

        [record] = await store.select("Staff", filter=Equals("Official_Link", "OFF_0002"))
        assert record.get("Policy_Areas") == "Travel, Events"
        assert record.get("Full_Name") == "Ana Lopez"
        assert record.get("Last_Updated") == "2025-08-01"

    @pytest.mark.asyncio
    async def test_given_staff_id_is_kept(self, store):
        staff = await StaffDirectory(store).create_staff({"fullName": "Ana Lopez", "staffId": "STF_CUSTOM"})
        assert staff["staffId"] == "STF_CUSTOM"

    @pytest.mark.asyncio
    async def test_create_failure_raises(self, failing_store):
        with pytest.raises(RecordStoreError):
            await StaffDirectory(failing_store).create_staff({"fullName": "Ana Lopez"})
