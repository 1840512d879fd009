from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from beacon.exceptions import StorageFailure
from beacon.repositories.sql import (
    SqlInteractionStore,
    SqlPreferenceStore,
    SqlProfileStore,
    format_age_range,
    parse_age_range,
)
from beacon.services.profile_adapter import to_candidate


class BrokenSession:
    """Session whose every query fails as if the database were unreachable."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("down"))

    async def flush(self):
        raise OperationalError("FLUSH", {}, Exception("down"))

    def add(self, row):
        pass


def test_age_range_text_form() -> None:
    assert format_age_range((25, 35)) == "[25,35)"
    assert format_age_range(None) is None
    assert parse_age_range("[25,35)") == (25, 35)
    assert parse_age_range(None) is None
    assert parse_age_range("") is None


@pytest.mark.asyncio
async def test_profile_store_wraps_database_errors() -> None:
    store = SqlProfileStore(BrokenSession())
    with pytest.raises(StorageFailure) as exc_info:
        await store.list_visible_profiles("viewer@x")
    assert exc_info.value.operation == "list_visible_profiles"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_empty_batch_lookup_skips_the_database() -> None:
    assert await SqlProfileStore(BrokenSession()).get_profiles([]) == []


@pytest.mark.asyncio
async def test_preference_store_wraps_database_errors() -> None:
    with pytest.raises(StorageFailure):
        await SqlPreferenceStore(BrokenSession()).get_preferences("viewer@x")


@pytest.mark.asyncio
async def test_interaction_store_wraps_database_errors() -> None:
    with pytest.raises(StorageFailure):
        await SqlInteractionStore(BrokenSession()).list_recently_active_users(datetime.now(timezone.utc))


def test_adapter_resolves_aliased_fields() -> None:
    candidate = to_candidate({
        "email": "c@x",
        "interests": ["music"],
        "updated_at": "2026-10-19T12:00:00Z",
        "profile_type": None,
        "age": "31",
    })
    assert candidate.tags == frozenset({"music"})
    assert candidate.last_seen == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    assert candidate.profile_type is None
    assert candidate.age == 31
    assert candidate.is_verified is False
