"""Preference Store — upsert semantics, timestamps and availability.

Invariants:
    - get() of an unknown user is None (defaults are a Gateway concern)
    - First upsert sets created_at == updated_at
    - Later upserts merge fields and strictly advance updated_at,
      even when the clock has not moved
    - A lost insert race on user_id is re-applied as an update
    - An unconnected store raises StoreUnavailableError
"""

from datetime import datetime, timedelta, timezone

import pytest

from racing_dashboard.core.errors import StoreUnavailableError
from racing_dashboard.infrastructure.database import DatabaseSessionManager
from racing_dashboard.services.preference_store import PreferenceStore

FROZEN = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


async def test_get_unknown_user_returns_none(store):
    assert await store.get("nobody") is None


async def test_first_upsert_sets_both_timestamps(db_manager):
    store = PreferenceStore(db_manager, clock=lambda: FROZEN)

    doc = await store.upsert("u1", {"favorite_teams": ["Ferrari"]})

    assert doc.created_at == FROZEN
    assert doc.updated_at == FROZEN
    assert doc.favorite_teams == ["Ferrari"]
    assert doc.theme is None


async def test_partial_first_write_stores_only_supplied_fields(store):
    await store.upsert("u1", {"notifications": False})

    doc = await store.get("u1")
    assert doc.notifications is False
    assert doc.favorite_teams is None
    assert doc.measurement_units is None


async def test_upsert_merges_and_keeps_unsupplied_fields(store):
    await store.upsert("u1", {"theme": "light", "favorite_teams": ["Ducati"]})
    await store.upsert("u1", {"favorite_teams": ["Ferrari", "Ducati"]})

    doc = await store.get("u1")
    assert doc.theme == "light"
    assert doc.favorite_teams == ["Ferrari", "Ducati"]


async def test_updated_at_strictly_increases_with_frozen_clock(db_manager):
    store = PreferenceStore(db_manager, clock=lambda: FROZEN)

    first = await store.upsert("u1", {"theme": "dark"})
    second = await store.upsert("u1", {"theme": "light"})
    third = await store.upsert("u1", {"theme": "dark"})

    assert first.updated_at < second.updated_at < third.updated_at
    assert third.created_at == FROZEN


async def test_updated_at_strictly_increases_when_clock_goes_backwards(db_manager):
    ticks = iter([FROZEN, FROZEN - timedelta(seconds=30)])
    store = PreferenceStore(db_manager, clock=lambda: next(ticks))

    first = await store.upsert("u1", {"theme": "dark"})
    second = await store.upsert("u1", {"theme": "light"})

    assert second.updated_at > first.updated_at


async def test_created_at_never_changes(db_manager):
    ticks = iter([FROZEN, FROZEN + timedelta(hours=1)])
    store = PreferenceStore(db_manager, clock=lambda: next(ticks))

    await store.upsert("u1", {"theme": "dark"})
    doc = await store.upsert("u1", {"theme": "light"})

    assert doc.created_at == FROZEN
    assert doc.updated_at == FROZEN + timedelta(hours=1)


async def test_documents_are_isolated_per_user(store):
    await store.upsert("alice", {"favorite_teams": ["Ferrari"]})
    await store.upsert("bob", {"favorite_teams": ["Ducati"]})

    assert (await store.get("alice")).favorite_teams == ["Ferrari"]
    assert (await store.get("bob")).favorite_teams == ["Ducati"]


async def test_unknown_field_rejected(store):
    with pytest.raises(ValueError, match="user_id"):
        await store.upsert("u1", {"user_id": "someone-else"})


async def test_lost_insert_race_applied_as_update(store, monkeypatch):
    """Simulates a concurrent first write: the row appears after our lookup."""
    await store.upsert("u1", {"theme": "light", "notifications": False})

    original_find = PreferenceStore._find
    missed = []

    async def find_missing_once(self, db, user_id, for_update=False):
        if for_update and not missed:
            missed.append(user_id)
            return None
        return await original_find(self, db, user_id, for_update)

    monkeypatch.setattr(PreferenceStore, "_find", find_missing_once)

    doc = await store.upsert("u1", {"favorite_teams": ["Ferrari"]})

    assert missed == ["u1"]
    assert doc.favorite_teams == ["Ferrari"]
    assert doc.theme == "light"
    assert doc.notifications is False


async def test_unconnected_store_raises_store_unavailable():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    store = PreferenceStore(manager)
    try:
        with pytest.raises(StoreUnavailableError):
            await store.get("u1")
        with pytest.raises(StoreUnavailableError):
            await store.upsert("u1", {"theme": "dark"})
    finally:
        await manager.disconnect()


async def test_health_check_reflects_connection(db_manager):
    assert await db_manager.health_check() is True
    await db_manager.disconnect()
    assert await db_manager.health_check() is False
