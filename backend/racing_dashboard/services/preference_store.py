"""Preference Store — single-document-per-user persistence with upsert semantics.

Invariants:
    - get() returns None for a missing user; it never fabricates defaults
    - upsert() sets created_at only when the document is created, together
      with updated_at in the same INSERT (readers never see one without the other)
    - updated_at strictly increases per user, even if the clock does not
    - Concurrent upserts for one user serialize on the row lock; a lost
      first-write race on the unique user_id is re-applied as an update
    - Every call goes to the database (no in-process caching)

Design Decisions:
    - Read-modify-write under SELECT ... FOR UPDATE instead of a dialect
      specific ON CONFLICT statement: same code path on PostgreSQL and SQLite
    - Clock injected so timestamp ordering is testable without sleeping
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from racing_dashboard.core.domain_types import UserId
from racing_dashboard.core.preferences import CONTENT_FIELDS, next_updated_at
from racing_dashboard.infrastructure.database import DatabaseSessionManager
from racing_dashboard.models.user_preferences import UserPreferences
from racing_dashboard.schemas.preferences import PreferencesDocument

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_document(row: UserPreferences) -> PreferencesDocument:
    return PreferencesDocument(
        user_id=row.user_id,
        favorite_teams=list(row.favorite_teams) if row.favorite_teams is not None else None,
        notifications=row.notifications,
        theme=row.theme,
        measurement_units=row.measurement_units,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class PreferenceStore:
    """Async preference persistence over the shared DatabaseSessionManager."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._db = db
        self._clock = clock

    async def get(self, user_id: UserId) -> PreferencesDocument | None:
        async with self._db.session() as db:
            row = await self._find(db, user_id)
            return _to_document(row) if row else None

    async def upsert(self, user_id: UserId, fields: dict) -> PreferencesDocument:
        """Merge `fields` into the user's document, creating it if absent."""
        unknown = set(fields) - set(CONTENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown preference fields: {sorted(unknown)}")

        async with self._db.session() as db:
            try:
                row = await self._apply(db, user_id, fields)
                await db.commit()
            except IntegrityError:
                await db.rollback()
                logger.info(
                    "Concurrent first write lost the insert race, applying as update",
                    extra={"user_id": user_id},
                )
                row = await self._apply(db, user_id, fields)
                await db.commit()
            return _to_document(row)

    async def _find(
        self, db: AsyncSession, user_id: UserId, for_update: bool = False,
    ) -> UserPreferences | None:
        query = select(UserPreferences).where(UserPreferences.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def _apply(
        self, db: AsyncSession, user_id: UserId, fields: dict,
    ) -> UserPreferences:
        row = await self._find(db, user_id, for_update=True)
        now = self._clock()
        if row is None:
            row = UserPreferences(
                user_id=user_id, created_at=now, updated_at=now, **fields,
            )
            db.add(row)
            return row
        for key, value in fields.items():
            setattr(row, key, value)
        row.updated_at = next_updated_at(now, _as_utc(row.updated_at))
        return row
