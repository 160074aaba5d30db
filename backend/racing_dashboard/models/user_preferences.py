"""UserPreferences ORM — one preference document per user.

Invariants:
    - user_id is unique (at most one document per user)
    - created_at and updated_at are always written together on insert
    - Content columns are nullable: a partial first write stores only what was supplied

Design Decisions:
    - JSON column for favorite_teams: ordered list stored as-is
    - Surrogate integer id; the natural key is user_id (unique index)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from racing_dashboard.db.base import Base


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    favorite_teams: Mapped[list | None] = mapped_column(JSON, nullable=True)
    notifications: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    theme: Mapped[str | None] = mapped_column(String(10), nullable=True)
    measurement_units: Mapped[str | None] = mapped_column(String(10), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
