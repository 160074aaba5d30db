"""Preference Rules — pure functions shared by the Gateway, the store and the client cache.

Invariants:
    - DEFAULT_PREFERENCES is the only synthetic document in the system; the
      store never returns it
    - add_team never produces duplicates (exact, case-sensitive match)
    - next_updated_at(now, previous) > previous whenever previous is set
    - All functions are pure and deterministic (no IO, no clock reads)
"""

from datetime import datetime, timedelta

from racing_dashboard.core.domain_types import MeasurementUnits, Theme

CONTENT_FIELDS = ("favorite_teams", "notifications", "theme", "measurement_units")

DEFAULT_PREFERENCES: dict = {
    "favorite_teams": [],
    "notifications": True,
    "theme": Theme.DARK.value,
    "measurement_units": MeasurementUnits.IMPERIAL.value,
}

_TIMESTAMP_STEP = timedelta(microseconds=1)


def default_preferences() -> dict:
    """Fresh copy of the defaults (lists are never shared between callers)."""
    return {**DEFAULT_PREFERENCES, "favorite_teams": []}


def fill_defaults(stored: dict) -> dict:
    """Content fields of a stored document, defaults substituted for missing ones."""
    filled = default_preferences()
    for key in CONTENT_FIELDS:
        value = stored.get(key)
        if value is not None:
            filled[key] = list(value) if key == "favorite_teams" else value
    return filled


def add_team(teams: list[str], name: str) -> list[str]:
    """Append a trimmed team name unless blank or already present."""
    name = name.strip()
    if not name or name in teams:
        return list(teams)
    return [*teams, name]


def remove_team(teams: list[str], name: str) -> list[str]:
    return [t for t in teams if t != name]


def next_updated_at(now: datetime, previous: datetime | None) -> datetime:
    """Timestamp for a write: the clock, nudged forward if it has not advanced."""
    if previous is None:
        return now
    return max(now, previous + _TIMESTAMP_STEP)
