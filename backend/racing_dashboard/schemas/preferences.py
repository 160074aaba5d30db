"""Preference Schemas — request/response contracts for /preferences.

Invariants:
    - PreferencesUpdate never carries an identity: unknown keys (userId
      included) are dropped, the user comes from the resolved identity only
    - supplied_fields() returns only fields the client actually sent
    - PreferencesView is always complete (defaults filled by the Gateway)
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from racing_dashboard.core.domain_types import MeasurementUnits, Theme
from racing_dashboard.schemas.base import CamelModel


class PreferencesUpdate(CamelModel):
    """Partial preferences body for PUT /preferences."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )

    favorite_teams: list[str] | None = Field(None, max_length=100)
    notifications: bool | None = None
    theme: Theme | None = None
    measurement_units: MeasurementUnits | None = None

    @field_validator("favorite_teams")
    @classmethod
    def strip_team_names(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        stripped = [name.strip() for name in v]
        if any(not name for name in stripped):
            raise ValueError("team names cannot be empty or whitespace")
        if any(len(name) > 100 for name in stripped):
            raise ValueError("team names must be at most 100 characters")
        return stripped

    def supplied_fields(self) -> dict:
        """Snake-case dict of the fields present (and non-null) in the body."""
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


class PreferencesView(CamelModel):
    """GET /preferences response — content fields only."""
    favorite_teams: list[str]
    notifications: bool
    theme: Theme
    measurement_units: MeasurementUnits


class PreferencesDocument(CamelModel):
    """Full stored document as returned by the store and PUT /preferences."""
    user_id: str
    favorite_teams: list[str] | None = None
    notifications: bool | None = None
    theme: Theme | None = None
    measurement_units: MeasurementUnits | None = None
    created_at: datetime
    updated_at: datetime
