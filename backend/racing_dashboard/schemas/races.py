"""Race Schemas — per-series race entries and the aggregate upcoming list."""

from pydantic import BaseModel, ConfigDict, Field


class RaceEntry(BaseModel):
    """One race; provider-specific extra fields pass through untouched."""
    model_config = ConfigDict(extra="allow")

    name: str
    date: str
    location: str
    country: str


class UpcomingRaces(BaseModel):
    motogp: list[RaceEntry] = Field(default_factory=list)
    f1: list[RaceEntry] = Field(default_factory=list)
