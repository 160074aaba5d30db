"""Dashboard Feed — weather and race panels with explicit load states.

Invariants:
    - Each panel is LOADING, LOADED or LOAD_FAILED; a reload clears the
      previous value and error before the new request goes out
    - Weather is requested in the user's preferred units (imperial when the
      preferences cannot be read) and falls back to DEFAULT_CITY when no
      coordinates are available
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import ValidationError

from racing_dashboard.client.gateway_client import GatewayClient, GatewayRequestError
from racing_dashboard.core.domain_types import LoadState, MeasurementUnits
from racing_dashboard.schemas.races import UpcomingRaces
from racing_dashboard.schemas.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_CITY = "London"

UNIT_LABELS = {
    MeasurementUnits.METRIC: {"temperature": "°C", "speed": "km/h", "pressure": "mb"},
    MeasurementUnits.IMPERIAL: {"temperature": "°F", "speed": "mph", "pressure": "in"},
}

T = TypeVar("T")


@dataclass
class Panel(Generic[T]):
    state: LoadState = LoadState.UNLOADED
    data: T | None = None
    error: str | None = None

    def begin(self) -> None:
        self.state = LoadState.LOADING
        self.data = None
        self.error = None

    def succeed(self, data: T) -> None:
        self.state = LoadState.LOADED
        self.data = data

    def fail(self, message: str) -> None:
        self.state = LoadState.LOAD_FAILED
        self.error = message


class DashboardFeed:

    def __init__(self, gateway: GatewayClient):
        self._gateway = gateway
        self.units = MeasurementUnits.IMPERIAL
        self.weather: Panel[WeatherSnapshot] = Panel()
        self.races: Panel[UpcomingRaces] = Panel()

    async def refresh(self, lat: float | None = None, lon: float | None = None) -> None:
        """Units first (weather depends on them), then both panels concurrently."""
        await self.load_units()
        await asyncio.gather(self.load_weather(lat, lon), self.load_races())

    async def load_units(self) -> None:
        try:
            prefs = await self._gateway.get_preferences()
        except GatewayRequestError as e:
            logger.warning(f"Preferences unavailable, keeping {self.units.value} units: {e}")
            return
        raw = prefs.get("measurementUnits") if isinstance(prefs, dict) else None
        try:
            self.units = MeasurementUnits(raw or MeasurementUnits.IMPERIAL.value)
        except ValueError:
            self.units = MeasurementUnits.IMPERIAL

    async def load_weather(self, lat: float | None = None, lon: float | None = None) -> None:
        self.weather.begin()
        try:
            if lat is not None and lon is not None:
                body = await self._gateway.get_weather(
                    units=self.units.value, lat=lat, lon=lon,
                )
            else:
                body = await self._gateway.get_weather(
                    units=self.units.value, city=DEFAULT_CITY,
                )
            self.weather.succeed(WeatherSnapshot.model_validate(body))
        except (GatewayRequestError, ValidationError) as e:
            logger.warning(f"Failed to load weather: {e}")
            self.weather.fail("Failed to load weather data")

    async def load_races(self) -> None:
        self.races.begin()
        try:
            body = await self._gateway.get_upcoming_races()
            self.races.succeed(UpcomingRaces.model_validate(body))
        except (GatewayRequestError, ValidationError) as e:
            logger.warning(f"Failed to load races: {e}")
            self.races.fail("Failed to load races")

    def unit_labels(self) -> dict[str, str]:
        """Labels for the units the displayed snapshot is actually in."""
        units = self.weather.data.units if self.weather.data else self.units
        return UNIT_LABELS[units]
