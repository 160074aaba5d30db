"""Weather Schemas — lookup query and the normalized snapshot returned by the weather upstream."""

from pydantic import BaseModel

from racing_dashboard.core.domain_types import MeasurementUnits
from racing_dashboard.schemas.base import CamelModel


class WeatherQuery(BaseModel):
    """Validated lookup: coordinates take precedence over city."""
    lat: float | None = None
    lon: float | None = None
    city: str | None = None
    units: MeasurementUnits = MeasurementUnits.IMPERIAL

    def to_params(self) -> dict[str, str]:
        if self.lat is not None and self.lon is not None:
            params = {"lat": str(self.lat), "lon": str(self.lon)}
        else:
            params = {"city": self.city or ""}
        params["units"] = self.units.value
        return params


class WeatherSnapshot(CamelModel):
    """Current conditions, already expressed in `units`. Never persisted."""
    location: str | None = None
    temperature: float
    feels_like: float
    dewpoint: float
    heat_index: float
    wind_speed: float
    gust: float
    pressure: float
    humidity: float
    condition: str
    icon: str | None = None
    units: MeasurementUnits
