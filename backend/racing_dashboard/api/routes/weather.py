"""Weather — location validation and passthrough of the normalized snapshot.

Invariants:
    - A request without (lat and lon) or city is rejected with 400 before any
      upstream call
    - units defaults to imperial
    - Upstream failure maps to 502 with a generic message
"""

from fastapi import APIRouter, Depends, Query

from racing_dashboard.api.dependencies import get_upstreams
from racing_dashboard.core.domain_types import MeasurementUnits
from racing_dashboard.core.errors import RequestValidationFailed
from racing_dashboard.infrastructure.upstreams import UpstreamClients
from racing_dashboard.schemas.weather import WeatherQuery, WeatherSnapshot

router = APIRouter(prefix="/weather", tags=["weather"])


def build_weather_query(
    lat: float | None,
    lon: float | None,
    city: str | None,
    units: MeasurementUnits,
) -> WeatherQuery:
    """Resolve the location; coordinates win over city when both are given."""
    city = city.strip() if city else None
    if (lat is None) != (lon is None) and not city:
        raise RequestValidationFailed(
            "Both lat and lon are required for a coordinate lookup", "lat",
        )
    if lat is None or lon is None:
        if not city:
            raise RequestValidationFailed(
                "Missing location: provide either lat and lon, or city", "city",
            )
        return WeatherQuery(city=city, units=units)
    return WeatherQuery(lat=lat, lon=lon, units=units)


@router.get("", response_model=WeatherSnapshot)
async def get_weather(
    lat: float | None = Query(None, ge=-90, le=90),
    lon: float | None = Query(None, ge=-180, le=180),
    city: str | None = Query(None, max_length=200),
    units: MeasurementUnits = Query(MeasurementUnits.IMPERIAL),
    upstreams: UpstreamClients = Depends(get_upstreams),
):
    query = build_weather_query(lat, lon, city, units)
    return await upstreams.weather.get_weather(query)
