"""Weather Client — current conditions from the weather function.

Invariants:
    - Failure always propagates (no default/stale reading is ever returned)
    - Returned snapshot is expressed in the requested units; an upstream body
      that omits `units` is stamped with the requested value
"""

import logging

from pydantic import ValidationError

from racing_dashboard.infrastructure.upstream_http import UpstreamClient
from racing_dashboard.schemas.weather import WeatherQuery, WeatherSnapshot

logger = logging.getLogger(__name__)


class WeatherClient(UpstreamClient):
    failure_message = "Failed to fetch weather data"
    failure_status = 502

    async def get_weather(self, query: WeatherQuery) -> WeatherSnapshot:
        params = query.to_params()
        logger.info(
            "Calling weather upstream",
            extra={"upstream": self.name},
        )
        body = await self._request("GET", params=params)
        if not isinstance(body, dict):
            raise self._failure(f"unexpected body type {type(body).__name__}")
        body.setdefault("units", query.units.value)
        try:
            return WeatherSnapshot.model_validate(body)
        except ValidationError as e:
            raise self._failure(f"malformed weather body: {e.error_count()} errors") from e
