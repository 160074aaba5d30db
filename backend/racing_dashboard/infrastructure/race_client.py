"""Race Provider Client — upcoming races for one series.

Raises on any failure; the degrade-to-empty policy lives in
services/race_schedule.py so this client stays as strict as the others.
"""

from pydantic import TypeAdapter, ValidationError

from racing_dashboard.infrastructure.upstream_http import UpstreamClient
from racing_dashboard.schemas.races import RaceEntry

_RACE_LIST = TypeAdapter(list[RaceEntry])


class RaceProviderClient(UpstreamClient):
    failure_message = "Failed to fetch race data"
    failure_status = 502

    async def get_races(self) -> list[RaceEntry]:
        body = await self._request("GET")
        try:
            return _RACE_LIST.validate_python(body)
        except ValidationError as e:
            raise self._failure(f"malformed race list: {e.error_count()} errors") from e
