"""Gateway Client — async HTTP access to the dashboard REST API.

Invariants:
    - Every transport or non-2xx failure surfaces as GatewayRequestError
    - The client never retries; callers decide (e.g. a "retry" button)
"""

from typing import Any

import httpx


class GatewayRequestError(Exception):
    """A gateway call failed; status_code is None for transport failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GatewayClient:
    def __init__(
        self,
        base_url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def get_preferences(self) -> dict:
        return await self._call("GET", "/api/preferences")

    async def put_preferences(self, preferences: dict) -> dict:
        return await self._call("PUT", "/api/preferences", json=preferences)

    async def get_weather(
        self,
        *,
        units: str,
        lat: float | None = None,
        lon: float | None = None,
        city: str | None = None,
    ) -> dict:
        params: dict[str, Any] = {"units": units}
        if lat is not None and lon is not None:
            params.update(lat=lat, lon=lon)
        elif city:
            params["city"] = city
        return await self._call("GET", "/api/weather", params=params)

    async def get_upcoming_races(self) -> dict:
        return await self._call("GET", "/api/races/upcoming")

    async def _call(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise GatewayRequestError(
                f"{method} {path} failed", e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GatewayRequestError(f"{method} {path} unreachable: {e!r}") from e
        except ValueError as e:
            raise GatewayRequestError(f"{method} {path} returned invalid JSON") from e
