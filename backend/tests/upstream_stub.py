"""Upstream Stub — fake external functions served through httpx.MockTransport.

Invariants:
    - Every request is recorded, in order, before a response is produced
    - An unrouted host answers 404 (never a real network call)
"""

from typing import Callable

import httpx

from racing_dashboard.config import UpstreamConfig, UpstreamEndpoint

USER_ID = "user-123"

WEATHER_URL = "https://weather.test/current"
MOTOGP_URL = "https://motogp.test/races"
F1_URL = "https://f1.test/races"
FILES_URL = "https://files.test/handler"

LONDON_METRIC = {
    "location": "London",
    "temperature": 15.2,
    "feelsLike": 14.1,
    "dewpoint": 9.3,
    "heatIndex": 15.2,
    "windSpeed": 18.5,
    "gust": 29.0,
    "pressure": 1012.0,
    "humidity": 72,
    "condition": "Partly cloudy",
    "icon": "02d",
    "units": "metric",
}

MOTOGP_RACES = [
    {"name": "Qatar Grand Prix", "date": "2026-03-08", "location": "Lusail", "country": "Qatar"},
    {"name": "Portuguese Grand Prix", "date": "2026-03-22", "location": "Portimão", "country": "Portugal"},
]

F1_RACES = [
    {"name": "Australian Grand Prix", "date": "2026-03-15", "location": "Melbourne", "country": "Australia", "round": 1},
]


class UpstreamStub:
    """Programmable stand-in for the external functions, keyed by host.

    A route is either an httpx.Response or a callable taking the request
    (which may raise an httpx exception to simulate a transport failure).
    """

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.routes: dict[str, httpx.Response | Callable] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get(request.url.host)
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        return route(request) if callable(route) else route

    def reply(self, url: str, route: httpx.Response | Callable) -> None:
        self.routes[httpx.URL(url).host] = route

    def calls_to(self, url: str) -> list[httpx.Request]:
        host = httpx.URL(url).host
        return [r for r in self.calls if r.url.host == host]


def timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("upstream took too long", request=request)


def endpoint(name: str, url: str | None, api_key: str | None = "secret") -> UpstreamEndpoint:
    return UpstreamEndpoint(
        name, url, f"{api_key}-{name}" if api_key else None, 10.0,
    )


def upstream_config(**overrides: UpstreamEndpoint) -> UpstreamConfig:
    endpoints = {
        "weather": endpoint("weather", WEATHER_URL),
        "motogp": endpoint("motogp", MOTOGP_URL),
        "f1": endpoint("f1", F1_URL),
        "file_handler": endpoint("file_handler", FILES_URL),
    }
    endpoints.update(overrides)
    return UpstreamConfig(upload_timeout_seconds=30.0, **endpoints)
