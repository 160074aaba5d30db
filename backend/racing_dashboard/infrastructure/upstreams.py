"""Upstream Registry — builds every capability client from one UpstreamConfig."""

from dataclasses import dataclass

import httpx

from racing_dashboard.config import UpstreamConfig
from racing_dashboard.infrastructure.file_storage_client import FileStorageClient
from racing_dashboard.infrastructure.race_client import RaceProviderClient
from racing_dashboard.infrastructure.weather_client import WeatherClient


@dataclass(frozen=True)
class UpstreamClients:
    weather: WeatherClient
    motogp: RaceProviderClient
    f1: RaceProviderClient
    files: FileStorageClient


def build_upstream_clients(
    config: UpstreamConfig, http: httpx.AsyncClient,
) -> UpstreamClients:
    return UpstreamClients(
        weather=WeatherClient(http, config.weather),
        motogp=RaceProviderClient(http, config.motogp),
        f1=RaceProviderClient(http, config.f1),
        files=FileStorageClient(
            http, config.file_handler, config.upload_timeout_seconds,
        ),
    )
