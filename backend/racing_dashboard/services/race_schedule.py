"""Race Schedule — concurrent fan-out to both race providers.

Invariants:
    - Both provider calls are issued concurrently and both are awaited
    - A failing or unconfigured provider yields [] for that series only
    - fetch_upcoming_races never raises because of a single provider
"""

import asyncio
import logging

from racing_dashboard.infrastructure.race_client import RaceProviderClient
from racing_dashboard.infrastructure.upstream_http import UpstreamNotConfiguredError
from racing_dashboard.core.errors import UpstreamUnavailableError
from racing_dashboard.schemas.races import RaceEntry, UpcomingRaces

logger = logging.getLogger(__name__)


async def _fetch_or_empty(client: RaceProviderClient) -> list[RaceEntry]:
    try:
        races = await client.get_races()
    except UpstreamNotConfiguredError:
        logger.warning(
            f"{client.name} provider not configured, returning empty list",
            extra={"series": client.name},
        )
        return []
    except UpstreamUnavailableError:
        logger.warning(
            f"{client.name} provider failed, returning empty list",
            extra={"series": client.name},
        )
        return []
    except Exception as e:
        logger.error(
            f"Unexpected error from {client.name} provider: {e}",
            exc_info=True, extra={"series": client.name},
        )
        return []
    logger.info(
        f"Fetched {client.name} races",
        extra={"series": client.name, "entries": len(races)},
    )
    return races


async def fetch_upcoming_races(
    motogp: RaceProviderClient, f1: RaceProviderClient,
) -> UpcomingRaces:
    motogp_races, f1_races = await asyncio.gather(
        _fetch_or_empty(motogp), _fetch_or_empty(f1),
    )
    return UpcomingRaces(motogp=motogp_races, f1=f1_races)
