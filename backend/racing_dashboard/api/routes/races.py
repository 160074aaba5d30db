"""Races — upcoming MotoGP and F1 races; degrades per provider, never hard-fails."""

from fastapi import APIRouter, Depends

from racing_dashboard.api.dependencies import get_upstreams
from racing_dashboard.infrastructure.upstreams import UpstreamClients
from racing_dashboard.schemas.races import UpcomingRaces
from racing_dashboard.services.race_schedule import fetch_upcoming_races

router = APIRouter(prefix="/races", tags=["races"])


@router.get("/upcoming", response_model=UpcomingRaces)
async def get_upcoming_races(
    upstreams: UpstreamClients = Depends(get_upstreams),
):
    return await fetch_upcoming_races(upstreams.motogp, upstreams.f1)
