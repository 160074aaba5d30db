"""Request Dependencies — lifecycle-managed handles and identity resolution.

Invariants:
    - Store and upstream clients are read from app.state (set by the lifespan),
      never constructed per request
    - A missing handle is a StoreUnavailableError / RuntimeError, not a lazy init
    - Identity comes only from the header set by the authentication layer;
      request bodies can never choose the user
"""

from fastapi import Request

from racing_dashboard.config import get_settings
from racing_dashboard.core.domain_types import UserId
from racing_dashboard.core.errors import StoreUnavailableError, UnauthorizedError
from racing_dashboard.infrastructure.database import DatabaseSessionManager
from racing_dashboard.infrastructure.upstreams import UpstreamClients
from racing_dashboard.services.preference_store import PreferenceStore


def get_preference_store(request: Request) -> PreferenceStore:
    store = getattr(request.app.state, "preference_store", None)
    if store is None:
        raise StoreUnavailableError("not_initialized")
    return store


def get_database(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db", None)


def get_upstreams(request: Request) -> UpstreamClients:
    upstreams = getattr(request.app.state, "upstreams", None)
    if upstreams is None:
        raise RuntimeError("Upstream clients not initialized")
    return upstreams


def get_current_user_id(request: Request) -> UserId:
    """Identity asserted by the authentication layer in front of the gateway."""
    header = get_settings().identity_header
    user_id = request.headers.get(header, "").strip()
    if not user_id:
        raise UnauthorizedError()
    return UserId(user_id)
