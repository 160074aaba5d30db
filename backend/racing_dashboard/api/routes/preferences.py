"""Preferences — read-through/write-through to the preference store.

Invariants:
    - GET never returns 404: an absent document becomes the default view
      (the only place synthetic defaults exist), and is not persisted
    - PUT upserts only the fields present in the body, keyed by the resolved
      identity, and returns the full stored document
"""

import logging

from fastapi import APIRouter, Depends

from racing_dashboard.api.dependencies import (
    get_current_user_id, get_preference_store,
)
from racing_dashboard.core.domain_types import UserId
from racing_dashboard.core.preferences import default_preferences, fill_defaults
from racing_dashboard.schemas.preferences import (
    PreferencesDocument, PreferencesUpdate, PreferencesView,
)
from racing_dashboard.services.preference_store import PreferenceStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesView)
async def get_preferences(
    user_id: UserId = Depends(get_current_user_id),
    store: PreferenceStore = Depends(get_preference_store),
):
    document = await store.get(user_id)
    if document is None:
        logger.info("No stored preferences, serving defaults", extra={"user_id": user_id})
        return PreferencesView(**default_preferences())
    return PreferencesView(**fill_defaults(document.model_dump(mode="json")))


@router.put("", response_model=PreferencesDocument)
async def update_preferences(
    body: PreferencesUpdate,
    user_id: UserId = Depends(get_current_user_id),
    store: PreferenceStore = Depends(get_preference_store),
):
    fields = body.supplied_fields()
    document = await store.upsert(user_id, fields)
    logger.info(
        f"Preferences updated ({', '.join(sorted(fields)) or 'no fields'})",
        extra={"user_id": user_id},
    )
    return document
