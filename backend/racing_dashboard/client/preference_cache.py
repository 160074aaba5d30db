"""Preference Cache — client-side copy of the user's preferences.

Invariants:
    - State machine: UNLOADED → LOADING → {LOADED, LOAD_FAILED};
      save: SAVING → {LOADED, SAVE_FAILED}
    - Edits touch only the in-memory copy; the network is used by load()/save()
    - SAVE_FAILED keeps every unsaved edit, so save() can simply be called again
    - LOAD_FAILED holds no document (nothing stale is presented as loaded)
    - Adding a team already present (exact match) or removing an absent one is a no-op
    - While SAVING, edits and a second save are rejected: the server document
      that ends the save replaces the local copy, so nothing may change under it
"""

import logging

from pydantic import ValidationError

from racing_dashboard.client.gateway_client import GatewayClient, GatewayRequestError
from racing_dashboard.core.domain_types import LoadState, MeasurementUnits, Theme
from racing_dashboard.core.preferences import add_team, fill_defaults, remove_team
from racing_dashboard.schemas.preferences import PreferencesDocument, PreferencesView

logger = logging.getLogger(__name__)


class PreferencesNotLoadedError(RuntimeError):
    """Edit or save attempted before a document was loaded."""


class PreferencesSaveInProgressError(RuntimeError):
    """Edit or save attempted while a save is awaiting the gateway."""


class PreferenceCache:

    def __init__(self, gateway: GatewayClient):
        self._gateway = gateway
        self.state = LoadState.UNLOADED
        self.preferences: PreferencesView | None = None
        self.dirty = False
        self.last_error: str | None = None

    async def load(self) -> None:
        self.state = LoadState.LOADING
        self.last_error = None
        try:
            body = await self._gateway.get_preferences()
            loaded = PreferencesView.model_validate(body)
        except (GatewayRequestError, ValidationError) as e:
            logger.warning(f"Failed to load preferences: {e}")
            self.preferences = None
            self.last_error = "Failed to load preferences"
            self.state = LoadState.LOAD_FAILED
            return
        self.preferences = loaded
        self.dirty = False
        self.state = LoadState.LOADED

    async def save(self) -> None:
        prefs = self._require_editable()
        self.state = LoadState.SAVING
        self.last_error = None
        payload = prefs.model_dump(mode="json", by_alias=True)
        try:
            body = await self._gateway.put_preferences(payload)
            saved = PreferencesDocument.model_validate(body)
        except (GatewayRequestError, ValidationError) as e:
            logger.warning(f"Failed to save preferences: {e}")
            self.last_error = "Failed to save preferences. Please try again."
            self.state = LoadState.SAVE_FAILED
            return
        self.preferences = PreferencesView(**fill_defaults(saved.model_dump(mode="json")))
        self.dirty = False
        self.state = LoadState.LOADED

    def add_team(self, name: str) -> None:
        prefs = self._require_editable()
        updated = add_team(prefs.favorite_teams, name)
        if updated != prefs.favorite_teams:
            prefs.favorite_teams = updated
            self.dirty = True

    def remove_team(self, name: str) -> None:
        prefs = self._require_editable()
        updated = remove_team(prefs.favorite_teams, name)
        if updated != prefs.favorite_teams:
            prefs.favorite_teams = updated
            self.dirty = True

    def set_theme(self, theme: Theme | str) -> None:
        self._set("theme", Theme(theme))

    def set_units(self, units: MeasurementUnits | str) -> None:
        self._set("measurement_units", MeasurementUnits(units))

    def set_notifications(self, enabled: bool) -> None:
        self._set("notifications", enabled)

    def _set(self, field: str, value) -> None:
        prefs = self._require_editable()
        if getattr(prefs, field) != value:
            setattr(prefs, field, value)
            self.dirty = True

    def _require_editable(self) -> PreferencesView:
        if self.state == LoadState.SAVING:
            raise PreferencesSaveInProgressError("Preferences are being saved")
        return self._require_loaded()

    def _require_loaded(self) -> PreferencesView:
        if self.preferences is None:
            raise PreferencesNotLoadedError(
                f"Preferences not loaded (state={self.state.value})",
            )
        return self.preferences
