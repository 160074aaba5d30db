"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the opaque identity string — never use a bare str in store signatures
    - All enumerated preference values encoded as str Enums — no raw string matching
"""

from enum import Enum
from typing import NewType


UserId = NewType("UserId", str)


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class MeasurementUnits(str, Enum):
    """Unit system for weather readings (°F/mph/in vs °C/km/h/mb)."""
    METRIC = "metric"
    IMPERIAL = "imperial"


class RaceSeries(str, Enum):
    """Race-list providers — one upstream function each."""
    MOTOGP = "motogp"
    F1 = "f1"


class LoadState(str, Enum):
    """Client-side load/save lifecycle for a panel or cached document."""
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"
    SAVING = "saving"
    SAVE_FAILED = "save_failed"
