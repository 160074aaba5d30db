"""Racing Dashboard Gateway — preferences, weather and race schedules.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
