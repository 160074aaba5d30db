"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundaries (client input, upstream responses)
    - JSON keys are camelCase; Python attributes are snake_case
"""
