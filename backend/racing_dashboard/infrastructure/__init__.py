"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout and error mapping
    - No automatic retries on any upstream or database call
"""
