"""Infrastructure Layer — upstream HTTP clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All outbound calls wrapped with timeout and error mapping (no retries)
"""
