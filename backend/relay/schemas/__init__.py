"""Pydantic Schemas — request validation at the API boundary.

Invariants:
    - Schemas validate only what the relay itself needs; upstream payloads pass through
"""
