"""Core Layer — pure logic, no IO, no HTTP.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - All functions are pure and deterministic
"""
