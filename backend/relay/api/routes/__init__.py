"""Route Modules — one file per upstream/resource.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain reshaping logic (delegate to services/)
"""
