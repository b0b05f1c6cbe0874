"""Liveness Probes — plain-text root and JSON health endpoint.

Invariants:
    - GET / always returns 200 "App is running." while the process is up
    - No upstream is contacted
"""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from relay import __version__

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "App is running."


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "storefront-relay",
        "version": __version__,
    }
