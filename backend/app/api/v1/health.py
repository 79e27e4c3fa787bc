# File: backend/app/api/v1/health.py
# Version: v0.2.0
"""
Healthcheck and version routers.
"""
from __future__ import annotations
from fastapi import APIRouter

from ...core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    """Return a minimal health payload."""
    return {"status": "ok"}


@router.get("/version")
def version() -> dict[str, str]:
    """Application name and version, as configured."""
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION}
