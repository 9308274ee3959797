"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict

from ytcast import __version__


class HealthStatus(BaseModel):
    """Application health status."""

    model_config = ConfigDict(strict=True)

    status: str
    version: str
    timestamp: datetime


router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Report that the server is up, with its version."""
    return HealthStatus(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
    )
