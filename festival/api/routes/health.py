"""Health check endpoint."""

import time

from fastapi import APIRouter, Depends

from festival import __version__
from festival.api.dependencies.festival import get_festival_config
from festival.api.models.health import HealthResponse
from festival.config.festival_config import FestivalConfig

router = APIRouter(prefix="/v1", tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthResponse)
def health_check(
    config: FestivalConfig = Depends(get_festival_config),
) -> HealthResponse:
    """Return health status.

    Returns:
        Health status with 200 OK.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=config.environment,
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 3),
    )
