"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        version: Package version.
        environment: Configured environment name.
        uptime_seconds: Seconds since the application started.
    """

    status: str
    version: str
    environment: str
    uptime_seconds: float
