"""Health check DTO."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthResponseDTO:
    """Liveness check response.

    Attributes:
        status: "healthy" while the process serves requests.
        version: Package version.
        environment: Configured environment name.
        uptime_seconds: Seconds since startup.
    """

    status: str
    version: str
    environment: str
    uptime_seconds: float = 0.0
