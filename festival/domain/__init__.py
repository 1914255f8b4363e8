"""Domain layer: models, errors and pure domain services.

This package MUST NOT import from application, infrastructure or api.
"""

from festival.domain.exceptions import FestivalError

__all__ = ["FestivalError"]
