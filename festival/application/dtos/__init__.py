"""Application-layer DTOs, mapped to API models by the routes."""

from festival.application.dtos.health import HealthResponseDTO
from festival.application.dtos.page import Page
from festival.application.dtos.program_view import ProgramView
from festival.application.dtos.search import (
    ProgramSearchCriteria,
    ScreeningSearchCriteria,
    ScreeningSort,
)

__all__ = [
    "HealthResponseDTO",
    "Page",
    "ProgramView",
    "ProgramSearchCriteria",
    "ScreeningSearchCriteria",
    "ScreeningSort",
]
