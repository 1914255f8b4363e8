"""Validation and lookup errors.

ValidationError covers malformed or out-of-range input (HTTP 400).
NotFoundError covers references to aggregates that do not exist (HTTP 404).
"""

from __future__ import annotations

from typing import Any

from festival.domain.exceptions import FestivalError


class ValidationError(FestivalError):
    """Raised when input fails validation.

    Attributes:
        field: Name of the offending field, when known.
        violations: Individual violation messages (e.g. password policy).
    """

    ERROR_CODE = "VALIDATION_ERROR"
    HTTP_STATUS = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        violations: list[str] | None = None,
    ) -> None:
        self.field = field
        self.violations = list(violations or [])
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field is not None:
            result["field"] = self.field
        if self.violations:
            result["violations"] = self.violations
        return result


class ScoreOutOfRangeError(ValidationError):
    """Raised when a review score falls outside the configured closed range.

    Attributes:
        score: The rejected score.
        minimum: Inclusive lower bound.
        maximum: Inclusive upper bound.
    """

    ERROR_CODE = "SCORE_OUT_OF_RANGE"

    def __init__(self, score: int, minimum: int, maximum: int) -> None:
        self.score = score
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Review score {score} is outside the range [{minimum}, {maximum}]",
            field="score",
        )


class NotFoundError(FestivalError):
    """Raised when a referenced aggregate does not exist.

    Attributes:
        entity: Kind of aggregate ("program", "screening", "user").
        entity_id: Identifier that was looked up.
    """

    ERROR_CODE = "NOT_FOUND"
    HTTP_STATUS = 404

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")
