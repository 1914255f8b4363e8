"""Domain errors for the festival workflow.

Taxonomy (HTTP status in brackets):
- ValidationError [400], ScoreOutOfRangeError
- NotFoundError [404]
- AuthenticationError [401] and its token/account variants
- AuthorizationError [403], IdentityMismatchError
- StateError [409], ForbiddenTransitionError, PhaseMismatchError,
  StaffSetFrozenError, ProgramLockedError
- ConflictError [409], AlreadyMemberError
- InvariantViolationError [409]
"""

from festival.domain.errors.authentication import (
    AccountInactiveError,
    AccountLockedError,
    AuthenticationError,
    ExpiredTokenError,
    InvalidTokenError,
    TokenRevokedError,
)
from festival.domain.errors.authorization import (
    AuthorizationError,
    IdentityMismatchError,
)
from festival.domain.errors.conflict import (
    AlreadyMemberError,
    ConflictError,
    InvariantViolationError,
)
from festival.domain.errors.state import (
    ForbiddenTransitionError,
    PhaseMismatchError,
    ProgramLockedError,
    StaffSetFrozenError,
    StateError,
)
from festival.domain.errors.validation import (
    NotFoundError,
    ScoreOutOfRangeError,
    ValidationError,
)
from festival.domain.exceptions import FestivalError

__all__ = [
    "FestivalError",
    "ValidationError",
    "ScoreOutOfRangeError",
    "NotFoundError",
    "AuthenticationError",
    "AccountInactiveError",
    "AccountLockedError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "TokenRevokedError",
    "AuthorizationError",
    "IdentityMismatchError",
    "StateError",
    "ForbiddenTransitionError",
    "PhaseMismatchError",
    "StaffSetFrozenError",
    "ProgramLockedError",
    "ConflictError",
    "AlreadyMemberError",
    "InvariantViolationError",
]
