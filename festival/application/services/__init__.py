"""Application services (use-cases)."""

from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.authentication_service import (
    AuthenticationService,
)
from festival.application.services.base import LoggingMixin
from festival.application.services.program_service import ProgramService
from festival.application.services.screening_query_service import (
    ScreeningQueryService,
)
from festival.application.services.screening_service import ScreeningService
from festival.application.services.session_integrity_service import (
    SessionIntegrityService,
)
from festival.application.services.user_account_service import UserAccountService

__all__ = [
    "AuditTrailService",
    "AuthenticationService",
    "LoggingMixin",
    "ProgramService",
    "ScreeningQueryService",
    "ScreeningService",
    "SessionIntegrityService",
    "UserAccountService",
]
