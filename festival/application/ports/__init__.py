"""Application ports (interfaces to external collaborators)."""

from festival.application.ports.audit_log import AuditLogProtocol
from festival.application.ports.password_hasher import PasswordHasherProtocol
from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.application.ports.screening_repository import (
    ScreeningRepositoryProtocol,
)
from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.ports.token_issuer import (
    IssuedToken,
    TokenClaims,
    TokenIssuerProtocol,
)
from festival.application.ports.user_repository import UserRepositoryProtocol

__all__ = [
    "AuditLogProtocol",
    "IssuedToken",
    "PasswordHasherProtocol",
    "ProgramRepositoryProtocol",
    "ScreeningRepositoryProtocol",
    "TimeAuthorityProtocol",
    "TokenClaims",
    "TokenIssuerProtocol",
    "UserRepositoryProtocol",
]
