"""In-memory stub implementations of application ports."""

from festival.infrastructure.stubs.audit_log_stub import AuditLogStub
from festival.infrastructure.stubs.password_hasher_stub import PasswordHasherStub
from festival.infrastructure.stubs.program_repository_stub import (
    ProgramRepositoryStub,
)
from festival.infrastructure.stubs.screening_repository_stub import (
    ScreeningRepositoryStub,
)
from festival.infrastructure.stubs.token_issuer_stub import TokenIssuerStub
from festival.infrastructure.stubs.user_repository_stub import UserRepositoryStub

__all__ = [
    "AuditLogStub",
    "PasswordHasherStub",
    "ProgramRepositoryStub",
    "ScreeningRepositoryStub",
    "TokenIssuerStub",
    "UserRepositoryStub",
]
