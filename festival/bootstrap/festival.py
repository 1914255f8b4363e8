"""Bootstrap wiring for festival workflow dependencies.

Singletons are created lazily from FestivalConfig. Storage is in-memory;
password hashing uses passlib and session tokens use python-jose. Tests
swap any collaborator through the set_* helpers and call
reset_festival_dependencies() between cases.
"""

from __future__ import annotations

from structlog import get_logger

from festival.application.ports.audit_log import AuditLogProtocol
from festival.application.ports.password_hasher import PasswordHasherProtocol
from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.application.ports.screening_repository import (
    ScreeningRepositoryProtocol,
)
from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.ports.token_issuer import TokenIssuerProtocol
from festival.application.ports.user_repository import UserRepositoryProtocol
from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.authentication_service import (
    AuthenticationService,
)
from festival.application.services.program_service import ProgramService
from festival.application.services.screening_query_service import (
    ScreeningQueryService,
)
from festival.application.services.screening_service import ScreeningService
from festival.application.services.session_integrity_service import (
    SessionIntegrityService,
)
from festival.application.services.user_account_service import UserAccountService
from festival.config.festival_config import FestivalConfig
from festival.infrastructure.adapters.security import (
    JoseTokenIssuer,
    PasslibPasswordHasher,
)
from festival.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from festival.infrastructure.stubs import (
    AuditLogStub,
    ProgramRepositoryStub,
    ScreeningRepositoryStub,
    UserRepositoryStub,
)

logger = get_logger()

_config: FestivalConfig | None = None
_time_authority: TimeAuthorityProtocol | None = None
_program_repository: ProgramRepositoryProtocol | None = None
_screening_repository: ScreeningRepositoryProtocol | None = None
_user_repository: UserRepositoryProtocol | None = None
_audit_log: AuditLogProtocol | None = None
_password_hasher: PasswordHasherProtocol | None = None
_token_issuer: TokenIssuerProtocol | None = None
_audit_trail: AuditTrailService | None = None
_session_integrity: SessionIntegrityService | None = None
_authentication_service: AuthenticationService | None = None
_user_account_service: UserAccountService | None = None
_program_service: ProgramService | None = None
_screening_service: ScreeningService | None = None
_screening_query_service: ScreeningQueryService | None = None


# ---------------------------------------------------------------------------
# Configuration and collaborators
# ---------------------------------------------------------------------------


def get_festival_config() -> FestivalConfig:
    global _config
    if _config is None:
        _config = FestivalConfig.from_environment()
        logger.info("festival_config_loaded", environment=_config.environment)
    return _config


def get_time_authority() -> TimeAuthorityProtocol:
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_program_repository() -> ProgramRepositoryProtocol:
    global _program_repository
    if _program_repository is None:
        _program_repository = ProgramRepositoryStub()
    return _program_repository


def get_screening_repository() -> ScreeningRepositoryProtocol:
    global _screening_repository
    if _screening_repository is None:
        _screening_repository = ScreeningRepositoryStub()
    return _screening_repository


def get_user_repository() -> UserRepositoryProtocol:
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepositoryStub()
    return _user_repository


def get_audit_log() -> AuditLogProtocol:
    global _audit_log
    if _audit_log is None:
        _audit_log = AuditLogStub()
    return _audit_log


def get_password_hasher() -> PasswordHasherProtocol:
    global _password_hasher
    if _password_hasher is None:
        schemes = get_festival_config().security.password_schemes
        _password_hasher = PasslibPasswordHasher(schemes=schemes)
        logger.info("password_hasher_configured", schemes=list(schemes))
    return _password_hasher


def get_token_issuer() -> TokenIssuerProtocol:
    global _token_issuer
    if _token_issuer is None:
        security = get_festival_config().security
        _token_issuer = JoseTokenIssuer(
            secret=security.token_secret,
            time_authority=get_time_authority(),
            ttl_seconds=security.token_ttl_seconds,
            algorithm=security.token_algorithm,
        )
    return _token_issuer


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


def get_audit_trail_service() -> AuditTrailService:
    global _audit_trail
    if _audit_trail is None:
        _audit_trail = AuditTrailService(
            audit_log=get_audit_log(),
            time_authority=get_time_authority(),
        )
    return _audit_trail


def get_session_integrity_service() -> SessionIntegrityService:
    global _session_integrity
    if _session_integrity is None:
        _session_integrity = SessionIntegrityService(
            user_repository=get_user_repository(),
            audit_trail=get_audit_trail_service(),
            lockout_threshold=get_festival_config().security.lockout_threshold,
        )
    return _session_integrity


def get_authentication_service() -> AuthenticationService:
    global _authentication_service
    if _authentication_service is None:
        _authentication_service = AuthenticationService(
            user_repository=get_user_repository(),
            password_hasher=get_password_hasher(),
            token_issuer=get_token_issuer(),
            session_integrity=get_session_integrity_service(),
            audit_trail=get_audit_trail_service(),
            time_authority=get_time_authority(),
        )
    return _authentication_service


def get_user_account_service() -> UserAccountService:
    global _user_account_service
    if _user_account_service is None:
        _user_account_service = UserAccountService(
            user_repository=get_user_repository(),
            program_repository=get_program_repository(),
            password_hasher=get_password_hasher(),
            session_integrity=get_session_integrity_service(),
            audit_trail=get_audit_trail_service(),
        )
    return _user_account_service


def get_program_service() -> ProgramService:
    global _program_service
    if _program_service is None:
        _program_service = ProgramService(
            program_repository=get_program_repository(),
            screening_repository=get_screening_repository(),
            user_repository=get_user_repository(),
            audit_trail=get_audit_trail_service(),
            time_authority=get_time_authority(),
            pagination=get_festival_config().pagination,
        )
    return _program_service


def get_screening_service() -> ScreeningService:
    global _screening_service
    if _screening_service is None:
        _screening_service = ScreeningService(
            screening_repository=get_screening_repository(),
            program_repository=get_program_repository(),
            audit_trail=get_audit_trail_service(),
            time_authority=get_time_authority(),
            review_config=get_festival_config().review,
        )
    return _screening_service


def get_screening_query_service() -> ScreeningQueryService:
    global _screening_query_service
    if _screening_query_service is None:
        _screening_query_service = ScreeningQueryService(
            screening_repository=get_screening_repository(),
            program_repository=get_program_repository(),
            pagination=get_festival_config().pagination,
        )
    return _screening_query_service


# ---------------------------------------------------------------------------
# Testing helper functions
# ---------------------------------------------------------------------------


def reset_festival_dependencies() -> None:
    """Reset all singleton instances for testing.

    Call this in test fixtures to ensure clean state between tests.
    """
    global _config, _time_authority, _program_repository, _screening_repository
    global _user_repository, _audit_log, _password_hasher, _token_issuer
    global _audit_trail, _session_integrity, _authentication_service
    global _user_account_service, _program_service, _screening_service
    global _screening_query_service

    _config = None
    _time_authority = None
    _program_repository = None
    _screening_repository = None
    _user_repository = None
    _audit_log = None
    _password_hasher = None
    _token_issuer = None
    _audit_trail = None
    _session_integrity = None
    _authentication_service = None
    _user_account_service = None
    _program_service = None
    _screening_service = None
    _screening_query_service = None


def set_festival_config(config: FestivalConfig) -> None:
    """Set configuration for testing (before any service is built)."""
    global _config
    _config = config


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set the clock for testing (before any service is built)."""
    global _time_authority
    _time_authority = time_authority


def set_password_hasher(hasher: PasswordHasherProtocol) -> None:
    """Set the password hasher for testing (before any service is built)."""
    global _password_hasher
    _password_hasher = hasher
