"""
Pytest configuration and shared fixtures for festival tests.

Testing Standards:
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
- Services are built over the in-memory stubs and a FakeTimeAuthority
- HTTP tests use `client`, which rebuilds the composition root per test
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from festival.api.main import create_app
from festival.application.services import (
    AuditTrailService,
    AuthenticationService,
    ProgramService,
    ScreeningQueryService,
    ScreeningService,
    SessionIntegrityService,
    UserAccountService,
)
from festival.bootstrap.festival import (
    get_user_account_service,
    reset_festival_dependencies,
    set_festival_config,
    set_password_hasher,
    set_time_authority,
)
from festival.config.festival_config import TEST_FESTIVAL_CONFIG
from festival.domain.models.program import Program
from festival.domain.models.user import BaseRole, User
from festival.infrastructure.stubs import (
    AuditLogStub,
    PasswordHasherStub,
    ProgramRepositoryStub,
    ScreeningRepositoryStub,
    TokenIssuerStub,
    UserRepositoryStub,
)
from tests.helpers import FakeTimeAuthority

STRONG_PASSWORD = "Str0ng!Pass"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from festival import __version__

    return __version__


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def fake_time() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def user_repository() -> UserRepositoryStub:
    return UserRepositoryStub()


@pytest.fixture
def program_repository() -> ProgramRepositoryStub:
    return ProgramRepositoryStub()


@pytest.fixture
def screening_repository() -> ScreeningRepositoryStub:
    return ScreeningRepositoryStub()


@pytest.fixture
def audit_log() -> AuditLogStub:
    return AuditLogStub()


@pytest.fixture
def password_hasher() -> PasswordHasherStub:
    return PasswordHasherStub()


@pytest.fixture
def token_issuer(fake_time: FakeTimeAuthority) -> TokenIssuerStub:
    return TokenIssuerStub(time_authority=fake_time, ttl_seconds=300)


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def audit_trail(
    audit_log: AuditLogStub, fake_time: FakeTimeAuthority
) -> AuditTrailService:
    return AuditTrailService(audit_log=audit_log, time_authority=fake_time)


@pytest.fixture
def session_integrity(
    user_repository: UserRepositoryStub, audit_trail: AuditTrailService
) -> SessionIntegrityService:
    return SessionIntegrityService(
        user_repository=user_repository,
        audit_trail=audit_trail,
        lockout_threshold=TEST_FESTIVAL_CONFIG.security.lockout_threshold,
    )


@pytest.fixture
def auth_service(
    user_repository: UserRepositoryStub,
    password_hasher: PasswordHasherStub,
    token_issuer: TokenIssuerStub,
    session_integrity: SessionIntegrityService,
    audit_trail: AuditTrailService,
    fake_time: FakeTimeAuthority,
) -> AuthenticationService:
    return AuthenticationService(
        user_repository=user_repository,
        password_hasher=password_hasher,
        token_issuer=token_issuer,
        session_integrity=session_integrity,
        audit_trail=audit_trail,
        time_authority=fake_time,
    )


@pytest.fixture
def user_service(
    user_repository: UserRepositoryStub,
    program_repository: ProgramRepositoryStub,
    password_hasher: PasswordHasherStub,
    session_integrity: SessionIntegrityService,
    audit_trail: AuditTrailService,
) -> UserAccountService:
    return UserAccountService(
        user_repository=user_repository,
        program_repository=program_repository,
        password_hasher=password_hasher,
        session_integrity=session_integrity,
        audit_trail=audit_trail,
    )


@pytest.fixture
def program_service(
    program_repository: ProgramRepositoryStub,
    screening_repository: ScreeningRepositoryStub,
    user_repository: UserRepositoryStub,
    audit_trail: AuditTrailService,
    fake_time: FakeTimeAuthority,
) -> ProgramService:
    return ProgramService(
        program_repository=program_repository,
        screening_repository=screening_repository,
        user_repository=user_repository,
        audit_trail=audit_trail,
        time_authority=fake_time,
        pagination=TEST_FESTIVAL_CONFIG.pagination,
    )


@pytest.fixture
def screening_service(
    screening_repository: ScreeningRepositoryStub,
    program_repository: ProgramRepositoryStub,
    audit_trail: AuditTrailService,
    fake_time: FakeTimeAuthority,
) -> ScreeningService:
    return ScreeningService(
        screening_repository=screening_repository,
        program_repository=program_repository,
        audit_trail=audit_trail,
        time_authority=fake_time,
        review_config=TEST_FESTIVAL_CONFIG.review,
    )


@pytest.fixture
def query_service(
    screening_repository: ScreeningRepositoryStub,
    program_repository: ProgramRepositoryStub,
) -> ScreeningQueryService:
    return ScreeningQueryService(
        screening_repository=screening_repository,
        program_repository=program_repository,
        pagination=TEST_FESTIVAL_CONFIG.pagination,
    )


# =============================================================================
# Seeded accounts and a staffed program
# =============================================================================


@pytest.fixture
def make_user(user_service: UserAccountService):
    """Factory creating active accounts with STRONG_PASSWORD."""

    def _make(
        username: str, role: BaseRole = BaseRole.USER, full_name: str = "Festival Tester"
    ) -> User:
        return user_service.seed_user(username, STRONG_PASSWORD, full_name, role=role)

    return _make


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin1", BaseRole.ADMIN, "Ada Admin")


@pytest.fixture
def creator(make_user) -> User:
    return make_user("creator", BaseRole.PROGRAMMER, "Cora Creator")


@pytest.fixture
def staff_member(make_user) -> User:
    return make_user("staffer", BaseRole.STAFF, "Sam Staff")


@pytest.fixture
def other_staff(make_user) -> User:
    return make_user("staffer2", BaseRole.STAFF, "Otto Other")


@pytest.fixture
def submitter(make_user) -> User:
    return make_user("submitter", BaseRole.SUBMITTER, "Suki Submitter")


@pytest.fixture
def program(
    program_service: ProgramService,
    creator: User,
    staff_member: User,
    other_staff: User,
) -> Program:
    """A CREATED program with two staff members."""
    created = program_service.create_program(
        creator.id,
        name="Northern Lights Film Festival",
        description="Independent cinema from the north",
        start_date=date(2026, 6, 1),
        end_date=date(2026, 6, 7),
    )
    program_service.add_staff(creator.id, created.id, staff_member.id)
    return program_service.add_staff(creator.id, created.id, other_staff.id)


# =============================================================================
# HTTP client over a freshly wired composition root
# =============================================================================


@pytest.fixture
def api_clock() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def client(api_clock: FakeTimeAuthority) -> Iterator[TestClient]:
    reset_festival_dependencies()
    set_festival_config(TEST_FESTIVAL_CONFIG)
    set_time_authority(api_clock)
    set_password_hasher(PasswordHasherStub())

    yield TestClient(create_app())

    reset_festival_dependencies()


@pytest.fixture
def accounts(client: TestClient) -> dict[str, User]:
    """Active accounts seeded through the wired services, keyed by username."""
    service = get_user_account_service()
    seeds = [
        ("admin1", BaseRole.ADMIN, "Ada Admin"),
        ("creator", BaseRole.PROGRAMMER, "Cora Creator"),
        ("staffer", BaseRole.STAFF, "Sam Staff"),
        ("submitter", BaseRole.SUBMITTER, "Suki Submitter"),
    ]
    return {
        username: service.seed_user(username, STRONG_PASSWORD, full_name, role=role)
        for username, role, full_name in seeds
    }


@pytest.fixture
def login(
    client: TestClient, accounts: dict[str, User]
) -> Callable[[str], dict[str, str]]:
    """Log a seeded user in and return their Authorization header."""

    def _login(username: str) -> dict[str, str]:
        response = client.post(
            "/v1/auth/login",
            json={"username": username, "password": STRONG_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
