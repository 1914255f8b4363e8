"""Unit tests for UserAccountService."""

import pytest

from festival.application.services import UserAccountService
from festival.domain.errors import (
    AccountInactiveError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    IdentityMismatchError,
    NotFoundError,
    ValidationError,
)
from festival.domain.models.user import BaseRole
from festival.infrastructure.stubs import AuditLogStub, UserRepositoryStub
from tests.conftest import STRONG_PASSWORD

NEW_PASSWORD = "N3w!Secret9"


class TestRegister:
    def test_register_creates_inactive_user(
        self, user_service: UserAccountService, audit_log: AuditLogStub
    ) -> None:
        user = user_service.register("  newbie  ", STRONG_PASSWORD, " Nina New ")
        assert user.id is not None
        assert user.username == "newbie"
        assert user.full_name == "Nina New"
        assert user.role == BaseRole.USER
        assert not user.active
        assert audit_log.actions() == ["REGISTER"]

    def test_password_is_hashed(self, user_service: UserAccountService) -> None:
        user = user_service.register("newbie", STRONG_PASSWORD, "Nina New")
        assert user.password_hash != STRONG_PASSWORD

    def test_duplicate_username(self, user_service: UserAccountService) -> None:
        user_service.register("newbie", STRONG_PASSWORD, "Nina New")
        with pytest.raises(ConflictError):
            user_service.register("newbie", STRONG_PASSWORD, "Nora Next")

    def test_weak_password(self, user_service: UserAccountService) -> None:
        with pytest.raises(ValidationError):
            user_service.register("newbie", "weak", "Nina New")

    def test_password_containing_username(self, user_service: UserAccountService) -> None:
        with pytest.raises(ValidationError):
            user_service.register("newbie", "Newbie!2024x", "Nina New")

    @pytest.mark.parametrize("username", ["abc", "1abcde", "has space"])
    def test_invalid_username(
        self, user_service: UserAccountService, username: str
    ) -> None:
        with pytest.raises(ValidationError):
            user_service.register(username, STRONG_PASSWORD, "Nina New")

    def test_blank_full_name(self, user_service: UserAccountService) -> None:
        with pytest.raises(ValidationError):
            user_service.register("newbie", STRONG_PASSWORD, "   ")


class TestProfile:
    def test_get_own_profile(self, user_service: UserAccountService, make_user) -> None:
        user = make_user("member")
        assert user_service.get_user(user.id, user.id) == user

    def test_admin_reads_other_profile(
        self, user_service: UserAccountService, make_user, admin
    ) -> None:
        user = make_user("member")
        assert user_service.get_user(admin.id, user.id).id == user.id

    def test_reading_other_profile_is_mismatch(
        self, user_service: UserAccountService, make_user
    ) -> None:
        user = make_user("member")
        other = make_user("another")
        with pytest.raises(IdentityMismatchError):
            user_service.get_user(other.id, user.id)

    def test_update_full_name_keeps_session(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
        fake_time,
    ) -> None:
        user = make_user("member")
        user_repository.save(user.start_session("tok", fake_time.utcnow()))
        updated = user_service.update_profile(user.id, user.id, full_name="Mia Member")
        assert updated.full_name == "Mia Member"
        assert updated.current_token_id == "tok"

    def test_username_change_clears_session(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
        fake_time,
    ) -> None:
        user = make_user("member")
        user_repository.save(user.start_session("tok", fake_time.utcnow()))
        updated = user_service.update_profile(user.id, user.id, username="renamed")
        assert updated.username == "renamed"
        assert updated.current_token_id is None
        assert user_repository.get_by_username("renamed") is not None

    def test_username_taken(self, user_service: UserAccountService, make_user) -> None:
        user = make_user("member")
        make_user("another")
        with pytest.raises(ConflictError):
            user_service.update_profile(user.id, user.id, username="another")

    def test_inactive_target(
        self, user_service: UserAccountService, make_user, admin
    ) -> None:
        user = make_user("member")
        user_service.deactivate(admin.id, user.id)
        with pytest.raises(AccountInactiveError):
            user_service.update_profile(admin.id, user.id, full_name="Mia Member")


class TestChangePassword:
    def test_change_password(
        self, user_service: UserAccountService, make_user, password_hasher
    ) -> None:
        user = make_user("member")
        updated = user_service.change_password(
            user.id, STRONG_PASSWORD, NEW_PASSWORD, NEW_PASSWORD
        )
        assert password_hasher.matches(NEW_PASSWORD, updated.password_hash)

    def test_mismatched_repeat_still_ends_session(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
        fake_time,
    ) -> None:
        user = make_user("member")
        user_repository.save(user.start_session("tok", fake_time.utcnow()))
        with pytest.raises(ValidationError):
            user_service.change_password(
                user.id, STRONG_PASSWORD, NEW_PASSWORD, "N3w!Secret8"
            )
        assert user_repository.get(user.id).current_token_id is None

    def test_wrong_current_password_counts_failure(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
    ) -> None:
        user = make_user("member")
        with pytest.raises(AuthenticationError):
            user_service.change_password(
                user.id, "Wrong!Pass1", NEW_PASSWORD, NEW_PASSWORD
            )
        assert user_repository.get(user.id).failed_login_attempts == 1

    def test_new_password_must_satisfy_policy(
        self, user_service: UserAccountService, make_user
    ) -> None:
        user = make_user("member")
        with pytest.raises(ValidationError):
            user_service.change_password(user.id, STRONG_PASSWORD, "short", "short")

    def test_inactive_account_cannot_change_password(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        password_hasher,
        make_user,
        admin,
        audit_log: AuditLogStub,
    ) -> None:
        user = make_user("member")
        user_service.deactivate(admin.id, user.id)

        with pytest.raises(AccountInactiveError):
            user_service.change_password(
                user.id, STRONG_PASSWORD, NEW_PASSWORD, NEW_PASSWORD
            )

        stored = user_repository.get(user.id)
        assert not stored.active
        assert password_hasher.matches(STRONG_PASSWORD, stored.password_hash)
        assert "CHANGE_PASSWORD" not in audit_log.actions()

    @pytest.mark.parametrize(
        ("current", "new", "repeat", "field"),
        [
            ("", NEW_PASSWORD, NEW_PASSWORD, "current_password"),
            (STRONG_PASSWORD, "   ", "   ", "new_password"),
            (STRONG_PASSWORD, NEW_PASSWORD, "", "repeat_password"),
        ],
    )
    def test_blank_fields_are_rejected_up_front(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
        fake_time,
        current: str,
        new: str,
        repeat: str,
        field: str,
    ) -> None:
        user = make_user("member")
        user_repository.save(user.start_session("tok", fake_time.utcnow()))

        with pytest.raises(ValidationError) as exc_info:
            user_service.change_password(user.id, current, new, repeat)

        assert exc_info.value.field == field
        stored = user_repository.get(user.id)
        assert stored.current_token_id == "tok"
        assert stored.failed_login_attempts == 0


class TestAccountState:
    def test_admin_activates_registered_user(
        self, user_service: UserAccountService, admin, audit_log: AuditLogStub
    ) -> None:
        user = user_service.register("newbie", STRONG_PASSWORD, "Nina New")
        assert user_service.activate(admin.id, user.id).active
        assert "ACTIVATE_USER" in audit_log.actions()

    def test_activation_clears_lock(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
        admin,
    ) -> None:
        user = make_user("member")
        locked = user
        for _ in range(3):
            locked = locked.register_failed_login()
        user_repository.save(locked)
        assert user_service.activate(admin.id, user.id).failed_login_attempts == 0

    def test_non_admin_cannot_activate(
        self, user_service: UserAccountService, make_user
    ) -> None:
        actor = make_user("member", BaseRole.PROGRAMMER)
        user = user_service.register("newbie", STRONG_PASSWORD, "Nina New")
        with pytest.raises(AuthorizationError):
            user_service.activate(actor.id, user.id)

    def test_deactivate_is_idempotent(
        self, user_service: UserAccountService, make_user, admin, audit_log: AuditLogStub
    ) -> None:
        user = make_user("member")
        user_service.deactivate(admin.id, user.id)
        assert not user_service.deactivate(admin.id, user.id).active
        assert audit_log.actions().count("DEACTIVATE_USER") == 1

    def test_unknown_target(self, user_service: UserAccountService, admin) -> None:
        with pytest.raises(NotFoundError):
            user_service.activate(admin.id, 404)


class TestDeleteUser:
    def test_delete_self(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
    ) -> None:
        user = make_user("member")
        user_service.delete_user(user.id, user.id)
        assert user_repository.get(user.id) is None

    def test_admin_cannot_be_deleted(
        self, user_service: UserAccountService, admin
    ) -> None:
        with pytest.raises(AuthorizationError):
            user_service.delete_user(admin.id, admin.id)

    def test_program_member_cannot_be_deleted(
        self, user_service: UserAccountService, program, staff_member, admin
    ) -> None:
        with pytest.raises(ConflictError):
            user_service.delete_user(admin.id, staff_member.id)

    def test_deleting_someone_else_is_mismatch(
        self,
        user_service: UserAccountService,
        user_repository: UserRepositoryStub,
        make_user,
    ) -> None:
        target = make_user("member")
        actor = make_user("another")
        with pytest.raises(IdentityMismatchError):
            user_service.delete_user(actor.id, target.id)
        assert user_repository.get(target.id) is not None
        assert not user_repository.get(actor.id).active
