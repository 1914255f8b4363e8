"""Program use-cases.

Every mutating operation follows the same order:
    load -> actor guard -> domain operation -> save -> audit/log

Membership changes require the actor to be a programmer of the program,
and the target to be an existing, active user.
"""

from __future__ import annotations

from datetime import date

from festival.application.dtos.page import Page
from festival.application.dtos.program_view import ProgramView
from festival.application.dtos.search import ProgramSearchCriteria
from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.application.ports.screening_repository import (
    ScreeningRepositoryProtocol,
)
from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.ports.user_repository import UserRepositoryProtocol
from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.base import LoggingMixin
from festival.config.festival_config import PaginationConfig
from festival.domain.errors.authorization import AuthorizationError
from festival.domain.errors.conflict import ConflictError
from festival.domain.errors.state import StateError
from festival.domain.errors.validation import NotFoundError, ValidationError
from festival.domain.models.program import Program, ProgramState
from festival.domain.models.screening import ScreeningState
from festival.domain.models.user import User
from festival.domain.services.authorization_guard import require_programmer

AUTO_REJECT_REASON = "Auto-rejected: approved but not finally submitted"


class ProgramService(LoggingMixin):
    """Creates, updates, transitions and staffs programs."""

    def __init__(
        self,
        program_repository: ProgramRepositoryProtocol,
        screening_repository: ScreeningRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        audit_trail: AuditTrailService,
        time_authority: TimeAuthorityProtocol,
        pagination: PaginationConfig | None = None,
    ) -> None:
        self._programs = program_repository
        self._screenings = screening_repository
        self._users = user_repository
        self._audit = audit_trail
        self._time = time_authority
        self._pagination = pagination or PaginationConfig()
        self._init_logger(component="programs")

    def _load(self, program_id: int) -> Program:
        program = self._programs.get(program_id)
        if program is None:
            raise NotFoundError("program", program_id)
        return program

    def _load_active_user(self, user_id: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        if not user.active:
            raise ValidationError(f"User {user_id} is inactive", field="user_id")
        return user

    # ------------------------------------------------------------------
    # Create / update / delete
    # ------------------------------------------------------------------

    def create_program(
        self,
        actor_id: int,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
    ) -> Program:
        """Create a program in CREATED with the actor as creator and programmer.

        Raises:
            ValidationError: Missing fields or inverted dates.
            ConflictError: A program with the same name exists.
        """
        log = self._log_operation("create_program", actor_id=actor_id)
        program = Program.create(
            name=name,
            description=description,
            start_date=start_date,
            end_date=end_date,
            creator_id=actor_id,
            created_at=self._time.utcnow(),
        )
        if self._programs.exists_by_name(program.name):
            raise self._log_rejection(
                log, ConflictError(f"Program name already exists: {program.name}")
            )

        saved = self._programs.save(program)
        self._audit.record(actor_id, "CREATE_PROGRAM", f"program {saved.id}")
        log.info("program_created", program_id=saved.id)
        return saved

    def update_program(
        self,
        actor_id: int,
        program_id: int,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
    ) -> Program:
        """Update descriptive fields (programmers only, not once announced)."""
        log = self._log_operation("update_program", actor_id=actor_id, program_id=program_id)
        program = self._load(program_id)
        require_programmer(actor_id, program, "update the program")
        updated = program.update_info(name, description, start_date, end_date)
        if updated.name.lower() != program.name.lower() and self._programs.exists_by_name(
            updated.name
        ):
            raise self._log_rejection(
                log, ConflictError(f"Program name already exists: {updated.name}")
            )

        saved = self._programs.save(updated)
        self._audit.record(actor_id, "UPDATE_PROGRAM", f"program {program_id}")
        log.info("program_updated")
        return saved

    def delete_program(self, actor_id: int, program_id: int) -> None:
        """Delete a program still in CREATED with no screenings.

        Raises:
            AuthorizationError: Actor is not a programmer.
            StateError: Program has left CREATED.
            ConflictError: Screenings still reference the program.
        """
        log = self._log_operation("delete_program", actor_id=actor_id, program_id=program_id)
        program = self._load(program_id)
        require_programmer(actor_id, program, "delete the program")
        if program.state is not ProgramState.CREATED:
            raise self._log_rejection(
                log,
                StateError(
                    f"Only CREATED programs can be deleted, program is {program.state.value}"
                ),
            )
        if self._screenings.exists_for_program(program_id):
            raise self._log_rejection(
                log, ConflictError(f"Program {program_id} still has screenings")
            )

        self._programs.delete(program_id)
        self._audit.record(actor_id, "DELETE_PROGRAM", f"program {program_id}")
        log.info("program_deleted")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def change_state(
        self, actor_id: int, program_id: int, new_state: ProgramState
    ) -> Program:
        """Advance the program to its next phase.

        The program is saved in its new state first. Entering DECISION then
        rejects every APPROVED screening that was not final-submitted,
        recording a REJECT_SCREENING audit entry for each.

        Raises:
            AuthorizationError: Actor is not a programmer.
            ForbiddenTransitionError: new_state is not the next phase.
        """
        log = self._log_operation(
            "change_state",
            actor_id=actor_id,
            program_id=program_id,
            new_state=new_state.value,
        )
        program = self._load(program_id)
        require_programmer(actor_id, program, "change the program state")

        saved = self._programs.save(program.with_state(new_state))
        self._audit.record(
            actor_id,
            "CHANGE_PROGRAM_STATE",
            f"program {program_id}: {program.state.value} -> {new_state.value}",
        )
        log.info("program_state_changed", from_state=program.state.value)

        if new_state is ProgramState.DECISION:
            rejected = self._auto_reject_unfinalized(actor_id, program_id)
            log.info("unfinalized_screenings_rejected", count=rejected)
        return saved

    def _auto_reject_unfinalized(self, actor_id: int, program_id: int) -> int:
        approved, _ = self._screenings.list_by_program(
            program_id,
            state=ScreeningState.APPROVED,
            offset=0,
            limit=self._pagination.max_page_size,
        )
        count = 0
        while approved:
            for screening in approved:
                rejected = self._screenings.save(screening.reject(AUTO_REJECT_REASON))
                self._audit.record(
                    actor_id,
                    "REJECT_SCREENING",
                    f"screening {rejected.id}: {AUTO_REJECT_REASON}",
                )
                count += 1
            approved, _ = self._screenings.list_by_program(
                program_id,
                state=ScreeningState.APPROVED,
                offset=0,
                limit=self._pagination.max_page_size,
            )
        return count

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def add_programmer(self, actor_id: int, program_id: int, user_id: int) -> Program:
        """Grant PROGRAMMER to an active user.

        Raises:
            AuthorizationError: Actor is not a programmer.
            ConflictError: User is staff.
            AlreadyMemberError: User is already a programmer.
            ProgramLockedError: Program is announced.
        """
        program = self._load(program_id)
        require_programmer(actor_id, program, "add programmers")
        self._load_active_user(user_id)
        return self._save_membership(
            actor_id, program.add_programmer(user_id), "ADD_PROGRAMMER", user_id
        )

    def remove_programmer(
        self, actor_id: int, program_id: int, user_id: int
    ) -> Program:
        """Revoke PROGRAMMER; the creator cannot be removed."""
        program = self._load(program_id)
        require_programmer(actor_id, program, "remove programmers")
        return self._save_membership(
            actor_id, program.remove_programmer(user_id), "REMOVE_PROGRAMMER", user_id
        )

    def add_staff(self, actor_id: int, program_id: int, user_id: int) -> Program:
        """Grant STAFF to an active user while the program is in CREATED.

        Raises:
            AuthorizationError: Actor is not a programmer.
            StaffSetFrozenError: Program has left CREATED.
            ConflictError: User is a programmer.
            AlreadyMemberError: User is already staff.
        """
        program = self._load(program_id)
        require_programmer(actor_id, program, "add staff")
        self._load_active_user(user_id)
        return self._save_membership(
            actor_id, program.add_staff(user_id), "ADD_STAFF", user_id
        )

    def remove_staff(self, actor_id: int, program_id: int, user_id: int) -> Program:
        """Revoke STAFF while the program is in CREATED."""
        program = self._load(program_id)
        require_programmer(actor_id, program, "remove staff")
        return self._save_membership(
            actor_id, program.remove_staff(user_id), "REMOVE_STAFF", user_id
        )

    def _save_membership(
        self, actor_id: int, program: Program, action: str, user_id: int
    ) -> Program:
        saved = self._programs.save(program)
        self._audit.record(actor_id, action, f"program {program.id}, user {user_id}")
        self._log_operation(
            action.lower(), actor_id=actor_id, program_id=program.id, user_id=user_id
        ).info("program_membership_changed")
        return saved

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _has_full_access(self, actor_id: int | None, program: Program) -> bool:
        if actor_id is None or program.id is None:
            return False
        if program.creator_id == actor_id or program.is_member(actor_id):
            return True
        return self._screenings.exists_by_program_and_submitter(program.id, actor_id)

    def _is_visible(self, actor_id: int | None, program: Program, full: bool) -> bool:
        if actor_id is None:
            return program.state is ProgramState.ANNOUNCED
        return full or program.state is not ProgramState.CREATED

    def view_program(self, actor_id: int | None, program_id: int) -> ProgramView:
        """Return a role-aware view of a program.

        Visitors see ANNOUNCED programs only. Members and submitters to the
        program see full details in any state. Other users see any program
        that has left CREATED.

        Raises:
            NotFoundError: Unknown program.
            AuthorizationError: Program is not visible to the actor.
        """
        program = self._load(program_id)
        full = self._has_full_access(actor_id, program)
        if not self._is_visible(actor_id, program, full):
            raise AuthorizationError(
                "Program not available", actor_id=actor_id, action="view_program"
            )
        return ProgramView(program=program, full=full)

    def search_programs(
        self,
        actor_id: int | None,
        criteria: ProgramSearchCriteria,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Page[ProgramView]:
        """Search programs visible to the actor, by start date then name.

        Raises:
            ValidationError: start_to is before start_from.
        """
        if (
            criteria.start_from is not None
            and criteria.start_to is not None
            and criteria.start_to < criteria.start_from
        ):
            raise ValidationError("start_to must be on or after start_from")
        safe_offset, safe_limit = self._pagination.clamp(offset, limit)

        views: list[ProgramView] = []
        for program in self._programs.search(
            name=criteria.name,
            state=criteria.state,
            start_from=criteria.start_from,
            start_to=criteria.start_to,
        ):
            full = self._has_full_access(actor_id, program)
            if self._is_visible(actor_id, program, full):
                views.append(ProgramView(program=program, full=full))

        views.sort(key=lambda v: (v.program.start_date, v.program.name.lower()))
        return Page.slice(views, safe_offset, safe_limit)
