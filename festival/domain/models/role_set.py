"""Per-program role membership (programmers and staff).

A RoleSet holds the two mutually exclusive membership sets of a Program.
The creator is always a programmer and can never be staff. Phase gating
(staff freeze, announced lock) belongs to the owning Program; this value
object only enforces membership rules.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from festival.domain.errors.conflict import (
    AlreadyMemberError,
    ConflictError,
    InvariantViolationError,
)

PROGRAMMER = "PROGRAMMER"
STAFF = "STAFF"


@dataclass(frozen=True, eq=True)
class RoleSet:
    """Immutable membership sets of a single program.

    Invariants (checked in __post_init__):
        - creator_id is a member of programmers
        - programmers and staff are disjoint

    Attributes:
        creator_id: The program creator; permanently a programmer.
        programmers: User ids holding the PROGRAMMER role.
        staff: User ids holding the STAFF role.
    """

    creator_id: int
    programmers: frozenset[int] = field(default_factory=frozenset)
    staff: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate structural membership invariants."""
        if self.creator_id not in self.programmers:
            raise InvariantViolationError(
                f"Creator {self.creator_id} must be a programmer"
            )
        overlap = self.programmers & self.staff
        if overlap:
            raise InvariantViolationError(
                f"Users cannot be both PROGRAMMER and STAFF: {sorted(overlap)}"
            )

    @classmethod
    def for_creator(cls, creator_id: int) -> RoleSet:
        """Create the initial role set with the creator as sole programmer."""
        return cls(creator_id=creator_id, programmers=frozenset({creator_id}))

    @classmethod
    def rehydrate(
        cls,
        creator_id: int,
        programmers: Iterable[int] | None = None,
        staff: Iterable[int] | None = None,
    ) -> RoleSet:
        """Rebuild a role set from storage.

        The creator is re-added to programmers if storage lost it. Overlap
        between the sets still fails validation.
        """
        stored_programmers = set(programmers or ())
        stored_programmers.add(creator_id)
        return cls(
            creator_id=creator_id,
            programmers=frozenset(stored_programmers),
            staff=frozenset(staff or ()),
        )

    def is_programmer(self, user_id: int | None) -> bool:
        return user_id is not None and user_id in self.programmers

    def is_staff(self, user_id: int | None) -> bool:
        return user_id is not None and user_id in self.staff

    def is_member(self, user_id: int | None) -> bool:
        return self.is_programmer(user_id) or self.is_staff(user_id)

    def add_programmer(self, user_id: int) -> RoleSet:
        """Return a new role set with user_id added as programmer.

        Raises:
            ConflictError: If the user is already staff.
            AlreadyMemberError: If the user is already a programmer.
        """
        if user_id in self.staff:
            raise ConflictError(
                f"User {user_id} is already {STAFF} in this program; "
                f"cannot also be {PROGRAMMER}"
            )
        if user_id in self.programmers:
            raise AlreadyMemberError(user_id, PROGRAMMER)
        return RoleSet(
            creator_id=self.creator_id,
            programmers=self.programmers | {user_id},
            staff=self.staff,
        )

    def add_staff(self, user_id: int) -> RoleSet:
        """Return a new role set with user_id added as staff.

        Raises:
            ConflictError: If the user is already a programmer.
            AlreadyMemberError: If the user is already staff.
        """
        if user_id in self.programmers:
            raise ConflictError(
                f"User {user_id} is already {PROGRAMMER} in this program; "
                f"cannot also be {STAFF}"
            )
        if user_id in self.staff:
            raise AlreadyMemberError(user_id, STAFF)
        return RoleSet(
            creator_id=self.creator_id,
            programmers=self.programmers,
            staff=self.staff | {user_id},
        )

    def remove_programmer(self, user_id: int) -> RoleSet:
        """Return a new role set without user_id as programmer.

        Removing a non-member is a no-op.

        Raises:
            InvariantViolationError: If user_id is the creator.
        """
        if user_id == self.creator_id:
            raise InvariantViolationError(
                f"Cannot remove creator {user_id} from programmers"
            )
        return RoleSet(
            creator_id=self.creator_id,
            programmers=self.programmers - {user_id},
            staff=self.staff,
        )

    def remove_staff(self, user_id: int) -> RoleSet:
        """Return a new role set without user_id as staff.

        Raises:
            InvariantViolationError: If user_id is the creator.
        """
        if user_id == self.creator_id:
            raise InvariantViolationError(
                f"Creator {user_id} cannot be {STAFF} in this program"
            )
        return RoleSet(
            creator_id=self.creator_id,
            programmers=self.programmers,
            staff=self.staff - {user_id},
        )
