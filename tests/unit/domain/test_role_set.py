"""Unit tests for RoleSet membership rules."""

import pytest

from festival.domain.errors import (
    AlreadyMemberError,
    ConflictError,
    InvariantViolationError,
)
from festival.domain.models.role_set import RoleSet


class TestRoleSetConstruction:
    """Tests for structural invariants."""

    def test_for_creator_makes_creator_sole_programmer(self) -> None:
        """The creator starts as the only programmer and staff is empty."""
        roles = RoleSet.for_creator(1)
        assert roles.programmers == frozenset({1})
        assert roles.staff == frozenset()

    def test_creator_must_be_programmer(self) -> None:
        """A role set without the creator among programmers is rejected."""
        with pytest.raises(InvariantViolationError):
            RoleSet(creator_id=1, programmers=frozenset({2}))

    def test_overlap_is_rejected(self) -> None:
        """The same user cannot be programmer and staff."""
        with pytest.raises(InvariantViolationError):
            RoleSet(creator_id=1, programmers=frozenset({1, 2}), staff=frozenset({2}))

    def test_rehydrate_restores_missing_creator(self) -> None:
        """Rehydration re-adds a creator that storage lost."""
        roles = RoleSet.rehydrate(1, programmers=[3], staff=[4])
        assert roles.programmers == frozenset({1, 3})
        assert roles.staff == frozenset({4})

    def test_rehydrate_still_rejects_overlap(self) -> None:
        with pytest.raises(InvariantViolationError):
            RoleSet.rehydrate(1, programmers=[2], staff=[2])

    def test_is_frozen(self) -> None:
        roles = RoleSet.for_creator(1)
        with pytest.raises(AttributeError):
            roles.creator_id = 2  # type: ignore[misc]


class TestRoleSetMutations:
    """Tests for add/remove operations."""

    def test_add_programmer_returns_new_set(self) -> None:
        roles = RoleSet.for_creator(1)
        updated = roles.add_programmer(2)
        assert updated.is_programmer(2)
        assert not roles.is_programmer(2)

    def test_add_staff_then_programmer_conflicts(self) -> None:
        """Adding a staff member as programmer names the existing role."""
        roles = RoleSet.for_creator(1).add_staff(2)
        with pytest.raises(ConflictError, match="already STAFF"):
            roles.add_programmer(2)

    def test_add_programmer_then_staff_conflicts(self) -> None:
        roles = RoleSet.for_creator(1).add_programmer(2)
        with pytest.raises(ConflictError, match="already PROGRAMMER"):
            roles.add_staff(2)

    def test_creator_cannot_become_staff(self) -> None:
        with pytest.raises(ConflictError):
            RoleSet.for_creator(1).add_staff(1)

    def test_duplicate_programmer_is_already_member(self) -> None:
        roles = RoleSet.for_creator(1).add_programmer(2)
        with pytest.raises(AlreadyMemberError):
            roles.add_programmer(2)

    def test_duplicate_staff_is_already_member(self) -> None:
        roles = RoleSet.for_creator(1).add_staff(2)
        with pytest.raises(AlreadyMemberError):
            roles.add_staff(2)

    def test_remove_creator_is_refused(self) -> None:
        with pytest.raises(InvariantViolationError):
            RoleSet.for_creator(1).remove_programmer(1)

    def test_remove_non_member_is_noop(self) -> None:
        roles = RoleSet.for_creator(1)
        assert roles.remove_programmer(9) == roles
        assert roles.remove_staff(9) == roles

    def test_remove_staff(self) -> None:
        roles = RoleSet.for_creator(1).add_staff(2).remove_staff(2)
        assert not roles.is_member(2)

    def test_invariants_hold_after_mixed_mutations(self) -> None:
        """Creator stays a programmer and the sets stay disjoint."""
        roles = RoleSet.for_creator(1)
        for user_id in range(2, 8):
            roles = roles.add_staff(user_id) if user_id % 2 else roles.add_programmer(user_id)
        roles = roles.remove_programmer(2).remove_staff(3)
        assert 1 in roles.programmers
        assert not roles.programmers & roles.staff

    def test_is_member_handles_none(self) -> None:
        assert not RoleSet.for_creator(1).is_member(None)
