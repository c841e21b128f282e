"""Decision rules of the authorization engine."""

from __future__ import annotations

import pytest
from src.domain.authorization import decide, resolve_role
from src.domain.errors import ErrorKind, NotOwnerError, NotVerifiedError
from src.domain.models import Action, Role, VerificationStatus

ALL_STATUSES = list(VerificationStatus) + [None]


class TestAdministrativeActions:
    @pytest.mark.parametrize(
        "action",
        [Action.MANAGE_ROLES, Action.MANAGE_VERIFICATION, Action.DELETE_ANY_POSTING],
    )
    def test_only_admins_are_allowed(self, action: Action) -> None:
        assert decide(Role.ADMIN, VerificationStatus.PENDING, action).allowed is True
        for role in (Role.ALUMNI, Role.EMPLOYER, None):
            decision = decide(role, VerificationStatus.APPROVED, action)
            assert decision.allowed is False
            assert decision.reason is ErrorKind.NOT_ADMIN

    def test_missing_role_is_never_admin(self) -> None:
        assert resolve_role(None) is Role.ALUMNI
        assert decide(None, VerificationStatus.APPROVED, Action.MANAGE_ROLES).allowed is False


class TestVerificationGatedActions:
    @pytest.mark.parametrize("action", [Action.CREATE_POSTING, Action.APPLY_TO_JOB])
    @pytest.mark.parametrize(
        "status", [VerificationStatus.PENDING, VerificationStatus.REJECTED, None]
    )
    def test_denied_unless_approved(self, action: Action, status: VerificationStatus | None) -> None:
        decision = decide(Role.ALUMNI, status, action)

        assert decision.allowed is False
        assert decision.reason is ErrorKind.NOT_VERIFIED

    @pytest.mark.parametrize("action", [Action.CREATE_POSTING, Action.APPLY_TO_JOB])
    def test_allowed_when_approved(self, action: Action) -> None:
        assert decide(Role.ALUMNI, VerificationStatus.APPROVED, action).allowed is True

    def test_admin_role_does_not_bypass_verification(self) -> None:
        decision = decide(Role.ADMIN, VerificationStatus.PENDING, Action.APPLY_TO_JOB)
        assert decision.reason is ErrorKind.NOT_VERIFIED

    def test_accepts_plain_string_values(self) -> None:
        assert decide("employer", "approved", "create-posting").allowed is True


class TestOwnershipGatedActions:
    @pytest.mark.parametrize(
        "action", [Action.EDIT_POSTING, Action.DELETE_POSTING, Action.DECIDE_APPLICATION]
    )
    def test_owner_is_allowed(self, action: Action) -> None:
        decision = decide(
            Role.EMPLOYER,
            VerificationStatus.PENDING,
            action,
            resource_owner_id="owner-1",
            caller_id="owner-1",
        )
        assert decision.allowed is True

    @pytest.mark.parametrize("status", ALL_STATUSES)
    def test_non_owner_is_denied_regardless_of_verification(
        self, status: VerificationStatus | None
    ) -> None:
        decision = decide(
            Role.ALUMNI,
            status,
            Action.DECIDE_APPLICATION,
            resource_owner_id="owner-1",
            caller_id="someone-else",
        )
        assert decision.allowed is False
        assert decision.reason is ErrorKind.NOT_OWNER

    def test_admin_overrides_ownership(self) -> None:
        decision = decide(
            Role.ADMIN,
            VerificationStatus.PENDING,
            Action.DECIDE_APPLICATION,
            resource_owner_id="owner-1",
            caller_id="admin-1",
        )
        assert decision.allowed is True

    def test_missing_ids_never_match(self) -> None:
        decision = decide(Role.ALUMNI, VerificationStatus.APPROVED, Action.EDIT_POSTING)
        assert decision.allowed is False


class TestOpenAndUnknownActions:
    @pytest.mark.parametrize("action", [Action.BROWSE_JOBS, Action.VIEW_OWN_APPLICATION])
    def test_read_actions_are_always_allowed(self, action: Action) -> None:
        assert decide(None, None, action).allowed is True

    def test_unknown_action_is_unrecognized(self) -> None:
        decision = decide(Role.ADMIN, VerificationStatus.APPROVED, "launch-rockets")

        assert decision.allowed is False
        assert decision.reason is ErrorKind.UNRECOGNIZED


class TestRaiseForDenial:
    def test_raises_typed_error(self) -> None:
        with pytest.raises(NotVerifiedError):
            decide(Role.ALUMNI, VerificationStatus.PENDING, Action.APPLY_TO_JOB).raise_for_denial()

        with pytest.raises(NotOwnerError) as exc_info:
            decide(
                Role.ALUMNI, None, Action.EDIT_POSTING, resource_owner_id="a", caller_id="b"
            ).raise_for_denial("nope")
        assert exc_info.value.kind is ErrorKind.NOT_OWNER
        assert exc_info.value.message == "nope"

    def test_allowed_decision_does_not_raise(self) -> None:
        decide(Role.ADMIN, None, Action.MANAGE_ROLES).raise_for_denial()
