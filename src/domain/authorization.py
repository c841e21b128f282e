"""Authorization engine.

A pure decision function over three independent axes: role gates
administrative overrides, verification gates creating postings and
applications, ownership gates mutating existing resources. Nothing here
touches the stores; callers pass a snapshot they fetched for this request.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.errors import AuthorizationError, ErrorKind, authorization_error
from src.domain.models import Action, Role, VerificationStatus

ADMIN_ACTIONS = frozenset(
    {Action.MANAGE_ROLES, Action.MANAGE_VERIFICATION, Action.DELETE_ANY_POSTING}
)
VERIFIED_ACTIONS = frozenset({Action.CREATE_POSTING, Action.APPLY_TO_JOB})
OWNER_ACTIONS = frozenset(
    {Action.EDIT_POSTING, Action.DELETE_POSTING, Action.DECIDE_APPLICATION}
)
OPEN_ACTIONS = frozenset({Action.BROWSE_JOBS, Action.VIEW_OWN_APPLICATION})


@dataclass(slots=True, frozen=True)
class Decision:
    allowed: bool
    reason: ErrorKind | None = None

    def raise_for_denial(self, message: str = "") -> None:
        if not self.allowed:
            raise authorization_error(self.reason or ErrorKind.UNRECOGNIZED, message)


ALLOW = Decision(allowed=True)


def resolve_role(role: Role | str | None) -> Role:
    """An account without any role assignment is treated as alumni."""
    if role is None:
        return Role.ALUMNI
    return Role(role)


def decide(
    caller_role: Role | str | None,
    caller_verification: VerificationStatus | str | None,
    action: Action | str,
    resource_owner_id: str | None = None,
    caller_id: str | None = None,
) -> Decision:
    """Return allow/deny for ``action``; rules are evaluated in order."""
    try:
        action = Action(action)
    except ValueError:
        return Decision(allowed=False, reason=ErrorKind.UNRECOGNIZED)

    role = resolve_role(caller_role)

    if action in ADMIN_ACTIONS:
        if role is Role.ADMIN:
            return ALLOW
        return Decision(allowed=False, reason=ErrorKind.NOT_ADMIN)

    if action in VERIFIED_ACTIONS:
        if caller_verification == VerificationStatus.APPROVED:
            return ALLOW
        return Decision(allowed=False, reason=ErrorKind.NOT_VERIFIED)

    if action in OWNER_ACTIONS:
        if role is Role.ADMIN:
            return ALLOW
        if caller_id is not None and caller_id == resource_owner_id:
            return ALLOW
        return Decision(allowed=False, reason=ErrorKind.NOT_OWNER)

    if action in OPEN_ACTIONS:
        return ALLOW

    return Decision(allowed=False, reason=ErrorKind.UNRECOGNIZED)


__all__ = [
    "ALLOW",
    "AuthorizationError",
    "Decision",
    "decide",
    "resolve_role",
]
