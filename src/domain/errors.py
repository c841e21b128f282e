"""Error taxonomy shared by the services and the API layer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class ErrorKind(str, enum.Enum):
    NOT_VERIFIED = "NotVerified"
    NOT_OWNER = "NotOwner"
    NOT_ADMIN = "NotAdmin"
    ALREADY_APPLIED = "AlreadyApplied"
    INVALID_TRANSITION = "InvalidTransition"
    JOB_INACTIVE = "JobInactive"
    NOT_FOUND = "NotFound"
    UNRECOGNIZED = "Unrecognized"
    STORE_UNAVAILABLE = "StoreUnavailable"

    @property
    def retryable(self) -> bool:
        return self is ErrorKind.STORE_UNAVAILABLE


class DomainError(Exception):
    """Base exception for failures surfaced to callers as a typed outcome."""

    kind: ErrorKind = ErrorKind.UNRECOGNIZED

    def __init__(self, message: str = "", *, kind: ErrorKind | None = None) -> None:
        if kind is not None:
            self.kind = kind
        super().__init__(message or self.kind.value)

    @property
    def message(self) -> str:
        return str(self)


class AuthorizationError(DomainError):
    """Raised when the authorization engine denies an action."""


class NotVerifiedError(AuthorizationError):
    kind = ErrorKind.NOT_VERIFIED


class NotOwnerError(AuthorizationError):
    kind = ErrorKind.NOT_OWNER


class NotAdminError(AuthorizationError):
    kind = ErrorKind.NOT_ADMIN


class AlreadyAppliedError(DomainError):
    kind = ErrorKind.ALREADY_APPLIED


class InvalidTransitionError(DomainError):
    kind = ErrorKind.INVALID_TRANSITION


class JobInactiveError(DomainError):
    kind = ErrorKind.JOB_INACTIVE


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class StoreUnavailableError(DomainError):
    """The backing store failed; the only kind worth retrying upstream."""

    kind = ErrorKind.STORE_UNAVAILABLE


_AUTHORIZATION_ERRORS: dict[ErrorKind, type[AuthorizationError]] = {
    ErrorKind.NOT_VERIFIED: NotVerifiedError,
    ErrorKind.NOT_OWNER: NotOwnerError,
    ErrorKind.NOT_ADMIN: NotAdminError,
}


def authorization_error(kind: ErrorKind, message: str = "") -> AuthorizationError:
    """Build the exception matching a deny reason."""
    error_cls = _AUTHORIZATION_ERRORS.get(kind)
    if error_cls is None:
        return AuthorizationError(message, kind=kind)
    return error_cls(message)


@dataclass(slots=True, frozen=True)
class Outcome:
    """Caller-facing result: ``{ok: true}`` or ``{ok: false, reason}``."""

    ok: bool
    reason: ErrorKind | None = None
    detail: str | None = None

    @classmethod
    def success(cls) -> Outcome:
        return cls(ok=True)

    @classmethod
    def from_error(cls, error: DomainError) -> Outcome:
        return cls(ok=False, reason=error.kind, detail=error.message)

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True}
        payload: dict[str, Any] = {"ok": False, "reason": self.reason.value if self.reason else None}
        if self.detail:
            payload["detail"] = self.detail
        return payload
