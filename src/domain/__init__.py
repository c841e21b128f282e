"""Domain layer: value types, errors and the authorization engine."""

from src.domain.authorization import Decision, decide, resolve_role
from src.domain.errors import DomainError, ErrorKind, Outcome
from src.domain.models import (
    AccountType,
    Action,
    ApplicationStatus,
    Caller,
    Role,
    VerificationStatus,
)

__all__ = [
    "AccountType",
    "Action",
    "ApplicationStatus",
    "Caller",
    "Decision",
    "DomainError",
    "ErrorKind",
    "Outcome",
    "Role",
    "VerificationStatus",
    "decide",
    "resolve_role",
]
