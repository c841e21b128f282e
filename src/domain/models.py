from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(str, enum.Enum):
    ADMIN = "admin"
    ALUMNI = "alumni"
    EMPLOYER = "employer"


class AccountType(str, enum.Enum):
    ALUMNI = "alumni"
    EMPLOYER = "employer"


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApplicationStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def terminal_statuses(cls) -> tuple[ApplicationStatus, ...]:
        return (cls.ACCEPTED, cls.REJECTED)


class Action(str, enum.Enum):
    """Actions checked by the authorization engine."""

    MANAGE_ROLES = "manage-roles"
    MANAGE_VERIFICATION = "manage-verification"
    DELETE_ANY_POSTING = "delete-any-posting"
    CREATE_POSTING = "create-posting"
    APPLY_TO_JOB = "apply-to-job"
    EDIT_POSTING = "edit-posting"
    DELETE_POSTING = "delete-posting"
    DECIDE_APPLICATION = "decide-application"
    BROWSE_JOBS = "browse-jobs"
    VIEW_OWN_APPLICATION = "view-own-application"


@dataclass(slots=True)
class Caller:
    """The authenticated account behind a request.

    Only the identifier comes from the session token; role and verification
    status are fetched from the stores whenever a decision is needed.
    """

    account_id: str
    email: str = ""
