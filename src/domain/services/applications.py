"""Job application lifecycle: submitted -> accepted | rejected."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.authorization import decide as decide_access
from src.domain.errors import (
    AlreadyAppliedError,
    InvalidTransitionError,
    JobInactiveError,
    NotFoundError,
)
from src.domain.models import Action, ApplicationStatus
from src.domain.services.roles import RoleStore
from src.domain.services.verification import VerificationStore
from src.infrastructure.db.guard import translate_store_errors
from src.infrastructure.db.models import Account, JobApplication, JobPosting

logger = structlog.get_logger()


@dataclass(slots=True)
class ApplicationSummary:
    """An applicant's view of one of their own applications."""

    id: str
    job_id: str
    job_title: str
    company: str
    status: str
    created_at: datetime
    decided_at: datetime | None


@dataclass(slots=True)
class ApplicationDetail:
    """A posting owner's view of an application to their job."""

    id: str
    job_id: str
    applicant_account_id: str
    applicant_email: str | None
    applicant_name: str | None
    status: str
    cover_letter: str | None
    resume_reference: str | None
    created_at: datetime
    decided_at: datetime | None


class ApplicationService:
    """Owns submission and decision of job applications.

    At most one application exists per (job, applicant). The unique
    constraint on the table is what guarantees it; the lookup before the
    insert only gives an early, friendly error. Decisions are terminal.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.roles = RoleStore(session)
        self.verifications = VerificationStore(session)

    @translate_store_errors
    async def submit(
        self,
        applicant_id: str,
        job_id: str,
        *,
        cover_letter: str | None = None,
        resume_reference: str | None = None,
    ) -> JobApplication:
        await self._authorize(applicant_id, Action.APPLY_TO_JOB)

        posting = await self.session.get(JobPosting, job_id)
        if posting is None:
            raise NotFoundError(f"Job posting {job_id} not found")
        if not posting.is_active:
            await logger.ainfo("application_job_inactive", job_id=job_id, applicant_id=applicant_id)
            raise JobInactiveError("This job is no longer accepting applications")

        if await self._find_application(job_id, applicant_id) is not None:
            await logger.ainfo("application_duplicate", job_id=job_id, applicant_id=applicant_id)
            raise AlreadyAppliedError("You have already applied for this job")

        application = JobApplication(
            job_id=job_id,
            applicant_account_id=applicant_id,
            status=ApplicationStatus.SUBMITTED,
            cover_letter=cover_letter,
            resume_reference=resume_reference,
        )
        try:
            self.session.add(application)
            await self.session.commit()
        except IntegrityError as exc:
            # Lost a race against a concurrent submission for the same pair
            await self.session.rollback()
            await logger.awarning(
                "application_duplicate_conflict", job_id=job_id, applicant_id=applicant_id
            )
            raise AlreadyAppliedError("You have already applied for this job") from exc

        await self.session.refresh(application)
        await logger.ainfo(
            "application_submitted",
            application_id=application.id,
            job_id=job_id,
            applicant_id=applicant_id,
        )
        return application

    @translate_store_errors
    async def decide(
        self, acting_id: str, application_id: str, outcome: ApplicationStatus | str
    ) -> JobApplication:
        outcome = ApplicationStatus(outcome)
        application = await self._get(application_id)
        posting = await self.session.get(JobPosting, application.job_id)
        owner_id = posting.owner_account_id if posting is not None else None
        await self._authorize(acting_id, Action.DECIDE_APPLICATION, owner_id=owner_id)

        if outcome not in ApplicationStatus.terminal_statuses():
            raise InvalidTransitionError(f"Cannot move an application to '{outcome.value}'")

        if application.status != ApplicationStatus.SUBMITTED:
            await logger.awarning(
                "application_invalid_transition",
                application_id=application_id,
                status=application.status.value,
                outcome=outcome.value,
            )
            raise InvalidTransitionError(
                f"Application is already {application.status.value}"
            )

        # Compare-and-set so two racing decisions cannot both land
        result = await self.session.execute(
            update(JobApplication)
            .where(
                JobApplication.id == application_id,
                JobApplication.status == ApplicationStatus.SUBMITTED,
            )
            .values(status=outcome, decided_by=acting_id, decided_at=datetime.now(UTC))
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise InvalidTransitionError("Application has already been decided")
        await self.session.commit()
        await self.session.refresh(application)

        await logger.ainfo(
            "application_decided",
            application_id=application_id,
            job_id=application.job_id,
            acting_id=acting_id,
            outcome=outcome.value,
        )
        return application

    @translate_store_errors
    async def list_for_applicant(self, applicant_id: str) -> list[ApplicationSummary]:
        stmt = (
            select(JobApplication, JobPosting)
            .join(JobPosting, JobPosting.id == JobApplication.job_id)
            .where(JobApplication.applicant_account_id == applicant_id)
            .order_by(JobApplication.created_at.desc())
        )
        rows = (await self.session.execute(stmt)).all()
        return [
            ApplicationSummary(
                id=application.id,
                job_id=application.job_id,
                job_title=posting.title,
                company=posting.company,
                status=application.status.value,
                created_at=application.created_at,
                decided_at=application.decided_at,
            )
            for application, posting in rows
        ]

    @translate_store_errors
    async def list_for_job(self, job_id: str, acting_id: str) -> list[ApplicationDetail]:
        posting = await self.session.get(JobPosting, job_id)
        if posting is None:
            raise NotFoundError(f"Job posting {job_id} not found")
        await self._authorize(
            acting_id, Action.DECIDE_APPLICATION, owner_id=posting.owner_account_id
        )

        stmt = (
            select(JobApplication, Account)
            .join(Account, Account.id == JobApplication.applicant_account_id, isouter=True)
            .where(JobApplication.job_id == job_id)
            .order_by(JobApplication.created_at)
        )
        rows = (await self.session.execute(stmt)).all()
        return [_to_detail(application, account) for application, account in rows]

    @translate_store_errors
    async def get_application(self, acting_id: str, application_id: str) -> ApplicationDetail:
        """Visible to the applicant, the posting owner, or an admin."""
        application = await self._get(application_id)
        if application.applicant_account_id == acting_id:
            await self._authorize(acting_id, Action.VIEW_OWN_APPLICATION)
        else:
            posting = await self.session.get(JobPosting, application.job_id)
            owner_id = posting.owner_account_id if posting is not None else None
            await self._authorize(acting_id, Action.DECIDE_APPLICATION, owner_id=owner_id)

        account = await self.session.get(Account, application.applicant_account_id)
        return _to_detail(application, account)

    async def _get(self, application_id: str) -> JobApplication:
        application = await self.session.get(JobApplication, application_id)
        if application is None:
            raise NotFoundError(f"Application {application_id} not found")
        return application

    async def _find_application(self, job_id: str, applicant_id: str) -> JobApplication | None:
        stmt = select(JobApplication).where(
            JobApplication.job_id == job_id,
            JobApplication.applicant_account_id == applicant_id,
        )
        return await self.session.scalar(stmt)

    async def _authorize(
        self, acting_id: str, action: Action, *, owner_id: str | None = None
    ) -> None:
        role = await self.roles.get_effective_role(acting_id)
        verification = await self.verifications.get_status(acting_id)
        decision = decide_access(
            role, verification, action, resource_owner_id=owner_id, caller_id=acting_id
        )
        if not decision.allowed:
            await logger.awarning(
                "application_action_denied",
                action=action.value,
                acting_id=acting_id,
                reason=decision.reason.value if decision.reason else None,
            )
            decision.raise_for_denial(f"Not allowed to {action.value}")


def _to_detail(application: JobApplication, account: Account | None) -> ApplicationDetail:
    return ApplicationDetail(
        id=application.id,
        job_id=application.job_id,
        applicant_account_id=application.applicant_account_id,
        applicant_email=account.email if account is not None else None,
        applicant_name=account.full_name if account is not None else None,
        status=application.status.value,
        cover_letter=application.cover_letter,
        resume_reference=application.resume_reference,
        created_at=application.created_at,
        decided_at=application.decided_at,
    )
