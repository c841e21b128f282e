"""Job postings: creation by verified accounts, mutation by owner or admin."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.authorization import decide
from src.domain.errors import NotFoundError
from src.domain.models import Action
from src.domain.services.roles import RoleStore
from src.domain.services.verification import VerificationStore
from src.infrastructure.db.guard import translate_store_errors
from src.infrastructure.db.models import JobApplication, JobPosting

if TYPE_CHECKING:
    from sqlalchemy import Select

logger = structlog.get_logger()

EDITABLE_FIELDS = frozenset({"title", "company", "location", "description", "is_active"})


class JobPostingService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.roles = RoleStore(session)
        self.verifications = VerificationStore(session)

    @translate_store_errors
    async def create(
        self,
        owner_id: str,
        *,
        title: str,
        company: str,
        location: str | None = None,
        description: str | None = None,
    ) -> JobPosting:
        await self._authorize(owner_id, Action.CREATE_POSTING)

        posting = JobPosting(
            owner_account_id=owner_id,
            title=title,
            company=company,
            location=location,
            description=description,
            is_active=True,
        )
        self.session.add(posting)
        await self.session.commit()
        await self.session.refresh(posting)

        await logger.ainfo("job_posting_created", job_id=posting.id, owner_id=owner_id)
        return posting

    @translate_store_errors
    async def browse(self) -> list[JobPosting]:
        """Active postings, newest first. Open to anonymous callers."""
        stmt: Select[tuple[JobPosting]] = (
            select(JobPosting)
            .where(JobPosting.is_active == True)  # noqa: E712
            .order_by(JobPosting.created_at.desc())
        )
        return list((await self.session.execute(stmt)).scalars().all())

    @translate_store_errors
    async def list_owned(self, owner_id: str) -> list[JobPosting]:
        stmt: Select[tuple[JobPosting]] = (
            select(JobPosting)
            .where(JobPosting.owner_account_id == owner_id)
            .order_by(JobPosting.created_at.desc())
        )
        return list((await self.session.execute(stmt)).scalars().all())

    @translate_store_errors
    async def get(self, job_id: str) -> JobPosting:
        posting = await self.session.get(JobPosting, job_id)
        if posting is None:
            raise NotFoundError(f"Job posting {job_id} not found")
        return posting

    @translate_store_errors
    async def update(self, acting_id: str, job_id: str, **changes: Any) -> JobPosting:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported field(s): {', '.join(sorted(unknown))}")

        posting = await self.get(job_id)
        await self._authorize(acting_id, Action.EDIT_POSTING, owner_id=posting.owner_account_id)

        for field, value in changes.items():
            setattr(posting, field, value)
        await self.session.commit()
        await self.session.refresh(posting)

        await logger.ainfo(
            "job_posting_updated",
            job_id=job_id,
            acting_id=acting_id,
            fields=sorted(changes),
        )
        return posting

    async def close(self, acting_id: str, job_id: str) -> JobPosting:
        return await self.update(acting_id, job_id, is_active=False)

    async def reopen(self, acting_id: str, job_id: str) -> JobPosting:
        return await self.update(acting_id, job_id, is_active=True)

    @translate_store_errors
    async def delete(self, acting_id: str, job_id: str) -> None:
        """Hard-delete a posting together with its applications."""
        posting = await self.get(job_id)
        await self._authorize(acting_id, Action.DELETE_POSTING, owner_id=posting.owner_account_id)

        await self.session.execute(delete(JobApplication).where(JobApplication.job_id == job_id))
        await self.session.delete(posting)
        await self.session.commit()
        await logger.ainfo("job_posting_deleted", job_id=job_id, acting_id=acting_id)

    async def _authorize(
        self, acting_id: str, action: Action, *, owner_id: str | None = None
    ) -> None:
        role = await self.roles.get_effective_role(acting_id)
        verification = await self.verifications.get_status(acting_id)
        decision = decide(
            role, verification, action, resource_owner_id=owner_id, caller_id=acting_id
        )
        if not decision.allowed:
            await logger.awarning(
                "job_posting_action_denied",
                action=action.value,
                acting_id=acting_id,
                reason=decision.reason.value if decision.reason else None,
            )
            decision.raise_for_denial(f"Not allowed to {action.value}")
