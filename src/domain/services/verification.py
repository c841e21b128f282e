"""Verification store and the admin approve/reject workflow."""

from __future__ import annotations

from datetime import UTC, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.authorization import decide
from src.domain.errors import NotFoundError
from src.domain.models import Action, VerificationStatus
from src.domain.services.roles import RoleStore
from src.infrastructure.db.guard import translate_store_errors
from src.infrastructure.db.models import VerificationProfile

logger = structlog.get_logger()


class VerificationStore:
    """Per-account verification records.

    Verification and role are independent: changing a status never writes
    to the role log.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.roles = RoleStore(session)

    @translate_store_errors
    async def get_profile(self, account_id: str) -> VerificationProfile | None:
        return await self.session.get(VerificationProfile, account_id)

    async def get_status(self, account_id: str) -> VerificationStatus:
        """Status for ``account_id``; ``pending`` when no record exists."""
        profile = await self.get_profile(account_id)
        if profile is None:
            return VerificationStatus.PENDING
        return VerificationStatus(profile.status)

    @translate_store_errors
    async def set_status(
        self,
        acting_account_id: str,
        target_account_id: str,
        new_status: VerificationStatus | str,
    ) -> VerificationProfile:
        status = VerificationStatus(new_status)
        acting_role = await self.roles.get_effective_role(acting_account_id)
        decision = decide(
            acting_role, None, Action.MANAGE_VERIFICATION, caller_id=acting_account_id
        )
        if not decision.allowed:
            await logger.awarning(
                "verification_change_denied",
                acting_account_id=acting_account_id,
                target_account_id=target_account_id,
                reason=decision.reason.value if decision.reason else None,
            )
            decision.raise_for_denial("Only administrators can review verifications")

        profile = await self.session.get(VerificationProfile, target_account_id)
        if profile is None:
            raise NotFoundError(f"No verification profile for account {target_account_id}")

        previous = VerificationStatus(profile.status)
        profile.status = status
        profile.reviewed_by = acting_account_id
        profile.reviewed_at = datetime.now(UTC)
        await self.session.commit()
        await self.session.refresh(profile)

        await logger.ainfo(
            "verification_status_set",
            acting_account_id=acting_account_id,
            target_account_id=target_account_id,
            previous_status=previous.value,
            status=status.value,
        )
        return profile

    @translate_store_errors
    async def list_by_status(self, status: VerificationStatus) -> list[VerificationProfile]:
        stmt = (
            select(VerificationProfile)
            .where(VerificationProfile.status == status)
            .order_by(VerificationProfile.created_at)
        )
        return list((await self.session.execute(stmt)).scalars().all())


class VerificationWorkflow:
    """Admin review of verification profiles.

    Unlike application decisions, reviews are not terminal: an admin may
    approve or reject the same account repeatedly, and repeating the current
    status succeeds without change. Existing postings and applications are
    left untouched when an account is rejected.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.store = VerificationStore(session)

    async def approve(self, admin_id: str, target_account_id: str) -> VerificationProfile:
        return await self._review(admin_id, target_account_id, VerificationStatus.APPROVED)

    async def reject(self, admin_id: str, target_account_id: str) -> VerificationProfile:
        return await self._review(admin_id, target_account_id, VerificationStatus.REJECTED)

    async def list_pending(self, admin_id: str) -> list[VerificationProfile]:
        await self._require_admin(admin_id)
        return await self.store.list_by_status(VerificationStatus.PENDING)

    async def _review(
        self, admin_id: str, target_account_id: str, status: VerificationStatus
    ) -> VerificationProfile:
        await self._require_admin(admin_id)

        profile = await self.store.get_profile(target_account_id)
        if profile is None:
            raise NotFoundError(f"No verification profile for account {target_account_id}")
        if profile.status == status:
            await logger.ainfo(
                "verification_review_noop",
                admin_id=admin_id,
                target_account_id=target_account_id,
                status=status.value,
            )
            return profile

        profile = await self.store.set_status(admin_id, target_account_id, status)
        await logger.ainfo(
            f"verification_{status.value}",
            admin_id=admin_id,
            target_account_id=target_account_id,
        )
        return profile

    async def _require_admin(self, admin_id: str) -> None:
        role = await self.store.roles.get_effective_role(admin_id)
        decision = decide(role, None, Action.MANAGE_VERIFICATION, caller_id=admin_id)
        if not decision.allowed:
            await logger.awarning(
                "verification_review_denied",
                admin_id=admin_id,
                reason=decision.reason.value if decision.reason else None,
            )
            decision.raise_for_denial("Only administrators can review verifications")
