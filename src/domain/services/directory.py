"""Account directories and public community counts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.authorization import decide, resolve_role
from src.domain.models import Action, Role, VerificationStatus
from src.domain.services.roles import RoleStore
from src.infrastructure.db.guard import translate_store_errors
from src.infrastructure.db.models import Account, RoleAssignment, VerificationProfile

logger = structlog.get_logger()


@dataclass(slots=True)
class AccountListing:
    account_id: str
    email: str
    full_name: str | None
    role: str
    verification_status: str
    account_type: str | None
    id_number: str | None
    created_at: datetime


@dataclass(slots=True)
class MemberListing:
    account_id: str
    full_name: str | None
    role: str
    account_type: str


@dataclass(slots=True)
class CommunityStats:
    total_accounts: int
    alumni: int
    employers: int
    admins: int


class AdminDirectoryService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.roles = RoleStore(session)

    @translate_store_errors
    async def list_accounts(self, admin_id: str) -> list[AccountListing]:
        """Every account with its effective role and verification status."""
        role = await self.roles.get_effective_role(admin_id)
        decision = decide(role, None, Action.MANAGE_VERIFICATION, caller_id=admin_id)
        if not decision.allowed:
            await logger.awarning("account_directory_denied", admin_id=admin_id)
            decision.raise_for_denial("Only administrators can list accounts")

        stmt = (
            select(Account, VerificationProfile)
            .join(VerificationProfile, VerificationProfile.account_id == Account.id, isouter=True)
            .order_by(Account.created_at.desc())
        )
        rows = (await self.session.execute(stmt)).all()
        effective = await self._effective_roles()

        return [
            AccountListing(
                account_id=account.id,
                email=account.email,
                full_name=account.full_name,
                role=resolve_role(effective.get(account.id)).value,
                verification_status=(
                    profile.status.value
                    if profile is not None
                    else VerificationStatus.PENDING.value
                ),
                account_type=profile.account_type.value if profile is not None else None,
                id_number=profile.id_number if profile is not None else None,
                created_at=account.created_at,
            )
            for account, profile in rows
        ]

    @translate_store_errors
    async def list_members(self) -> list[MemberListing]:
        """Approved accounts only, by name. Contact and identity details stay private."""
        stmt = (
            select(Account, VerificationProfile)
            .join(VerificationProfile, VerificationProfile.account_id == Account.id)
            .where(VerificationProfile.status == VerificationStatus.APPROVED)
            .order_by(Account.full_name, Account.email)
        )
        rows = (await self.session.execute(stmt)).all()
        effective = await self._effective_roles()

        return [
            MemberListing(
                account_id=account.id,
                full_name=account.full_name,
                role=resolve_role(effective.get(account.id)).value,
                account_type=profile.account_type.value,
            )
            for account, profile in rows
        ]

    @translate_store_errors
    async def community_stats(self) -> CommunityStats:
        total = await self.session.scalar(select(func.count(Account.id))) or 0
        effective = await self._effective_roles()
        account_ids = (await self.session.execute(select(Account.id))).scalars().all()
        counts = Counter(resolve_role(effective.get(account_id)) for account_id in account_ids)
        return CommunityStats(
            total_accounts=total,
            alumni=counts[Role.ALUMNI],
            employers=counts[Role.EMPLOYER],
            admins=counts[Role.ADMIN],
        )

    async def _effective_roles(self) -> dict[str, Role]:
        """Latest role per account, applying the same ordering as the role store."""
        ranked = select(
            RoleAssignment.account_id,
            RoleAssignment.role,
            func.row_number()
            .over(
                partition_by=RoleAssignment.account_id,
                order_by=(RoleAssignment.assigned_at.desc(), RoleAssignment.id.desc()),
            )
            .label("rank"),
        ).subquery()
        stmt = select(ranked.c.account_id, ranked.c.role).where(ranked.c.rank == 1)
        rows = (await self.session.execute(stmt)).all()
        return {account_id: Role(role) for account_id, role in rows}
