"""Role store: an append-only assignment log read as "most recent wins"."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.authorization import decide, resolve_role
from src.domain.errors import NotFoundError
from src.domain.models import Action, Role
from src.infrastructure.db.guard import translate_store_errors
from src.infrastructure.db.models import Account, RoleAssignment

if TYPE_CHECKING:
    from sqlalchemy import Select

logger = structlog.get_logger()


class RoleStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_store_errors
    async def get_effective_role(self, account_id: str) -> Role | None:
        """Return the newest assignment, or ``None`` if the account has none."""
        stmt: Select[tuple[RoleAssignment]] = (
            select(RoleAssignment)
            .where(RoleAssignment.account_id == account_id)
            .order_by(RoleAssignment.assigned_at.desc(), RoleAssignment.id.desc())
            .limit(1)
        )
        assignment = await self.session.scalar(stmt)
        return assignment.role if assignment is not None else None

    async def resolve(self, account_id: str) -> Role:
        return resolve_role(await self.get_effective_role(account_id))

    @translate_store_errors
    async def set_role(
        self, acting_account_id: str, target_account_id: str, new_role: Role | str
    ) -> RoleAssignment:
        """Append a new assignment for ``target_account_id`` (admins only)."""
        role = Role(new_role)
        acting_role = await self.get_effective_role(acting_account_id)
        decision = decide(acting_role, None, Action.MANAGE_ROLES, caller_id=acting_account_id)
        if not decision.allowed:
            await logger.awarning(
                "role_change_denied",
                acting_account_id=acting_account_id,
                target_account_id=target_account_id,
                reason=decision.reason.value if decision.reason else None,
            )
            decision.raise_for_denial("Only administrators can change roles")

        if await self.session.get(Account, target_account_id) is None:
            raise NotFoundError(f"Account {target_account_id} not found")

        assignment = await self.append(target_account_id, role, assigned_by=acting_account_id)
        await self.session.commit()
        await logger.ainfo(
            "role_assigned",
            acting_account_id=acting_account_id,
            target_account_id=target_account_id,
            role=role.value,
        )
        return assignment

    async def append(
        self, account_id: str, role: Role, *, assigned_by: str | None = None
    ) -> RoleAssignment:
        """Stage an assignment row without committing."""
        assignment = RoleAssignment(account_id=account_id, role=role, assigned_by=assigned_by)
        self.session.add(assignment)
        await self.session.flush()
        return assignment

    @translate_store_errors
    async def history(self, account_id: str) -> list[RoleAssignment]:
        stmt: Select[tuple[RoleAssignment]] = (
            select(RoleAssignment)
            .where(RoleAssignment.account_id == account_id)
            .order_by(RoleAssignment.assigned_at.desc(), RoleAssignment.id.desc())
        )
        return list((await self.session.execute(stmt)).scalars().all())
