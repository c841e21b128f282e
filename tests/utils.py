from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import issue_smoke_token
from src.domain.models import AccountType, Role, VerificationStatus
from src.infrastructure.db.models import (
    Account,
    JobPosting,
    RoleAssignment,
    VerificationProfile,
)


async def create_account(
    session: AsyncSession,
    *,
    email: str,
    role: Role | None = Role.ALUMNI,
    status: VerificationStatus | None = VerificationStatus.PENDING,
    account_type: AccountType = AccountType.ALUMNI,
    full_name: str | None = None,
) -> Account:
    """Insert an account directly, bypassing registration.

    ``role=None`` leaves the account without any role assignment and
    ``status=None`` without a verification profile.
    """
    account = Account(email=email, hashed_password="not-a-real-hash", full_name=full_name)
    session.add(account)
    await session.flush()

    if role is not None:
        session.add(RoleAssignment(account_id=account.id, role=role))
    if status is not None:
        session.add(
            VerificationProfile(
                account_id=account.id,
                status=status,
                id_number=f"ID-{email.split('@')[0]}",
                account_type=account_type,
            )
        )
    await session.commit()
    return account


async def create_posting(
    session: AsyncSession,
    owner: Account,
    *,
    title: str = "Backend Engineer",
    company: str = "Acme",
    is_active: bool = True,
) -> JobPosting:
    posting = JobPosting(
        owner_account_id=owner.id, title=title, company=company, is_active=is_active
    )
    session.add(posting)
    await session.commit()
    return posting


def auth_headers(account: Account | str) -> dict[str, str]:
    account_id = account if isinstance(account, str) else account.id
    token = issue_smoke_token(account_id, email="user@example.com")
    return {"Authorization": f"Bearer {token}"}
