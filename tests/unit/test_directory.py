from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from src.domain.errors import NotAdminError
from src.domain.models import Role, VerificationStatus
from src.domain.services import AdminDirectoryService, RoleStore
from src.infrastructure.db.models import Account

from tests.utils import create_account

pytestmark = pytest.mark.asyncio


async def test_admin_lists_accounts_with_effective_role(
    session: AsyncSession, admin: Account, employer: Account, pending_alumni: Account
) -> None:
    unassigned = await create_account(session, email="unassigned@example.com", role=None)

    listings = await AdminDirectoryService(session).list_accounts(admin.id)
    by_email = {listing.email: listing for listing in listings}

    assert by_email[admin.email].role == "admin"
    assert by_email[employer.email].role == "employer"
    assert by_email[pending_alumni.email].verification_status == "pending"
    assert by_email[unassigned.email].role == "alumni"


async def test_listing_reflects_latest_assignment(
    session: AsyncSession, admin: Account, pending_alumni: Account
) -> None:
    await RoleStore(session).set_role(admin.id, pending_alumni.id, Role.EMPLOYER)

    listings = await AdminDirectoryService(session).list_accounts(admin.id)

    assert {listing.email: listing.role for listing in listings}[pending_alumni.email] == "employer"


async def test_non_admin_cannot_list_accounts(
    session: AsyncSession, employer: Account
) -> None:
    with pytest.raises(NotAdminError):
        await AdminDirectoryService(session).list_accounts(employer.id)


async def test_community_stats_count_effective_roles(
    session: AsyncSession, admin: Account, employer: Account, approved_alumni: Account
) -> None:
    await create_account(session, email="norole@example.com", role=None)

    stats = await AdminDirectoryService(session).community_stats()

    assert stats.total_accounts == 4
    assert stats.admins == 1
    assert stats.employers == 1
    assert stats.alumni == 2


async def test_member_directory_lists_only_approved_accounts(
    session: AsyncSession,
    employer: Account,
    approved_alumni: Account,
    pending_alumni: Account,
) -> None:
    rejected = await create_account(
        session, email="rejected@example.com", status=VerificationStatus.REJECTED
    )
    no_profile = await create_account(session, email="noprofile@example.com", status=None)

    members = await AdminDirectoryService(session).list_members()
    ids = {member.account_id for member in members}

    assert ids == {employer.id, approved_alumni.id}
    assert pending_alumni.id not in ids
    assert rejected.id not in ids
    assert no_profile.id not in ids


async def test_member_directory_is_ordered_by_name(session: AsyncSession) -> None:
    for email, name in (("zoe@example.com", "Zoe"), ("adam@example.com", "Adam")):
        await create_account(
            session, email=email, full_name=name, status=VerificationStatus.APPROVED
        )

    members = await AdminDirectoryService(session).list_members()

    assert [member.full_name for member in members] == ["Adam", "Zoe"]
    assert {member.role for member in members} == {"alumni"}
