"""Admin review of account verifications and the account directory."""

from __future__ import annotations

from dataclasses import asdict

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_caller, get_db_session
from src.api.schemas.accounts import (
    AccountListingItem,
    AccountListingResponse,
    CommunityStatsResponse,
    MemberDirectoryResponse,
    MemberItem,
    PendingVerificationsResponse,
    VerificationResponse,
)
from src.domain import Caller
from src.domain.services import AdminDirectoryService, VerificationWorkflow
from src.infrastructure.db.models import VerificationProfile

logger = structlog.get_logger()
router = APIRouter(prefix="/admin", tags=["Admin"])
stats_router = APIRouter(prefix="/stats", tags=["Community"])
directory_router = APIRouter(prefix="/directory", tags=["Community"])


def _verification_payload(profile: VerificationProfile) -> VerificationResponse:
    return VerificationResponse(
        account_id=profile.account_id,
        status=profile.status.value,
        account_type=profile.account_type.value,
        id_number=profile.id_number,
        reviewed_by=profile.reviewed_by,
        reviewed_at=profile.reviewed_at,
    )


@router.get("/verifications/pending", response_model=PendingVerificationsResponse)
async def list_pending_verifications(
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> PendingVerificationsResponse:
    profiles = await VerificationWorkflow(session).list_pending(caller.account_id)
    return PendingVerificationsResponse(
        verifications=[_verification_payload(profile) for profile in profiles]
    )


@router.post("/verifications/{account_id}/approve", response_model=VerificationResponse)
async def approve_verification(
    account_id: str,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> VerificationResponse:
    """Approve an account. Approving an already approved account is a no-op."""
    profile = await VerificationWorkflow(session).approve(caller.account_id, account_id)
    return _verification_payload(profile)


@router.post("/verifications/{account_id}/reject", response_model=VerificationResponse)
async def reject_verification(
    account_id: str,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> VerificationResponse:
    profile = await VerificationWorkflow(session).reject(caller.account_id, account_id)
    return _verification_payload(profile)


@router.get("/accounts", response_model=AccountListingResponse)
async def list_accounts(
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> AccountListingResponse:
    listings = await AdminDirectoryService(session).list_accounts(caller.account_id)
    return AccountListingResponse(
        accounts=[AccountListingItem(**asdict(listing)) for listing in listings]
    )


@stats_router.get("/community", response_model=CommunityStatsResponse)
async def community_stats(
    session: AsyncSession = Depends(get_db_session),
) -> CommunityStatsResponse:
    """Public account counts by effective role."""
    stats = await AdminDirectoryService(session).community_stats()
    return CommunityStatsResponse(**asdict(stats))


@directory_router.get("", response_model=MemberDirectoryResponse)
async def member_directory(
    session: AsyncSession = Depends(get_db_session),
    _caller: Caller = Depends(get_current_caller),
) -> MemberDirectoryResponse:
    """Approved members, visible to any signed-in account."""
    members = await AdminDirectoryService(session).list_members()
    return MemberDirectoryResponse(members=[MemberItem(**asdict(member)) for member in members])
