"""Role and verification lookups, and admin role changes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_caller, get_db_session
from src.api.schemas.accounts import RoleResponse, RoleUpdate, VerificationResponse
from src.domain import Caller, resolve_role
from src.domain.services import RoleStore, VerificationStore

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("/{account_id}/role", response_model=RoleResponse)
async def get_role(
    account_id: str,
    session: AsyncSession = Depends(get_db_session),
    _caller: Caller = Depends(get_current_caller),
) -> RoleResponse:
    role = await RoleStore(session).get_effective_role(account_id)
    return RoleResponse(account_id=account_id, role=role, effective_role=resolve_role(role))


@router.put("/{account_id}/role", response_model=RoleResponse)
async def set_role(
    account_id: str,
    payload: RoleUpdate,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> RoleResponse:
    """Assign a new role (admin-only). Earlier assignments are kept as history."""
    assignment = await RoleStore(session).set_role(caller.account_id, account_id, payload.role)
    return RoleResponse(
        account_id=account_id, role=assignment.role, effective_role=assignment.role
    )


@router.get("/{account_id}/verification", response_model=VerificationResponse)
async def get_verification(
    account_id: str,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> VerificationResponse:
    store = VerificationStore(session)
    profile = await store.get_profile(account_id)
    if profile is None:
        status = await store.get_status(account_id)
        return VerificationResponse(account_id=account_id, status=status.value)

    payload = VerificationResponse(
        account_id=account_id,
        status=profile.status.value,
        account_type=profile.account_type.value,
        reviewed_by=profile.reviewed_by,
        reviewed_at=profile.reviewed_at,
    )
    # The ID number is only disclosed to its owner
    if account_id == caller.account_id:
        payload.id_number = profile.id_number
    return payload
