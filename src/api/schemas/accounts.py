from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from src.domain.models import Role


class RoleResponse(BaseModel):
    account_id: str
    role: Role | None = Field(None, description="Most recent assignment, if any")
    effective_role: Role = Field(..., description="Role used for decisions (defaults to alumni)")


class RoleUpdate(BaseModel):
    role: Role


class VerificationResponse(BaseModel):
    account_id: str
    status: str
    account_type: str | None = None
    id_number: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None


class AccountListingItem(BaseModel):
    account_id: str
    email: str
    full_name: str | None
    role: str
    verification_status: str
    account_type: str | None
    id_number: str | None
    created_at: datetime


class AccountListingResponse(BaseModel):
    accounts: list[AccountListingItem]


class PendingVerificationsResponse(BaseModel):
    verifications: list[VerificationResponse]


class CommunityStatsResponse(BaseModel):
    total_accounts: int
    alumni: int
    employers: int
    admins: int


class MemberItem(BaseModel):
    account_id: str
    full_name: str | None
    role: str
    account_type: str


class MemberDirectoryResponse(BaseModel):
    members: list[MemberItem]
