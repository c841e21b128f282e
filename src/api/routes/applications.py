from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_caller, get_db_session
from src.api.schemas.applications import (
    ApplicationDecision,
    ApplicationDetailItem,
    ApplicationResponse,
    ApplicationSummaryItem,
    MyApplicationsResponse,
)
from src.domain import Caller
from src.domain.services import ApplicationService

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/mine", response_model=MyApplicationsResponse)
async def my_applications(
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> MyApplicationsResponse:
    summaries = await ApplicationService(session).list_for_applicant(caller.account_id)
    return MyApplicationsResponse(
        applications=[ApplicationSummaryItem.model_validate(summary) for summary in summaries]
    )


@router.get("/{application_id}", response_model=ApplicationDetailItem)
async def get_application(
    application_id: str,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> ApplicationDetailItem:
    detail = await ApplicationService(session).get_application(caller.account_id, application_id)
    return ApplicationDetailItem.model_validate(detail)


@router.post("/{application_id}/decision", response_model=ApplicationResponse)
async def decide_application(
    application_id: str,
    payload: ApplicationDecision,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> ApplicationResponse:
    """Accept or reject a submitted application (posting owner or admin)."""
    application = await ApplicationService(session).decide(
        caller.account_id, application_id, payload.outcome
    )
    return ApplicationResponse.model_validate(application)
