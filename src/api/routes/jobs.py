"""Job postings and the applications made to them."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_caller, get_db_session
from src.api.schemas.applications import (
    ApplicationCreate,
    ApplicationDetailItem,
    ApplicationResponse,
    JobApplicationsResponse,
)
from src.api.schemas.jobs import JobCreate, JobResponse, JobsResponse, JobUpdate
from src.domain import Caller
from src.domain.services import ApplicationService, JobPostingService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=JobsResponse)
async def browse_jobs(
    session: AsyncSession = Depends(get_db_session),
) -> JobsResponse:
    """Active postings; anonymous visitors may browse."""
    postings = await JobPostingService(session).browse()
    return JobsResponse(jobs=[JobResponse.model_validate(posting) for posting in postings])


@router.get("/mine", response_model=JobsResponse)
async def my_jobs(
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> JobsResponse:
    postings = await JobPostingService(session).list_owned(caller.account_id)
    return JobsResponse(jobs=[JobResponse.model_validate(posting) for posting in postings])


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobCreate,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> JobResponse:
    posting = await JobPostingService(session).create(
        caller.account_id,
        title=payload.title,
        company=payload.company,
        location=payload.location,
        description=payload.description,
    )
    return JobResponse.model_validate(posting)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> JobResponse:
    posting = await JobPostingService(session).get(job_id)
    return JobResponse.model_validate(posting)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    payload: JobUpdate,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> JobResponse:
    """Edit or close a posting (owner or admin)."""
    changes = payload.model_dump(exclude_unset=True)
    posting = await JobPostingService(session).update(caller.account_id, job_id, **changes)
    return JobResponse.model_validate(posting)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: str,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> Response:
    await JobPostingService(session).delete(caller.account_id, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{job_id}/applications",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_to_job(
    job_id: str,
    payload: ApplicationCreate,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> ApplicationResponse:
    application = await ApplicationService(session).submit(
        caller.account_id,
        job_id,
        cover_letter=payload.cover_letter,
        resume_reference=payload.resume_reference,
    )
    return ApplicationResponse.model_validate(application)


@router.get("/{job_id}/applications", response_model=JobApplicationsResponse)
async def list_job_applications(
    job_id: str,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(get_current_caller),
) -> JobApplicationsResponse:
    """Applicants for a posting (owner or admin)."""
    details = await ApplicationService(session).list_for_job(job_id, caller.account_id)
    return JobApplicationsResponse(
        applications=[ApplicationDetailItem.model_validate(detail) for detail in details]
    )
