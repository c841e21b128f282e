from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from src.domain.models import ApplicationStatus


class ApplicationCreate(BaseModel):
    cover_letter: str | None = Field(None, max_length=10_000)
    resume_reference: str | None = Field(
        None, max_length=512, description="Opaque reference or URL to a stored resume"
    )


class ApplicationDecision(BaseModel):
    outcome: Literal["accepted", "rejected"]


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    applicant_account_id: str
    status: ApplicationStatus
    cover_letter: str | None
    resume_reference: str | None
    decided_by: str | None = None
    decided_at: datetime | None = None
    created_at: datetime


class ApplicationSummaryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    job_title: str
    company: str
    status: str
    created_at: datetime
    decided_at: datetime | None


class ApplicationDetailItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    applicant_account_id: str
    applicant_email: str | None
    applicant_name: str | None
    status: str
    cover_letter: str | None
    resume_reference: str | None
    created_at: datetime
    decided_at: datetime | None


class MyApplicationsResponse(BaseModel):
    applications: list[ApplicationSummaryItem]


class JobApplicationsResponse(BaseModel):
    applications: list[ApplicationDetailItem]
