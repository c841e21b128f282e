from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    location: str | None = Field(None, max_length=200)
    description: str | None = None


class JobUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    company: str | None = Field(None, min_length=1, max_length=200)
    location: str | None = Field(None, max_length=200)
    description: str | None = None
    is_active: bool | None = None

    @field_validator("title", "company", "is_active", mode="before")
    @classmethod
    def _not_null(cls, value: object) -> object:
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("must not be null")
        return value


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_account_id: str
    title: str
    company: str
    location: str | None
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class JobsResponse(BaseModel):
    jobs: list[JobResponse]
