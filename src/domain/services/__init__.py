"""Domain services."""

from src.domain.services.applications import (
    ApplicationDetail,
    ApplicationService,
    ApplicationSummary,
)
from src.domain.services.directory import (
    AdminDirectoryService,
    CommunityStats,
    MemberListing,
)
from src.domain.services.postings import JobPostingService
from src.domain.services.roles import RoleStore
from src.domain.services.verification import VerificationStore, VerificationWorkflow

__all__ = [
    "AdminDirectoryService",
    "ApplicationDetail",
    "ApplicationService",
    "ApplicationSummary",
    "CommunityStats",
    "JobPostingService",
    "MemberListing",
    "RoleStore",
    "VerificationStore",
    "VerificationWorkflow",
]
