"""Pydantic models for the analytics service."""

from ats_analytics.models.application import Application
from ats_analytics.models.candidate import Candidate
from ats_analytics.models.context import TenantContext
from ats_analytics.models.interview import CriteriaScore, Interview, InterviewScorecard
from ats_analytics.models.job import Job
from ats_analytics.models.offer import Offer
from ats_analytics.models.organization import (
    Department,
    Profile,
    TeamInvite,
    UserRole,
    UserRoleDepartment
)

__all__ = [
    "Application",
    "Candidate",
    "TenantContext",
    "CriteriaScore",
    "Interview",
    "InterviewScorecard",
    "Job",
    "Offer",
    "Department",
    "Profile",
    "TeamInvite",
    "UserRole",
    "UserRoleDepartment"
]
