"""Pydantic models for job applications."""

from datetime import datetime
from typing import Optional

from ats_analytics.models.base import RowModel


class Application(RowModel):
    """A candidate's application to a job.

    ``status`` is the current funnel stage. There is no stage transition log,
    so ``updated_at`` stands in for the moment an application reached its
    current stage.

    Attributes:
        id: Unique application identifier.
        status: Current pipeline stage (new, screening, interviewing, ...).
        source: Where the candidate came from (linkedin, referral, ...).
        job_id: Job applied to.
        candidate_id: Applicant.
        created_at: When the application was submitted.
        updated_at: Last status change.
        hired_at: Explicit hire timestamp, when recorded.
    """
    id: str
    status: Optional[str] = None
    source: Optional[str] = None
    job_id: Optional[str] = None
    candidate_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    hired_at: Optional[datetime] = None

    @property
    def is_hired(self) -> bool:
        return self.status == "hired"
