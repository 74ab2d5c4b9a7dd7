"""Pydantic models for job postings."""

from datetime import datetime
from typing import Optional

from ats_analytics.constants import ACTIVE_JOB_STATUSES
from ats_analytics.models.base import RowModel


class Job(RowModel):
    """A job posting owned by an organization.

    Attributes:
        id: Unique job identifier.
        status: Posting status (draft, published, open, closed, ...).
        department_id: Owning department, when assigned.
        title: Job title.
        created_at: When the job was created.
    """
    id: str
    status: Optional[str] = None
    department_id: Optional[str] = None
    title: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_JOB_STATUSES
