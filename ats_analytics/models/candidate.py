"""Pydantic models for candidates."""

from typing import Optional

from ats_analytics.models.base import RowModel


class Candidate(RowModel):
    """A person who applied to one or more jobs."""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
