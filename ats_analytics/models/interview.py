"""Pydantic models for interviews and scorecards."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from ats_analytics.models.base import RowModel


class Interview(RowModel):
    """A scheduled interview for an application.

    Attributes:
        id: Unique interview identifier.
        interviewer_id: Profile of the interviewer.
        status: scheduled, confirmed, completed, cancelled, ...
        scheduled_at: When the interview takes place.
        application_id: Application being interviewed.
        title: Display title.
    """
    id: str
    interviewer_id: Optional[str] = None
    status: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    application_id: Optional[str] = None
    title: Optional[str] = None


class CriteriaScore(BaseModel):
    """Score given against one scorecard criterion."""
    criteria_id: str
    score: float
    notes: Optional[str] = ""

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes(cls, value: Optional[str]) -> str:
        return value or ""


class InterviewScorecard(RowModel):
    """Feedback submitted by an interviewer for one interview.

    Attributes:
        id: Unique scorecard identifier.
        interview_id: Interview the scorecard belongs to.
        interviewer_id: Author of the scorecard.
        criteria_scores: Per-criterion scores decoded from the JSON column.
    """
    id: str
    interview_id: str
    interviewer_id: Optional[str] = None
    criteria_scores: List[CriteriaScore] = []
