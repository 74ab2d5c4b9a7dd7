"""Pydantic models for job offers."""

from datetime import datetime
from typing import Optional

from ats_analytics.models.base import RowModel


class Offer(RowModel):
    """An offer extended to a candidate for one application.

    Attributes:
        id: Unique offer identifier.
        status: Offer status (draft, sent, accepted, declined, ...).
        application_id: Application the offer was made on.
        created_at: When the offer was created.
    """
    id: str
    status: Optional[str] = None
    application_id: Optional[str] = None
    created_at: Optional[datetime] = None
