"""Base model for rows read from the database."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from ats_analytics.utils.dates import ensure_utc


class RowModel(BaseModel):
    """Read-only database row.

    Unknown columns are ignored and every timestamp is normalised to UTC so
    that window comparisons never mix naive and aware datetimes.
    """

    @field_validator("*")
    @classmethod
    def _normalise_timestamps(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value

    class Config:
        """Pydantic configuration."""
        frozen = True
