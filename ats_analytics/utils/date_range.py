"""Resolves symbolic period selectors into absolute date boundaries."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from ats_analytics.utils.dates import EPOCH, ensure_utc, utc_now

ALL_TIME = "all"

# token -> (window days, trend days, English label, Arabic label)
RANGE_DEFINITIONS = {
    "7d": (7, 7, "Last 7 days", "آخر 7 أيام"),
    "30d": (30, 30, "Last 30 days", "آخر 30 يومًا"),
    "90d": (90, 90, "Last 90 days", "آخر 90 يومًا"),
    "12m": (365, 365, "Last 12 months", "آخر 12 شهرًا"),
    ALL_TIME: (None, 30, "All time", "كل الأوقات"),
}

SUPPORTED_RANGES = list(RANGE_DEFINITIONS)


class DateRangeBoundaries(BaseModel):
    """Absolute boundaries for a current period and its comparison period.

    Attributes:
        range: Resolved range token.
        start: First instant of the current period.
        end: Last instant of the current period ("now").
        previous_start: First instant of the comparison period.
        previous_end: End (exclusive) of the comparison period.
        trend_days: Number of daily buckets in the trend series.
        label: English display label.
    """
    range: str
    start: datetime
    end: datetime
    previous_start: datetime
    previous_end: datetime
    trend_days: int
    label: str

    @property
    def has_previous_period(self) -> bool:
        return self.previous_start < self.previous_end

    class Config:
        """Pydantic configuration."""
        frozen = True


def resolve_date_range(token: Optional[str], now: Optional[datetime] = None) -> DateRangeBoundaries:
    """Convert a range token (7d, 30d, 90d, 12m, all) into boundaries.

    Unknown or missing tokens resolve to ``all``. The comparison period is
    the equally long window immediately before ``start``. ``all`` has no
    meaningful previous period, so both of its comparison bounds collapse
    to the epoch.

    Args:
        token: Range selector.
        now: Reference instant; defaults to the current UTC time.

    Returns:
        DateRangeBoundaries for the token.
    """
    end = ensure_utc(now) if now is not None else utc_now()
    key = token if token in RANGE_DEFINITIONS else ALL_TIME
    window_days, trend_days, label, _ = RANGE_DEFINITIONS[key]

    if window_days is None:
        return DateRangeBoundaries(
            range=key,
            start=EPOCH,
            end=end,
            previous_start=EPOCH,
            previous_end=EPOCH,
            trend_days=trend_days,
            label=label,
        )

    window = timedelta(days=window_days)
    start = end - window
    return DateRangeBoundaries(
        range=key,
        start=start,
        end=end,
        previous_start=start - window,
        previous_end=start,
        trend_days=trend_days,
        label=label,
    )


def localized_label(boundaries: DateRangeBoundaries, language: str) -> str:
    """Display label for the range in ``language`` (``en`` or ``ar``)."""
    if language == "ar":
        return RANGE_DEFINITIONS[boundaries.range][3]
    return boundaries.label
