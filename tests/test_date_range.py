from datetime import datetime, timedelta, timezone

import pytest

from ats_analytics.utils.date_range import (
    SUPPORTED_RANGES,
    localized_label,
    resolve_date_range
)
from ats_analytics.utils.dates import EPOCH

from conftest import NOW


@pytest.mark.parametrize("token", ["7d", "30d", "90d", "12m"])
def test_windowed_ranges_have_ordered_boundaries(token):
    boundaries = resolve_date_range(token, now=NOW)

    assert boundaries.range == token
    assert boundaries.start < boundaries.end == NOW
    assert boundaries.previous_start < boundaries.previous_end
    assert boundaries.previous_end == boundaries.start
    assert boundaries.end - boundaries.start == boundaries.previous_end - boundaries.previous_start


@pytest.mark.parametrize("token,days,trend_days", [
    ("7d", 7, 7),
    ("30d", 30, 30),
    ("90d", 90, 90),
    ("12m", 365, 365),
])
def test_window_lengths_and_trend_days(token, days, trend_days):
    boundaries = resolve_date_range(token, now=NOW)

    assert boundaries.end - boundaries.start == timedelta(days=days)
    assert boundaries.trend_days == trend_days


def test_all_time_has_empty_previous_period():
    boundaries = resolve_date_range("all", now=NOW)

    assert boundaries.start == EPOCH
    assert boundaries.end == NOW
    assert boundaries.previous_start == boundaries.previous_end == EPOCH
    assert not boundaries.has_previous_period
    assert boundaries.trend_days == 30
    assert boundaries.label == "All time"


@pytest.mark.parametrize("token", [None, "", "14d", "ALL", "1y"])
def test_unknown_tokens_fall_back_to_all(token):
    assert resolve_date_range(token, now=NOW).range == "all"


def test_naive_now_is_treated_as_utc():
    boundaries = resolve_date_range("7d", now=datetime(2025, 6, 15, 12, 0))

    assert boundaries.end == datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_every_supported_range_has_arabic_label():
    for token in SUPPORTED_RANGES:
        boundaries = resolve_date_range(token, now=NOW)
        assert localized_label(boundaries, "ar") != boundaries.label
        assert localized_label(boundaries, "en") == boundaries.label
