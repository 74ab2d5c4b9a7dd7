import pytest

from ats_analytics.utils.rounding import allocate_percentages, average, percentage, round_half_up


@pytest.mark.parametrize("value,expected", [
    (17.5, 18),
    (17.49, 17),
    (2.5, 3),
    (0.5, 1),
    (-12.5, -12),
    (-12.51, -13),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_percentage_guards_empty_denominator():
    assert percentage(5, 0) == 0
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(1, 8) == 13


def test_average_of_empty_set_is_zero():
    assert average(0, 0) == 0
    assert average(105, 6) == 18


def test_allocated_percentages_never_exceed_one_hundred():
    assert allocate_percentages([1] * 6, 6) == [17, 17, 17, 17, 16, 16]
    assert allocate_percentages([1, 1, 1], 3) == [34, 33, 33]
    assert allocate_percentages([4, 3, 0, 0, 2, 1], 10) == [40, 30, 0, 0, 20, 10]


def test_allocated_percentages_leave_room_for_uncounted_items():
    # One of the two items falls in no bucket
    assert allocate_percentages([1, 0], 2) == [50, 0]
    assert sum(allocate_percentages([1, 1], 7)) == 29


def test_allocated_percentages_of_empty_whole():
    assert allocate_percentages([0, 0], 0) == [0, 0]
