import pytest

from safewalk_routing.formatting import format_distance, format_duration


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0 min 0 sec"),
        (59, "0 min 59 sec"),
        (900, "15 min 0 sec"),
        (725.4, "12 min 5 sec"),
        (119.6, "2 min 0 sec"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


@pytest.mark.parametrize(
    "meters, expected",
    [
        (0, "0.0 mi"),
        (1000, "0.6 mi"),
        (1609.344, "1.0 mi"),
        (5000, "3.1 mi"),
    ],
)
def test_format_distance(meters, expected):
    assert format_distance(meters) == expected
