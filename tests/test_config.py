import pytest

from facility_booking.config import resolve_log_level


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", "DEBUG"),
        ("WARNING", "WARNING"),
        ("verbose", "INFO"),
        ("", "INFO"),
        (None, "INFO"),
    ],
)
def test_resolve_log_level(name, expected):
    assert resolve_log_level(name) == expected
