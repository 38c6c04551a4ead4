"""
Unit tests for duration parsing
"""

from datetime import timedelta

import pytest

from utils.duration_utils import parse_duration, format_duration
from utils.exceptions import ConfigurationError


@pytest.mark.unit
class TestParseDuration:
    """Test cases for parse_duration"""

    @pytest.mark.parametrize("value,expected", [
        ("90s", 90.0),
        ("5m", 300.0),
        ("1h30m", 5400.0),
        ("250ms", 0.25),
        ("1.5h", 5400.0),
        ("0", 0.0),
        ("10", 10.0),
        (" 2m ", 120.0),
        (45, 45.0),
        (0.5, 0.5),
        (None, 0.0),
        (timedelta(minutes=2), 120.0),
    ])
    def test_valid_durations(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "abc", "5x", "1h 30m", "m5", "-5s", -1, "5s extra"])
    def test_invalid_durations(self, value):
        with pytest.raises(ConfigurationError):
            parse_duration(value)

    def test_unsupported_type(self):
        with pytest.raises(ConfigurationError):
            parse_duration([1, 2])


@pytest.mark.unit
class TestFormatDuration:
    """Test cases for format_duration"""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0s"),
        (30, "30s"),
        (300, "5m"),
        (5400, "1h30m"),
        (3725, "1h2m5s"),
        (0.25, "0.25s"),
    ])
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected
