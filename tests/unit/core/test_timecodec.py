# tests/unit/core/test_timecodec.py
# Unit tests for the hh:mm:ss.cc time codec

import pytest

from stopclock.core.constants import MAX_EDITABLE_MS
from stopclock.core.exceptions import TimeEditError, ValidationError
from stopclock.core.timecodec import (
    TimeParts,
    format_time,
    ms_to_string,
    parse_time,
    parse_time_strict,
)


class TestFormatTime:

    # * Verify zero-padded components
    def test_parts(self):
        parts = format_time(12345)
        assert parts == TimeParts(hh="00", mm="00", ss="12", cc="34")
        assert parts.main == "00:00:12"
        assert parts.fraction == ".34"

    # * Verify known renderings
    @pytest.mark.parametrize(
        "ms, expected",
        [
            (0, "00:00:00.00"),
            (9, "00:00:00.00"),
            (10, "00:00:00.01"),
            (65000, "00:01:05.00"),
            (3723450, "01:02:03.45"),
            (MAX_EDITABLE_MS, "99:59:59.99"),
        ],
    )
    def test_ms_to_string(self, ms, expected):
        assert ms_to_string(ms) == expected

    # * Verify hours are not wrapped past 99
    def test_hours_unbounded(self):
        assert format_time(100 * 3600000).hh == "100"

    # * Verify float input floors to the centisecond
    def test_float_input(self):
        assert ms_to_string(1234.9) == "00:00:01.23"


class TestParseTime:

    # * Verify exact parse of full-width fields
    def test_full_fields(self):
        assert parse_time("01:02:03.45") == 3723450

    # * Verify single-digit fields are accepted
    def test_single_digit_fields(self):
        assert parse_time("1:2:3.4") == 3723040

    # * Verify surrounding whitespace is stripped
    def test_strips_whitespace(self):
        assert parse_time("  00:00:05.00\n") == 5000

    # * Verify rejected inputs
    @pytest.mark.parametrize(
        "text",
        [
            "00:60:00.00",
            "00:00:60.00",
            "00:00:00.100",
            "abc",
            "",
            "00:00:00",
            "000:00:00.00",
            "00:00:0a.00",
            "-1:00:00.00",
            "٠١:٠٠:٠٠.٠٠",
        ],
    )
    def test_invalid(self, text):
        assert parse_time(text) is None

    # * Verify parse inverts format on centisecond-aligned values
    @pytest.mark.parametrize("ms", [0, 10, 990, 59990, 3599990, 3723450, MAX_EDITABLE_MS])
    def test_inverse_of_format(self, ms):
        assert parse_time(ms_to_string(ms)) == ms


class TestParseTimeStrict:

    # * Verify valid text returns milliseconds
    def test_valid(self):
        assert parse_time_strict("00:01:00.00") == 60000

    # * Verify invalid text raises TimeEditError carrying the value
    def test_invalid_raises(self):
        with pytest.raises(TimeEditError) as exc_info:
            parse_time_strict("12:34")
        assert exc_info.value.value == "12:34"
        assert "hh:mm:ss.cs" in str(exc_info.value)
        assert isinstance(exc_info.value, ValidationError)
