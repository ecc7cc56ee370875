"""
Tests for wire timestamp codecs

Covers:
- UTC+8 "YYYY-MM-DD HH:MM:SS" decode/encode
- Compact "YYYYMMDDHHMMSS" form
- RFC 3339 for modern payloads
- Malformed input rejection
"""
from datetime import datetime, timedelta, timezone

import pytest

from wxpay_lite.core.timestamp import (
    UTC8,
    decode_compact,
    decode_rfc3339,
    decode_utc8,
    encode_compact,
    encode_rfc3339,
    encode_utc8,
)
from wxpay_lite.exceptions import MalformedTimestamp

INSTANT = datetime(2023, 1, 2, 7, 4, 5, tzinfo=timezone.utc)


# ============== UTC+8 Tests ==============

class TestDecodeUtc8:
    """Test parsing gateway wall-clock times"""

    def test_vector(self):
        assert decode_utc8("2023-01-02 15:04:05") == INSTANT

    def test_offset_attached(self):
        decoded = decode_utc8("2023-01-02 15:04:05")
        assert decoded.utcoffset() == timedelta(hours=8)

    def test_crosses_midnight(self):
        assert decode_utc8("2023-01-01 03:00:00") == datetime(2022, 12, 31, 19, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [
        "",
        "2023-01-02T15:04:05",
        "2023-1-2 15:04:05",
        "2023-01-02 15:04",
        " 2023-01-02 15:04:05",
        "2023-01-02 15:04:05 ",
        "2023-01-02 15:04:05+08:00",
        "20230102150405",
        "2023-13-02 15:04:05",
        "2023-02-30 15:04:05",
        "2023-01-02 24:00:00",
    ])
    def test_malformed(self, value):
        with pytest.raises(MalformedTimestamp) as exc_info:
            decode_utc8(value)
        assert exc_info.value.value == value


class TestEncodeUtc8:
    """Test rendering instants as gateway wall-clock times"""

    def test_vector(self):
        assert encode_utc8(INSTANT) == "2023-01-02 15:04:05"

    def test_other_offset(self):
        moment = datetime(2023, 1, 2, 2, 4, 5, tzinfo=timezone(timedelta(hours=-5)))
        assert encode_utc8(moment) == "2023-01-02 15:04:05"

    def test_utc8_input_unchanged(self):
        moment = datetime(2023, 1, 2, 15, 4, 5, tzinfo=UTC8)
        assert encode_utc8(moment) == "2023-01-02 15:04:05"

    def test_naive_rejected(self):
        with pytest.raises(ValueError):
            encode_utc8(datetime(2023, 1, 2, 15, 4, 5))

    def test_round_trip_preserves_instant(self):
        assert decode_utc8(encode_utc8(INSTANT)) == INSTANT


# ============== Compact Tests ==============

class TestCompact:
    """Test the compact form used by time_start/time_end"""

    def test_decode(self):
        assert decode_compact("20230102150405") == INSTANT

    def test_encode(self):
        assert encode_compact(INSTANT) == "20230102150405"

    @pytest.mark.parametrize("value", ["2023010215040", "2023-01-02 15:04:05", "20231302150405"])
    def test_malformed(self, value):
        with pytest.raises(MalformedTimestamp):
            decode_compact(value)


# ============== RFC 3339 Tests ==============

class TestRfc3339:
    """Test timestamps of modern JSON payloads"""

    def test_decode_with_offset(self):
        assert decode_rfc3339("2023-01-02T15:04:05+08:00") == INSTANT

    @pytest.mark.parametrize("value", ["2023-01-02T07:04:05Z", "2023-01-02T07:04:05z"])
    def test_decode_zulu(self, value):
        decoded = decode_rfc3339(value)
        assert decoded == INSTANT
        assert decoded.utcoffset() == timedelta(0)

    def test_decode_fractional_seconds(self):
        decoded = decode_rfc3339("2023-01-02T15:04:05.5+08:00")
        assert decoded == INSTANT + timedelta(milliseconds=500)

    def test_decode_keeps_offset(self):
        assert decode_rfc3339("2023-01-02T15:04:05+08:00").utcoffset() == timedelta(hours=8)

    def test_decode_without_offset_rejected(self):
        with pytest.raises(MalformedTimestamp):
            decode_rfc3339("2023-01-02T15:04:05")

    def test_decode_garbage_rejected(self):
        with pytest.raises(MalformedTimestamp):
            decode_rfc3339("yesterday")

    def test_encode(self):
        moment = datetime(2023, 1, 2, 15, 4, 5, tzinfo=UTC8)
        assert encode_rfc3339(moment) == "2023-01-02T15:04:05+08:00"

    def test_encode_naive_rejected(self):
        with pytest.raises(ValueError):
            encode_rfc3339(datetime(2023, 1, 2))
