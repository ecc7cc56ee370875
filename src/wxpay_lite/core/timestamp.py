"""Timestamp codecs for the two wire formats.

Legacy XML fields are wall-clock times in China Standard Time (UTC+8)
without an offset marker, e.g. ``2023-01-02 15:04:05`` or the compact
``20230102150405``. They are interpreted with a fixed +08:00 offset,
independent of the host timezone.

Modern JSON fields are RFC 3339 strings with an explicit offset and must
not go through the UTC+8 codec.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from wxpay_lite.exceptions import MalformedTimestamp

UTC8 = timezone(timedelta(hours=8), "UTC+8")

UTC8_FORMAT = "%Y-%m-%d %H:%M:%S"
COMPACT_FORMAT = "%Y%m%d%H%M%S"

_UTC8_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
_COMPACT_PATTERN = re.compile(r"[0-9]{14}")


def _decode(value: str, pattern: re.Pattern[str], fmt: str, label: str) -> datetime:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        raise MalformedTimestamp(str(value), label)
    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError as e:
        raise MalformedTimestamp(value, label) from e
    return parsed.replace(tzinfo=UTC8)


def _to_utc8(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        raise ValueError("Naive datetime has no instant; attach a timezone first")
    return moment.astimezone(UTC8)


def decode_utc8(value: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM:SS`` as UTC+8.

    >>> decode_utc8("2023-01-02 15:04:05").astimezone(timezone.utc).isoformat()
    '2023-01-02T07:04:05+00:00'
    """
    return _decode(value, _UTC8_PATTERN, UTC8_FORMAT, "YYYY-MM-DD HH:MM:SS")


def encode_utc8(moment: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DD HH:MM:SS`` in UTC+8."""
    return _to_utc8(moment).strftime(UTC8_FORMAT)


def decode_compact(value: str) -> datetime:
    """Parse ``YYYYMMDDHHMMSS`` as UTC+8 (``time_start``, ``time_end``...)."""
    return _decode(value, _COMPACT_PATTERN, COMPACT_FORMAT, "YYYYMMDDHHMMSS")


def encode_compact(moment: datetime) -> str:
    return _to_utc8(moment).strftime(COMPACT_FORMAT)


def decode_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp from a modern JSON payload.

    A trailing ``Z`` means UTC.
    """
    text = value
    if isinstance(text, str) and text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except (TypeError, ValueError) as e:
        raise MalformedTimestamp(str(value), "RFC 3339") from e
    if parsed.tzinfo is None:
        raise MalformedTimestamp(value, "RFC 3339")
    return parsed


def encode_rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        raise ValueError("Naive datetime has no instant; attach a timezone first")
    return moment.isoformat(timespec="seconds")
