"""
Timestamp parsing and timezone conversion for log lines.

Container runtimes prefix every line with an RFC 3339 timestamp carrying up
to nine fractional digits. Python's datetime only keeps microseconds, so the
fractional part is parsed and carried separately to keep full precision.
Converted timestamps always print nine fractional digits: stripping trailing
zeroes would break the column alignment of the rendered lines.
"""

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import NamedTuple, Optional

RFC3339_NANO_PATTERN = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<zone>Z|[+-][0-9]{2}:[0-9]{2})"
)

NANO_DIGITS = 9


class ParsedTimestamp(NamedTuple):
    """A timestamp split into a second-precision datetime and its nanoseconds."""

    moment: datetime
    nanosecond: int


def _parse_zone(zone: str) -> tzinfo:
    if zone == "Z":
        return timezone.utc
    sign = -1 if zone[0] == "-" else 1
    hours, minutes = int(zone[1:3]), int(zone[4:6])
    if minutes >= 60:
        raise ValueError(f"invalid offset minutes: {zone}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_timestamp(raw: str) -> Optional[ParsedTimestamp]:
    """
    Parse an RFC 3339 timestamp with optional fractional seconds.

    Args:
        raw: Timestamp text such as ``2023-01-01T00:00:00.123456789Z``

    Returns:
        Optional[ParsedTimestamp]: The parsed value, or None when ``raw`` is
                                   not a valid timestamp. Digits past the
                                   ninth fractional place are truncated.
    """
    match = RFC3339_NANO_PATTERN.fullmatch(raw)
    if not match:
        return None

    fraction = (match.group("fraction") or "")[:NANO_DIGITS]
    try:
        moment = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            tzinfo=_parse_zone(match.group("zone")),
        )
    except ValueError:
        return None

    return ParsedTimestamp(moment, int(fraction.ljust(NANO_DIGITS, "0")))


def format_timestamp(moment: datetime, nanosecond: int) -> str:
    """Format an aware datetime with exactly nine fractional digits."""
    offset = moment.utcoffset()
    if not offset:
        zone = "Z"
    else:
        total = int(offset.total_seconds())
        sign = "-" if total < 0 else "+"
        hours, minutes = divmod(abs(total) // 60, 60)
        zone = f"{sign}{hours:02d}:{minutes:02d}"

    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{nanosecond:09d}{zone}"
    )


def convert_timezone(raw: str, tz: Optional[tzinfo]) -> str:
    """
    Reformat a log timestamp in the given timezone.

    Args:
        raw: Timestamp token taken from the start of a log line
        tz: Target timezone, or None to leave the timestamp untouched

    Returns:
        str: The converted timestamp, or ``raw`` unchanged when no timezone
             is given or the token cannot be parsed or converted.
    """
    if tz is None:
        return raw

    parsed = parse_timestamp(raw)
    if parsed is None:
        return raw

    try:
        local = parsed.moment.astimezone(tz)
    except (OverflowError, ValueError):
        return raw

    return format_timestamp(local, parsed.nanosecond)
