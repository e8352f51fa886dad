"""
Date and time codecs for the typed JSON conversions.

A naive datetime has UNSPECIFIED kind, one whose tzinfo is timezone.utc
has UTC kind, and any other aware datetime is LOCAL. Ticks are 100 ns
intervals since 0001-01-01T00:00:00; Python resolves microseconds, so
parsed tick values are truncated to a multiple of 10.
"""

import re
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from enum import Enum

from jsonlinq._formats import NUMERIC_DATE_TIME_FORMATS
from jsonlinq._formats import NUMERIC_TIME_FORMATS
from jsonlinq._formats import JsonDateTimeFormat
from jsonlinq._formats import JsonTimeFormat
from jsonlinq._numbers import INT32_RANGE
from jsonlinq._numbers import INT64_RANGE
from jsonlinq._numbers import parse_fixed_point
from jsonlinq._numbers import parse_integer

TICKS_PER_MICROSECOND = 10
TICKS_PER_MILLISECOND = 10_000
TICKS_PER_SECOND = 10_000_000
TICKS_PER_MINUTE = 60 * TICKS_PER_SECOND
TICKS_PER_HOUR = 60 * TICKS_PER_MINUTE
TICKS_PER_DAY = 24 * TICKS_PER_HOUR

MAX_DATETIME_TICKS = 3_155_378_975_999_999_999
UNIX_EPOCH_TICKS = 621_355_968_000_000_000
UNIX_EPOCH_MILLISECONDS = UNIX_EPOCH_TICKS // TICKS_PER_MILLISECOND
UNIX_EPOCH_SECONDS = UNIX_EPOCH_TICKS // TICKS_PER_SECOND
MIN_UNIX_MILLISECONDS = -62_135_596_800_000
MAX_UNIX_MILLISECONDS = 253_402_300_799_999
MIN_UNIX_SECONDS = -62_135_596_800
MAX_UNIX_SECONDS = 253_402_300_799
MIN_TIMEDELTA_MILLISECONDS = -922_337_203_685_477
MAX_TIMEDELTA_MILLISECONDS = 922_337_203_685_477

_MIN_DATETIME = datetime(1, 1, 1)
_MIN_DATETIME_UTC = datetime(1, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)

_DATE = r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
_MINUTES = _DATE + r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
_SECONDS = _MINUTES + r":(?P<second>[0-9]{2})"
_OFFSET = r"[+-][0-9]{2}:[0-9]{2}"
_ZONE = rf"(?P<zone>Z|{_OFFSET})?"

_ISO_PATTERNS = {
    JsonDateTimeFormat.ISO8601_JAVASCRIPT: _SECONDS
    + r"\.(?P<fraction>[0-9]{3})(?P<zone>Z)",
    JsonDateTimeFormat.ISO8601_ROUNDTRIP: _SECONDS
    + r"\.(?P<fraction>[0-9]{7})"
    + _ZONE,
    JsonDateTimeFormat.ISO8601_UTC: _SECONDS
    + r"\.(?P<fraction>[0-9]{7})(?P<zone>Z)",
    JsonDateTimeFormat.ISO8601_LOCAL: _SECONDS
    + rf"\.(?P<fraction>[0-9]{{7}})(?P<zone>{_OFFSET})",
    JsonDateTimeFormat.ISO8601_DATE: _DATE,
    JsonDateTimeFormat.ISO8601_MINUTES: _MINUTES + _ZONE,
    JsonDateTimeFormat.ISO8601_SECONDS: _SECONDS + _ZONE,
    JsonDateTimeFormat.ISO8601_MILLISECONDS: _SECONDS
    + r"\.(?P<fraction>[0-9]{3})"
    + _ZONE,
}
_ISO_REGEXES = {
    fmt: re.compile(pattern, re.ASCII) for fmt, pattern in _ISO_PATTERNS.items()
}

# Year-month, date, hours, minutes, seconds or fractional seconds, each
# with an optional zone designator
_AUTO_ISO_REGEX = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})"
    r"(?:-(?P<day>[0-9]{2})"
    r"(?:T(?P<hour>[0-9]{2})"
    r"(?::(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]{1,7}))?)?)?)?)?" + _ZONE,
    re.ASCII,
)

_MS_DATE_REGEX = re.compile(
    r"/Date\((?P<ms>[+-]?[0-9]+)"
    r"(?:(?P<sign>[+-])(?P<hours>[0-9]{2})(?P<minutes>[0-9]{2}))?\)/",
    re.ASCII,
)

_TIME_TEXT_REGEX = re.compile(
    r"[ \t]*(?P<sign>-)?(?:(?P<days>[0-9]{1,8})\.)?"
    r"(?P<hours>[0-9]{1,2}):(?P<minutes>[0-9]{1,2})"
    r"(?::(?P<seconds>[0-9]{1,2})(?:\.(?P<fraction>[0-9]{1,7}))?)?[ \t]*",
    re.ASCII,
)


class DateTimeKind(Enum):
    """Whether a datetime is local time, UTC, or neither."""

    UNSPECIFIED = "unspecified"
    UTC = "utc"
    LOCAL = "local"


def kind_of(value: datetime) -> DateTimeKind:
    if value.tzinfo is None:
        return DateTimeKind.UNSPECIFIED
    if value.tzinfo is timezone.utc:
        return DateTimeKind.UTC
    return DateTimeKind.LOCAL


def specify_kind(value: datetime, kind: DateTimeKind) -> datetime:
    """Relabels value with kind, keeping its wall clock time."""
    naive = value.replace(tzinfo=None)
    if kind is DateTimeKind.UTC:
        return naive.replace(tzinfo=timezone.utc)
    if kind is DateTimeKind.LOCAL:
        return naive.astimezone()
    return naive


def as_utc(value: datetime) -> datetime:
    """Converts local values to UTC and relabels unspecified ones as UTC."""
    kind = kind_of(value)
    if kind is DateTimeKind.UTC:
        return value
    if kind is DateTimeKind.LOCAL:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=timezone.utc)


def as_local(value: datetime) -> datetime:
    """Converts UTC values to local time and relabels unspecified ones as local."""
    if kind_of(value) is DateTimeKind.LOCAL:
        return value
    # A naive value is read as local wall clock time
    return value.astimezone()


def convert_kind(value: datetime, desired_kind: DateTimeKind | None) -> datetime:
    """
    Adjusts value to desired_kind.

    Between UTC and LOCAL the instant is preserved and the clock time
    changes; to or from UNSPECIFIED only the label changes.
    """
    if desired_kind is None:
        return value
    kind = kind_of(value)
    if kind is desired_kind:
        return value
    if DateTimeKind.UNSPECIFIED in (kind, desired_kind):
        return specify_kind(value, desired_kind)
    if desired_kind is DateTimeKind.UTC:
        return value.astimezone(timezone.utc)
    return value.astimezone()


def datetime_to_ticks(value: datetime) -> int:
    """Ticks of the wall clock time of value, ignoring its zone."""
    return (value.replace(tzinfo=None) - _MIN_DATETIME) // _ONE_MICROSECOND * 10


def _from_ticks(ticks: int) -> datetime:
    return _MIN_DATETIME_UTC + timedelta(microseconds=ticks // 10)


def _from_unix_milliseconds(milliseconds: int) -> datetime:
    return _from_ticks(
        (milliseconds + UNIX_EPOCH_MILLISECONDS) * TICKS_PER_MILLISECOND
    )


def _from_unix_seconds(seconds: int) -> datetime:
    return _from_ticks((seconds + UNIX_EPOCH_SECONDS) * TICKS_PER_SECOND)


def to_unix_milliseconds(value: datetime) -> int:
    return (
        datetime_to_ticks(as_utc(value)) // TICKS_PER_MILLISECOND
        - UNIX_EPOCH_MILLISECONDS
    )


def to_unix_seconds(value: datetime) -> int:
    return datetime_to_ticks(as_utc(value)) // TICKS_PER_SECOND - UNIX_EPOCH_SECONDS


def _parse_offset(text: str) -> timedelta | None:
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 14 or minutes > 59:
        return None
    offset = timedelta(hours=hours, minutes=minutes)
    return -offset if text[0] == "-" else offset


def _apply_zone(
    value: datetime, zone: str | None, as_offset: bool
) -> datetime | None:
    """
    Attaches the parsed zone designator to a wall clock time.

    Without as_offset the result follows round-trip kind rules: no zone is
    UNSPECIFIED, Z is UTC and an explicit offset becomes local time. With
    as_offset a missing zone is taken as UTC and an offset is kept.
    """
    if zone is None:
        return value.replace(tzinfo=timezone.utc) if as_offset else value
    if zone == "Z":
        return value.replace(tzinfo=timezone.utc)
    offset = _parse_offset(zone)
    if offset is None:
        return None
    aware = value.replace(tzinfo=timezone(offset))
    if as_offset:
        return aware
    try:
        return aware.astimezone()
    except (OverflowError, ValueError):
        return None


def _parse_iso(
    text: str, regex: re.Pattern[str], as_offset: bool
) -> datetime | None:
    match = regex.fullmatch(text)
    if match is None:
        return None
    groups = match.groupdict()
    fraction = (groups.get("fraction") or "").ljust(7, "0")
    try:
        value = datetime(
            int(groups["year"]),
            int(groups["month"]),
            int(groups.get("day") or 1),
            int(groups.get("hour") or 0),
            int(groups.get("minute") or 0),
            int(groups.get("second") or 0),
            int(fraction) // 10,
        )
    except ValueError:
        return None
    return _apply_zone(value, groups.get("zone"), as_offset)


def _parse_microsoft_date(text: str, as_offset: bool) -> datetime | None:
    """Parses /Date(ms)/ and /Date(ms+hhmm)/."""
    match = _MS_DATE_REGEX.fullmatch(text)
    if match is None:
        return None
    milliseconds = parse_integer(
        match.group("ms"), (MIN_UNIX_MILLISECONDS, MAX_UNIX_MILLISECONDS)
    )
    if milliseconds is None:
        return None
    value = _from_unix_milliseconds(milliseconds)
    if match.group("sign") is None:
        return value
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes"))
    )
    if match.group("sign") == "-":
        offset = -offset
    try:
        return value.astimezone(timezone(offset) if as_offset else None)
    except (OverflowError, ValueError):
        return None


def _parse_float_seconds(text: str) -> datetime | None:
    seconds = parse_fixed_point(text)
    if seconds is None or not MIN_UNIX_SECONDS <= seconds <= MAX_UNIX_SECONDS:
        return None
    return _from_unix_milliseconds(int(seconds * 1000))


def _detect_datetime(text: str, is_number: bool, as_offset: bool) -> datetime | None:
    if not is_number:
        if len(text) >= 7 and text[4] == "-":
            return _parse_iso(text, _AUTO_ISO_REGEX, as_offset)
        value = _parse_microsoft_date(text, as_offset)
        if value is not None:
            return value

    number = parse_integer(text, (MIN_UNIX_MILLISECONDS, MAX_DATETIME_TICKS))
    if number is not None:
        if number > MAX_UNIX_MILLISECONDS:
            return _from_ticks(number)
        if INT32_RANGE[0] <= number <= INT32_RANGE[1]:
            return _from_unix_seconds(number)
        return _from_unix_milliseconds(number)

    return _parse_float_seconds(text)


def parse_datetime(
    text: str,
    fmt: JsonDateTimeFormat,
    is_number: bool,
    as_offset: bool = False,
) -> datetime | None:
    """
    Parses raw JSON text as a datetime in the given format.

    Numeric formats accept numbers and strings; the other formats accept
    only strings. Numeric encodings always yield UTC. With as_offset the
    result is always aware, as a date and time with offset.
    """
    if is_number and fmt not in NUMERIC_DATE_TIME_FORMATS:
        return None

    if fmt is JsonDateTimeFormat.AUTO:
        return _detect_datetime(text, is_number, as_offset)
    if fmt is JsonDateTimeFormat.UNIX_MILLISECONDS:
        number = parse_integer(text, (MIN_UNIX_MILLISECONDS, MAX_UNIX_MILLISECONDS))
        return None if number is None else _from_unix_milliseconds(number)
    if fmt is JsonDateTimeFormat.UNIX_SECONDS:
        number = parse_integer(text, (MIN_UNIX_SECONDS, MAX_UNIX_SECONDS))
        return None if number is None else _from_unix_seconds(number)
    if fmt is JsonDateTimeFormat.TICKS:
        number = parse_integer(text, (0, MAX_DATETIME_TICKS))
        return None if number is None else _from_ticks(number)
    if fmt is JsonDateTimeFormat.UNIX_SECONDS_FLOAT:
        return _parse_float_seconds(text)
    if fmt is JsonDateTimeFormat.MICROSOFT_LEGACY:
        return _parse_microsoft_date(text, as_offset)
    return _parse_iso(text, _ISO_REGEXES[fmt], as_offset)


def parse_datetime_custom(
    text: str, pattern: str, as_offset: bool = False
) -> datetime | None:
    """Parses text with a strptime pattern, applying the same zone rules."""
    try:
        value = datetime.strptime(text, pattern)
    except ValueError:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc) if as_offset else value
    if as_offset or value.tzinfo is timezone.utc:
        return value
    try:
        return value.astimezone()
    except (OverflowError, ValueError):
        return None


def _date_text(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _minutes_text(value: datetime) -> str:
    return f"{_date_text(value)}T{value.hour:02d}:{value.minute:02d}"


def _seconds_text(value: datetime) -> str:
    return f"{_minutes_text(value)}:{value.second:02d}"


def _milliseconds_text(value: datetime) -> str:
    return f"{_seconds_text(value)}.{value.microsecond // 1000:03d}"


def _ticks_text(value: datetime) -> str:
    return f"{_seconds_text(value)}.{value.microsecond * 10:07d}"


def _offset_text(value: datetime, separator: str = ":") -> str:
    offset = value.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{sign}{minutes // 60:02d}{separator}{minutes % 60:02d}"


def _kind_text(value: datetime) -> str:
    kind = kind_of(value)
    if kind is DateTimeKind.UTC:
        return "Z"
    if kind is DateTimeKind.LOCAL:
        return _offset_text(value)
    return ""


def _unix_seconds_float_text(value: datetime) -> str:
    milliseconds = to_unix_milliseconds(value)
    seconds, fraction = divmod(abs(milliseconds), 1000)
    sign = "-" if milliseconds < 0 else ""
    return f"{sign}{seconds}.{fraction:03d}"


def _format_numeric(value: datetime, fmt: JsonDateTimeFormat) -> str | None:
    if fmt is JsonDateTimeFormat.UNIX_MILLISECONDS:
        return str(to_unix_milliseconds(value))
    if fmt is JsonDateTimeFormat.UNIX_SECONDS:
        return str(to_unix_seconds(value))
    if fmt is JsonDateTimeFormat.UNIX_SECONDS_FLOAT:
        return _unix_seconds_float_text(value)
    if fmt is JsonDateTimeFormat.TICKS:
        return str(datetime_to_ticks(as_utc(value)))
    if fmt is JsonDateTimeFormat.ISO8601_JAVASCRIPT:
        return _milliseconds_text(as_utc(value)) + "Z"
    if fmt is JsonDateTimeFormat.ISO8601_UTC:
        return _ticks_text(as_utc(value)) + "Z"
    if fmt is JsonDateTimeFormat.ISO8601_DATE:
        return _date_text(value)
    return None


def format_datetime(value: datetime, fmt: JsonDateTimeFormat) -> str:
    """
    Formats value in fmt; AUTO must be resolved by the caller.

    Zone suffixes follow the kind of value: Z for UTC, the offset for local
    values and nothing for unspecified ones.
    """
    text = _format_numeric(value, fmt)
    if text is not None:
        return text
    if fmt is JsonDateTimeFormat.ISO8601_ROUNDTRIP:
        return _ticks_text(value) + _kind_text(value)
    if fmt is JsonDateTimeFormat.ISO8601_LOCAL:
        local = as_local(value)
        return _ticks_text(local) + _offset_text(local)
    if fmt is JsonDateTimeFormat.ISO8601_MINUTES:
        return _minutes_text(value) + _kind_text(value)
    if fmt is JsonDateTimeFormat.ISO8601_SECONDS:
        return _seconds_text(value) + _kind_text(value)
    if fmt is JsonDateTimeFormat.ISO8601_MILLISECONDS:
        return _milliseconds_text(value) + _kind_text(value)
    # MICROSOFT_LEGACY
    milliseconds = to_unix_milliseconds(value)
    if kind_of(value) is not DateTimeKind.LOCAL:
        return f"/Date({milliseconds})/"
    return f"/Date({milliseconds}{_offset_text(value, '')})/"


def format_datetime_offset(value: datetime, fmt: JsonDateTimeFormat) -> str:
    """
    Formats an aware value in fmt, always writing its own offset.

    A naive value is taken as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    text = _format_numeric(value, fmt)
    if text is not None:
        return text
    if fmt in (
        JsonDateTimeFormat.ISO8601_ROUNDTRIP,
        JsonDateTimeFormat.ISO8601_LOCAL,
    ):
        return _ticks_text(value) + _offset_text(value)
    if fmt is JsonDateTimeFormat.ISO8601_MINUTES:
        return _minutes_text(value) + _offset_text(value)
    if fmt is JsonDateTimeFormat.ISO8601_SECONDS:
        return _seconds_text(value) + _offset_text(value)
    if fmt is JsonDateTimeFormat.ISO8601_MILLISECONDS:
        return _milliseconds_text(value) + _offset_text(value)
    return f"/Date({to_unix_milliseconds(value)}{_offset_text(value, '')})/"


def timedelta_to_ticks(value: timedelta) -> int:
    return value // _ONE_MICROSECOND * TICKS_PER_MICROSECOND


def timedelta_from_ticks(ticks: int) -> timedelta:
    """Builds a timedelta, truncating sub-microsecond ticks toward zero."""
    microseconds = abs(ticks) // TICKS_PER_MICROSECOND
    return timedelta(microseconds=-microseconds if ticks < 0 else microseconds)


def _parse_time_text(text: str) -> int | None:
    match = _TIME_TEXT_REGEX.fullmatch(text)
    if match is None:
        return None
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    ticks = (
        int(match.group("days") or 0) * TICKS_PER_DAY
        + hours * TICKS_PER_HOUR
        + minutes * TICKS_PER_MINUTE
        + seconds * TICKS_PER_SECOND
        + int((match.group("fraction") or "").ljust(7, "0"))
    )
    if match.group("sign"):
        ticks = -ticks
    return ticks if INT64_RANGE[0] <= ticks <= INT64_RANGE[1] else None


def parse_time_ticks(text: str, fmt: JsonTimeFormat, is_number: bool) -> int | None:
    """
    Parses raw JSON text as a time interval in ticks.

    AUTO tries the constant text format for strings, then reads an integer
    as milliseconds if it is in the millisecond range of a 64-bit tick
    count, or as ticks otherwise.
    """
    if is_number and fmt not in NUMERIC_TIME_FORMATS:
        return None
    if fmt is JsonTimeFormat.TEXT:
        return _parse_time_text(text)
    if fmt is JsonTimeFormat.MILLISECONDS:
        number = parse_integer(
            text, (MIN_TIMEDELTA_MILLISECONDS, MAX_TIMEDELTA_MILLISECONDS)
        )
        return None if number is None else number * TICKS_PER_MILLISECOND
    if fmt is JsonTimeFormat.TICKS:
        return parse_integer(text, INT64_RANGE)

    if not is_number:
        ticks = _parse_time_text(text)
        if ticks is not None:
            return ticks
    number = parse_integer(text, INT64_RANGE)
    if number is None:
        return None
    if MIN_TIMEDELTA_MILLISECONDS <= number <= MAX_TIMEDELTA_MILLISECONDS:
        return number * TICKS_PER_MILLISECOND
    return number


def format_time_ticks(ticks: int, fmt: JsonTimeFormat) -> str:
    """Formats ticks in fmt; AUTO must be resolved by the caller."""
    if fmt is JsonTimeFormat.MILLISECONDS:
        milliseconds = abs(ticks) // TICKS_PER_MILLISECOND
        return str(-milliseconds if ticks < 0 else milliseconds)
    if fmt is JsonTimeFormat.TICKS:
        return str(ticks)

    sign = "-" if ticks < 0 else ""
    days, rest = divmod(abs(ticks), TICKS_PER_DAY)
    hours, rest = divmod(rest, TICKS_PER_HOUR)
    minutes, rest = divmod(rest, TICKS_PER_MINUTE)
    seconds, fraction = divmod(rest, TICKS_PER_SECOND)
    text = f"{sign}{days}." if days else sign
    text += f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{text}.{fraction:07d}" if fraction else text
