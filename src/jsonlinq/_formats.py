"""Format selectors for the typed conversions between JsonValue and native types."""

from enum import Enum


class JsonEnumFormat(Enum):
    """
    Text style of an enum value converted to JSON.

    The case styles split member names into words at existing underscores
    and hyphens and at lower-to-upper case transitions; digits stay with
    the word before them.
    """

    PASCAL_CASE = "pascal_case"
    CAMEL_CASE = "camel_case"
    LOWER_CASE = "lower_case"
    UPPER_CASE = "upper_case"
    LOWER_CASE_WITH_UNDERSCORES = "lower_case_with_underscores"
    UPPER_CASE_WITH_UNDERSCORES = "upper_case_with_underscores"
    LOWER_CASE_WITH_HYPHENS = "lower_case_with_hyphens"
    UPPER_CASE_WITH_HYPHENS = "upper_case_with_hyphens"
    NUMBER = "number"
    NUMBER_AS_STRING = "number_as_string"


class JsonDateTimeFormat(Enum):
    """
    Encoding of a date and time value in JSON.

    AUTO detects the encoding when parsing. The formats up to TICKS are
    numeric and may be read from JSON numbers or strings; the ISO 8601 and
    MICROSOFT_LEGACY formats are strings only.
    """

    AUTO = "auto"
    UNIX_MILLISECONDS = "unix_milliseconds"
    UNIX_SECONDS = "unix_seconds"
    UNIX_SECONDS_FLOAT = "unix_seconds_float"
    TICKS = "ticks"
    ISO8601_JAVASCRIPT = "iso8601_javascript"
    ISO8601_ROUNDTRIP = "iso8601_roundtrip"
    ISO8601_UTC = "iso8601_utc"
    ISO8601_LOCAL = "iso8601_local"
    ISO8601_DATE = "iso8601_date"
    ISO8601_MINUTES = "iso8601_minutes"
    ISO8601_SECONDS = "iso8601_seconds"
    ISO8601_MILLISECONDS = "iso8601_milliseconds"
    MICROSOFT_LEGACY = "microsoft_legacy"


NUMERIC_DATE_TIME_FORMATS = frozenset(
    {
        JsonDateTimeFormat.AUTO,
        JsonDateTimeFormat.UNIX_MILLISECONDS,
        JsonDateTimeFormat.UNIX_SECONDS,
        JsonDateTimeFormat.UNIX_SECONDS_FLOAT,
        JsonDateTimeFormat.TICKS,
    }
)


class JsonTimeFormat(Enum):
    """
    Encoding of a time interval or time of day in JSON.

    TEXT is the constant format [-][d.]hh:mm:ss[.fffffff] and is a string
    only format.
    """

    AUTO = "auto"
    MILLISECONDS = "milliseconds"
    TICKS = "ticks"
    TEXT = "text"


NUMERIC_TIME_FORMATS = frozenset(
    {JsonTimeFormat.AUTO, JsonTimeFormat.MILLISECONDS, JsonTimeFormat.TICKS}
)
