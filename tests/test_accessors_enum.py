"""
Enum accessor tests.

Validates member lookup by name and number, case-insensitive matching,
flag combinations and every JsonEnumFormat case style.
"""

from enum import Enum
from enum import Flag
from enum import IntEnum

import pytest

import jsonlinq
from jsonlinq import JsonEnumFormat
from jsonlinq import JsonValue
from jsonlinq import JsonValueType
from jsonlinq._enums import split_words


class Color(Enum):
    RED = 1
    DARK_RED = 2
    LIGHT_SKY_BLUE = 3


class Status(Enum):
    HttpError = 500
    NotFound = 404


class Permission(Flag):
    READ = 1
    WRITE_ACCESS = 2
    EXECUTE_NOW = 4


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Named(Enum):
    ALPHA = "a"


@pytest.mark.parametrize(
    "fmt,expected",
    [
        (JsonEnumFormat.PASCAL_CASE, "LightSkyBlue"),
        (JsonEnumFormat.CAMEL_CASE, "lightSkyBlue"),
        (JsonEnumFormat.LOWER_CASE, "lightskyblue"),
        (JsonEnumFormat.UPPER_CASE, "LIGHTSKYBLUE"),
        (JsonEnumFormat.LOWER_CASE_WITH_UNDERSCORES, "light_sky_blue"),
        (JsonEnumFormat.UPPER_CASE_WITH_UNDERSCORES, "LIGHT_SKY_BLUE"),
        (JsonEnumFormat.LOWER_CASE_WITH_HYPHENS, "light-sky-blue"),
        (JsonEnumFormat.UPPER_CASE_WITH_HYPHENS, "LIGHT-SKY-BLUE"),
        (JsonEnumFormat.NUMBER_AS_STRING, "3"),
    ],
)
def test_constant_name_formats(fmt: JsonEnumFormat, expected: str) -> None:
    """
    Validates every string format for an upper case member name.
    """
    encoded = jsonlinq.enum_to_json(Color.LIGHT_SKY_BLUE, fmt)
    assert encoded.as_string == expected


@pytest.mark.parametrize(
    "fmt,expected",
    [
        (JsonEnumFormat.PASCAL_CASE, "HttpError"),
        (JsonEnumFormat.CAMEL_CASE, "httpError"),
        (JsonEnumFormat.LOWER_CASE, "httperror"),
        (JsonEnumFormat.LOWER_CASE_WITH_UNDERSCORES, "http_error"),
        (JsonEnumFormat.UPPER_CASE_WITH_HYPHENS, "HTTP-ERROR"),
    ],
)
def test_pascal_name_formats(fmt: JsonEnumFormat, expected: str) -> None:
    """
    Validates formats for a member name already in Pascal case.
    """
    assert jsonlinq.enum_to_json(Status.HttpError, fmt).as_string == expected


def test_number_format() -> None:
    """
    Validates NUMBER writes a JSON number and needs an integer value.
    """
    encoded = jsonlinq.enum_to_json(Status.NotFound, JsonEnumFormat.NUMBER)
    assert encoded.type is JsonValueType.NUMBER
    assert encoded.as_literal == "404"

    with pytest.raises(ValueError, match="no integer value"):
        jsonlinq.enum_to_json(Named.ALPHA, JsonEnumFormat.NUMBER)
    assert jsonlinq.enum_to_json(Named.ALPHA).as_string == "Alpha"


def test_split_words() -> None:
    """
    Validates word splitting at separators, case changes and acronyms.
    """
    assert split_words("HTTPServerError2Value") == [
        "HTTP",
        "Server",
        "Error2",
        "Value",
    ]
    assert split_words("light_sky-blue") == ["light", "sky", "blue"]
    assert split_words("__A__") == ["A"]


@pytest.mark.parametrize(
    "text,expected",
    [
        ('"DARK_RED"', Color.DARK_RED),
        ('"2"', Color.DARK_RED),
        ("2", Color.DARK_RED),
        ('" RED "', Color.RED),
        ('"DarkRed"', None),
        ('"dark_red"', None),
        ('"9"', None),
        ('""', None),
        ("null", None),
        ("[1]", None),
    ],
)
def test_strict_parsing(text: str, expected: Color | None) -> None:
    """
    Validates strict matching on exact names and defined numbers.
    """
    value = jsonlinq.loads(text)
    assert jsonlinq.as_enum(value, Color) is expected
    assert jsonlinq.try_get_enum(value, Color) == (expected is not None, expected)


@pytest.mark.parametrize(
    "text",
    ["DarkRed", "darkRed", "darkred", "DARKRED", "dark_red", "dark-red", "DARK-RED"],
)
def test_ignore_format_parsing(text: str) -> None:
    """
    Validates ignore_format accepts every case style of a name.
    """
    value = JsonValue(text)
    assert jsonlinq.as_enum(value, Color, ignore_format=True) is Color.DARK_RED


@pytest.mark.parametrize("fmt", list(JsonEnumFormat))
def test_roundtrip_with_ignore_format(fmt: JsonEnumFormat) -> None:
    """
    Validates text written in any format parses back with ignore_format.
    """
    for member in Color:
        encoded = jsonlinq.enum_to_json(member, fmt)
        assert jsonlinq.as_enum(encoded, Color, ignore_format=True) is member


def test_flags_formatting() -> None:
    """
    Validates flag combinations write each name joined by the separator.
    """
    value = Permission.READ | Permission.WRITE_ACCESS
    assert jsonlinq.enum_to_json(value).as_string == "Read, WriteAccess"
    assert (
        jsonlinq.enum_to_json(
            value, JsonEnumFormat.LOWER_CASE_WITH_UNDERSCORES, "|"
        ).as_string
        == "read|write_access"
    )
    assert jsonlinq.enum_to_json(value, JsonEnumFormat.NUMBER).as_literal == "3"
    assert jsonlinq.enum_to_json(Permission(0)).as_string == "0"


def test_flags_parsing() -> None:
    """
    Validates flag parts are matched one by one and combined.
    """
    expected = Permission.READ | Permission.EXECUTE_NOW

    assert jsonlinq.as_enum(JsonValue("READ,EXECUTE_NOW"), Permission) == expected
    assert jsonlinq.as_enum(JsonValue("READ, 4"), Permission) == expected
    assert jsonlinq.as_enum(JsonValue("5"), Permission) == expected
    assert (
        jsonlinq.as_enum(
            JsonValue("read | execute-now"),
            Permission,
            ignore_format=True,
            flags_separator="|",
        )
        == expected
    )
    assert jsonlinq.as_enum(JsonValue("READ,,EXECUTE_NOW"), Permission) is None
    assert jsonlinq.as_enum(JsonValue("READ,BOGUS"), Permission) is None
    assert (
        jsonlinq.as_enum(JsonValue("READ,EXECUTE_NOW"), Permission, flags_separator="")
        is None
    )


def test_flags_roundtrip() -> None:
    """
    Validates multiword flag combinations survive a write and read cycle.
    """
    value = Permission.WRITE_ACCESS | Permission.EXECUTE_NOW
    for fmt in JsonEnumFormat:
        text = jsonlinq.dumps(jsonlinq.enum_to_json(value, fmt, ","))
        decoded = jsonlinq.loads(text)
        assert jsonlinq.as_enum(decoded, Permission, ignore_format=True) == value


def test_combining_non_flag_members() -> None:
    """
    Validates a combination must itself be a defined value.
    """
    assert jsonlinq.as_enum(JsonValue("LOW,HIGH"), Level) is None
    assert jsonlinq.as_enum(JsonValue("LOW,LOW"), Level) is Level.LOW
    assert jsonlinq.as_enum(JsonValue("ALPHA,ALPHA"), Named) is None


def test_enum_defaults_and_gate() -> None:
    """
    Validates defaults and the expected type gate.
    """
    number = JsonValue(1)
    assert jsonlinq.get_enum_or_default(number, Color, Color.DARK_RED) is Color.RED
    assert (
        jsonlinq.get_enum_or_default(JsonValue("x"), Color, Color.DARK_RED)
        is Color.DARK_RED
    )
    assert jsonlinq.get_enum_or_default(JsonValue("x"), Color) is None
    assert (
        jsonlinq.as_enum(number, Color, expected_type=JsonValueType.STRING) is None
    )


def test_enum_argument_errors() -> None:
    """
    Validates invalid enum types, values and formats raise.
    """
    assert jsonlinq.enum_to_json(None).is_null
    with pytest.raises(TypeError, match="Enum subclass"):
        jsonlinq.as_enum(JsonValue("RED"), int)  # type: ignore[type-var]
    with pytest.raises(TypeError, match="Enum member"):
        jsonlinq.enum_to_json(1)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Invalid JsonEnumFormat"):
        jsonlinq.enum_to_json(Color.RED, "pascal_case")  # type: ignore[arg-type]
