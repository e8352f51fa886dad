"""
Typed accessor tests for booleans, integers, floating point and decimals.

Validates conversion from numbers and numeric strings, range checks for
each integer width, precision rounding of the narrow float types and the
shapes of the try_get, as, get_or_default and to_json operations.
"""

import math
from decimal import Decimal

import pytest

import jsonlinq
from jsonlinq import JsonValue
from jsonlinq import JsonValueType


@pytest.mark.parametrize(
    "text,expected",
    [
        ("true", True),
        ("false", False),
        ('"true"', True),
        ('"false"', False),
        ("1", True),
        ("0", False),
        ('"1"', True),
        ('"0"', False),
        ("2.5", True),
        ("-1", True),
        ("0.0", False),
        ('" 3 "', True),
        ("1e3", True),
    ],
)
def test_bool_coercion(text: str, expected: bool) -> None:
    """
    Validates literals, "1" and "0", and any other number as nonzero.
    """
    value = jsonlinq.loads(text)
    assert jsonlinq.try_get_bool(value) == (True, expected)
    assert jsonlinq.as_bool(value) is expected


@pytest.mark.parametrize("text", ['""', '"yes"', '"True"', "null", "[1]", "{}"])
def test_bool_failures(text: str) -> None:
    """
    Validates non-boolean text fails softly with the zero value.
    """
    value = jsonlinq.loads(text)
    assert jsonlinq.try_get_bool(value) == (False, False)
    assert jsonlinq.as_bool(value) is None
    assert jsonlinq.get_bool_or_default(value, True) is True


def test_bool_to_json() -> None:
    """
    Validates bool encoding including null.
    """
    assert jsonlinq.bool_to_json(True) is JsonValue.TRUE
    assert jsonlinq.bool_to_json(False) is JsonValue.FALSE
    assert jsonlinq.bool_to_json(None) is JsonValue.NULL


@pytest.mark.parametrize(
    "as_name,low,high",
    [
        ("int8", -128, 127),
        ("uint8", 0, 255),
        ("int16", -32768, 32767),
        ("uint16", 0, 65535),
        ("int32", -(2**31), 2**31 - 1),
        ("uint32", 0, 2**32 - 1),
        ("int64", -(2**63), 2**63 - 1),
        ("uint64", 0, 2**64 - 1),
        ("int128", -(2**127), 2**127 - 1),
        ("uint128", 0, 2**128 - 1),
    ],
)
def test_integer_ranges(as_name: str, low: int, high: int) -> None:
    """
    Validates each integer width accepts its bounds and rejects one past.
    """
    as_x = getattr(jsonlinq, f"as_{as_name}")
    try_get_x = getattr(jsonlinq, f"try_get_{as_name}")
    to_json = getattr(jsonlinq, f"{as_name}_to_json")

    assert as_x(JsonValue(low)) == low
    assert as_x(JsonValue(high)) == high
    assert as_x(JsonValue.create_string(str(high))) == high
    assert as_x(JsonValue(low - 1)) is None
    assert try_get_x(JsonValue(high + 1)) == (False, 0)

    assert to_json(high, as_string=False).as_literal == str(high)
    assert to_json(low, as_string=True).as_string == str(low)
    assert to_json(None).is_null
    with pytest.raises(ValueError, match="out of range"):
        to_json(high + 1)
    with pytest.raises(ValueError, match="out of range"):
        to_json(low - 1)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("42", 42),
        ('"42"', 42),
        ('" -7 "', -7),
        ('"+5"', 5),
        ("007", 7),
        ("1.0", None),
        ("1e2", None),
        ('"0x10"', None),
        ('""', None),
        ("true", None),
        ("null", None),
        ("undefined", None),
        ("[]", None),
    ],
)
def test_int32_text_forms(text: str, expected: int | None) -> None:
    """
    Validates integer parsing accepts only integral text.
    """
    assert jsonlinq.as_int32(jsonlinq.loads(text)) == expected


def test_integer_default_encodings() -> None:
    """
    Validates widths up to 32 bits write numbers and wider ones strings.
    """
    assert jsonlinq.int32_to_json(5).type is JsonValueType.NUMBER
    assert jsonlinq.uint32_to_json(5).type is JsonValueType.NUMBER
    assert jsonlinq.int64_to_json(5).type is JsonValueType.STRING
    assert jsonlinq.uint64_to_json(5).type is JsonValueType.STRING
    assert jsonlinq.int128_to_json(5).type is JsonValueType.STRING
    assert jsonlinq.bigint_to_json(5).type is JsonValueType.STRING


def test_int64_max_roundtrip() -> None:
    """
    Validates the largest 64-bit value survives writing and reading.
    """
    value = 2**63 - 1
    encoded = jsonlinq.int64_to_json(value)
    assert jsonlinq.dumps(encoded) == '"9223372036854775807"'

    decoded = jsonlinq.loads(jsonlinq.dumps(encoded))
    assert jsonlinq.as_int64(decoded) == value
    assert jsonlinq.as_int64(decoded, JsonValueType.NUMBER) is None


def test_bigint() -> None:
    """
    Validates unbounded integers in both directions.
    """
    big = 10**40 + 1
    assert jsonlinq.as_bigint(jsonlinq.loads(str(big))) == big
    assert jsonlinq.bigint_to_json(-big, as_string=False).as_literal == str(-big)
    assert jsonlinq.get_bigint_or_default(JsonValue("x"), 9) == 9


def test_integer_to_json_type_errors() -> None:
    """
    Validates encoders reject non-integer values.
    """
    with pytest.raises(TypeError):
        jsonlinq.int32_to_json(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        jsonlinq.int8_to_json(True)
    with pytest.raises(TypeError):
        jsonlinq.bigint_to_json("1")  # type: ignore[arg-type]


def test_integer_or_default() -> None:
    """
    Validates defaults replace failed conversions only.
    """
    assert jsonlinq.get_int16_or_default(JsonValue(3), 99) == 3
    assert jsonlinq.get_int16_or_default(JsonValue(0), 99) == 0
    assert jsonlinq.get_int16_or_default(JsonValue(40000), 99) == 99
    assert jsonlinq.get_uint8_or_default(JsonValue(-1)) == 0


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1.5", 1.5),
        ('"1.5"', 1.5),
        ("1e3", 1000.0),
        ('" -2.25 "', -2.25),
        ('"Infinity"', math.inf),
        ('"-Infinity"', -math.inf),
        ("1e400", math.inf),
        ('"abc"', None),
        ('""', None),
        ("null", None),
    ],
)
def test_float64_parsing(text: str, expected: float | None) -> None:
    """
    Validates double parsing of numbers, numeric strings and symbols.
    """
    assert jsonlinq.as_float64(jsonlinq.loads(text)) == expected


def test_float64_nan() -> None:
    """
    Validates NaN parses from text and writes back as a string.
    """
    assert math.isnan(jsonlinq.as_float64(JsonValue("NaN")))  # type: ignore[arg-type]
    encoded = jsonlinq.float64_to_json(math.nan, as_string=True)
    assert encoded.as_string == "NaN"


def test_float32_rounding() -> None:
    """
    Validates single precision rounding and shortest round-trip output.
    """
    value = jsonlinq.as_float32(JsonValue(0.1))
    assert value != 0.1
    assert value == pytest.approx(0.1, rel=1e-7)
    assert jsonlinq.float32_to_json(value).as_literal == "0.1"
    assert jsonlinq.float32_to_json(16777217.0).as_literal == "16777216"
    assert jsonlinq.as_float32(JsonValue(1e39)) == math.inf


def test_float16_rounding() -> None:
    """
    Validates half precision rounding with overflow to infinity.
    """
    assert jsonlinq.as_float16(JsonValue(65504)) == 65504.0
    assert jsonlinq.as_float16(JsonValue(70000)) == math.inf
    assert jsonlinq.as_float16(JsonValue(-70000)) == -math.inf
    assert jsonlinq.as_float16(JsonValue(2049)) == 2048.0
    assert jsonlinq.float16_to_json(0.1).as_literal == "0.1"
    assert jsonlinq.try_get_float16(JsonValue("x")) == (False, 0.0)


def test_float_to_json() -> None:
    """
    Validates floats write as numbers by default and as strings on request.
    """
    assert jsonlinq.float64_to_json(2.5).as_literal == "2.5"
    assert jsonlinq.float64_to_json(3).as_literal == "3"
    assert jsonlinq.float64_to_json(2.5, as_string=True).as_string == "2.5"
    assert jsonlinq.float64_to_json(None).is_null
    with pytest.raises(TypeError):
        jsonlinq.float64_to_json("2.5")  # type: ignore[arg-type]


def test_decimal_exact() -> None:
    """
    Validates decimals are parsed exactly without a double in between.
    """
    value = jsonlinq.loads('["0.1", 12345678901234567890.123456789]')
    assert jsonlinq.as_decimal(value[0]) == Decimal("0.1")
    assert jsonlinq.as_decimal(value[1]) == Decimal("12345678901234567890.123456789")
    assert jsonlinq.as_decimal(JsonValue("1e2")) == Decimal("100")
    assert jsonlinq.as_decimal(JsonValue("NaN")) is None
    assert jsonlinq.as_decimal(JsonValue(str(2**96))) is None
    assert jsonlinq.try_get_decimal(JsonValue.NULL) == (False, Decimal(0))


def test_decimal_to_json() -> None:
    """
    Validates decimals write as strings by default and keep their scale.
    """
    assert jsonlinq.decimal_to_json(Decimal("1.50")).as_string == "1.50"
    assert (
        jsonlinq.decimal_to_json(Decimal("1.50"), as_string=False).as_literal
        == "1.50"
    )
    assert jsonlinq.decimal_to_json(7).as_string == "7"
    assert jsonlinq.decimal_to_json(None).is_null
    with pytest.raises(ValueError, match="decimal range"):
        jsonlinq.decimal_to_json(Decimal(2**96))
    with pytest.raises(ValueError, match="decimal range"):
        jsonlinq.decimal_to_json(Decimal("NaN"))
    with pytest.raises(TypeError):
        jsonlinq.decimal_to_json(1.5)  # type: ignore[arg-type]


def test_expected_type_gate() -> None:
    """
    Validates expected_type rejects values of another type unread.
    """
    number = JsonValue(5)
    string = JsonValue("5")

    assert jsonlinq.as_int32(number, JsonValueType.NUMBER) == 5
    assert jsonlinq.as_int32(string, JsonValueType.NUMBER) is None
    assert jsonlinq.as_int32(string, JsonValueType.STRING) == 5
    assert jsonlinq.as_int32(string, JsonValueType.UNDEFINED) == 5
    assert jsonlinq.as_float64(number, JsonValueType.STRING) is None
    assert jsonlinq.as_bool(JsonValue.TRUE, JsonValueType.STRING) is None


def test_invalid_arguments() -> None:
    """
    Validates invalid arguments raise instead of failing softly.
    """
    with pytest.raises(ValueError, match="expected_type"):
        jsonlinq.as_int32(JsonValue(1), "number")  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="Expected a JsonValue"):
        jsonlinq.as_int32(1)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="Expected a JsonValue"):
        jsonlinq.try_get_bool(None)  # type: ignore[arg-type]
