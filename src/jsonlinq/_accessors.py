"""
Typed conversions between JsonValue and native Python values.

Every native type X has four operations:

- try_get_X(json, ...) returns a (success, value) pair; value is the zero
  value of the type when the conversion fails.
- as_X(json, ...) returns the value or None.
- get_X_or_default(json, default, ...) returns the value or default.
- X_to_json(value, ...) encodes a native value; None gives null.

expected_type gates a conversion: unless it is None or UNDEFINED, a value
of another type fails without its text being inspected. A JSON value that
cannot be converted is never an error; an invalid format argument is.
"""

import logging
import re
import uuid
from datetime import date
from datetime import datetime
from datetime import time
from datetime import timedelta
from datetime import timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from typing import TypeAlias
from typing import TypeVar

from jsonlinq._datetime import TICKS_PER_DAY
from jsonlinq._datetime import TICKS_PER_HOUR
from jsonlinq._datetime import TICKS_PER_MICROSECOND
from jsonlinq._datetime import TICKS_PER_MINUTE
from jsonlinq._datetime import TICKS_PER_SECOND
from jsonlinq._datetime import DateTimeKind
from jsonlinq._datetime import convert_kind
from jsonlinq._datetime import format_datetime
from jsonlinq._datetime import format_datetime_offset
from jsonlinq._datetime import format_time_ticks
from jsonlinq._datetime import parse_datetime
from jsonlinq._datetime import parse_datetime_custom
from jsonlinq._datetime import parse_time_ticks
from jsonlinq._datetime import timedelta_from_ticks
from jsonlinq._datetime import timedelta_to_ticks
from jsonlinq._enums import format_enum
from jsonlinq._enums import integer_value
from jsonlinq._enums import parse_enum
from jsonlinq._formats import NUMERIC_DATE_TIME_FORMATS
from jsonlinq._formats import NUMERIC_TIME_FORMATS
from jsonlinq._formats import JsonDateTimeFormat
from jsonlinq._formats import JsonEnumFormat
from jsonlinq._formats import JsonTimeFormat
from jsonlinq._model import FALSE_LITERAL
from jsonlinq._model import TRUE_LITERAL
from jsonlinq._model import JsonValue
from jsonlinq._model import JsonValueType
from jsonlinq._numbers import INT8_RANGE
from jsonlinq._numbers import INT16_RANGE
from jsonlinq._numbers import INT32_RANGE
from jsonlinq._numbers import INT64_RANGE
from jsonlinq._numbers import INT128_RANGE
from jsonlinq._numbers import MAX_DECIMAL
from jsonlinq._numbers import UINT8_RANGE
from jsonlinq._numbers import UINT16_RANGE
from jsonlinq._numbers import UINT32_RANGE
from jsonlinq._numbers import UINT64_RANGE
from jsonlinq._numbers import UINT128_RANGE
from jsonlinq._numbers import format_decimal
from jsonlinq._numbers import format_float16
from jsonlinq._numbers import format_float32
from jsonlinq._numbers import format_float64
from jsonlinq._numbers import parse_decimal
from jsonlinq._numbers import parse_float
from jsonlinq._numbers import parse_integer
from jsonlinq._numbers import round_float16
from jsonlinq._numbers import round_float32

logger = logging.getLogger(__name__)

_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
    re.ASCII,
)

MIN_DATETIME_OFFSET = datetime.min.replace(tzinfo=timezone.utc)
ZERO_UUID = uuid.UUID(int=0)

DateTimeFormat: TypeAlias = JsonDateTimeFormat | str
TimeFormat: TypeAlias = JsonTimeFormat | str

E = TypeVar("E", bound=Enum)


# Argument checks


def _check_expected_type(expected_type: Any) -> None:
    if expected_type is not None and not isinstance(expected_type, JsonValueType):
        raise ValueError(f"Invalid expected_type: {expected_type!r}")


def _matches(json: Any, expected_type: JsonValueType | None) -> bool:
    """Applies the expected type gate after validating the arguments."""
    if not isinstance(json, JsonValue):
        raise TypeError(f"Expected a JsonValue, got {type(json).__name__}")
    _check_expected_type(expected_type)
    return expected_type in (None, JsonValueType.UNDEFINED) or json.type is expected_type


def _raw_text(json: Any, expected_type: JsonValueType | None) -> str | None:
    if not _matches(json, expected_type):
        return None
    return json._as_string_internal


def _check_format(fmt: Any, format_type: type[Enum], allow_custom: bool) -> None:
    if isinstance(fmt, format_type):
        return
    if allow_custom and isinstance(fmt, str):
        return
    raise ValueError(f"Invalid {format_type.__name__}: {fmt!r}")


def _check_kind(desired_kind: Any) -> None:
    if desired_kind is not None and not isinstance(desired_kind, DateTimeKind):
        raise ValueError(f"Invalid DateTimeKind: {desired_kind!r}")


def _check_integer(value: Any, bounds: tuple[int, int] | None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected an int, got {type(value).__name__}")
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        raise ValueError(f"{value} is out of range [{bounds[0]}, {bounds[1]}]")
    return value


def _number_or_string(text: str, as_string: bool) -> JsonValue:
    if as_string:
        return JsonValue.create_string(text)
    return JsonValue.create_number_unchecked(text)


# Boolean


def as_bool(json: JsonValue, expected_type: JsonValueType | None = None) -> bool | None:
    """
    Gets the value as a bool.

    Accepts true, false, "1" and "0"; any other text is parsed as a double
    where zero is False and any other number is True.
    """
    text = _raw_text(json, expected_type)
    if text is None or text == "":
        return None
    if text in (TRUE_LITERAL, "1"):
        return True
    if text in (FALSE_LITERAL, "0"):
        return False
    number = parse_float(text)
    return None if number is None else number != 0


def try_get_bool(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, bool]:
    result = as_bool(json, expected_type)
    return result is not None, bool(result)


def get_bool_or_default(
    json: JsonValue, default: bool = False, expected_type: JsonValueType | None = None
) -> bool:
    result = as_bool(json, expected_type)
    return default if result is None else result


def bool_to_json(value: bool | None) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    return JsonValue.TRUE if value else JsonValue.FALSE


# Integers


def _as_integer(
    json: JsonValue,
    bounds: tuple[int, int] | None,
    expected_type: JsonValueType | None,
) -> int | None:
    text = _raw_text(json, expected_type)
    return None if text is None else parse_integer(text, bounds)


def _integer_to_json(
    value: int | None, bounds: tuple[int, int] | None, as_string: bool
) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    return _number_or_string(str(_check_integer(value, bounds)), as_string)


def as_int8(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the signed 8-bit range."""
    return _as_integer(json, INT8_RANGE, expected_type)


def try_get_int8(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_int8(json, expected_type)
    return result is not None, result or 0


def get_int8_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_int8(json, expected_type)
    return default if result is None else result


def int8_to_json(value: int | None, as_string: bool = False) -> JsonValue:
    return _integer_to_json(value, INT8_RANGE, as_string)


def as_uint8(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the unsigned 8-bit range."""
    return _as_integer(json, UINT8_RANGE, expected_type)


def try_get_uint8(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_uint8(json, expected_type)
    return result is not None, result or 0


def get_uint8_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_uint8(json, expected_type)
    return default if result is None else result


def uint8_to_json(value: int | None, as_string: bool = False) -> JsonValue:
    return _integer_to_json(value, UINT8_RANGE, as_string)


def as_int16(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the signed 16-bit range."""
    return _as_integer(json, INT16_RANGE, expected_type)


def try_get_int16(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_int16(json, expected_type)
    return result is not None, result or 0


def get_int16_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_int16(json, expected_type)
    return default if result is None else result


def int16_to_json(value: int | None, as_string: bool = False) -> JsonValue:
    return _integer_to_json(value, INT16_RANGE, as_string)


def as_uint16(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the unsigned 16-bit range."""
    return _as_integer(json, UINT16_RANGE, expected_type)


def try_get_uint16(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_uint16(json, expected_type)
    return result is not None, result or 0


def get_uint16_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_uint16(json, expected_type)
    return default if result is None else result


def uint16_to_json(value: int | None, as_string: bool = False) -> JsonValue:
    return _integer_to_json(value, UINT16_RANGE, as_string)


def as_int32(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the signed 32-bit range."""
    return _as_integer(json, INT32_RANGE, expected_type)


def try_get_int32(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_int32(json, expected_type)
    return result is not None, result or 0


def get_int32_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_int32(json, expected_type)
    return default if result is None else result


def int32_to_json(value: int | None, as_string: bool = False) -> JsonValue:
    return _integer_to_json(value, INT32_RANGE, as_string)


def as_uint32(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the unsigned 32-bit range."""
    return _as_integer(json, UINT32_RANGE, expected_type)


def try_get_uint32(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_uint32(json, expected_type)
    return result is not None, result or 0


def get_uint32_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_uint32(json, expected_type)
    return default if result is None else result


def uint32_to_json(value: int | None, as_string: bool = False) -> JsonValue:
    return _integer_to_json(value, UINT32_RANGE, as_string)


def as_int64(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the signed 64-bit range."""
    return _as_integer(json, INT64_RANGE, expected_type)


def try_get_int64(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_int64(json, expected_type)
    return result is not None, result or 0


def get_int64_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_int64(json, expected_type)
    return default if result is None else result


def int64_to_json(value: int | None, as_string: bool = True) -> JsonValue:
    """
    Encodes a 64-bit integer, as a string by default.

    Consumers that read every JSON number as a double would lose
    precision above 2**53.
    """
    return _integer_to_json(value, INT64_RANGE, as_string)


def as_uint64(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the unsigned 64-bit range."""
    return _as_integer(json, UINT64_RANGE, expected_type)


def try_get_uint64(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_uint64(json, expected_type)
    return result is not None, result or 0


def get_uint64_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_uint64(json, expected_type)
    return default if result is None else result


def uint64_to_json(value: int | None, as_string: bool = True) -> JsonValue:
    return _integer_to_json(value, UINT64_RANGE, as_string)


def as_int128(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer in the signed 128-bit range."""
    return _as_integer(json, INT128_RANGE, expected_type)


def try_get_int128(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_int128(json, expected_type)
    return result is not None, result or 0


def get_int128_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_int128(json, expected_type)
    return default if result is None else result


def int128_to_json(value: int | None, as_string: bool = True) -> JsonValue:
    return _integer_to_json(value, INT128_RANGE, as_string)


def as_uint128(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> int | None:
    """Gets the value as an integer in the unsigned 128-bit range."""
    return _as_integer(json, UINT128_RANGE, expected_type)


def try_get_uint128(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_uint128(json, expected_type)
    return result is not None, result or 0


def get_uint128_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_uint128(json, expected_type)
    return default if result is None else result


def uint128_to_json(value: int | None, as_string: bool = True) -> JsonValue:
    return _integer_to_json(value, UINT128_RANGE, as_string)


def as_bigint(json: JsonValue, expected_type: JsonValueType | None = None) -> int | None:
    """Gets the value as an integer of any size."""
    return _as_integer(json, None, expected_type)


def try_get_bigint(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, int]:
    result = as_bigint(json, expected_type)
    return result is not None, result or 0


def get_bigint_or_default(
    json: JsonValue, default: int = 0, expected_type: JsonValueType | None = None
) -> int:
    result = as_bigint(json, expected_type)
    return default if result is None else result


def bigint_to_json(value: int | None, as_string: bool = True) -> JsonValue:
    return _integer_to_json(value, None, as_string)


# Floating point and decimal


def _check_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"Expected a float, got {type(value).__name__}")
    return float(value)


def as_float16(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> float | None:
    """Gets the value rounded to half precision; out of range values give ±inf."""
    text = _raw_text(json, expected_type)
    number = None if text is None else parse_float(text)
    return None if number is None else round_float16(number)


def try_get_float16(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, float]:
    result = as_float16(json, expected_type)
    return result is not None, 0.0 if result is None else result


def get_float16_or_default(
    json: JsonValue, default: float = 0.0, expected_type: JsonValueType | None = None
) -> float:
    result = as_float16(json, expected_type)
    return default if result is None else result


def float16_to_json(value: float | None, as_string: bool = False) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    return _number_or_string(format_float16(_check_float(value)), as_string)


def as_float32(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> float | None:
    """Gets the value rounded to single precision; out of range values give ±inf."""
    text = _raw_text(json, expected_type)
    number = None if text is None else parse_float(text)
    return None if number is None else round_float32(number)


def try_get_float32(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, float]:
    result = as_float32(json, expected_type)
    return result is not None, 0.0 if result is None else result


def get_float32_or_default(
    json: JsonValue, default: float = 0.0, expected_type: JsonValueType | None = None
) -> float:
    result = as_float32(json, expected_type)
    return default if result is None else result


def float32_to_json(value: float | None, as_string: bool = False) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    return _number_or_string(format_float32(_check_float(value)), as_string)


def as_float64(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> float | None:
    text = _raw_text(json, expected_type)
    return None if text is None else parse_float(text)


def try_get_float64(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, float]:
    result = as_float64(json, expected_type)
    return result is not None, 0.0 if result is None else result


def get_float64_or_default(
    json: JsonValue, default: float = 0.0, expected_type: JsonValueType | None = None
) -> float:
    result = as_float64(json, expected_type)
    return default if result is None else result


def float64_to_json(value: float | None, as_string: bool = False) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    return _number_or_string(format_float64(_check_float(value)), as_string)


def as_decimal(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> Decimal | None:
    """Gets the value as an exact Decimal within the 96-bit decimal range."""
    text = _raw_text(json, expected_type)
    return None if text is None else parse_decimal(text)


def try_get_decimal(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, Decimal]:
    result = as_decimal(json, expected_type)
    return result is not None, Decimal(0) if result is None else result


def get_decimal_or_default(
    json: JsonValue,
    default: Decimal = Decimal(0),
    expected_type: JsonValueType | None = None,
) -> Decimal:
    result = as_decimal(json, expected_type)
    return default if result is None else result


def decimal_to_json(value: Decimal | int | None, as_string: bool = True) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    if isinstance(value, bool) or not isinstance(value, Decimal | int):
        raise TypeError(f"Expected a Decimal, got {type(value).__name__}")
    value = Decimal(value)
    if not value.is_finite() or abs(value) > MAX_DECIMAL:
        raise ValueError(f"{value} is out of the decimal range")
    return _number_or_string(format_decimal(value), as_string)


# Strings


def try_get_string(
    json: JsonValue,
    expected_type: JsonValueType | None = None,
    allow_null_if_string_is_expected: bool = False,
) -> tuple[bool, str | None]:
    """
    Gets the raw text of any scalar value.

    null succeeds with None when no type is expected. With
    allow_null_if_string_is_expected, null also passes a STRING gate.
    """
    if _matches(json, expected_type):
        if json.is_null:
            return True, None
        text = json._as_string_internal
        if text is not None:
            return True, text
    allowed = (
        allow_null_if_string_is_expected
        and expected_type is JsonValueType.STRING
        and json.is_null
    )
    return allowed, None


def as_string(json: JsonValue, expected_type: JsonValueType | None = None) -> str | None:
    return try_get_string(json, expected_type)[1]


def get_string_or_default(
    json: JsonValue,
    default: str | None = None,
    expected_type: JsonValueType | None = None,
) -> str | None:
    success, result = try_get_string(json, expected_type)
    return result if success else default


def string_to_json(value: str | None) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    if not isinstance(value, str):
        raise TypeError(f"Expected a str, got {type(value).__name__}")
    return JsonValue.create_string(value)


# Enums


def _check_enum_type(enum_type: Any) -> None:
    if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
        raise TypeError(f"Expected an Enum subclass, got {enum_type!r}")


def as_enum(
    json: JsonValue,
    enum_type: type[E],
    ignore_format: bool = False,
    flags_separator: str = ",",
    expected_type: JsonValueType | None = None,
) -> E | None:
    """
    Gets a member of enum_type from a name, a flag combination or a number.

    With ignore_format names match regardless of case and of underscores
    and hyphens, so text written in any JsonEnumFormat style parses back.
    """
    _check_enum_type(enum_type)
    text = _raw_text(json, expected_type)
    if text is None:
        return None
    return parse_enum(text, enum_type, ignore_format, flags_separator)  # type: ignore[return-value]


def try_get_enum(
    json: JsonValue,
    enum_type: type[E],
    ignore_format: bool = False,
    flags_separator: str = ",",
    expected_type: JsonValueType | None = None,
) -> tuple[bool, E | None]:
    result = as_enum(json, enum_type, ignore_format, flags_separator, expected_type)
    return result is not None, result


def get_enum_or_default(
    json: JsonValue,
    enum_type: type[E],
    default: E | None = None,
    ignore_format: bool = False,
    flags_separator: str = ",",
    expected_type: JsonValueType | None = None,
) -> E | None:
    result = as_enum(json, enum_type, ignore_format, flags_separator, expected_type)
    return default if result is None else result


def enum_to_json(
    value: Enum | None,
    fmt: JsonEnumFormat = JsonEnumFormat.PASCAL_CASE,
    flags_separator: str = ", ",
) -> JsonValue:
    """
    Encodes a member or flag combination.

    NUMBER writes the integer value as a number; every other format writes
    a string.
    """
    _check_format(fmt, JsonEnumFormat, allow_custom=False)
    if value is None:
        return JsonValue.NULL
    if not isinstance(value, Enum):
        raise TypeError(f"Expected an Enum member, got {type(value).__name__}")
    if fmt is JsonEnumFormat.NUMBER:
        return JsonValue.create_number_unchecked(str(integer_value(value)))
    return JsonValue.create_string(format_enum(value, fmt, flags_separator))


# Date and time


def _resolve_date_time_format(
    fmt: JsonDateTimeFormat, as_string: bool, string_auto: JsonDateTimeFormat
) -> JsonDateTimeFormat:
    if fmt is JsonDateTimeFormat.AUTO:
        return string_auto if as_string else JsonDateTimeFormat.UNIX_MILLISECONDS
    if not as_string and fmt not in NUMERIC_DATE_TIME_FORMATS:
        raise ValueError(f"{fmt} can only be written as a string")
    return fmt


def _parse_date_time(
    json: JsonValue,
    fmt: DateTimeFormat,
    expected_type: JsonValueType | None,
    as_offset: bool,
) -> datetime | None:
    _check_format(fmt, JsonDateTimeFormat, allow_custom=True)
    text = _raw_text(json, expected_type)
    if text is None:
        return None
    if isinstance(fmt, JsonDateTimeFormat):
        is_number = json.type is JsonValueType.NUMBER
        return parse_datetime(text, fmt, is_number, as_offset)
    return parse_datetime_custom(text, fmt, as_offset)


def as_datetime(
    json: JsonValue,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    desired_kind: DateTimeKind | None = None,
    expected_type: JsonValueType | None = None,
) -> datetime | None:
    """
    Gets the value as a datetime, reading fmt or a strptime pattern.

    desired_kind adjusts the result: between UTC and LOCAL the instant is
    kept, while to or from UNSPECIFIED only the label changes.
    """
    _check_kind(desired_kind)
    value = _parse_date_time(json, fmt, expected_type, as_offset=False)
    if value is None:
        return None
    try:
        return convert_kind(value, desired_kind)
    except (OverflowError, ValueError) as e:
        logger.debug("Cannot convert %s to %s: %s", value, desired_kind, e)
        return None


def try_get_datetime(
    json: JsonValue,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    desired_kind: DateTimeKind | None = None,
    expected_type: JsonValueType | None = None,
) -> tuple[bool, datetime]:
    result = as_datetime(json, fmt, desired_kind, expected_type)
    return result is not None, datetime.min if result is None else result


def get_datetime_or_default(
    json: JsonValue,
    default: datetime = datetime.min,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    desired_kind: DateTimeKind | None = None,
    expected_type: JsonValueType | None = None,
) -> datetime:
    result = as_datetime(json, fmt, desired_kind, expected_type)
    return default if result is None else result


def datetime_to_json(
    value: datetime | None,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    as_string: bool = True,
) -> JsonValue:
    """
    Encodes a datetime.

    AUTO writes ISO8601_JAVASCRIPT as a string or UNIX_MILLISECONDS as a
    number. A strftime pattern always writes a string.
    """
    _check_format(fmt, JsonDateTimeFormat, allow_custom=True)
    if value is None:
        return JsonValue.NULL
    if not isinstance(fmt, JsonDateTimeFormat):
        return JsonValue.create_string(value.strftime(fmt))
    fmt = _resolve_date_time_format(
        fmt, as_string, JsonDateTimeFormat.ISO8601_JAVASCRIPT
    )
    try:
        text = format_datetime(value, fmt)
    except OverflowError as e:
        raise ValueError(f"{value} cannot be written as {fmt}") from e
    return _number_or_string(text, as_string)


def as_datetime_offset(
    json: JsonValue,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> datetime | None:
    """
    Gets the value as an aware datetime that keeps the parsed offset.

    Text without a zone designator is taken as UTC.
    """
    return _parse_date_time(json, fmt, expected_type, as_offset=True)


def try_get_datetime_offset(
    json: JsonValue,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> tuple[bool, datetime]:
    result = as_datetime_offset(json, fmt, expected_type)
    return result is not None, MIN_DATETIME_OFFSET if result is None else result


def get_datetime_offset_or_default(
    json: JsonValue,
    default: datetime = MIN_DATETIME_OFFSET,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> datetime:
    result = as_datetime_offset(json, fmt, expected_type)
    return default if result is None else result


def datetime_offset_to_json(
    value: datetime | None,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    as_string: bool = True,
) -> JsonValue:
    _check_format(fmt, JsonDateTimeFormat, allow_custom=True)
    if value is None:
        return JsonValue.NULL
    if not isinstance(fmt, JsonDateTimeFormat):
        return JsonValue.create_string(value.strftime(fmt))
    fmt = _resolve_date_time_format(
        fmt, as_string, JsonDateTimeFormat.ISO8601_JAVASCRIPT
    )
    try:
        text = format_datetime_offset(value, fmt)
    except OverflowError as e:
        raise ValueError(f"{value} cannot be written as {fmt}") from e
    return _number_or_string(text, as_string)


def as_date(
    json: JsonValue,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> date | None:
    """
    Gets the calendar date of the parsed value, in its own offset.

    ISO8601_ROUNDTRIP reads the same text as ISO8601_DATE.
    """
    if fmt is JsonDateTimeFormat.ISO8601_ROUNDTRIP:
        fmt = JsonDateTimeFormat.ISO8601_DATE
    value = _parse_date_time(json, fmt, expected_type, as_offset=True)
    return None if value is None else value.date()


def try_get_date(
    json: JsonValue,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> tuple[bool, date]:
    result = as_date(json, fmt, expected_type)
    return result is not None, date.min if result is None else result


def get_date_or_default(
    json: JsonValue,
    default: date = date.min,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> date:
    result = as_date(json, fmt, expected_type)
    return default if result is None else result


def date_to_json(
    value: date | None,
    fmt: DateTimeFormat = JsonDateTimeFormat.AUTO,
    as_string: bool = True,
) -> JsonValue:
    """
    Encodes a date as midnight with unspecified kind.

    AUTO and ISO8601_ROUNDTRIP write ISO8601_DATE as a string; AUTO writes
    UNIX_MILLISECONDS as a number.
    """
    _check_format(fmt, JsonDateTimeFormat, allow_custom=True)
    if value is None:
        return JsonValue.NULL
    if not isinstance(fmt, JsonDateTimeFormat):
        return JsonValue.create_string(value.strftime(fmt))
    if fmt is JsonDateTimeFormat.ISO8601_ROUNDTRIP:
        fmt = JsonDateTimeFormat.ISO8601_DATE
    fmt = _resolve_date_time_format(fmt, as_string, JsonDateTimeFormat.ISO8601_DATE)
    midnight = datetime(value.year, value.month, value.day)
    try:
        text = format_datetime(midnight, fmt)
    except OverflowError as e:
        raise ValueError(f"{value} cannot be written as {fmt}") from e
    return _number_or_string(text, as_string)


def _resolve_time_format(fmt: JsonTimeFormat, as_string: bool) -> JsonTimeFormat:
    if fmt is JsonTimeFormat.AUTO:
        return JsonTimeFormat.TEXT if as_string else JsonTimeFormat.MILLISECONDS
    if not as_string and fmt not in NUMERIC_TIME_FORMATS:
        raise ValueError(f"{fmt} can only be written as a string")
    return fmt


def _parse_ticks(
    json: JsonValue, fmt: JsonTimeFormat, expected_type: JsonValueType | None
) -> int | None:
    text = _raw_text(json, expected_type)
    if text is None:
        return None
    return parse_time_ticks(text, fmt, json.type is JsonValueType.NUMBER)


def as_timedelta(
    json: JsonValue,
    fmt: JsonTimeFormat = JsonTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> timedelta | None:
    """
    Gets the value as a timedelta.

    AUTO reads [-][d.]hh:mm[:ss[.fffffff]] text, then an integer as
    milliseconds, or as ticks when it exceeds the millisecond range.
    """
    _check_format(fmt, JsonTimeFormat, allow_custom=False)
    ticks = _parse_ticks(json, fmt, expected_type)
    return None if ticks is None else timedelta_from_ticks(ticks)


def try_get_timedelta(
    json: JsonValue,
    fmt: JsonTimeFormat = JsonTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> tuple[bool, timedelta]:
    result = as_timedelta(json, fmt, expected_type)
    return result is not None, timedelta(0) if result is None else result


def get_timedelta_or_default(
    json: JsonValue,
    default: timedelta = timedelta(0),
    fmt: JsonTimeFormat = JsonTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> timedelta:
    result = as_timedelta(json, fmt, expected_type)
    return default if result is None else result


def timedelta_to_json(
    value: timedelta | None,
    fmt: JsonTimeFormat = JsonTimeFormat.AUTO,
    as_string: bool = True,
) -> JsonValue:
    """Encodes a timedelta; AUTO is TEXT as a string or MILLISECONDS as a number."""
    _check_format(fmt, JsonTimeFormat, allow_custom=False)
    if value is None:
        return JsonValue.NULL
    ticks = timedelta_to_ticks(value)
    if not INT64_RANGE[0] <= ticks <= INT64_RANGE[1]:
        raise ValueError(f"{value} is out of the 64-bit tick range")
    fmt = _resolve_time_format(fmt, as_string)
    return _number_or_string(format_time_ticks(ticks, fmt), as_string)


def as_time(
    json: JsonValue,
    fmt: TimeFormat = JsonTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> time | None:
    """Gets a time of day; the interval must be within one day."""
    _check_format(fmt, JsonTimeFormat, allow_custom=True)
    if not isinstance(fmt, JsonTimeFormat):
        text = _raw_text(json, expected_type)
        if text is None:
            return None
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError as e:
            logger.debug("Time text rejected: %s", e)
            return None
    ticks = _parse_ticks(json, fmt, expected_type)
    if ticks is None or not 0 <= ticks < TICKS_PER_DAY:
        return None
    return (datetime.min + timedelta_from_ticks(ticks)).time()


def try_get_time(
    json: JsonValue,
    fmt: TimeFormat = JsonTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> tuple[bool, time]:
    result = as_time(json, fmt, expected_type)
    return result is not None, time.min if result is None else result


def get_time_or_default(
    json: JsonValue,
    default: time = time.min,
    fmt: TimeFormat = JsonTimeFormat.AUTO,
    expected_type: JsonValueType | None = None,
) -> time:
    result = as_time(json, fmt, expected_type)
    return default if result is None else result


def time_to_json(
    value: time | None,
    fmt: TimeFormat = JsonTimeFormat.AUTO,
    as_string: bool = True,
) -> JsonValue:
    _check_format(fmt, JsonTimeFormat, allow_custom=True)
    if value is None:
        return JsonValue.NULL
    if not isinstance(fmt, JsonTimeFormat):
        return JsonValue.create_string(value.strftime(fmt))
    ticks = (
        value.hour * TICKS_PER_HOUR
        + value.minute * TICKS_PER_MINUTE
        + value.second * TICKS_PER_SECOND
        + value.microsecond * TICKS_PER_MICROSECOND
    )
    fmt = _resolve_time_format(fmt, as_string)
    return _number_or_string(format_time_ticks(ticks, fmt), as_string)


# UUID


def as_uuid(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> uuid.UUID | None:
    """Gets a UUID from a STRING value in the 36 character hyphenated form."""
    text = _raw_text(json, expected_type)
    if text is None or json.type is not JsonValueType.STRING:
        return None
    if _UUID_PATTERN.fullmatch(text) is None:
        return None
    return uuid.UUID(text)


def try_get_uuid(
    json: JsonValue, expected_type: JsonValueType | None = None
) -> tuple[bool, uuid.UUID]:
    result = as_uuid(json, expected_type)
    return result is not None, ZERO_UUID if result is None else result


def get_uuid_or_default(
    json: JsonValue,
    default: uuid.UUID = ZERO_UUID,
    expected_type: JsonValueType | None = None,
) -> uuid.UUID:
    result = as_uuid(json, expected_type)
    return default if result is None else result


def uuid_to_json(value: uuid.UUID | None) -> JsonValue:
    if value is None:
        return JsonValue.NULL
    return JsonValue.create_string(str(value))


__all__ = [
    "as_bigint",
    "as_bool",
    "as_date",
    "as_datetime",
    "as_datetime_offset",
    "as_decimal",
    "as_enum",
    "as_float16",
    "as_float32",
    "as_float64",
    "as_int128",
    "as_int16",
    "as_int32",
    "as_int64",
    "as_int8",
    "as_string",
    "as_time",
    "as_timedelta",
    "as_uint128",
    "as_uint16",
    "as_uint32",
    "as_uint64",
    "as_uint8",
    "as_uuid",
    "bigint_to_json",
    "bool_to_json",
    "date_to_json",
    "datetime_offset_to_json",
    "datetime_to_json",
    "decimal_to_json",
    "enum_to_json",
    "float16_to_json",
    "float32_to_json",
    "float64_to_json",
    "get_bigint_or_default",
    "get_bool_or_default",
    "get_date_or_default",
    "get_datetime_offset_or_default",
    "get_datetime_or_default",
    "get_decimal_or_default",
    "get_enum_or_default",
    "get_float16_or_default",
    "get_float32_or_default",
    "get_float64_or_default",
    "get_int128_or_default",
    "get_int16_or_default",
    "get_int32_or_default",
    "get_int64_or_default",
    "get_int8_or_default",
    "get_string_or_default",
    "get_time_or_default",
    "get_timedelta_or_default",
    "get_uint128_or_default",
    "get_uint16_or_default",
    "get_uint32_or_default",
    "get_uint64_or_default",
    "get_uint8_or_default",
    "get_uuid_or_default",
    "int128_to_json",
    "int16_to_json",
    "int32_to_json",
    "int64_to_json",
    "int8_to_json",
    "string_to_json",
    "time_to_json",
    "timedelta_to_json",
    "try_get_bigint",
    "try_get_bool",
    "try_get_date",
    "try_get_datetime",
    "try_get_datetime_offset",
    "try_get_decimal",
    "try_get_enum",
    "try_get_float16",
    "try_get_float32",
    "try_get_float64",
    "try_get_int128",
    "try_get_int16",
    "try_get_int32",
    "try_get_int64",
    "try_get_int8",
    "try_get_string",
    "try_get_time",
    "try_get_timedelta",
    "try_get_uint128",
    "try_get_uint16",
    "try_get_uint32",
    "try_get_uint64",
    "try_get_uint8",
    "try_get_uuid",
    "uint128_to_json",
    "uint16_to_json",
    "uint32_to_json",
    "uint64_to_json",
    "uint8_to_json",
    "uuid_to_json",
]
