"""Culture-invariant parsing and formatting of numeric JSON text."""

import logging
import math
import re
import struct
from collections.abc import Callable
from decimal import Decimal
from decimal import InvalidOperation
from typing import Final

logger = logging.getLogger(__name__)

_WS: Final = r"[ \t\n\v\f\r]*"

# Integral styles: optional surrounding whitespace and a leading sign
_INTEGER_PATTERN: Final = re.compile(rf"{_WS}([+-]?[0-9]+){_WS}", re.ASCII)

# Float styles: the integral style plus decimal point and exponent
_FLOAT_PATTERN: Final = re.compile(
    rf"{_WS}([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?){_WS}",
    re.ASCII,
)

# Unix seconds as a float: decimal point but no exponent
_FIXED_POINT_PATTERN: Final = re.compile(
    rf"{_WS}([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)){_WS}", re.ASCII
)

_JSON_NUMBER_PATTERN: Final = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?", re.ASCII
)

_FLOAT_SYMBOLS: Final = {
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
    "NaN": math.nan,
}

INT8_RANGE: Final = (-(2**7), 2**7 - 1)
UINT8_RANGE: Final = (0, 2**8 - 1)
INT16_RANGE: Final = (-(2**15), 2**15 - 1)
UINT16_RANGE: Final = (0, 2**16 - 1)
INT32_RANGE: Final = (-(2**31), 2**31 - 1)
UINT32_RANGE: Final = (0, 2**32 - 1)
INT64_RANGE: Final = (-(2**63), 2**63 - 1)
UINT64_RANGE: Final = (0, 2**64 - 1)
INT128_RANGE: Final = (-(2**127), 2**127 - 1)
UINT128_RANGE: Final = (0, 2**128 - 1)

MAX_DECIMAL: Final = Decimal(2**96 - 1)

FLOAT16_DIGITS: Final = 5
FLOAT32_DIGITS: Final = 9


def is_json_number(text: str) -> bool:
    """Returns whether text matches the JSON number grammar exactly."""
    return _JSON_NUMBER_PATTERN.fullmatch(text) is not None


def parse_integer(
    text: str, bounds: tuple[int, int] | None = None
) -> int | None:
    """
    Parses integral text, optionally signed and surrounded by whitespace.

    bounds is an inclusive (min, max) range. Returns None for text that is
    not integral or falls outside bounds.
    """
    match = _INTEGER_PATTERN.fullmatch(text)
    if match is None:
        return None
    try:
        value = int(match.group(1))
    except ValueError as e:
        # int() refuses inputs above sys.get_int_max_str_digits()
        logger.debug("Integer text rejected: %s", e)
        return None
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        return None
    return value


def parse_float(text: str) -> float | None:
    """Parses float text; Infinity, -Infinity and NaN are accepted."""
    symbol = _FLOAT_SYMBOLS.get(text.strip())
    if symbol is not None:
        return symbol
    match = _FLOAT_PATTERN.fullmatch(text)
    if match is None:
        return None
    return float(match.group(1))


def parse_fixed_point(text: str) -> float | None:
    """Parses text allowing a decimal point but no exponent."""
    match = _FIXED_POINT_PATTERN.fullmatch(text)
    return None if match is None else float(match.group(1))


def parse_decimal(text: str) -> Decimal | None:
    """
    Parses float text exactly as a Decimal within the 96-bit decimal range.

    Symbolic values such as NaN are rejected.
    """
    match = _FLOAT_PATTERN.fullmatch(text)
    if match is None:
        return None
    try:
        value = Decimal(match.group(1))
    except InvalidOperation as e:
        logger.debug("Decimal text rejected: %s", e)
        return None
    return value if abs(value) <= MAX_DECIMAL else None


def _round_to(fmt: str, value: float) -> float:
    try:
        return struct.unpack(fmt, struct.pack(fmt, value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def round_float16(value: float) -> float:
    """Rounds a double to the nearest half precision value."""
    return _round_to("<e", value)


def round_float32(value: float) -> float:
    """Rounds a double to the nearest single precision value."""
    return _round_to("<f", value)


def _format_symbol(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return None


def format_float64(value: float) -> str:
    """Formats a double as the shortest text that round-trips."""
    symbol = _format_symbol(value)
    if symbol is not None:
        return symbol
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def _format_shortest(
    value: float, max_digits: int, rounder: Callable[[float], float]
) -> str:
    symbol = _format_symbol(value)
    if symbol is not None:
        return symbol
    for precision in range(1, max_digits + 1):
        text = f"{value:.{precision}g}"
        if rounder(float(text)) == value:
            return text
    return f"{value:.{max_digits}g}"


def format_float16(value: float) -> str:
    """Formats a half precision value as the shortest round-trip text."""
    return _format_shortest(round_float16(value), FLOAT16_DIGITS, round_float16)


def format_float32(value: float) -> str:
    """Formats a single precision value as the shortest round-trip text."""
    return _format_shortest(round_float32(value), FLOAT32_DIGITS, round_float32)


def format_decimal(value: Decimal) -> str:
    """Formats a decimal in fixed-point notation, keeping its scale."""
    return format(value, "f")
