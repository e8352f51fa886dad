"""Enum member names in the JSON case styles, including flag combinations."""

import logging
import re
from enum import Enum
from enum import Flag

from jsonlinq._formats import JsonEnumFormat
from jsonlinq._numbers import parse_integer

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[_-]+")

# Lower or digit followed by upper, or the last capital of an acronym
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(name: str) -> list[str]:
    """
    Splits a member name into words.

    >>> split_words("HTTPServerError2Value")
    ['HTTP', 'Server', 'Error2', 'Value']
    >>> split_words("NOT_FOUND")
    ['NOT', 'FOUND']
    """
    words: list[str] = []
    for part in _SEPARATORS.split(name):
        if part:
            words.extend(_WORD_BOUNDARY.split(part))
    return words


def _is_identifier_style(name: str) -> bool:
    return "_" in name or "-" in name or name == name.upper()


def format_name(name: str, fmt: JsonEnumFormat) -> str:
    """Formats a single member name in one of the case styles."""
    if fmt in (JsonEnumFormat.PASCAL_CASE, JsonEnumFormat.CAMEL_CASE):
        if _is_identifier_style(name):
            words = [word.capitalize() for word in split_words(name)]
            text = "".join(words)
        else:
            text = name
        if not text:
            return text
        if fmt is JsonEnumFormat.CAMEL_CASE:
            return text[0].lower() + text[1:]
        return text[0].upper() + text[1:]

    words = split_words(name)
    if fmt is JsonEnumFormat.LOWER_CASE:
        return "".join(words).lower()
    if fmt is JsonEnumFormat.UPPER_CASE:
        return "".join(words).upper()
    if fmt is JsonEnumFormat.LOWER_CASE_WITH_UNDERSCORES:
        return "_".join(words).lower()
    if fmt is JsonEnumFormat.UPPER_CASE_WITH_UNDERSCORES:
        return "_".join(words).upper()
    if fmt is JsonEnumFormat.LOWER_CASE_WITH_HYPHENS:
        return "-".join(words).lower()
    return "-".join(words).upper()


def integer_value(value: Enum) -> int:
    """Returns the integer value of a member, for the numeric formats."""
    raw = value.value
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(
            f"{type(value).__name__}.{value.name} has no integer value"
        )
    return raw


def _member_names(value: Enum) -> list[str] | None:
    """
    Names of the members that make up value.

    Returns None when value cannot be spelled with names, which happens for
    an empty flag set or one with bits no member covers.
    """
    if value.name and "|" not in value.name:
        return [value.name]
    if not isinstance(value, Flag):
        return None
    covered = 0
    names = []
    for member in value:
        covered |= member.value
        names.append(member.name)
    if not names or covered != value.value:
        return None
    return names


def format_enum(value: Enum, fmt: JsonEnumFormat, flags_separator: str) -> str:
    """
    Formats a member or flag combination as text.

    Each flag name is formatted on its own and the names are joined with
    flags_separator. Values without a name are written as their number.
    """
    if fmt in (JsonEnumFormat.NUMBER, JsonEnumFormat.NUMBER_AS_STRING):
        return str(integer_value(value))
    names = _member_names(value)
    if names is None:
        return str(integer_value(value))
    return flags_separator.join(format_name(name, fmt) for name in names)


def _strip_separators(name: str) -> str:
    return _SEPARATORS.sub("", name).casefold()


def _from_number(number: int, enum_type: type[Enum]) -> Enum | None:
    try:
        return enum_type(number)
    except ValueError as e:
        logger.debug("Enum value rejected: %s", e)
        return None


def _match_part(
    part: str, enum_type: type[Enum], ignore_format: bool
) -> Enum | None:
    members = enum_type.__members__
    member = members.get(part)
    if member is not None:
        return member
    number = parse_integer(part)
    if number is not None:
        return _from_number(number, enum_type)
    if not ignore_format:
        return None

    folded = part.casefold()
    for name, member in members.items():
        if name.casefold() == folded:
            return member
    stripped = _strip_separators(part)
    for name, member in members.items():
        if _strip_separators(name) == stripped:
            return member
    return None


def parse_enum(
    text: str,
    enum_type: type[Enum],
    ignore_format: bool,
    flags_separator: str,
) -> Enum | None:
    """
    Parses member names or numbers joined by flags_separator.

    An empty separator disables splitting. With ignore_format names match
    regardless of case and of underscore or hyphen separators. Returns
    None if any part does not match.
    """
    parts = text.split(flags_separator) if flags_separator else [text]
    matches = []
    for part in parts:
        part = part.strip()
        if not part:
            return None
        member = _match_part(part, enum_type, ignore_format)
        if member is None:
            return None
        matches.append(member)

    if len(matches) == 1:
        return matches[0]
    total = 0
    for member in matches:
        if isinstance(member.value, bool) or not isinstance(member.value, int):
            return None
        total |= member.value
    return _from_number(total, enum_type)
