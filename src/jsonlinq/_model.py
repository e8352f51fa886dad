"""
In-memory JSON document model.

JsonValue is an immutable tagged value that stores scalars as their raw
JSON text, so numbers of any size round-trip without going through a
double. JsonArray and JsonObject are mutable containers shared by
reference between the JsonValue instances that wrap them; they are not
internally synchronized.
"""

import re
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import MutableSequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import IO
from typing import TYPE_CHECKING
from typing import Any
from typing import overload

from jsonlinq._numbers import format_decimal
from jsonlinq._numbers import format_float64
from jsonlinq._numbers import is_json_number
from jsonlinq._numbers import parse_float
from jsonlinq import _profiling

if TYPE_CHECKING:
    from jsonlinq._parser import ParseConfig

UNDEFINED_LITERAL = "undefined"
NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

# Objects switch from backward scans to a name -> index map at this size
_BUILD_INDEX_MAP_THRESHOLD = 5


class JsonValueType(Enum):
    """
    Declared type of a JsonValue.

    UNKNOWN_LITERAL marks a bare token that is neither a number nor one of
    the known literals; it is kept verbatim rather than rejected.
    """

    UNKNOWN_LITERAL = "unknown_literal"
    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


_PRIMITIVE_TYPES = frozenset(
    {
        JsonValueType.UNKNOWN_LITERAL,
        JsonValueType.UNDEFINED,
        JsonValueType.NULL,
        JsonValueType.BOOLEAN,
        JsonValueType.NUMBER,
        JsonValueType.STRING,
    }
)

# Types whose str() is the bare literal rather than JSON text
_LITERAL_TYPES = _PRIMITIVE_TYPES - {JsonValueType.STRING}

_KNOWN_LITERALS = {
    NULL_LITERAL: JsonValueType.NULL,
    TRUE_LITERAL: JsonValueType.BOOLEAN,
    FALSE_LITERAL: JsonValueType.BOOLEAN,
    UNDEFINED_LITERAL: JsonValueType.UNDEFINED,
}

_STRING_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_NEEDS_ESCAPE = re.compile(r'["\\\x00-\x1f]')

_UNSET: Any = object()


def _escape_char(match: re.Match[str]) -> str:
    char = match.group()
    return _STRING_ESCAPES.get(char) or f"\\u{ord(char):04x}"


def _write_string(parts: list[str], value: str) -> None:
    """Appends value as a quoted JSON string."""
    parts.append('"')
    parts.append(_NEEDS_ESCAPE.sub(_escape_char, value))
    parts.append('"')


class JsonValue:
    """
    Represents any JSON value: a scalar, an array, an object, or undefined.

    Scalars keep their raw JSON text; containers are held by reference, so
    copies of a JsonValue share the same JsonArray or JsonObject. JsonValue()
    with no argument is undefined, JsonValue(None) is null.
    """

    __slots__ = ("_type", "_value")

    UNDEFINED: "JsonValue"
    NULL: "JsonValue"
    TRUE: "JsonValue"
    FALSE: "JsonValue"

    _type: JsonValueType
    _value: Any

    def __init__(self, value: Any = _UNSET) -> None:
        self._type, self._value = _convert(value)

    @classmethod
    def _create(cls, value_type: JsonValueType, value: Any) -> "JsonValue":
        """Builds a value from a type and raw text without validation."""
        result = object.__new__(cls)
        if value is None and value_type is JsonValueType.STRING:
            value_type = JsonValueType.NULL
        result._type = value_type
        result._value = value
        return result

    @classmethod
    def create_number_unchecked(cls, text: str | None) -> "JsonValue":
        """
        Creates a number from raw text without checking its format.

        None creates null. The text is written to the output verbatim.
        """
        if text is None:
            return cls.NULL
        return cls._create(JsonValueType.NUMBER, text)

    @classmethod
    def create_literal_unchecked(cls, text: str | None) -> "JsonValue":
        """
        Creates an unknown literal from raw text without checking its format.

        None creates null. Known literals are recognized and returned as the
        corresponding value.
        """
        if text is None:
            return cls.NULL
        if text in _KNOWN_LITERALS:
            return _literal(text)
        return cls._create(JsonValueType.UNKNOWN_LITERAL, text)

    @classmethod
    def create_number(cls, value: int | float | Decimal | str) -> "JsonValue":
        """Creates a number, validating text against the JSON number grammar."""
        if isinstance(value, str):
            if not is_json_number(value):
                raise ValueError(f"Invalid JSON number: {value!r}")
            return cls._create(JsonValueType.NUMBER, value)
        if isinstance(value, bool) or not isinstance(
            value, int | float | Decimal
        ):
            raise TypeError(
                f"Cannot create a number from {type(value).__name__}"
            )
        return cls._create(JsonValueType.NUMBER, _format_number(value))

    @classmethod
    def create_string(cls, value: int | float | Decimal | str) -> "JsonValue":
        """Creates a string, formatting numbers with invariant culture."""
        if isinstance(value, str):
            return cls._create(JsonValueType.STRING, value)
        if isinstance(value, bool) or not isinstance(
            value, int | float | Decimal
        ):
            raise TypeError(
                f"Cannot create a string from {type(value).__name__}"
            )
        return cls._create(JsonValueType.STRING, _format_number(value))

    @classmethod
    def parse(
        cls, source: Any, config: "ParseConfig | None" = None
    ) -> "JsonValue":
        """Parses a JSON document from a string, bytes, or a stream."""
        from jsonlinq._parser import parse_value

        return parse_value(source, config)

    @classmethod
    def try_parse(
        cls, source: Any, config: "ParseConfig | None" = None
    ) -> tuple[bool, "JsonValue"]:
        """Like parse but returns (False, UNDEFINED) for malformed input."""
        from jsonlinq._parser import JSONDecodeError

        try:
            return True, cls.parse(source, config)
        except JSONDecodeError:
            return False, cls.UNDEFINED

    @property
    def type(self) -> JsonValueType:
        return self._type

    @property
    def is_undefined(self) -> bool:
        return self._type is JsonValueType.UNDEFINED

    @property
    def is_null(self) -> bool:
        return self._type is JsonValueType.NULL

    @property
    def as_boolean(self) -> bool | None:
        """The value as bool if the type is BOOLEAN, otherwise None."""
        if self._type is not JsonValueType.BOOLEAN:
            return None
        return self._value == TRUE_LITERAL

    @property
    def as_number(self) -> float | None:
        """The value as a double if the type is NUMBER and parsable."""
        if self._type is not JsonValueType.NUMBER:
            return None
        return parse_float(self._value)

    @property
    def as_string(self) -> str | None:
        """The value if the type is STRING, otherwise None."""
        return self._value if self._type is JsonValueType.STRING else None

    @property
    def as_literal(self) -> str | None:
        """
        The literal text of a non-string scalar.

        Undefined gives "undefined" and null gives "null"; strings and
        containers give None.
        """
        if self._type is JsonValueType.UNDEFINED:
            return UNDEFINED_LITERAL
        if self._type is JsonValueType.NULL:
            return NULL_LITERAL
        return self._value if self._type in _LITERAL_TYPES else None

    @property
    def as_array(self) -> "JsonArray | None":
        return self._value if self._type is JsonValueType.ARRAY else None

    @property
    def as_object(self) -> "JsonObject | None":
        return self._value if self._type is JsonValueType.OBJECT else None

    @property
    def _as_string_internal(self) -> str | None:
        """
        Raw backing text of a scalar, or None for null, undefined and containers.

        Every typed accessor reads the value through this property.
        """
        if self._type in _PRIMITIVE_TYPES:
            return self._value
        return None

    def __getitem__(self, key: int | str) -> "JsonValue":
        if isinstance(key, str):
            if self._type is JsonValueType.OBJECT:
                return self._value[key]
            return JsonValue.UNDEFINED
        if self._type is JsonValueType.ARRAY:
            return self._value[key]
        return JsonValue.UNDEFINED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return _equal(self, other)

    def __hash__(self) -> int:
        return hash((self._type, self._value))

    def __str__(self) -> str:
        if self._type in _LITERAL_TYPES:
            return self.as_literal  # type: ignore[return-value]
        parts: list[str] = []
        _write_value(parts, self)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"JsonValue({self._type.name}, {self!s})"

    def dump(self, fp: IO[str]) -> None:
        """Writes the compact JSON text of this value to fp."""
        parts: list[str] = []
        _write_value(parts, self)
        fp.write("".join(parts))


def _format_number(value: int | float | Decimal) -> str:
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, float):
        return format_float64(value)
    return str(int(value))


def _literal(text: str) -> JsonValue:
    if text == NULL_LITERAL:
        return JsonValue.NULL
    if text == UNDEFINED_LITERAL:
        return JsonValue.UNDEFINED
    return JsonValue.TRUE if text == TRUE_LITERAL else JsonValue.FALSE


def _convert(value: Any) -> tuple[JsonValueType, Any]:
    """Maps a native Python value to a (type, raw value) pair."""
    if value is _UNSET:
        return JsonValueType.UNDEFINED, None
    if value is None:
        return JsonValueType.NULL, None
    if isinstance(value, JsonValue):
        return value._type, value._value
    if isinstance(value, bool):
        return JsonValueType.BOOLEAN, TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, int | float | Decimal):
        return JsonValueType.NUMBER, _format_number(value)
    if isinstance(value, str):
        return JsonValueType.STRING, value
    if isinstance(value, JsonArray):
        return JsonValueType.ARRAY, value
    if isinstance(value, JsonObject):
        return JsonValueType.OBJECT, value
    if isinstance(value, Mapping):
        return JsonValueType.OBJECT, JsonObject(value)
    if isinstance(value, list | tuple):
        return JsonValueType.ARRAY, JsonArray(value)
    msg = f"Object of type {type(value).__name__} cannot be converted to a JSON value"
    raise TypeError(msg)


def _to_value(value: Any) -> JsonValue:
    return value if isinstance(value, JsonValue) else JsonValue(value)


JsonValue.UNDEFINED = JsonValue._create(JsonValueType.UNDEFINED, None)
JsonValue.NULL = JsonValue._create(JsonValueType.NULL, None)
JsonValue.TRUE = JsonValue._create(JsonValueType.BOOLEAN, TRUE_LITERAL)
JsonValue.FALSE = JsonValue._create(JsonValueType.BOOLEAN, FALSE_LITERAL)


@dataclass(frozen=True)
class JsonProperty:
    """
    A single named member of a JsonObject.

    The value is converted with JsonValue(...) when a native value is
    given, so JsonProperty("a", 1) holds the number 1.
    """

    name: str
    value: JsonValue = JsonValue.UNDEFINED

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError("name must be a string")
        if not isinstance(self.value, JsonValue):
            object.__setattr__(self, "value", JsonValue(self.value))

    def __str__(self) -> str:
        return f"{self.name}:{self.value}"

    def dump(self, fp: IO[str]) -> None:
        """
        Writes the property as "name":value to fp.

        Nothing is written when the value is undefined, matching how objects
        omit such properties.
        """
        if self.value._type is JsonValueType.UNDEFINED:
            return
        parts: list[str] = []
        _write_string(parts, self.name)
        parts.append(":")
        _write_value(parts, self.value)
        fp.write("".join(parts))


def _to_property(item: Any) -> JsonProperty:
    if isinstance(item, JsonProperty):
        return item
    if isinstance(item, tuple) and len(item) == 2:
        return JsonProperty(item[0], item[1])
    raise TypeError(
        f"Expected JsonProperty or (name, value) pair, got {type(item).__name__}"
    )


class JsonArray(MutableSequence[JsonValue]):
    """
    Ordered, mutable list of JsonValue items.

    Reading an index outside [0, len) returns JsonValue.UNDEFINED instead of
    raising; negative indexes are out of range for reads. Writes and
    deletions follow list semantics. Undefined items are kept and counted,
    but they are left out when the array is dumped.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self._items: list[JsonValue] = (
            [] if items is None else [_to_value(item) for item in items]
        )

    @classmethod
    def parse(
        cls, source: Any, config: "ParseConfig | None" = None
    ) -> "JsonArray":
        """Parses a JSON array; any other top-level value is an error."""
        from jsonlinq._parser import parse_array

        return parse_array(source, config)

    @classmethod
    def try_parse(
        cls, source: Any, config: "ParseConfig | None" = None
    ) -> tuple[bool, "JsonArray | None"]:
        from jsonlinq._parser import JSONDecodeError

        try:
            return True, cls.parse(source, config)
        except JSONDecodeError:
            return False, None

    @overload
    def __getitem__(self, index: int) -> JsonValue: ...

    @overload
    def __getitem__(self, index: slice) -> "JsonArray": ...

    def __getitem__(self, index: int | slice) -> "JsonValue | JsonArray":
        if isinstance(index, slice):
            return JsonArray(self._items[index])
        if 0 <= index < len(self._items):
            return self._items[index]
        return JsonValue.UNDEFINED

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._items[index] = [_to_value(item) for item in value]
        else:
            self._items[index] = _to_value(value)

    def __delitem__(self, index: int | slice) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[JsonValue]:
        return reversed(self._items)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, JsonValue):
            try:
                value = JsonValue(value)
            except TypeError:
                return False
        return value in self._items

    def insert(self, index: int, value: Any) -> None:
        self._items.insert(index, _to_value(value))

    def append(self, value: Any) -> None:
        self._items.append(_to_value(value))

    def extend(self, values: Iterable[Any]) -> None:
        self._items.extend([_to_value(value) for value in values])

    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        end = len(self._items) if stop is None else stop
        return self._items.index(_to_value(value), start, end)

    def count(self, value: Any) -> int:
        return self._items.count(_to_value(value))

    def remove(self, value: Any) -> None:
        self._items.remove(_to_value(value))

    def pop(self, index: int = -1) -> JsonValue:
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, JsonArray):
            return NotImplemented
        return _equal(self, other)

    def __hash__(self) -> int:
        result = len(self._items)
        for item in self._items:
            result = hash(
                (result, item if item._type in _PRIMITIVE_TYPES else item._type)
            )
        return result

    def __str__(self) -> str:
        parts: list[str] = []
        _write_container(parts, self)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"JsonArray({self!s})"

    def dump(self, fp: IO[str]) -> None:
        """Writes the compact JSON text of the array to fp."""
        fp.write(str(self))


class JsonObject:
    """
    Ordered collection of JsonProperty items with a name-keyed surface.

    Duplicate names are allowed and enumeration yields every property in
    insertion order. Lookups by name (obj["name"], try_get_value, contains,
    index_of) resolve to the last property with that name; a missing name
    reads as JsonValue.UNDEFINED. obj[int] addresses properties by
    position.
    """

    __slots__ = ("_name_to_index", "_properties")

    def __init__(
        self,
        properties: Mapping[str, Any]
        | Iterable[JsonProperty | tuple[str, Any]]
        | None = None,
        allow_duplicates: bool = True,
    ) -> None:
        self._properties: list[JsonProperty] = []
        self._name_to_index: dict[str, int] | None = None
        if properties is None:
            return
        items = (
            properties.items()
            if isinstance(properties, Mapping)
            else properties
        )
        for item in items:
            prop = _to_property(item)
            if allow_duplicates:
                self.append(prop)
            else:
                self[prop.name] = prop.value

    @classmethod
    def parse(
        cls, source: Any, config: "ParseConfig | None" = None
    ) -> "JsonObject":
        """Parses a JSON object; any other top-level value is an error."""
        from jsonlinq._parser import parse_object

        return parse_object(source, config)

    @classmethod
    def try_parse(
        cls, source: Any, config: "ParseConfig | None" = None
    ) -> tuple[bool, "JsonObject | None"]:
        from jsonlinq._parser import JSONDecodeError

        try:
            return True, cls.parse(source, config)
        except JSONDecodeError:
            return False, None

    def _get_index(self, name: str) -> int:
        """Returns the index of the last property called name, or -1."""
        if (
            self._name_to_index is None
            and len(self._properties) >= _BUILD_INDEX_MAP_THRESHOLD
        ):
            self._name_to_index = {
                prop.name: i for i, prop in enumerate(self._properties)
            }
        if self._name_to_index is not None:
            return self._name_to_index.get(name, -1)
        for i in range(len(self._properties) - 1, -1, -1):
            if self._properties[i].name == name:
                return i
        return -1

    def _invalidate(self) -> None:
        self._name_to_index = None

    @overload
    def __getitem__(self, key: str) -> JsonValue: ...

    @overload
    def __getitem__(self, key: int) -> JsonProperty: ...

    def __getitem__(self, key: str | int) -> JsonValue | JsonProperty:
        if isinstance(key, str):
            index = self._get_index(key)
            return (
                self._properties[index].value
                if index >= 0
                else JsonValue.UNDEFINED
            )
        return self._properties[key]

    def __setitem__(self, key: str | int, value: Any) -> None:
        if isinstance(key, str):
            index = self._get_index(key)
            if index < 0:
                self.append(JsonProperty(key, value))
            else:
                self._properties[index] = JsonProperty(key, value)
            return

        prop = _to_property(value)
        old = self._properties[key]
        self._properties[key] = prop
        if old.name != prop.name:
            self._invalidate()

    def __delitem__(self, key: str | int) -> None:
        if isinstance(key, str):
            index = self._get_index(key)
            if index < 0:
                raise KeyError(key)
            key = index
        self.remove_at(key)

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[JsonProperty]:
        return iter(self._properties)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self._get_index(item) >= 0
        return item in self._properties

    def contains(self, name: str) -> bool:
        return self._get_index(name) >= 0

    def index_of(self, item: str | JsonProperty) -> int:
        """
        Returns the index of a property, or -1 if there is none.

        A name resolves to the last property with that name; a JsonProperty
        resolves to its first equal occurrence.
        """
        if isinstance(item, str):
            return self._get_index(item)
        for i, prop in enumerate(self._properties):
            if prop == item:
                return i
        return -1

    def try_get_value(self, name: str) -> tuple[bool, JsonValue]:
        index = self._get_index(name)
        if index < 0:
            return False, JsonValue.UNDEFINED
        return True, self._properties[index].value

    def get(self, name: str, default: Any = None) -> Any:
        index = self._get_index(name)
        return self._properties[index].value if index >= 0 else default

    def add(self, name: str, value: Any) -> None:
        """Appends a property even if the name already exists."""
        self.append(JsonProperty(name, value))

    def append(self, item: JsonProperty | tuple[str, Any]) -> None:
        prop = _to_property(item)
        if self._name_to_index is not None:
            self._name_to_index[prop.name] = len(self._properties)
        self._properties.append(prop)

    def extend(self, items: Iterable[JsonProperty | tuple[str, Any]]) -> None:
        for item in list(items):
            self.append(item)

    def insert(self, index: int, item: JsonProperty | tuple[str, Any]) -> None:
        if index >= len(self._properties):
            self.append(item)
            return
        self._properties.insert(index, _to_property(item))
        self._invalidate()

    def remove(self, item: str | JsonProperty) -> bool:
        """
        Removes a property by name or by value.

        A name removes only the last property with that name. Returns whether
        anything was removed.
        """
        index = self.index_of(item)
        if index < 0:
            return False
        self.remove_at(index)
        return True

    def remove_at(self, index: int) -> None:
        del self._properties[index]
        self._invalidate()

    def clear(self) -> None:
        self._properties.clear()
        self._invalidate()

    def keys(self) -> list[str]:
        """Distinct property names in order of first appearance."""
        return list(dict.fromkeys(prop.name for prop in self._properties))

    def values(self) -> list[JsonValue]:
        """Values of every property, duplicates included."""
        return [prop.value for prop in self._properties]

    def items(self) -> list[tuple[str, JsonValue]]:
        return [(prop.name, prop.value) for prop in self._properties]

    def ensure_unique_keys(self) -> None:
        """
        Removes duplicate names, keeping the value of the last occurrence.

        Properties stay in order of the first appearance of each name.
        """
        last_index = {prop.name: i for i, prop in enumerate(self._properties)}
        if len(last_index) == len(self._properties):
            return
        self._properties = [self._properties[i] for i in last_index.values()]
        self._invalidate()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, JsonValue):
            return other.type is JsonValueType.OBJECT and _equal(self, other._value)
        if not isinstance(other, JsonObject):
            return NotImplemented
        return _equal(self, other)

    def __hash__(self) -> int:
        result = len(self._properties)
        for prop in self._properties:
            value = prop.value
            result = hash(
                (
                    result,
                    prop.name,
                    value if value._type in _PRIMITIVE_TYPES else value._type,
                )
            )
        return result

    def __str__(self) -> str:
        parts: list[str] = []
        _write_container(parts, self)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"JsonObject({self!s})"

    def dump(self, fp: IO[str]) -> None:
        """Writes the compact JSON text of the object to fp."""
        fp.write(str(self))


def _equal(left: Any, right: Any) -> bool:
    """
    Compares two values, arrays or objects of the same kind structurally.

    Nested containers are compared pair by pair from an explicit stack, so
    deep documents compare without recursion. Scalars compare by type and
    raw text.
    """
    stack: list[tuple[Any, Any]] = [(left, right)]
    while stack:
        a, b = stack.pop()
        if a is b:
            continue
        if isinstance(a, JsonValue):
            if a._type is not b._type:
                return False
            if a._type is JsonValueType.ARRAY or a._type is JsonValueType.OBJECT:
                stack.append((a._value, b._value))
            elif a._value != b._value:
                return False
        elif isinstance(a, JsonArray):
            if len(a._items) != len(b._items):
                return False
            stack.extend(zip(a._items, b._items))
        else:
            if len(a._properties) != len(b._properties):
                return False
            for prop_a, prop_b in zip(a._properties, b._properties):
                if prop_a.name != prop_b.name:
                    return False
                stack.append((prop_a.value, prop_b.value))
    return True


def _write_container(parts: list[str], container: JsonArray | JsonObject) -> None:
    value_type = (
        JsonValueType.ARRAY
        if isinstance(container, JsonArray)
        else JsonValueType.OBJECT
    )
    _write_value(parts, JsonValue._create(value_type, container))


def _write_value(parts: list[str], root: JsonValue) -> None:
    """
    Appends the compact JSON text of root to parts.

    Nested containers are walked with an explicit stack; undefined items
    and undefined-valued properties are skipped. A top-level undefined is
    written as its literal.
    """
    with _profiling.ProfileContext("write_value") as profile:
        start = len(parts)
        # Each frame: [children iterator, closing bracket, wrote a child yet]
        stack: list[list[Any]] = []
        pending: JsonValue | None = root
        while True:
            if pending is not None:
                value_type = pending._type
                if value_type is JsonValueType.STRING:
                    _write_string(parts, pending._value)
                elif value_type is JsonValueType.ARRAY:
                    parts.append("[")
                    stack.append([iter(pending._value._items), "]", False])
                elif value_type is JsonValueType.OBJECT:
                    parts.append("{")
                    stack.append([iter(pending._value._properties), "}", False])
                else:
                    parts.append(pending.as_literal)  # type: ignore[arg-type]
                pending = None

            if not stack:
                if _profiling.PROFILE_HOT_PATHS:
                    profile.processed(sum(map(len, parts[start:])))
                return

            frame = stack[-1]
            for child in frame[0]:
                if isinstance(child, JsonProperty):
                    if child.value._type is JsonValueType.UNDEFINED:
                        continue
                    if frame[2]:
                        parts.append(",")
                    _write_string(parts, child.name)
                    parts.append(":")
                    pending = child.value
                else:
                    if child._type is JsonValueType.UNDEFINED:
                        continue
                    if frame[2]:
                        parts.append(",")
                    pending = child
                frame[2] = True
                break
            else:
                parts.append(frame[1])
                stack.pop()
