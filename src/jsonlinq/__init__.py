"""
Lightweight JSON document model with typed accessors.

Parses JSON into JsonValue, JsonArray and JsonObject instances that keep
scalars as raw text, writes them back as compact JSON, and converts values
to and from native Python types through the try_get_X, as_X,
get_X_or_default and X_to_json functions.
"""

from typing import IO
from typing import Any

from jsonlinq import _accessors
from jsonlinq._accessors import *  # noqa: F403
from jsonlinq._datetime import DateTimeKind
from jsonlinq._formats import JsonDateTimeFormat
from jsonlinq._formats import JsonEnumFormat
from jsonlinq._formats import JsonTimeFormat
from jsonlinq._model import JsonArray
from jsonlinq._model import JsonObject
from jsonlinq._model import JsonProperty
from jsonlinq._model import JsonValue
from jsonlinq._model import JsonValueType
from jsonlinq._parser import JSONDecodeError
from jsonlinq._parser import JsonParser
from jsonlinq._parser import ParseConfig
from jsonlinq._parser import ParseState
from jsonlinq._parser import parse_value
from jsonlinq._profiling import HotPathStats
from jsonlinq._profiling import clear_hot_path_stats
from jsonlinq._profiling import get_hot_path_stats
from jsonlinq._profiling import log_hot_path_stats

__version__ = "0.1.0"


def loads(s: str | bytes | bytearray, **kwargs: Any) -> JsonValue:
    """
    Parses a JSON document into a JsonValue.

    Keyword arguments build a ParseConfig.
    """
    if not isinstance(s, str | bytes | bytearray):
        raise TypeError(
            f"the JSON object must be str, bytes or bytearray, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return parse_value(s, config)


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> JsonValue:
    """
    Parses a JSON document from a file-like object, reading it in chunks.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    config = ParseConfig(**kwargs)
    return parse_value(fp, config)


def dumps(obj: Any) -> str:
    """
    Serializes a JsonValue, container or native value to compact JSON.

    Undefined values are omitted from arrays and objects.
    """
    return str(JsonValue(obj))


def dump(obj: Any, fp: IO[str]) -> None:
    """
    Serializes obj as compact JSON to a file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj))


__all__ = sorted(
    [
        "DateTimeKind",
        "HotPathStats",
        "JSONDecodeError",
        "JsonArray",
        "JsonDateTimeFormat",
        "JsonEnumFormat",
        "JsonObject",
        "JsonParser",
        "JsonProperty",
        "JsonTimeFormat",
        "JsonValue",
        "JsonValueType",
        "ParseConfig",
        "ParseState",
        "clear_hot_path_stats",
        "dump",
        "dumps",
        "get_hot_path_stats",
        "load",
        "loads",
        "log_hot_path_stats",
        *_accessors.__all__,
    ]
)
