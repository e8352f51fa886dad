"""
Single-pass JSON parser producing JsonValue trees.

The parser reads one character at a time with a single character of
lookahead and never backtracks. Nesting is tracked with an explicit stack
of containers plus a ParseState, so deeply nested input is bounded by
memory rather than by the interpreter recursion limit.
"""

import codecs
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import TypeAlias

from jsonlinq._model import JsonArray
from jsonlinq._model import JsonObject
from jsonlinq._model import JsonProperty
from jsonlinq._model import JsonValue
from jsonlinq._model import JsonValueType
from jsonlinq import _profiling

Position: TypeAlias = int

_WHITESPACE = frozenset(" \t\r\n")
_LITERAL_END = frozenset(",}]")
_NUMBER_CHARS = frozenset("0123456789-.eE+")
_LITERAL_CHARS = frozenset(
    "0123456789-.+abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_PLAIN_STRING_RUN = re.compile(r'[^"\\]*')
_WHITESPACE_RUN = re.compile(r"[ \t\r\n]*")
_CONTAINER_TYPES = frozenset((JsonValueType.ARRAY, JsonValueType.OBJECT))


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with precise position information.

    pos is the zero-based character offset of the offending character;
    lineno and colno are one-based. When the whole document is available
    as doc they are derived from it, otherwise the reader supplies them.
    """

    def __init__(
        self,
        msg: str,
        doc: str = "",
        pos: Position = 0,
        *,
        lineno: int | None = None,
        colno: int | None = None,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        if lineno is None:
            lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        if colno is None:
            colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1
        self.lineno = lineno
        self.colno = colno

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")


class ParseState(Enum):
    """
    What the parser expects next.

    OBJECT_KEY and ARRAY_VALUE follow a comma, where a closing bracket
    would be a trailing comma.
    """

    VALUE = "value"
    OBJECT_START = "object_start"
    OBJECT_KEY = "object_key"
    OBJECT_COLON = "object_colon"
    OBJECT_COMMA = "object_comma"
    ARRAY_START = "array_start"
    ARRAY_VALUE = "array_value"
    ARRAY_COMMA = "array_comma"


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    encoding decodes bytes and binary streams. allow_trailing_data stops
    the parser right after the first value instead of requiring the rest
    of the input to be whitespace, which also makes stream input read one
    character at a time.
    """

    encoding: str = "utf-8"
    allow_trailing_data: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.encoding, str):
            raise TypeError("encoding must be a string")
        if not isinstance(self.allow_trailing_data, bool):
            raise TypeError("allow_trailing_data must be a boolean")
        codecs.lookup(self.encoding)


_DEFAULT_CONFIG = ParseConfig()


class CharReader:
    """
    Character source with one character of lookahead.

    Wraps a str, bytes, or any object with read(n) returning str or bytes,
    and tracks the offset, line and column of what it has consumed.
    """

    def __init__(self, source: Any, config: ParseConfig = _DEFAULT_CONFIG):
        self.doc = ""
        self._buffer = ""
        self._index = 0
        self._stream: Any = None
        self._decoder: codecs.IncrementalDecoder | None = None
        self._encoding = config.encoding
        self._chunk_size = 1 if config.allow_trailing_data else 8192

        self.pos: Position = 0
        self.lineno = 1
        self.colno = 1
        self._last = (0, 1, 1)

        if isinstance(source, str):
            self.doc = self._buffer = source
        elif isinstance(source, bytes | bytearray | memoryview):
            self.doc = self._buffer = self._decode(bytes(source), True)
        elif hasattr(source, "read"):
            self._stream = source
        else:
            raise TypeError(
                f"Cannot read JSON from {type(source).__name__}; "
                "expected str, bytes or an object with a read() method"
            )

    def _fill(self) -> bool:
        """Loads the next chunk from the stream; False at end of input."""
        while self._stream is not None:
            chunk = self._stream.read(self._chunk_size)
            if isinstance(chunk, bytes | bytearray):
                at_end = not chunk
                if at_end:
                    self._stream = None
                text = self._decode(chunk, at_end)
                if not text:
                    # Partial multi-byte sequence or nothing left to flush
                    continue
            elif chunk:
                text = chunk
            else:
                self._stream = None
                return False
            self._buffer = text
            self._index = 0
            return True
        return False

    def _decode(self, data: bytes | bytearray, final: bool) -> str:
        if self._decoder is None:
            self._decoder = codecs.getincrementaldecoder(self._encoding)()
        try:
            return self._decoder.decode(data, final=final)
        except UnicodeDecodeError as e:
            raise self.error(f"Invalid {self._encoding} data", at_end=True) from e

    def peek(self) -> str:
        """Returns the next character without consuming it, "" at the end."""
        if self._index >= len(self._buffer) and not self._fill():
            return ""
        return self._buffer[self._index]

    def read(self) -> str:
        """Consumes and returns the next character, "" at the end."""
        char = self.peek()
        if char:
            self._last = (self.pos, self.lineno, self.colno)
            self._index += 1
            self.pos += 1
            if char == "\n":
                self.lineno += 1
                self.colno = 1
            else:
                self.colno += 1
        return char

    def read_run(self, pattern: re.Pattern[str]) -> str:
        """
        Consumes the longest run of characters matched by pattern.

        pattern must match the empty string and must not span a character it
        would reject, for example a negated character class with *.
        """
        runs: list[str] = []
        while self.peek():
            match = pattern.match(self._buffer, self._index)
            run = match.group() if match else ""
            if run:
                self._advance(run)
                runs.append(run)
            if self._index < len(self._buffer):
                break
        return "".join(runs)

    def _advance(self, run: str) -> None:
        newlines = run.count("\n")
        if newlines:
            self.lineno += newlines
            self.colno = len(run) - run.rfind("\n")
        else:
            self.colno += len(run)
        self.pos += len(run)
        self._index += len(run)

    def error(self, msg: str, at_end: bool = False) -> JSONDecodeError:
        """
        Builds an error pointing at the last consumed character.

        With at_end the error points just past the consumed input, which is
        where an unexpected end of input is detected.
        """
        pos, lineno, colno = (
            (self.pos, self.lineno, self.colno) if at_end else self._last
        )
        return JSONDecodeError(msg, self.doc, pos, lineno=lineno, colno=colno)


class JsonParser:
    """
    State machine parser over a CharReader.

    parse_value returns exactly one JsonValue. The parser holds no state
    between calls other than its reader position, so a stream containing
    several documents can be consumed by repeated calls when
    allow_trailing_data is set.
    """

    def __init__(self, reader: CharReader, config: ParseConfig = _DEFAULT_CONFIG):
        self.reader = reader
        self.config = config

    def skip_whitespace(self) -> str:
        """Skips whitespace and returns the next character without consuming it."""
        self.reader.read_run(_WHITESPACE_RUN)
        return self.reader.peek()

    def _unexpected_end(self, stack: list[JsonArray | JsonObject]) -> JSONDecodeError:
        if not stack:
            msg = "Unexpected end of JSON stream"
        elif isinstance(stack[-1], JsonArray):
            msg = "Unexpected end of JSON array"
        else:
            msg = "Unexpected end of JSON object"
        return self.reader.error(msg, at_end=True)

    def _record_container(
        self, value_type: JsonValueType, opened: tuple[int, int]
    ) -> None:
        start_ns, start_pos = opened
        _profiling.record_hot_path(
            "parse_array" if value_type is JsonValueType.ARRAY else "parse_object",
            time.perf_counter_ns() - start_ns,
            self.reader.pos - start_pos,
        )

    def parse_value(self) -> JsonValue:
        """Parses one JSON value, leaving the reader right after it."""
        with _profiling.ProfileContext("parse_value") as profile:
            reader = self.reader
            start = reader.pos
            profiling = _profiling.PROFILE_HOT_PATHS
            # Start time and offset of each open container, kept when profiling
            opened: list[tuple[int, int]] = []
            stack: list[JsonArray | JsonObject] = []
            names: list[str] = []
            state = ParseState.VALUE

            while True:
                char = self.skip_whitespace()
                if not char:
                    raise self._unexpected_end(stack)

                value: JsonValue | None = None

                if state is ParseState.VALUE:
                    if char in "{[" and profiling:
                        opened.append((time.perf_counter_ns(), reader.pos))
                    if char == "{":
                        reader.read()
                        stack.append(JsonObject())
                        state = ParseState.OBJECT_START
                        continue
                    if char == "[":
                        reader.read()
                        stack.append(JsonArray())
                        state = ParseState.ARRAY_START
                        continue
                    if char == '"':
                        reader.read()
                        value = JsonValue._create(
                            JsonValueType.STRING, self.scan_string()
                        )
                    elif char in _LITERAL_CHARS:
                        value = self.scan_literal()
                    else:
                        reader.read()
                        raise reader.error(
                            f"Unexpected character in JSON value: {char!r}"
                        )

                elif state in (ParseState.ARRAY_START, ParseState.ARRAY_VALUE):
                    if char == "]":
                        reader.read()
                        if state is ParseState.ARRAY_VALUE:
                            raise reader.error(
                                "Illegal trailing comma before end of array"
                            )
                        value = JsonValue._create(JsonValueType.ARRAY, stack.pop())
                    elif char == ",":
                        reader.read()
                        raise reader.error("Unexpected comma in JSON array")
                    else:
                        state = ParseState.VALUE
                        continue

                elif state is ParseState.ARRAY_COMMA:
                    reader.read()
                    if char == ",":
                        state = ParseState.ARRAY_VALUE
                        continue
                    if char != "]":
                        raise reader.error(
                            f"Unexpected character in JSON array: {char!r}"
                        )
                    value = JsonValue._create(JsonValueType.ARRAY, stack.pop())

                elif state in (ParseState.OBJECT_START, ParseState.OBJECT_KEY):
                    reader.read()
                    if char == '"':
                        names.append(self.scan_string())
                        state = ParseState.OBJECT_COLON
                        continue
                    if char == "}":
                        if state is ParseState.OBJECT_KEY:
                            raise reader.error(
                                "Illegal trailing comma before end of object"
                            )
                        value = JsonValue._create(
                            JsonValueType.OBJECT, stack.pop()
                        )
                    elif char == ",":
                        raise reader.error("Unexpected comma in JSON object")
                    else:
                        raise reader.error(
                            f"Unexpected character in JSON object: {char!r}"
                        )

                elif state is ParseState.OBJECT_COLON:
                    reader.read()
                    if char != ":":
                        raise reader.error(
                            f"Unexpected character in JSON object: {char!r}"
                        )
                    if self.skip_whitespace() == ":":
                        reader.read()
                        raise reader.error("Unexpected colon in JSON object")
                    state = ParseState.VALUE
                    continue

                else:  # ParseState.OBJECT_COMMA
                    reader.read()
                    if char == ",":
                        state = ParseState.OBJECT_KEY
                        continue
                    if char == '"':
                        raise reader.error("Missing comma in JSON object")
                    if char != "}":
                        raise reader.error(
                            f"Unexpected character in JSON object: {char!r}"
                        )
                    value = JsonValue._create(JsonValueType.OBJECT, stack.pop())

                # A value is complete: attach it to its parent or finish
                if profiling and value._type in _CONTAINER_TYPES:
                    self._record_container(value._type, opened.pop())
                if not stack:
                    profile.processed(reader.pos - start)
                    return value
                parent = stack[-1]
                if isinstance(parent, JsonArray):
                    parent.append(value)
                    state = ParseState.ARRAY_COMMA
                else:
                    parent.append(JsonProperty(names.pop(), value))
                    state = ParseState.OBJECT_COMMA

    def scan_string(self) -> str:
        """
        Reads string content after the opening quote up to the closing one.

        Known escapes are decoded; an unknown escape such as \\x is kept
        verbatim including its backslash.
        """
        with _profiling.ProfileContext("scan_string") as profile:
            reader = self.reader
            start = reader.pos
            chunks: list[str] = []
            has_surrogates = False
            while True:
                chunks.append(reader.read_run(_PLAIN_STRING_RUN))
                char = reader.read()
                if char == '"':
                    break
                if not char:
                    raise reader.error("Unexpected end of JSON string", at_end=True)

                escaped = reader.read()
                if not escaped:
                    raise reader.error("Unexpected end of JSON string", at_end=True)
                if escaped in _ESCAPES:
                    chunks.append(_ESCAPES[escaped])
                elif escaped == "u":
                    code_point = self._scan_unicode_escape()
                    has_surrogates = has_surrogates or 0xD800 <= code_point <= 0xDFFF
                    chunks.append(chr(code_point))
                else:
                    chunks.append("\\")
                    chunks.append(escaped)

            profile.processed(reader.pos - start)
            text = "".join(chunks)
            if has_surrogates:
                # Join \\uD83D\\uDE00 style pairs; lone surrogates pass through
                text = text.encode("utf-16-le", "surrogatepass").decode(
                    "utf-16-le", "surrogatepass"
                )
            return text

    def _scan_unicode_escape(self) -> int:
        digits = []
        for _ in range(4):
            char = self.reader.read()
            if not char:
                raise self.reader.error(
                    "Unexpected end of JSON string", at_end=True
                )
            digits.append(char)
            if char not in _HEX_DIGITS:
                raise self.reader.error(
                    f"Invalid unicode escape sequence: \\u{''.join(digits)}"
                )
        return int("".join(digits), 16)

    def scan_literal(self) -> JsonValue:
        """
        Reads a bare token up to whitespace, a comma, a closing bracket or EOF.

        A token made only of number characters is a NUMBER. Otherwise it is
        one of null, true, false or undefined, or an UNKNOWN_LITERAL kept as
        written. The terminating character is left unread.
        """
        with _profiling.ProfileContext("scan_literal") as profile:
            reader = self.reader
            start = reader.pos
            chars: list[str] = []
            can_be_number = True
            while True:
                char = reader.peek()
                if not char or char in _WHITESPACE or char in _LITERAL_END:
                    break
                reader.read()
                if char not in _LITERAL_CHARS:
                    raise reader.error(
                        f"Unexpected character in JSON literal: {char!r}"
                    )
                if can_be_number and char not in _NUMBER_CHARS:
                    can_be_number = False
                chars.append(char)

            profile.processed(reader.pos - start)
            text = "".join(chars)
            if can_be_number:
                return JsonValue._create(JsonValueType.NUMBER, text)
            return JsonValue.create_literal_unchecked(text)

    def expect_start(self, char: str, container: str) -> None:
        found = self.skip_whitespace()
        if found == char:
            return
        if not found:
            raise self.reader.error("Unexpected end of JSON stream", at_end=True)
        self.reader.read()
        raise self.reader.error(
            f"Expecting '{char}' at the start of a JSON {container}, found {found!r}"
        )

    def expect_end(self) -> None:
        """Fails unless only whitespace remains."""
        if self.skip_whitespace():
            self.reader.read()
            raise self.reader.error("Extra data")


def _parse(source: Any, config: ParseConfig | None, start: str = "") -> JsonValue:
    config = config or _DEFAULT_CONFIG
    parser = JsonParser(CharReader(source, config), config)
    if start == "[":
        parser.expect_start("[", "array")
    elif start == "{":
        parser.expect_start("{", "object")
    value = parser.parse_value()
    if not config.allow_trailing_data:
        parser.expect_end()
    return value


def parse_value(source: Any, config: ParseConfig | None = None) -> JsonValue:
    """
    Parses a JSON document into a JsonValue.

    source can be a str, bytes, or any file-like object with read().
    Raises JSONDecodeError for malformed input.
    """
    return _parse(source, config)


def parse_array(source: Any, config: ParseConfig | None = None) -> JsonArray:
    """Parses a document whose top-level value must be an array."""
    return _parse(source, config, "[").as_array  # type: ignore[return-value]


def parse_object(source: Any, config: ParseConfig | None = None) -> JsonObject:
    """Parses a document whose top-level value must be an object."""
    return _parse(source, config, "{").as_object  # type: ignore[return-value]
