"""
JSON decoding functionality tests.

Validates input sources (text, bytes, text and binary streams), escape
handling, raw number preservation and the ParseConfig options.
"""

import io

import pytest

import jsonlinq
from jsonlinq import JsonValueType
from jsonlinq import ParseConfig


def test_raw_number_text_preserved() -> None:
    """
    Validates numbers keep their exact text instead of going through a double.
    """
    big = "123456789012345678901234567890"
    value = jsonlinq.loads(f"[{big}, 1.10, -0.0, 1E400]")
    assert [item.as_literal for item in value.as_array] == [
        big,
        "1.10",
        "-0.0",
        "1E400",
    ]
    assert jsonlinq.dumps(value) == f"[{big},1.10,-0.0,1E400]"


@pytest.mark.parametrize("invalid_digit", ["1０", "0.０", "0e０"])
def test_nonascii_digits_rejected(invalid_digit: str) -> None:
    """
    Validates rejection of non-ASCII digits inside bare tokens.
    """
    with pytest.raises(jsonlinq.JSONDecodeError, match="JSON literal"):
        jsonlinq.loads(invalid_digit)


@pytest.mark.parametrize(
    "escaped,expected",
    [
        ('"\\"\\\\\\/"', '"\\/'),
        ('"\\b\\f\\n\\r\\t"', "\b\f\n\r\t"),
        ('"\\u00e9\\u20AC"', "é€"),
        ('"\\ud83d\\ude00"', "\U0001f600"),
        ('"\\ud83d"', "\ud83d"),
        ('"abc\\y"', "abc\\y"),
        ('"\\x15"', "\\x15"),
    ],
)
def test_string_escapes(escaped: str, expected: str) -> None:
    """
    Validates known escapes are decoded and unknown ones kept verbatim.

    Surrogate pairs are joined; a lone surrogate passes through.
    """
    assert jsonlinq.loads(escaped).as_string == expected


def test_control_characters_allowed_in_strings() -> None:
    """
    Validates raw control characters inside strings are accepted.
    """
    assert jsonlinq.loads('"a\tb\nc\x1f"').as_string == "a\tb\nc\x1f"


def test_keys_with_escapes() -> None:
    """
    Validates property names go through the same escape handling.
    """
    obj = jsonlinq.JsonObject.parse('{"a\\nb": 1, "b_\xe9": 2}')
    assert obj.keys() == ["a\nb", "b_\xe9"]


def test_duplicate_keys_preserved() -> None:
    """
    Validates duplicate names are kept in order with the last one winning.
    """
    obj = jsonlinq.JsonObject.parse('{"k": 1, "other": 0, "k": 2}')
    assert len(obj) == 3
    assert obj["k"].as_literal == "2"
    assert [prop.name for prop in obj] == ["k", "other", "k"]


def test_text_stream_input() -> None:
    """
    Validates load reads from file-like text objects.
    """
    value = jsonlinq.load(io.StringIO('{"a": [1, 2, {"b": null}]}'))
    assert value["a"][2]["b"].is_null


def test_large_stream_input() -> None:
    """
    Validates documents larger than one read chunk parse correctly.
    """
    items = ",".join(f'{{"id": {i}, "name": "item {i}"}}' for i in range(5000))
    value = jsonlinq.load(io.StringIO(f"[{items}]"))
    assert len(value.as_array) == 5000
    assert value[4999]["name"].as_string == "item 4999"


@pytest.mark.parametrize(
    "data",
    [
        '{"k": "é€\U0001f600"}'.encode(),
        bytearray('{"k": "é€\U0001f600"}'.encode()),
    ],
)
def test_bytes_input(data: bytes | bytearray) -> None:
    """
    Validates bytes input is decoded with the configured encoding.
    """
    assert jsonlinq.loads(data)["k"].as_string == "é€\U0001f600"


def test_binary_stream_input() -> None:
    """
    Validates multi-byte characters split across reads are decoded.
    """
    text = '["' + "é€\U0001f600" * 4000 + '"]'
    value = jsonlinq.load(io.BytesIO(text.encode()))
    assert value[0].as_string == "é€\U0001f600" * 4000


def test_encoding_config() -> None:
    """
    Validates the encoding option applies to bytes and binary streams.
    """
    data = '{"k": "\xe9"}'.encode("latin-1")
    assert jsonlinq.loads(data, encoding="latin-1")["k"].as_string == "\xe9"
    assert (
        jsonlinq.load(io.BytesIO(data), encoding="latin-1")["k"].as_string
        == "\xe9"
    )


def test_utf8_bom_handling() -> None:
    """
    Validates a BOM is rejected in text but stripped by utf-8-sig.
    """
    data = "[1,2,3]".encode("utf-8-sig")

    with pytest.raises(jsonlinq.JSONDecodeError, match="JSON value"):
        jsonlinq.loads(data.decode("utf-8"))

    value = jsonlinq.loads(data, encoding="utf-8-sig")
    assert jsonlinq.dumps(value) == "[1,2,3]"

    bom_in_str = '"\ufeff"'
    assert jsonlinq.loads(bom_in_str).as_string == "\ufeff"


def test_allow_trailing_data_reads_one_document() -> None:
    """
    Validates allow_trailing_data stops right after the first value.

    Consecutive documents can be read from one stream.
    """
    stream = io.StringIO('{"a": 1} ["b"]{"c": true}')
    first = jsonlinq.load(stream, allow_trailing_data=True)
    second = jsonlinq.load(stream, allow_trailing_data=True)
    third = jsonlinq.load(stream, allow_trailing_data=True)

    assert jsonlinq.dumps(first) == '{"a":1}'
    assert jsonlinq.dumps(second) == '["b"]'
    assert jsonlinq.dumps(third) == '{"c":true}'
    assert stream.read() == ""


def test_allow_trailing_data_with_text() -> None:
    """
    Validates trailing content is ignored for text input when allowed.
    """
    value = jsonlinq.loads("[1, 2] garbage", allow_trailing_data=True)
    assert jsonlinq.dumps(value) == "[1,2]"

    with pytest.raises(jsonlinq.JSONDecodeError, match="Extra data"):
        jsonlinq.loads("[1, 2] garbage")


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"encoding": 8}, TypeError),
        ({"encoding": "no-such-codec"}, LookupError),
        ({"allow_trailing_data": "yes"}, TypeError),
        ({"indent": 2}, TypeError),
    ],
)
def test_parse_config_validation(kwargs: dict[str, object], error: type) -> None:
    """
    Validates ParseConfig rejects invalid options.
    """
    with pytest.raises(error):
        jsonlinq.loads("[]", **kwargs)


def test_parse_config_is_frozen() -> None:
    """
    Validates ParseConfig instances are immutable.
    """
    config = ParseConfig()
    with pytest.raises(AttributeError):
        config.encoding = "latin-1"  # type: ignore[misc]


def test_load_requires_read() -> None:
    """
    Validates load rejects objects without a read method.
    """
    with pytest.raises(TypeError, match="read"):
        jsonlinq.load("[]")  # type: ignore[arg-type]


def test_parse_entry_points_agree() -> None:
    """
    Validates the class parse methods and loads produce equal trees.
    """
    text = '{"a": [1, "x", null]}'
    value = jsonlinq.JsonValue.parse(text)
    assert value == jsonlinq.loads(text)
    assert jsonlinq.JsonObject.parse(text) == value
    assert jsonlinq.JsonArray.parse('[1, "x", null]') == value["a"].as_array
    assert value.type is JsonValueType.OBJECT


def test_deep_nesting_without_recursion() -> None:
    """
    Validates nesting far beyond the interpreter recursion limit parses.
    """
    depth = 10_000
    value = jsonlinq.loads("[" * depth + "]" * depth)
    assert jsonlinq.dumps(value) == "[" * depth + "]" * depth
