"""
Test data generators for jsonlinq benchmarks.

Creates JSON documents shaped like the payloads the typed accessors are
meant for:
- Small and large records mixing numbers, strings and dates
- Arrays of mixed scalars and small objects
- Deep nesting and escape-heavy strings
- Date and time values in every format the accessors detect
"""

import json
import random
import string
from typing import Any

# Choices for mixed array elements
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3

# Seconds between 2000-01-01 and 2030-01-01
_EPOCH_2000 = 946684800
_EPOCH_2030 = 1893456000

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
    "date_heavy",
]


def generate_test_data(data_type: str, seed: int = 0) -> str:
    """Generates a JSON document of the given type.

    The same seed always yields the same text, so runs are comparable.
    """
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "date_heavy": _generate_date_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(generators[data_type](random.Random(seed)))


def _generate_small_object(rng: random.Random) -> dict[str, Any]:
    """An order record under 1KB."""
    return {
        "id": 12345,
        "customer": "Alice Johnson",
        "total": "1234.56",
        "paid": True,
        "status": "PartiallyShipped",
        "created": "2024-01-15T10:30:00.000Z",
        "items": [{"sku": "A-100", "quantity": 2}, {"sku": "B-200", "quantity": 1}],
    }


def _generate_large_object(rng: random.Random) -> dict[str, Any]:
    """An account export over 10KB with a ledger and an audit trail."""
    return {
        "account_id": str(rng.randint(10**17, 10**18 - 1)),
        "owner": {
            "name": _random_string(rng, 10) + " " + _random_string(rng, 12),
            "email": f"{_random_string(rng, 8)}@{_random_string(rng, 6)}.com",
            "uuid": _random_uuid(rng),
            "address": {
                "street": f"{rng.randint(1, 9999)} {_random_string(rng, 8)} St",
                "city": _random_string(rng, 12),
                "zip": f"{rng.randint(10000, 99999)}",
            },
            "preferences": {
                "language": rng.choice(["en", "es", "fr", "de", "zh"]),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "notifications": rng.choice(["Email", "Sms", "Email, Sms"]),
            },
        },
        "ledger": [
            {
                "id": f"txn_{i:06d}",
                "amount": f"{rng.uniform(1.0, 1000.0):.2f}",
                "fee": round(rng.uniform(0.0, 5.0), 2),
                "booked": _random_iso_timestamp(rng),
                "kind": rng.choice(["Credit", "Debit", "Refund"]),
                "memo": f"Payment for {_random_string(rng, 20)}",
            }
            for i in range(50)
        ],
        "audit": [
            {
                "at": _random_unix_ms(rng),
                "action": rng.choice(["login", "logout", "update", "export"]),
                "duration": f"00:{rng.randint(0, 59):02d}:{rng.randint(0, 59):02d}",
                "ip": ".".join(str(rng.randint(1, 255)) for _ in range(4)),
            }
            for _ in range(30)
        ],
    }


def _generate_mixed_array(rng: random.Random) -> list[Any]:
    """A 200 element array of mixed scalars and small objects."""
    array: list[Any] = []
    for i in range(200):
        choice = rng.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(rng.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(rng.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(rng, rng.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(rng.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append(
                {
                    "index": i,
                    "value": _random_string(rng, 10),
                    "score": round(rng.uniform(0, 100), 2),
                }
            )
    return array


def _generate_nested_structure(rng: random.Random) -> dict[str, Any]:
    """A tree eight levels deep."""

    def create_node(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10)}
        return {
            "level": depth,
            "data": _random_string(rng, 15),
            "children": [create_node(depth - 1) for _ in range(3)],
            "next": create_node(depth - 1),
        }

    return create_node(8)


def _generate_string_heavy(rng: random.Random) -> dict[str, Any]:
    """Strings full of characters that need escaping."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(['"', "\\", "/", "\b", "\f", "\n", "\r", "\t"]))
            else:
                chars.append(rng.choice(string.ascii_letters + string.digits + " "))
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "unicode": [f"Unicode: {chr(rng.randint(0x00A0, 0x04FF))}" for _ in range(50)],
        "controls": [
            "".join(chr(rng.randint(0, 0x1F)) for _ in range(8)) for _ in range(20)
        ],
        "files": {
            f"key_{i}": {
                "description": create_escaped_string(),
                "path": f"C:\\Users\\{_random_string(rng, 8)}\\Documents\\file_{i}.txt",
            }
            for i in range(20)
        },
    }


def _generate_date_heavy(rng: random.Random) -> dict[str, Any]:
    """Timestamps in ISO, Unix, ticks and Microsoft legacy forms."""
    return {
        "iso": [_random_iso_timestamp(rng) for _ in range(50)],
        "unix_ms": [_random_unix_ms(rng) for _ in range(50)],
        "unix_seconds": [_random_unix_ms(rng) // 1000 for _ in range(50)],
        "ticks": [
            _random_unix_ms(rng) * 10_000 + 621355968000000000 for _ in range(50)
        ],
        "legacy": [f"/Date({_random_unix_ms(rng)})/" for _ in range(50)],
        "durations": [
            f"{rng.randint(0, 9)}.{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00"
            for _ in range(50)
        ],
    }


def _random_unix_ms(rng: random.Random) -> int:
    return rng.randint(_EPOCH_2000, _EPOCH_2030) * 1000 + rng.randint(0, 999)


def _random_iso_timestamp(rng: random.Random) -> str:
    return (
        f"20{rng.randint(0, 29):02d}-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
        f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:{rng.randint(0, 59):02d}"
        f".{rng.randint(0, 999):03d}Z"
    )


def _random_uuid(rng: random.Random) -> str:
    hex_digits = f"{rng.getrandbits(128):032x}"
    bounds = [0, 8, 12, 16, 20, 32]
    return "-".join(hex_digits[a:b] for a, b in zip(bounds, bounds[1:]))


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))
