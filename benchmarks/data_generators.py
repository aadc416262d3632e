"""
Test data generators for JSON encode and decode benchmarks.

Each generator builds a Python value; generate_test_data serializes it with
the standard library so every library under test decodes identical text.
- Different sizes (small/large)
- Different shapes (flat/nested/mixed)
- String-heavy content with characters that need escaping
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

_ESCAPE_PROBABILITY = 0.3
_ESCAPABLE = ['"', "\\", "/", "\b", "\f", "\n", "\r", "\t", "\x01"]


def _random_string(length: int) -> str:
    """Generates a random ASCII string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))


def _random_escaped_string(length: int) -> str:
    """Generates a string where roughly a third of characters need escaping."""
    return "".join(
        random.choice(_ESCAPABLE)
        if random.random() < _ESCAPE_PROBABILITY
        else random.choice(string.ascii_letters + string.digits + " ")
        for _ in range(length)
    )


def _small_object() -> dict[str, Any]:
    """A record under 1KB with a nested member."""
    return {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _large_object() -> dict[str, Any]:
    """A profile with transaction history, well over 10KB."""
    return {
        "user_id": random.randint(1_000_000, 9_999_999),
        "profile": {
            "first_name": _random_string(10),
            "last_name": _random_string(12),
            "email": f"{_random_string(8)}@{_random_string(6)}.com",
            "address": {
                "street": f"{random.randint(1, 9999)} {_random_string(8)} St",
                "city": _random_string(12),
                "zip": f"{random.randint(10000, 99999)}",
            },
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "status": random.choice(["completed", "pending", "failed"]),
                "refunded": random.choice([True, False, None]),
            }
            for i in range(80)
        ],
    }


def _mixed_array() -> list[Any]:
    """A flat array mixing every scalar type with small objects."""
    makers: list[Callable[[int], Any]] = [
        lambda i: random.randint(-1000, 1000),
        lambda i: round(random.uniform(-100.0, 100.0), 3),
        lambda i: _random_string(random.randint(5, 30)),
        lambda i: random.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "value": _random_string(10)},
    ]
    return [random.choice(makers)(i) for i in range(300)]


def _nested_structure() -> dict[str, Any]:
    """A tree eight levels deep with fan-out in every level."""

    def node(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}
        return {
            "level": depth,
            "items": [node(depth - 1) for _ in range(3)],
            "nested": node(depth - 1),
        }

    return node(7)


def _string_heavy() -> dict[str, Any]:
    """Mostly strings, many with escapes and non-ASCII text."""
    return {
        "escaped": [_random_escaped_string(50) for _ in range(100)],
        "unicode": [
            "".join(chr(random.randint(0x00A0, 0x2FFF)) for _ in range(20))
            for _ in range(50)
        ],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(8)}\\file_{i}.txt"
            for i in range(20)
        },
    }


_GENERATORS: dict[str, Callable[[], Any]] = {
    "small_object": _small_object,
    "large_object": _large_object,
    "mixed_array": _mixed_array,
    "nested_structure": _nested_structure,
    "string_heavy": _string_heavy,
}

DATA_TYPES = list(_GENERATORS)


def generate_test_value(data_type: str) -> Any:
    """Generates a Python value of the specified type."""
    if data_type not in _GENERATORS:
        raise ValueError(f"Unknown data type: {data_type}")
    return _GENERATORS[data_type]()


def generate_test_data(data_type: str, indent: int | None = None) -> str:
    """Generates JSON text of the specified type, optionally indented."""
    return json.dumps(
        generate_test_value(data_type), ensure_ascii=False, indent=indent
    )
