"""
Value model shared by the encoder and decoder.

Python keeps sequences and mappings apart, but mappings keyed by 1..n are
still treated as arrays when encoding. The classification is structural and
recomputed every time a mapping is encoded.
"""

import math
from collections.abc import Mapping
from typing import Any

# Type aliases for domain concepts - recursive definition
type JsonValue = (
    str | int | float | bool | None | dict[str, JsonValue] | list[JsonValue]
)
type Position = int
type Depth = int | None

# More permissive type for values handed to the encoder
JsonValueLoose = Any


def is_number(value: object) -> bool:
    """Returns True for int and float values; bool is not a number here."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def format_number(n: int | float) -> str:
    """
    Formats a finite number as JSON text.

    Integers are written in full, floats with 14 significant digits.
    """
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            raise ValueError(f"unexpected number value '{n!r}'")
        return "%.14g" % n
    return "%d" % n


def sequence_length(mapping: Mapping[Any, Any]) -> int:
    """Returns the largest n such that keys 1..n are all present."""
    n = 0
    while (n + 1) in mapping:
        n += 1
    return n


def should_treat_as_array(mapping: Mapping[Any, Any]) -> bool:
    """
    Decides whether a mapping encodes as a JSON array.

    A mapping is array-like when every key is numeric and the keys are
    exactly 1..n without holes. An empty mapping is array-like.
    """
    if 1 not in mapping and mapping:
        return False

    count = 0
    for key in mapping:
        if not is_number(key):
            return False
        count += 1
    return count == sequence_length(mapping)


def object_key_to_string(key: object) -> str:
    """Converts an object key to its JSON string form."""
    if is_number(key):
        return format_number(key)  # type: ignore[arg-type]
    if not isinstance(key, str):
        raise TypeError(
            f"invalid key type: key of type {type(key).__name__} found"
        )
    return key
