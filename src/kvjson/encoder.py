"""
JSON encoder.

Walks a value tree and emits JSON text. Mappings go through the array/object
classification in _model, containers currently being encoded are tracked to
reject circular references, and output is optionally indented.
"""

import re
import threading
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from kvjson._model import Depth
from kvjson._model import JsonValueLoose
from kvjson._model import format_number
from kvjson._model import is_number
from kvjson._model import object_key_to_string
from kvjson._model import sequence_length
from kvjson._model import should_treat_as_array
from kvjson._profile import ProfileContext
from kvjson._tables import ESCAPE_CHAR_MAP
from kvjson._tables import INDENT_UNIT

# Default for encode() when pretty_print is not given
PRETTY_PRINT = True

_ESCAPE_RE = re.compile(r'[\x00-\x1f\\"]')

# Process-wide, append-only; entries are never replaced once written
_indent_cache: dict[int, str] = {0: ""}
_indent_lock = threading.Lock()


def indent_string(depth: int) -> str:
    """Returns the indentation for a nesting depth, memoized per process."""
    if depth not in _indent_cache:
        with _indent_lock:
            if depth not in _indent_cache:
                _indent_cache[depth] = INDENT_UNIT * depth
    return _indent_cache[depth]


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    pretty_print selects indented output; compact output has no inserted
    whitespace at all.
    """

    pretty_print: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.pretty_print, bool):
            raise TypeError("pretty_print must be a boolean")


def _escape_char(match: re.Match[str]) -> str:
    char = match.group()
    return ESCAPE_CHAR_MAP.get(char) or f"\\u{ord(char):04x}"


def _encode_string(s: str) -> str:
    """Encode string, escaping quote, backslash and control characters."""
    with ProfileContext("encode_string", len(s)):
        return '"' + _ESCAPE_RE.sub(_escape_char, s) + '"'


def _is_composite(value: object) -> bool:
    return isinstance(value, Mapping | list | tuple)


def _join_indented(
    parts: list[str], depth: Depth, left: str, right: str
) -> str:
    """Wraps encoded children in brackets, one per line when depth is set."""
    if depth is None:
        return left + ",".join(parts) + right

    inner = indent_string(depth + 1)
    return (
        f"{left}\n{inner}"
        + f",\n{inner}".join(parts)
        + f"\n{indent_string(depth)}{right}"
    )


class JsonEncoder:
    """
    Recursive encoder for one top-level value.

    markers holds the ids of the containers on the current encoding path.
    An encoder is meant for a single encode() call; encode() builds a fresh
    one so concurrent calls never share markers.
    """

    def __init__(self, config: EncodeConfig):
        self.config = config
        self.markers: set[int] = set()

    def encode(self, obj: JsonValueLoose) -> str:
        """Encodes a complete value tree."""
        return self.encode_value(obj, 0 if self.config.pretty_print else None)

    def encode_value(  # noqa: PLR0911
        self, obj: JsonValueLoose, depth: Depth
    ) -> str:
        """Encode any supported value at the given indentation depth."""
        if obj is None:
            return "null"
        elif obj is True:
            return "true"
        elif obj is False:
            return "false"
        elif isinstance(obj, str):
            return _encode_string(obj)
        elif is_number(obj):
            return format_number(obj)
        elif isinstance(obj, Mapping):
            return self.encode_mapping(obj, depth)
        elif isinstance(obj, list | tuple):
            return self._encode_array(obj, obj, depth)
        else:
            raise TypeError(f"unexpected type '{type(obj).__name__}'")

    def _enter(self, container: object) -> int:
        marker = id(container)
        if marker in self.markers:
            raise ValueError("circular reference")
        self.markers.add(marker)
        return marker

    def encode_mapping(self, mapping: Mapping[Any, Any], depth: Depth) -> str:
        """Encodes a mapping keyed 1..n as an array, others as objects."""
        if should_treat_as_array(mapping):
            length = sequence_length(mapping)
            items = [mapping[i] for i in range(1, length + 1)]
            return self._encode_array(mapping, items, depth)
        return self._encode_object(mapping, depth)

    def _encode_array(
        self, container: object, items: Sequence[Any], depth: Depth
    ) -> str:
        # Arrays only go multi-line when their first element is a container
        must_indent = (
            depth is not None and bool(items) and _is_composite(items[0])
        )
        child_depth = depth + 1 if must_indent else None  # type: ignore

        marker = self._enter(container)
        try:
            with ProfileContext("encode_array", len(items)):
                parts = [self.encode_value(item, child_depth) for item in items]
        finally:
            self.markers.discard(marker)

        return _join_indented(parts, depth if must_indent else None, "[", "]")

    def _encode_object(self, mapping: Mapping[Any, Any], depth: Depth) -> str:
        child_depth = None if depth is None else depth + 1

        marker = self._enter(mapping)
        try:
            with ProfileContext("encode_object", len(mapping)):
                parts = []
                for key, value in mapping.items():
                    str_key = object_key_to_string(key)
                    encoded_value = self.encode_value(value, child_depth)
                    parts.append(f"{_encode_string(str_key)}:{encoded_value}")
        finally:
            self.markers.discard(marker)

        return _join_indented(parts, depth, "{", "}")


def encode(obj: JsonValueLoose, pretty_print: bool | None = None) -> str:
    """
    Serializes a value tree to JSON text.

    pretty_print defaults to the module-level PRETTY_PRINT setting. Raises
    TypeError for unsupported values or keys and ValueError for non-finite
    numbers or circular references; nothing is returned on failure.
    """
    if pretty_print is None:
        pretty_print = PRETTY_PRINT

    config = EncodeConfig(pretty_print=pretty_print)
    return JsonEncoder(config).encode(obj)
