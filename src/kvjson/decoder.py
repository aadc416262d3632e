"""
JSON decoder.

Recursive descent over the input text with one method per grammar
production. Every failure raises JSONDecodeError carrying the 1-based line
and column of the offending character.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from kvjson._model import JsonValue
from kvjson._model import Position
from kvjson._profile import ProfileContext
from kvjson._tables import CONTROL_CHAR_LIMIT
from kvjson._tables import DELIM_CHARS
from kvjson._tables import ESCAPE_CHAR_MAP_INV
from kvjson._tables import ESCAPE_CHARS
from kvjson._tables import HEX_DIGITS
from kvjson._tables import LITERAL_MAP
from kvjson._tables import SPACE_CHARS

# Characters that end a plain run inside a string
_STRING_STOP_RE = re.compile(r'["\\\x00-\x1f]')

_NUMBER_RE = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
)

# Alternation order is the unescape precedence: surrogate pair, single
# unicode escape, simple escape. One left-to-right pass never revisits output.
_UNESCAPE_RE = re.compile(
    r"\\u([dD][89aAbB][0-9a-fA-F]{2})\\u([dD][c-fC-F][0-9a-fA-F]{2})"
    r"|\\u([0-9a-fA-F]{4})"
    r"|\\.",
    re.DOTALL,
)


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with precise position information.

    pos is the 0-based character offset of the failure; lineno and colno are
    1-based and count every character before pos, resetting the column after
    each newline.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno} col {self.colno}")


@dataclass(frozen=True)
class DecodeConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    allow_trailing_data keeps the permissive default of ignoring anything
    after the top-level value; set it to False to reject non-whitespace there.
    """

    allow_trailing_data: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.allow_trailing_data, bool):
            raise TypeError("allow_trailing_data must be a boolean")


class JsonScanner:
    """
    Cursor over the input text.

    Owned by a single parse; the text never changes while pos moves forward.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def peek(self) -> str:
        """Returns current character without advancing, or '' at the end."""
        return self.text[self.pos] if self.pos < self.length else ""

    def skip_whitespace(self) -> None:
        """Skips whitespace characters according to JSON spec."""
        while self.pos < self.length and self.text[self.pos] in SPACE_CHARS:
            self.pos += 1

    def next_delimiter(self, start: Position) -> Position:
        """Returns the offset of the first delimiter at or after start."""
        i = start
        while i < self.length and self.text[i] not in DELIM_CHARS:
            i += 1
        return i

    def error(self, msg: str, pos: Position | None = None) -> JSONDecodeError:
        """Builds a decode error located at pos, defaulting to the cursor."""
        return JSONDecodeError(msg, self.text, self.pos if pos is None else pos)


def _replace_escape(match: re.Match[str]) -> str:
    high, low, single = match.group(1, 2, 3)
    if high:
        return chr(
            (int(high, 16) - 0xD800) * 0x400 + (int(low, 16) - 0xDC00) + 0x10000
        )
    if single:
        return chr(int(single, 16))
    return ESCAPE_CHAR_MAP_INV[match.group()]


def _unescape(raw: str) -> str:
    """Resolves escape sequences in already validated string content."""
    return _UNESCAPE_RE.sub(_replace_escape, raw)


class JsonParser:
    """
    Recursive descent parser for JSON text.

    The first character of a value selects the production. Object keys are
    interned per parse so repeated keys share one string object.
    """

    def __init__(self, scanner: JsonScanner, config: DecodeConfig):
        self.scanner = scanner
        self.config = config
        self._key_cache: dict[str, str] = {}
        self._dispatch: dict[str, Callable[[], JsonValue]] = {
            '"': self.parse_string,
            "-": self.parse_number,
            "t": self.parse_literal,
            "f": self.parse_literal,
            "n": self.parse_literal,
            "[": self.parse_array,
            "{": self.parse_object,
        }
        for digit in "0123456789":
            self._dispatch[digit] = self.parse_number

    def parse(self) -> JsonValue:
        """Parses one top-level value, skipping leading whitespace."""
        self.scanner.skip_whitespace()
        result = self.parse_value()

        if not self.config.allow_trailing_data:
            self.scanner.skip_whitespace()
            if self.scanner.pos < self.scanner.length:
                raise self.scanner.error("unexpected trailing data")

        return result

    def parse_value(self) -> JsonValue:
        """Parses any JSON value starting at the cursor."""
        char = self.scanner.peek()
        handler = self._dispatch.get(char)
        if handler is None:
            if not char:
                raise self.scanner.error("unexpected end of input")
            raise self.scanner.error(f"unexpected character '{char}'")
        return handler()

    def parse_string(self) -> str:
        """Parses a quoted string; the cursor must be on the opening quote."""
        scanner = self.scanner
        text = scanner.text
        start = scanner.pos
        i = start + 1
        has_escape = False

        with ProfileContext("parse_string"):
            while True:
                stop = _STRING_STOP_RE.search(text, i)
                i = stop.start() if stop else scanner.length
                if i >= scanner.length:
                    raise scanner.error(
                        "expected closing quote for string", start
                    )

                char = text[i]
                if char == '"':
                    break
                if char != "\\":
                    raise scanner.error("control character in string", i)

                # Escape sequence
                has_escape = True
                esc = text[i + 1 : i + 2]
                if not esc:
                    raise scanner.error(
                        "expected closing quote for string", start
                    )
                if ord(esc) < CONTROL_CHAR_LIMIT:
                    raise scanner.error("control character in string", i + 1)
                if esc not in ESCAPE_CHARS:
                    raise scanner.error(
                        f"invalid escape char '{esc}' in string", i + 1
                    )
                if esc == "u":
                    hex_digits = text[i + 2 : i + 6]
                    if len(hex_digits) != 4 or not all(
                        c in HEX_DIGITS for c in hex_digits
                    ):
                        raise scanner.error(
                            "invalid unicode escape in string", i + 1
                        )
                    i += 6
                else:
                    i += 2

        raw = text[start + 1 : i]
        scanner.pos = i + 1
        return _unescape(raw) if has_escape else raw

    def parse_number(self) -> int | float:
        """Parses a bare number token running up to the next delimiter."""
        scanner = self.scanner
        start = scanner.pos
        end = scanner.next_delimiter(start)
        token = scanner.text[start:end]

        with ProfileContext("parse_number", len(token)):
            if not _NUMBER_RE.fullmatch(token):
                raise scanner.error(f"invalid number '{token}'", start)
            try:
                if any(c in token for c in ".eE"):
                    value: int | float = float(token)
                else:
                    value = int(token)
            except ValueError as e:
                # Integers beyond the interpreter's digit limit
                raise scanner.error(f"invalid number '{token}'", start) from e

        scanner.pos = end
        return value

    def parse_literal(self) -> bool | None:
        """Parses true, false or null."""
        scanner = self.scanner
        start = scanner.pos
        end = scanner.next_delimiter(start)
        word = scanner.text[start:end]

        if word not in LITERAL_MAP:
            raise scanner.error(f"invalid literal '{word}'", start)

        scanner.pos = end
        return LITERAL_MAP[word]

    def parse_array(self) -> list[JsonValue]:
        """Parses a JSON array; the cursor must be on '['."""
        scanner = self.scanner
        with ProfileContext("parse_array"):
            scanner.pos += 1
            values: list[JsonValue] = []

            # Handle empty array
            scanner.skip_whitespace()
            if scanner.peek() == "]":
                scanner.pos += 1
                return values

            while True:
                values.append(self.parse_value())

                scanner.skip_whitespace()
                char = scanner.peek()
                if char == "]":
                    scanner.pos += 1
                    break
                if char != ",":
                    raise scanner.error("expected ']' or ','")
                scanner.pos += 1
                scanner.skip_whitespace()

            return values

    def _parse_object_key(self) -> str:
        """Parses an object key and interns it for this parse."""
        if self.scanner.peek() != '"':
            raise self.scanner.error("expected string for key")
        key = self.parse_string()
        return self._key_cache.setdefault(key, key)

    def parse_object(self) -> dict[str, JsonValue]:
        """Parses a JSON object; the cursor must be on '{'. Later keys win."""
        scanner = self.scanner
        with ProfileContext("parse_object"):
            scanner.pos += 1
            obj: dict[str, JsonValue] = {}

            # Handle empty object
            scanner.skip_whitespace()
            if scanner.peek() == "}":
                scanner.pos += 1
                return obj

            while True:
                key = self._parse_object_key()

                scanner.skip_whitespace()
                if scanner.peek() != ":":
                    raise scanner.error("expected ':' after key")
                scanner.pos += 1
                scanner.skip_whitespace()

                obj[key] = self.parse_value()

                scanner.skip_whitespace()
                char = scanner.peek()
                if char == "}":
                    scanner.pos += 1
                    break
                if char != ",":
                    raise scanner.error("expected '}' or ','")
                scanner.pos += 1
                scanner.skip_whitespace()

            return obj


def decode(s: str, *, allow_trailing_data: bool = True) -> JsonValue:
    """
    Parses JSON text into Python objects.

    Objects become dicts and arrays lists. Raises TypeError when s is not a
    str and JSONDecodeError for any lexical or structural violation.
    """
    if not isinstance(s, str):
        raise TypeError(f"the JSON object must be str, not {type(s).__name__}")

    config = DecodeConfig(allow_trailing_data=allow_trailing_data)
    parser = JsonParser(JsonScanner(s), config)
    return parser.parse()
