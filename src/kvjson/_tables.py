"""
Lexical tables shared by the encoder and the decoder.

The encoder consults ESCAPE_CHAR_MAP, the decoder its inverse together with
the character class sets.
"""

from typing import Final

ESCAPE_CHAR_MAP: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Two-character escape -> decoded character; "\/" only appears on input
ESCAPE_CHAR_MAP_INV: Final[dict[str, str]] = {"\\/": "/"} | {
    escaped: char for char, escaped in ESCAPE_CHAR_MAP.items()
}

SPACE_CHARS: Final = frozenset(" \t\r\n")
DELIM_CHARS: Final = SPACE_CHARS | frozenset("]},")
ESCAPE_CHARS: Final = frozenset('\\/"bfnrtu')
HEX_DIGITS: Final = frozenset("0123456789abcdefABCDEF")

LITERAL_MAP: Final[dict[str, bool | None]] = {
    "true": True,
    "false": False,
    "null": None,
}

CONTROL_CHAR_LIMIT: Final = 0x20
INDENT_UNIT: Final = "  "
