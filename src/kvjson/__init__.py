"""
Compact JSON encoding and decoding library.

Converts Python values to JSON text and back. Mappings keyed by 1..n encode
as arrays, output can be indented, and decode errors report the line and
column of the offending character.
"""

from kvjson._model import JsonValue
from kvjson._model import object_key_to_string
from kvjson._model import should_treat_as_array
from kvjson._profile import HotPathStats
from kvjson._profile import clear_hot_path_stats
from kvjson._profile import get_hot_path_stats
from kvjson._profile import log_hot_path_stats
from kvjson.decoder import DecodeConfig
from kvjson.decoder import JSONDecodeError
from kvjson.decoder import JsonParser
from kvjson.decoder import JsonScanner
from kvjson.decoder import decode
from kvjson.encoder import EncodeConfig
from kvjson.encoder import JsonEncoder
from kvjson.encoder import encode

__version__ = "0.1.0"

__all__ = [
    "DecodeConfig",
    "EncodeConfig",
    "HotPathStats",
    "JSONDecodeError",
    "JsonEncoder",
    "JsonParser",
    "JsonScanner",
    "JsonValue",
    "clear_hot_path_stats",
    "decode",
    "encode",
    "get_hot_path_stats",
    "log_hot_path_stats",
    "object_key_to_string",
    "should_treat_as_array",
]
