"""
Benchmark suite for kvjson encoding and decoding performance.

Compares kvjson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures speed and memory usage across different data types.
"""
