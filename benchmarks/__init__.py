"""
Benchmark suite for jsonlinq.

Compares jsonlinq against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed, serialization speed, accessor cost and memory
usage across different document shapes.
"""
