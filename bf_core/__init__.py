"""bf_core: a fixed-capacity Bloom filter with double hashing.

Typical use::

    from bf_core import BloomFilter

    seen = BloomFilter(capacity=1_000_000, false_positive_rate=0.01)
    seen.insert(b"user:42")
    if b"user:42" in seen:
        ...
"""
from __future__ import annotations

__all__ = [
    "BitArray",
    "BloomFilter",
    "DoubleHasher",
    "InvalidParameter",
    "Murmur3Hash64",
    "XXHash64",
    "estimate_false_positive_rate",
    "optimal_bit_array_size",
    "optimal_hash_count",
]

from .bit_array import BitArray
from .bloom_filter import BloomFilter
from .exceptions import InvalidParameter
from .hashing import DoubleHasher, Murmur3Hash64, XXHash64
from .params import estimate_false_positive_rate, optimal_bit_array_size, optimal_hash_count
