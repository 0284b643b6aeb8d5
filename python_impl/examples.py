"""Basic usage walkthrough for bf_core.BloomFilter.

Run with ``python -m python_impl.examples``.
"""
from __future__ import annotations

import struct

from bf_core import BloomFilter


FRUITS = ["apple", "banana", "cherry", "date", "elderberry"]
ABSENT = ["grape", "kiwi", "mango"]


def main() -> None:
    print("=== Bloom Filter Basic Usage Example ===")
    print()

    bloom = BloomFilter(capacity=1000, false_positive_rate=0.01)

    print("Bloom Filter Configuration:")
    print(f"  Capacity: {bloom.capacity()} elements")
    print(f"  Target False Positive Rate: {bloom.false_positive_rate():.2%}")
    print(f"  Bit Array Size: {bloom.bit_array_size()} bits")
    print(f"  Hash Functions: {bloom.hash_count()}")
    print(f"  Memory Usage: {bloom.memory_usage() / 1024:.2f} KB")
    print()

    print("Inserting elements...")
    bloom.update(FRUITS)
    print(f"  Inserted {bloom.size()} elements")
    print()

    print("Querying for existing elements:")
    for elem in FRUITS[:3]:
        verdict = "MIGHT BE in set" if elem in bloom else "NOT in set"
        print(f"  {elem!r}: {verdict}")
    print()

    print("Querying for non-existing elements:")
    for elem in ABSENT:
        verdict = "MIGHT BE in set (false positive!)" if elem in bloom else "NOT in set"
        print(f"  {elem!r}: {verdict}")
    print()

    print("Statistics:")
    print(f"  Elements inserted: {bloom.size()}")
    print(f"  Bits set: {bloom.count_set_bits()}")
    print(f"  Estimated false positive rate: {bloom.estimated_false_positive_rate():.6%}")
    print()

    print("=== No False Negatives Guarantee ===")
    missing = [elem for elem in FRUITS if not bloom.contains(elem)]
    for elem in missing:
        print(f"  ERROR: {elem!r} not found!")
    if not missing:
        print("  All inserted elements found correctly")
    print()

    print("=== Inserting Raw Bytes ===")
    number = struct.pack("<i", 42)
    bloom.insert(number)
    print(f"  Inserted packed integer 42, contains: {'Yes' if number in bloom else 'No'}")

    raw = b"raw_bytes_data"
    bloom.insert(raw)
    print(f"  Inserted raw bytes {raw!r}, contains: {'Yes' if raw in bloom else 'No'}")


if __name__ == "__main__":
    main()
